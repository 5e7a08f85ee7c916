import logging
import typing as t
from abc import ABC, abstractmethod
from collections.abc import Set as AbstractSet, MutableSet

from starscope.protocols import Supplier
from starscope.utils.concurrent import ConcurrentSet
from starscope.utils.error import StarscopeError
from starscope.value import Value, constant
from starscope.valuemap import SEPARATOR, KeyView, ValueMap

log = logging.getLogger(__name__)


class UnsupportedPath(StarscopeError):
    def __init__(self, scope: 'Scope', name: str):
        self.scope = scope
        self.name = name
        super().__init__(f"cannot use '{name}' - child scopes do not support dot notation")


class Scope(ABC):
    """Lookup context mapping names to value suppliers.

    Scopes form a chain: a `ChildScope` wraps a parent and may override or
    mask any name the parent exposes, while the `RootScope` terminates the
    chain. Suppliers are stored as-is and only invoked by whoever resolves
    the name, so a binding may reflect state at lookup time.
    """
    __slots__ = []

    @staticmethod
    def of(parent: 'Scope') -> 'ChildScope':
        """Create a new child scope inheriting the bindings of `parent`."""
        return ChildScope(parent)

    @abstractmethod
    def set_supplier(self, name: str, supplier: Supplier) -> 'Scope':
        """Bind `name` to `supplier` in this scope's own storage."""

    def set(self, name: str, value: t.Any) -> 'Scope':
        """Bind `name` to a supplier always producing `value`.

        Plain Python objects are converted with `Value.of`.
        """
        return self.set_supplier(name, constant(value))

    @abstractmethod
    def clear(self) -> None:
        """Remove all bindings owned by this scope; ancestors are untouched."""

    @abstractmethod
    def remove(self, name: str) -> t.Optional[Supplier]:
        """Remove `name` and return the supplier visible just before, if any."""

    @abstractmethod
    def get(self, name: str) -> t.Optional[Supplier]:
        pass

    @abstractmethod
    def get_raw(self, name: str) -> t.Optional[Supplier]:
        pass

    @abstractmethod
    def keys(self) -> AbstractSet:
        """Names currently visible through this scope."""

    @abstractmethod
    def scoped_keys(self) -> MutableSet:
        """Names this scope provides itself, excluding inherited ones."""

    @abstractmethod
    def get_variables(self) -> ValueMap:
        pass

    def scope(self) -> 'ChildScope':
        """Create a new child scope with this scope as its parent."""
        return Scope.of(self)

    def lookup(self, name: str) -> Value:
        """Resolve `name` and invoke its supplier; null when nothing is bound."""
        supplier = self.get(name)
        if supplier is None:
            return Value.null()
        return supplier()

    def __contains__(self, name):
        return self.get(name) is not None


class RootScope(Scope):
    """Top-level scope backed by a single dot-path aware ValueMap."""
    __slots__ = ['_values']

    def __init__(self, values: t.Optional[ValueMap] = None):
        self._values = values if values is not None else ValueMap()

    def set_supplier(self, name: str, supplier: Supplier) -> 'RootScope':
        self._values.set_supplier(name, supplier)
        return self

    def clear(self) -> None:
        self._values.clear()

    def remove(self, name: str) -> t.Optional[Supplier]:
        return self._values.remove(name)

    def get(self, name: str) -> t.Optional[Supplier]:
        return self._values.get(name)

    def get_raw(self, name: str) -> t.Optional[Supplier]:
        return self._values.get_raw(name)

    def keys(self) -> KeyView:
        return KeyView(self._values)

    def scoped_keys(self) -> MutableSet:
        return self._values.keys()

    def get_variables(self) -> ValueMap:
        return self._values

    def __repr__(self):
        return f"RootScope({self._values.names()!r})"


class ChildScope(Scope):
    """Scope inheriting the bindings of a parent without ever mutating it.

    Each name is in one of three states:

    * inherited - no own entry, resolves through the parent
    * overridden - own entry present, resolves to it
    * removed - masked, resolves to nothing regardless of the parent

    `set` moves a name to overridden (clearing any removal mark), `remove`
    masks a visible name and `clear` resets every name to inherited.

    Child scopes are meant to live for one unit of work::

        with root.scope() as scope:
            scope.set('x', 2)
            template.render(scope)

    Closing is pure bookkeeping; there is nothing to roll back.
    """
    __slots__ = ['_parent', '_overrides', '_removed']

    def __init__(self, parent: Scope):
        self._parent = parent
        self._overrides = ValueMap()
        self._removed = ConcurrentSet()
        log.debug(f"new child scope of {type(parent).__name__}")

    @property
    def parent(self) -> Scope:
        return self._parent

    def removed_keys(self) -> ConcurrentSet:
        """Mutable set of parent names hidden by this scope."""
        return self._removed

    def _check_name(self, name: str) -> None:
        if SEPARATOR in name:
            raise UnsupportedPath(self, name)

    def set_supplier(self, name: str, supplier: Supplier) -> 'ChildScope':
        self._check_name(name)
        self._overrides.set_supplier(name, supplier)
        self._removed.discard(name)
        return self

    def clear(self) -> None:
        self._overrides.clear()
        self._removed.clear()

    def remove(self, name: str) -> t.Optional[Supplier]:
        self._check_name(name)
        supplier = self.get_raw(name)
        if supplier is not None:
            log.debug(f"masking '{name}' in child scope")
            self._removed.add(name)
        return supplier

    def get(self, name: str) -> t.Optional[Supplier]:
        self._check_name(name)
        return self.get_raw(name)

    def get_raw(self, name: str) -> t.Optional[Supplier]:
        if name in self._removed:
            return None
        supplier = self._overrides.get_raw(name)
        if supplier is not None:
            return supplier
        return self._parent.get_raw(name)

    def keys(self) -> t.FrozenSet[str]:
        visible = set(self._overrides.names())
        visible.update(self._parent.keys())
        return frozenset(visible.difference(self._removed))

    def scoped_keys(self) -> MutableSet:
        return self._overrides.keys()

    def get_variables(self) -> ValueMap:
        return self._overrides

    def close(self) -> None:
        pass

    def __enter__(self) -> 'ChildScope':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self):
        return (f"ChildScope({self._overrides.names()!r}"
                f", removed={sorted(self._removed)!r}"
                f", parent={self._parent!r})")
