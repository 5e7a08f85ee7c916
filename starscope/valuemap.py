import typing as t
from collections.abc import Mapping, MutableSet, Set
from threading import RLock

from starscope.protocols import Supplier
from starscope.value import Value, constant

SEPARATOR = '.'


def split_name(name: str) -> t.Tuple[str, t.Optional[str]]:
    """Split `name` at its first separator.

    Returns
    -------
        (head, rest) where `rest` is None for names without a separator.
    """
    if not all(name.split(SEPARATOR)):
        raise ValueError(f"invalid name '{name}'")
    head, sep, rest = name.partition(SEPARATOR)
    return head, (rest if sep else None)


class KeyView(Set):
    """Read-only, live view of the names bound directly in a ValueMap."""
    __slots__ = ['_map']

    def __init__(self, values: 'ValueMap'):
        self._map = values

    def __contains__(self, name):
        return self._map.get_raw(name) is not None

    def __iter__(self):
        return iter(self._map.names())

    def __len__(self):
        return len(self._map)

    def __repr__(self):
        return f"{type(self).__name__}({sorted(self)!r})"


class MutableKeyView(KeyView, MutableSet):
    """Live view of the names bound in a ValueMap; discarding a name unbinds it."""
    __slots__ = []

    def add(self, name):
        raise TypeError("cannot bind a name without a supplier, use ValueMap.set()")

    def discard(self, name):
        self._map.remove_raw(name)


class ValueMap:
    """Flat store of name -> supplier with dot-path aware accessors.

    A dotted name such as `player.name` addresses the entry `name` inside the
    map bound to `player`; intermediate maps are created on demand by `set`.
    All access to the underlying dict happens under a re-entrant lock.
    """
    __slots__ = ['_values', '_lock']

    def __init__(self):
        self._values: t.Dict[str, Supplier] = {}
        self._lock = RLock()

    def set_supplier(self, name: str, supplier: Supplier) -> 'ValueMap':
        """Bind `name` to `supplier` without invoking it.

        For a dotted name the supplier already bound at the first segment is
        invoked once, at write time, to find out whether it produces a map to
        merge into; any other result is replaced by a fresh map.
        """
        head, rest = split_name(name)
        if rest is None:
            with self._lock:
                self._values[head] = supplier
            return self

        with self._lock:
            nested = self._nested_map(head)
            if nested is None:
                nested = ValueMap()
                self._values[head] = constant(Value.map(nested))
        nested.set_supplier(rest, supplier)
        return self

    def set(self, name: str, value: t.Any) -> 'ValueMap':
        """Bind `name` to a supplier always producing `value`."""
        return self.set_supplier(name, constant(value))

    def get(self, name: str) -> t.Optional[Supplier]:
        head, rest = split_name(name)
        if rest is None:
            return self.get_raw(head)
        nested = self._nested_map(head)
        if nested is None:
            return None
        return nested.get(rest)

    def get_raw(self, name: str) -> t.Optional[Supplier]:
        with self._lock:
            return self._values.get(name)

    def remove(self, name: str) -> t.Optional[Supplier]:
        head, rest = split_name(name)
        if rest is None:
            return self.remove_raw(head)
        nested = self._nested_map(head)
        if nested is None:
            return None
        return nested.remove(rest)

    def remove_raw(self, name: str) -> t.Optional[Supplier]:
        with self._lock:
            return self._values.pop(name, None)

    def clear(self) -> None:
        with self._lock:
            self._values.clear()

    def keys(self) -> MutableKeyView:
        return MutableKeyView(self)

    def names(self) -> t.List[str]:
        """Snapshot of the names bound directly in this map."""
        with self._lock:
            return list(self._values)

    def update_from(self, mapping: t.Mapping, prefix: str = "") -> 'ValueMap':
        """Bind every leaf of a (nested) mapping, merging into existing maps."""
        for key, value in mapping.items():
            name = f"{prefix}{key}"
            if isinstance(value, Mapping) and value:
                self.update_from(value, f"{name}{SEPARATOR}")
            elif isinstance(value, Mapping):
                self.set(name, ValueMap())
            else:
                self.set(name, value)
        return self

    def _nested_map(self, name: str) -> t.Optional['ValueMap']:
        supplier = self.get_raw(name)
        if supplier is None:
            return None
        value = supplier()
        return value.data if value.is_map() else None

    def __contains__(self, name):
        return self.get_raw(name) is not None

    def __iter__(self):
        return iter(self.names())

    def __len__(self):
        with self._lock:
            return len(self._values)

    def __repr__(self):
        return f"{type(self).__name__}({self.names()!r})"
