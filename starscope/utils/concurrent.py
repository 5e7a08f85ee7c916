import typing as t
from collections.abc import MutableSet
from threading import Lock


class ConcurrentSet(MutableSet):
    """Set which may be mutated and iterated from several threads at once.

    Every operation holds the lock for its own duration only. Iteration walks
    a snapshot taken under the lock, so concurrent `add`/`discard` calls never
    invalidate an iterator.
    """
    __slots__ = ['_items', '_lock']

    def __init__(self, items: t.Optional[t.Iterable[str]] = None):
        self._lock = Lock()
        self._items: t.Set[str] = set(items or ())

    def __contains__(self, item):
        with self._lock:
            return item in self._items

    def __iter__(self):
        with self._lock:
            snapshot = list(self._items)
        return iter(snapshot)

    def __len__(self):
        with self._lock:
            return len(self._items)

    def add(self, item) -> None:
        with self._lock:
            self._items.add(item)

    def discard(self, item) -> None:
        with self._lock:
            self._items.discard(item)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __repr__(self):
        return f"{type(self).__name__}({sorted(self)!r})"
