import typing as t
from typing_extensions import Protocol

if t.TYPE_CHECKING:
    from starscope.value import Value


class Supplier(Protocol):
    """Deferred, zero-argument producer of a value."""
    def __call__(self) -> 'Value':
        ...
