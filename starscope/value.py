import typing as t
from enum import Enum, unique as enum_unique_values

if t.TYPE_CHECKING:
    from starscope.valuemap import ValueMap

Function = t.Callable[..., t.Any]


@enum_unique_values
class ValueType(Enum):
    NULL = 1
    BOOLEAN = 2
    NUMBER = 3
    STRING = 4
    FUNCTION = 5
    MAP = 6
    OBJECT = 7


class Value:
    """Immutable, tagged value handed out by scope suppliers.

    Construct values through the class methods (`Value.number(5)`) or convert
    arbitrary Python objects with `Value.of`.
    """
    __slots__ = ['_type', '_data']

    def __init__(self, typ: ValueType, data: t.Any = None):
        self._type = typ
        self._data = data

    @classmethod
    def null(cls) -> 'Value':
        return _NULL

    @classmethod
    def bool_(cls, value: bool) -> 'Value':
        return _TRUE if value else _FALSE

    @classmethod
    def number(cls, value: float) -> 'Value':
        return cls(ValueType.NUMBER, value)

    @classmethod
    def string(cls, value: str) -> 'Value':
        return cls(ValueType.STRING, value)

    @classmethod
    def function(cls, fn: Function) -> 'Value':
        return cls(ValueType.FUNCTION, fn)

    @classmethod
    def map(cls, value: 'ValueMap') -> 'Value':
        return cls(ValueType.MAP, value)

    @classmethod
    def object(cls, value: t.Any) -> 'Value':
        return cls(ValueType.OBJECT, value)

    @classmethod
    def of(cls, obj: t.Any) -> 'Value':
        """Convert a plain Python object into a Value."""
        from starscope.valuemap import ValueMap

        if obj is None:
            return _NULL
        if isinstance(obj, Value):
            return obj
        # bool is a subclass of int, check it first
        if isinstance(obj, bool):
            return cls.bool_(obj)
        if isinstance(obj, (int, float)):
            return cls.number(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, ValueMap):
            return cls.map(obj)
        if callable(obj):
            return cls.function(obj)
        return cls.object(obj)

    @property
    def type(self) -> ValueType:
        return self._type

    @property
    def data(self) -> t.Any:
        return self._data

    def is_null(self) -> bool:
        return self._type is ValueType.NULL

    def is_bool(self) -> bool:
        return self._type is ValueType.BOOLEAN

    def is_number(self) -> bool:
        return self._type is ValueType.NUMBER

    def is_string(self) -> bool:
        return self._type is ValueType.STRING

    def is_function(self) -> bool:
        return self._type is ValueType.FUNCTION

    def is_map(self) -> bool:
        return self._type is ValueType.MAP

    def is_object(self) -> bool:
        return self._type is ValueType.OBJECT

    def call(self, *args: 'Value') -> 'Value':
        if not self.is_function():
            raise TypeError(f"cannot call a value of type '{self._type.name.lower()}'")
        return Value.of(self._data(*args))

    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self._type is other._type and self._data == other._data

    def __hash__(self):
        try:
            return hash((self._type, self._data))
        except TypeError:
            return hash(self._type)

    def __str__(self):
        typ = self._type
        if typ is ValueType.NULL:
            return "null"
        elif typ is ValueType.BOOLEAN:
            return "true" if self._data else "false"
        elif typ is ValueType.NUMBER:
            num = self._data
            if isinstance(num, float) and num.is_integer():
                return str(int(num))
            return str(num)
        elif typ is ValueType.FUNCTION:
            return "<function>"
        elif typ is ValueType.MAP:
            return "<map>"
        return str(self._data)

    def __repr__(self):
        if self._type is ValueType.NULL:
            return "Value.null()"
        return f"Value({self._type.name.lower()}, {self._data!r})"


_NULL = Value(ValueType.NULL)
_TRUE = Value(ValueType.BOOLEAN, True)
_FALSE = Value(ValueType.BOOLEAN, False)


def constant(value: t.Any) -> t.Callable[[], Value]:
    """Make a supplier which always produces `value` (converted with `Value.of`)."""
    value = Value.of(value)

    def supplier() -> Value:
        return value
    return supplier
