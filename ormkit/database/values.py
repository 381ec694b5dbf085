"""Database-portable scalar values.

Every parameter handed to a driver and every cell read back from one passes through
:class:`Value`. Conversions between Python objects, driver-native objects and
``Value`` live in this module only.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, TypeAlias

NativeValue: TypeAlias = None | int | float | str | bytes

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(str, Enum):
    """Variant tag of a :class:`Value`."""

    NULL = "null"
    INTEGER = "integer"
    REAL = "real"
    TEXT = "text"
    BLOB = "blob"


@dataclass(frozen=True, slots=True)
class Value:
    """Tagged scalar: exactly one of Null, Integer, Real, Text or Blob."""

    kind: ValueKind
    data: NativeValue = None

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES[self.kind]
        # bool is an int subclass but never a valid Integer payload
        if isinstance(self.data, bool) or not isinstance(self.data, expected):
            raise TypeError(
                f"{self.kind.value} value cannot hold {type(self.data).__name__}"
            )
        if self.kind == ValueKind.INTEGER and not INT64_MIN <= self.data <= INT64_MAX:
            raise ValueError(f"integer value out of 64-bit range: {self.data}")

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueKind.NULL)

    @classmethod
    def integer(cls, value: int) -> "Value":
        return cls(ValueKind.INTEGER, value)

    @classmethod
    def real(cls, value: float) -> "Value":
        return cls(ValueKind.REAL, float(value))

    @classmethod
    def text(cls, value: str) -> "Value":
        return cls(ValueKind.TEXT, value)

    @classmethod
    def blob(cls, value: bytes) -> "Value":
        return cls(ValueKind.BLOB, bytes(value))

    @classmethod
    def from_python(cls, obj: Any) -> "Value":
        """Convert a Python object into a Value.

        Booleans become Integer 0/1, dates and datetimes become ISO-8601 text and
        enums are converted through their ``value``.

        Raises:
            TypeError: If the object has no database representation
            ValueError: If an integer does not fit in 64 bits
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return cls.null()
        if isinstance(obj, bool):
            return cls.integer(int(obj))
        if isinstance(obj, Enum):
            return cls.from_python(obj.value)
        if isinstance(obj, int):
            return cls.integer(obj)
        if isinstance(obj, float):
            return cls.real(obj)
        if isinstance(obj, str):
            return cls.text(obj)
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return cls.blob(bytes(obj))
        if isinstance(obj, (datetime, date)):
            return cls.text(obj.isoformat())
        raise TypeError(f"Unsupported value type: {type(obj).__name__}")

    @classmethod
    def from_native(cls, obj: Any) -> "Value":
        """Convert a cell returned by a driver into a Value."""
        if obj is None:
            return cls.null()
        if isinstance(obj, int) and not isinstance(obj, bool):
            return cls.integer(obj)
        if isinstance(obj, float):
            return cls.real(obj)
        if isinstance(obj, str):
            return cls.text(obj)
        if isinstance(obj, (bytes, bytearray, memoryview)):
            return cls.blob(bytes(obj))
        raise TypeError(f"Unsupported driver value type: {type(obj).__name__}")

    def to_native(self) -> NativeValue:
        """Object bound as a driver parameter."""
        return self.data

    def to_python(self) -> NativeValue:
        return self.data

    @property
    def is_null(self) -> bool:
        return self.kind == ValueKind.NULL

    def __repr__(self) -> str:
        if self.kind == ValueKind.NULL:
            return "Value.null()"
        return f"Value.{self.kind.value}({self.data!r})"


_PAYLOAD_TYPES: dict[ValueKind, type | tuple[type, ...]] = {
    ValueKind.NULL: type(None),
    ValueKind.INTEGER: int,
    ValueKind.REAL: float,
    ValueKind.TEXT: str,
    ValueKind.BLOB: bytes,
}


def to_values(objects: list[Any] | tuple[Any, ...] | None) -> list[Value]:
    """Convert a parameter sequence into Values."""
    if not objects:
        return []
    return [Value.from_python(obj) for obj in objects]


def to_native_params(values: list[Value]) -> tuple[NativeValue, ...]:
    """Convert Values into the tuple a DB-API cursor binds."""
    return tuple(value.to_native() for value in values)
