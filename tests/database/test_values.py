"""Tests for Value conversions."""

from datetime import date, datetime, timezone
from enum import Enum

import pytest

from ormkit.database import Value, ValueKind
from ormkit.database.values import to_native_params, to_values


class Color(str, Enum):
    RED = "red"


class Level(int, Enum):
    HIGH = 3


def test_from_python_scalars() -> None:
    """Test conversion of plain Python scalars."""
    assert Value.from_python(None) == Value.null()
    assert Value.from_python(7) == Value.integer(7)
    assert Value.from_python(2.5) == Value.real(2.5)
    assert Value.from_python("abc") == Value.text("abc")
    assert Value.from_python(b"\x00\x01") == Value.blob(b"\x00\x01")


def test_booleans_become_integers() -> None:
    """Test that booleans are stored as Integer 0/1."""
    assert Value.from_python(True) == Value.integer(1)
    assert Value.from_python(False) == Value.integer(0)


def test_enum_and_dates() -> None:
    """Test enum and date conversions."""
    assert Value.from_python(Color.RED) == Value.text("red")
    assert Value.from_python(Level.HIGH) == Value.integer(3)
    assert Value.from_python(date(2024, 1, 2)) == Value.text("2024-01-02")

    moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert Value.from_python(moment) == Value.text("2024-01-02T03:04:05+00:00")


def test_unsupported_type() -> None:
    """Test that unknown objects are rejected."""
    with pytest.raises(TypeError):
        Value.from_python(object())


def test_payload_must_match_kind() -> None:
    """Test that a Value never holds a payload of another kind."""
    with pytest.raises(TypeError):
        Value(ValueKind.INTEGER, "1")
    with pytest.raises(TypeError):
        Value(ValueKind.INTEGER, True)
    with pytest.raises(TypeError):
        Value(ValueKind.NULL, 0)


def test_integer_range_is_64_bit() -> None:
    """Test that integers outside the signed 64-bit range are rejected."""
    assert Value.integer(2**63 - 1).data == 2**63 - 1
    assert Value.integer(-(2**63)).data == -(2**63)

    with pytest.raises(ValueError, match="64-bit"):
        Value.integer(2**63)
    with pytest.raises(ValueError, match="64-bit"):
        Value.integer(-(2**63) - 1)
    with pytest.raises(ValueError, match="64-bit"):
        Value.from_python(2**70)


def test_real_accepts_int() -> None:
    """Test that Real payloads are normalized to float."""
    value = Value.real(2)
    assert value.data == 2.0
    assert isinstance(value.data, float)


def test_from_native() -> None:
    """Test conversion of driver cells."""
    assert Value.from_native(None).is_null
    assert Value.from_native(5).kind == ValueKind.INTEGER
    assert Value.from_native(1.5).kind == ValueKind.REAL
    assert Value.from_native("x").kind == ValueKind.TEXT
    assert Value.from_native(memoryview(b"ab")) == Value.blob(b"ab")


def test_repr() -> None:
    """Test the readable representation."""
    assert repr(Value.integer(30)) == "Value.integer(30)"
    assert repr(Value.text("a")) == "Value.text('a')"
    assert repr(Value.null()) == "Value.null()"


def test_param_helpers() -> None:
    """Test sequence conversions used for binding."""
    values = to_values([1, "a", None, True])
    assert values == [
        Value.integer(1),
        Value.text("a"),
        Value.null(),
        Value.integer(1),
    ]
    assert to_native_params(values) == (1, "a", None, 1)
    assert to_values(None) == []
