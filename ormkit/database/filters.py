"""Composable filter trees.

A :class:`Filter` is one column comparison. :class:`Single`, :class:`And` and
:class:`Or` combine filters into a tree (``FilterOperator``) that
:class:`~ormkit.database.sql_builder.SqlBuilder` renders into parameterized SQL.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeAlias

from ormkit.database.values import Value


class Operator(str, Enum):
    """Comparison operators supported in a Filter."""

    EQ = "="
    NE = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"
    IN = "IN"
    NOT_IN = "NOT IN"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"

    @property
    def takes_list(self) -> bool:
        return self in (Operator.IN, Operator.NOT_IN)

    @property
    def takes_none(self) -> bool:
        return self in (Operator.IS_NULL, Operator.IS_NOT_NULL)


@dataclass(frozen=True)
class Filter:
    """A single ``column <operator> operand`` comparison."""

    column: str
    operator: Operator
    values: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        if not self.column:
            raise ValueError("Filter column must not be empty")
        if self.operator.takes_none and self.values:
            raise ValueError(f"{self.operator.value} takes no operand")
        if (
            not self.operator.takes_none
            and not self.operator.takes_list
            and len(self.values) != 1
        ):
            raise ValueError(
                f"{self.operator.value} takes exactly one operand, "
                f"got {len(self.values)}"
            )

    @classmethod
    def _compare(cls, column: str, operator: Operator, value: Any) -> "Filter":
        return cls(column, operator, (Value.from_python(value),))

    @classmethod
    def eq(cls, column: str, value: Any) -> "Filter":
        return cls._compare(column, Operator.EQ, value)

    @classmethod
    def ne(cls, column: str, value: Any) -> "Filter":
        return cls._compare(column, Operator.NE, value)

    @classmethod
    def gt(cls, column: str, value: Any) -> "Filter":
        return cls._compare(column, Operator.GT, value)

    @classmethod
    def gte(cls, column: str, value: Any) -> "Filter":
        return cls._compare(column, Operator.GTE, value)

    @classmethod
    def lt(cls, column: str, value: Any) -> "Filter":
        return cls._compare(column, Operator.LT, value)

    @classmethod
    def lte(cls, column: str, value: Any) -> "Filter":
        return cls._compare(column, Operator.LTE, value)

    @classmethod
    def like(cls, column: str, pattern: str) -> "Filter":
        """LIKE comparison; the caller supplies the ``%``/``_`` wildcards."""
        return cls._compare(column, Operator.LIKE, pattern)

    @classmethod
    def not_like(cls, column: str, pattern: str) -> "Filter":
        return cls._compare(column, Operator.NOT_LIKE, pattern)

    @classmethod
    def in_(cls, column: str, values: Iterable[Any]) -> "Filter":
        return cls(column, Operator.IN, tuple(Value.from_python(v) for v in values))

    @classmethod
    def not_in(cls, column: str, values: Iterable[Any]) -> "Filter":
        return cls(
            column, Operator.NOT_IN, tuple(Value.from_python(v) for v in values)
        )

    @classmethod
    def is_null(cls, column: str) -> "Filter":
        return cls(column, Operator.IS_NULL)

    @classmethod
    def is_not_null(cls, column: str) -> "Filter":
        return cls(column, Operator.IS_NOT_NULL)


@dataclass(frozen=True)
class Single:
    """Leaf node wrapping one Filter."""

    filter: Filter


@dataclass(frozen=True)
class And:
    """All children must match. ``And([])`` matches every row."""

    children: list["FilterOperator"] = field(default_factory=list)


@dataclass(frozen=True)
class Or:
    """Any child must match. ``Or([])`` matches no row."""

    children: list["FilterOperator"] = field(default_factory=list)


FilterOperator: TypeAlias = Single | And | Or


def as_operator(node: "Filter | FilterOperator") -> FilterOperator:
    """Wrap a bare Filter in Single; pass tree nodes through."""
    if isinstance(node, Filter):
        return Single(node)
    return node
