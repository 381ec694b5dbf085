"""Render filter trees and statements into parameterized SQL.

Placeholders are positional (``?``). Parameters are collected depth-first,
left-to-right, so the n-th placeholder in the SQL text always binds the n-th
Value in the returned list.

Identifiers (tables, columns) are trusted and inserted verbatim; only operand
values are parameterized.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from ormkit.database.filters import And, Filter, FilterOperator, Operator, Or, Single
from ormkit.database.values import Value
from ormkit.types import SortOrder

ALWAYS_TRUE = "1=1"
ALWAYS_FALSE = "1=0"

Statement = tuple[str, list[Value]]


@dataclass(frozen=True)
class Sort:
    """One ORDER BY term."""

    column: str
    order: SortOrder = SortOrder.ASC

    @classmethod
    def asc(cls, column: str) -> "Sort":
        return cls(column, SortOrder.ASC)

    @classmethod
    def desc(cls, column: str) -> "Sort":
        return cls(column, SortOrder.DESC)


class SqlBuilder:
    """Builds SQL fragments and full statements for one table-oriented dialect."""

    def render(self, node: FilterOperator) -> Statement:
        """Render a filter tree.

        Returns:
            Tuple of (sql_fragment, params)

        Example:
            >>> SqlBuilder().render(And([Single(Filter.gt("age", 30)),
            ...                          Single(Filter.eq("active", True))]))
            ('(age > ?) AND (active = ?)', [Value.integer(30), Value.integer(1)])
        """
        if isinstance(node, Single):
            return self.render_filter(node.filter)
        if isinstance(node, And):
            return self._render_group(node.children, "AND", ALWAYS_TRUE)
        if isinstance(node, Or):
            return self._render_group(node.children, "OR", ALWAYS_FALSE)
        raise TypeError(f"Unsupported filter node: {type(node).__name__}")

    def render_filter(self, flt: Filter) -> Statement:
        """Render one leaf comparison."""
        op = flt.operator

        if op.takes_none:
            return f"{flt.column} {op.value}", []

        if op.takes_list:
            if not flt.values:
                # x IN () matches nothing, x NOT IN () matches everything
                return (ALWAYS_FALSE if op == Operator.IN else ALWAYS_TRUE), []
            placeholders = ", ".join("?" for _ in flt.values)
            return f"{flt.column} {op.value} ({placeholders})", list(flt.values)

        return f"{flt.column} {op.value} ?", list(flt.values)

    def _render_group(
        self, children: Sequence[FilterOperator], joiner: str, empty: str
    ) -> Statement:
        if not children:
            return empty, []

        parts: list[str] = []
        params: list[Value] = []
        for child in children:
            fragment, child_params = self.render(child)
            parts.append(f"({fragment})")
            params.extend(child_params)
        return f" {joiner} ".join(parts), params

    def where_clause(self, node: FilterOperator | None) -> Statement:
        """Render ``WHERE ...``, or an empty string when there is no filter."""
        if node is None:
            return "", []
        fragment, params = self.render(node)
        return f"WHERE {fragment}", params

    def order_by_clause(self, sorts: Sequence[Sort]) -> str:
        """Render ``ORDER BY`` with one term per Sort, in the given order.

        Example:
            >>> SqlBuilder().order_by_clause([Sort.asc("name"), Sort.desc("age")])
            'ORDER BY name ASC, age DESC'
        """
        if not sorts:
            return ""
        terms = ", ".join(f"{sort.column} {sort.order.value}" for sort in sorts)
        return f"ORDER BY {terms}"

    def limit_clause(self, limit: int | None, offset: int | None = None) -> str:
        """Render ``LIMIT``/``OFFSET``.

        SQLite only accepts OFFSET after LIMIT, so an offset without a limit is
        rendered as ``LIMIT -1 OFFSET n``.
        """
        if limit is None and offset is None:
            return ""
        clause = f"LIMIT {limit if limit is not None else -1}"
        if offset is not None:
            clause += f" OFFSET {offset}"
        return clause

    def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        where: FilterOperator | None = None,
        order_by: Sequence[Sort] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> Statement:
        """Build a SELECT statement."""
        cols = "*" if not columns else ", ".join(columns)
        where_sql, params = self.where_clause(where)
        clauses = [
            f"SELECT {cols} FROM {table}",
            where_sql,
            self.order_by_clause(order_by),
            self.limit_clause(limit, offset),
        ]
        return " ".join(clause for clause in clauses if clause), params

    def count(self, table: str, where: FilterOperator | None = None) -> Statement:
        """Build a ``SELECT COUNT(*)`` statement."""
        where_sql, params = self.where_clause(where)
        sql = f"SELECT COUNT(*) FROM {table}"
        if where_sql:
            sql += f" {where_sql}"
        return sql, params

    def insert(self, table: str, values: Sequence[tuple[str, Value]]) -> Statement:
        """Build an INSERT statement for one row."""
        if not values:
            return f"INSERT INTO {table} DEFAULT VALUES", []
        columns = ", ".join(column for column, _ in values)
        placeholders = ", ".join("?" for _ in values)
        return (
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",
            [value for _, value in values],
        )

    def update(
        self,
        table: str,
        values: Sequence[tuple[str, Value]],
        where: FilterOperator | None = None,
    ) -> Statement:
        """Build an UPDATE statement. SET parameters precede WHERE parameters."""
        if not values:
            raise ValueError("UPDATE requires at least one column")
        assignments = ", ".join(f"{column} = ?" for column, _ in values)
        params = [value for _, value in values]
        where_sql, where_params = self.where_clause(where)
        sql = f"UPDATE {table} SET {assignments}"
        if where_sql:
            sql += f" {where_sql}"
        return sql, params + where_params

    def delete(self, table: str, where: FilterOperator | None = None) -> Statement:
        """Build a DELETE statement."""
        where_sql, params = self.where_clause(where)
        sql = f"DELETE FROM {table}"
        if where_sql:
            sql += f" {where_sql}"
        return sql, params


def render(node: FilterOperator) -> Statement:
    """Render a filter tree with the default builder."""
    return SqlBuilder().render(node)
