"""Fluent SELECT builder."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, TypeVar, cast

from ormkit.database.filters import Filter, FilterOperator, as_operator
from ormkit.database.model import Model
from ormkit.database.sql_builder import Sort, SqlBuilder, Statement
from ormkit.database.values import ValueKind
from ormkit.exceptions import DecodeError
from ormkit.log import get_logger

if TYPE_CHECKING:
    from ormkit.database.engine import Database

logger = get_logger(__name__)

M = TypeVar("M", bound=Model)


class QueryBuilder:
    """Accumulates a filtered, sorted, windowed SELECT against one table.

    Configure with chained calls, then run :meth:`execute` or
    :meth:`execute_count` once.
    """

    def __init__(self, table: str, builder: SqlBuilder | None = None) -> None:
        self.table = table
        self._builder = builder or SqlBuilder()
        self._filter: FilterOperator | None = None
        self._sorts: list[Sort] = []
        self._limit: int | None = None
        self._offset: int | None = None

    def where(self, node: Filter | FilterOperator) -> "QueryBuilder":
        """Set the filter, replacing any previous one."""
        self._filter = as_operator(node)
        return self

    def order_by(self, sort: Sort) -> "QueryBuilder":
        """Append an ORDER BY term."""
        self._sorts.append(sort)
        return self

    def limit(self, limit: int) -> "QueryBuilder":
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        self._limit = limit
        return self

    def offset(self, offset: int) -> "QueryBuilder":
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        self._offset = offset
        return self

    @property
    def filter(self) -> FilterOperator | None:
        return self._filter

    @property
    def sorts(self) -> list[Sort]:
        return list(self._sorts)

    def build(self, columns: Sequence[str] | None = None) -> Statement:
        """Build the SELECT statement."""
        return self._builder.select(
            self.table,
            columns=columns,
            where=self._filter,
            order_by=self._sorts,
            limit=self._limit,
            offset=self._offset,
        )

    def build_count(self) -> Statement:
        """Build the COUNT statement; sorting and windowing are ignored."""
        return self._builder.count(self.table, self._filter)

    async def execute(self, db: "Database", model: type[M]) -> list[M]:
        """Run the query and decode every row into ``model``.

        Raises:
            DecodeError: If any row fails to decode; no partial result is returned
        """
        sql, params = self.build(model.column_names())
        cursor = await db.query(sql, params)

        results: list[M] = []
        async for row in cursor:
            results.append(model.decode(row))
        logger.debug(f"Decoded {len(results)} {model.__name__} rows from {self.table}")
        return results

    async def execute_count(self, db: "Database") -> int:
        sql, params = self.build_count()
        cursor = await db.query(sql, params)
        row = await cursor.next()
        if row is None:
            raise DecodeError(f"COUNT on {self.table} returned no row")

        value = row.get(0)
        if value.kind != ValueKind.INTEGER:
            raise DecodeError(f"COUNT on {self.table} returned {value!r}")
        return cast(int, value.data)
