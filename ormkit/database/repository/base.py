"""Generic CRUD repository built on the Model contract."""

from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

from ormkit.database.engine import Database
from ormkit.database.filters import Filter, FilterOperator, Single, as_operator
from ormkit.database.model import ColumnInfo, Model
from ormkit.database.pagination import PaginatedResult, Pagination, SearchFilter
from ormkit.database.query_builder import QueryBuilder
from ormkit.database.sql_builder import Sort, SqlBuilder
from ormkit.database.values import Value
from ormkit.exceptions import ConfigurationError, NotFoundError
from ormkit.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=Model)


class Repository(Generic[T]):
    """CRUD operations for one Model type over a Database handle."""

    def __init__(
        self, model: type[T], db: Database, builder: SqlBuilder | None = None
    ) -> None:
        self.model = model
        self.db = db
        self.builder = builder or SqlBuilder()

    @property
    def table(self) -> str:
        return self.model.table_name()

    def query(self) -> QueryBuilder:
        """Start a QueryBuilder on this repository's table."""
        return QueryBuilder(self.table, self.builder)

    def _primary_key(self) -> ColumnInfo:
        pk = self.model.primary_key_column()
        if pk is None:
            raise ConfigurationError(
                f"{self.model.__name__} has no primary key column"
            )
        return pk

    def _pk_filter(self, entity_id: Any) -> Single:
        return Single(Filter.eq(self._primary_key().name, entity_id))

    def _insert_values(self, entity: T) -> list[tuple[str, Value]]:
        pk = self.model.primary_key_column()
        values = entity.encode()
        if pk is not None and entity.primary_key_value() is None:
            # Unset generated key: let the database assign it
            values = [(name, value) for name, value in values if name != pk.name]
        return values

    async def create(self, entity: T) -> T:
        """Insert a row for ``entity``.

        The generated primary key is not written back to ``entity``; re-query
        (e.g. with :meth:`find_where`) to obtain it.

        Returns:
            The entity passed in, unchanged
        """
        sql, params = self.builder.insert(self.table, self._insert_values(entity))
        await self.db.execute(sql, params)
        logger.debug(f"Created {self.model.__name__} row in {self.table}")
        return entity

    async def bulk_create(self, entities: Iterable[T]) -> int:
        """Insert several rows inside one transaction.

        Returns:
            Number of rows inserted
        """
        inserted = 0
        async with self.db.transaction():
            for entity in entities:
                sql, params = self.builder.insert(
                    self.table, self._insert_values(entity)
                )
                inserted += await self.db.execute(sql, params)
        return inserted

    async def find_by_id(self, entity_id: Any) -> T | None:
        """Get entity by primary key, or None if absent."""
        rows = await self.query().where(self._pk_filter(entity_id)).limit(1).execute(
            self.db, self.model
        )
        return rows[0] if rows else None

    async def get(self, entity_id: Any) -> T:
        """Get entity by primary key.

        Raises:
            NotFoundError: If no row has this key
        """
        entity = await self.find_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model.__name__} {entity_id!r} not found")
        return entity

    async def exists(self, entity_id: Any) -> bool:
        return await self.count_where(self._pk_filter(entity_id)) > 0

    async def find_all(self, order_by: Sequence[Sort] = ()) -> list[T]:
        builder = self.query()
        for sort in order_by:
            builder.order_by(sort)
        return await builder.execute(self.db, self.model)

    async def find_where(
        self, node: Filter | FilterOperator, order_by: Sequence[Sort] = ()
    ) -> list[T]:
        builder = self.query().where(node)
        for sort in order_by:
            builder.order_by(sort)
        return await builder.execute(self.db, self.model)

    async def find_paginated(
        self,
        pagination: Pagination,
        node: Filter | FilterOperator | None = None,
        order_by: Sequence[Sort] = (),
    ) -> PaginatedResult[T]:
        """Read one page; the count runs under the same filter, unpaginated."""
        count_builder = self.query()
        if node is not None:
            count_builder.where(node)
        total = await count_builder.execute_count(self.db)

        page_builder = self.query().limit(pagination.limit).offset(pagination.offset)
        if node is not None:
            page_builder.where(node)
        for sort in order_by:
            page_builder.order_by(sort)
        data = await page_builder.execute(self.db, self.model)

        return PaginatedResult(data=data, pagination=pagination.with_total(total))

    async def find_where_paginated(
        self,
        node: Filter | FilterOperator,
        pagination: Pagination,
        order_by: Sequence[Sort] = (),
    ) -> PaginatedResult[T]:
        return await self.find_paginated(pagination, node, order_by)

    async def search(
        self, search: SearchFilter, pagination: Pagination | None = None
    ) -> PaginatedResult[T]:
        """Substring search across ``search.columns``.

        Without a pagination request every match is returned as a single page.
        """
        node = search.to_filter()
        if pagination is not None:
            return await self.find_paginated(pagination, node)

        data = await self.find_where(node)
        full_page = Pagination(page=1, per_page=max(len(data), 1))
        return PaginatedResult(data=data, pagination=full_page.with_total(len(data)))

    async def update(self, entity: T) -> T:
        """Write every non-key column by primary key.

        Updating a key that matches no row succeeds without changing anything.
        """
        pk = self._primary_key()
        pk_value = entity.primary_key_value()
        if pk_value is None:
            raise ValueError(f"Cannot update {self.model.__name__} without {pk.name}")

        values = [(name, value) for name, value in entity.encode() if name != pk.name]
        sql, params = self.builder.update(self.table, values, self._pk_filter(pk_value))
        await self.db.execute(sql, params)
        return entity

    async def create_or_update(self, entity: T) -> T:
        """Update when the primary key is set, insert otherwise.

        No existence check is made before updating.
        """
        if entity.primary_key_value() is not None:
            return await self.update(entity)
        return await self.create(entity)

    async def delete(self, entity: T) -> bool:
        """Delete the row of ``entity`` by primary key.

        Returns True whenever the statement runs, whether or not a row matched.
        """
        pk = self._primary_key()
        pk_value = entity.primary_key_value()
        if pk_value is None:
            raise ValueError(f"Cannot delete {self.model.__name__} without {pk.name}")
        return await self.delete_by_id(pk_value)

    async def delete_by_id(self, entity_id: Any) -> bool:
        sql, params = self.builder.delete(self.table, self._pk_filter(entity_id))
        await self.db.execute(sql, params)
        return True

    async def bulk_delete(self, ids: Iterable[Any]) -> int:
        """Delete rows by primary key.

        Returns:
            Number of rows actually removed
        """
        node = Single(Filter.in_(self._primary_key().name, ids))
        sql, params = self.builder.delete(self.table, node)
        return await self.db.execute(sql, params)

    async def delete_where(self, node: Filter | FilterOperator) -> int:
        """Delete matching rows and return how many were removed."""
        sql, params = self.builder.delete(self.table, as_operator(node))
        return await self.db.execute(sql, params)

    async def count(self) -> int:
        return await self.query().execute_count(self.db)

    async def count_where(self, node: Filter | FilterOperator) -> int:
        return await self.query().where(node).execute_count(self.db)
