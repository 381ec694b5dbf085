"""Abstract schema builder interface."""

from abc import ABC, abstractmethod

from ormkit.database.schema import ColumnDefinition, TableDefinition


class SchemaBuilder(ABC):
    """Renders DDL statements for one SQL dialect."""

    @abstractmethod
    def create_table_sql(self, table: TableDefinition, if_not_exists: bool = True) -> str:
        """Generate CREATE TABLE SQL."""
        pass

    @abstractmethod
    def create_index_sql(
        self, table_name: str, index_name: str, columns: list[str]
    ) -> str:
        """Generate CREATE INDEX SQL."""
        pass

    @abstractmethod
    def drop_table_sql(self, table_name: str) -> str:
        """Generate DROP TABLE SQL."""
        pass

    @abstractmethod
    def drop_index_sql(self, index_name: str) -> str:
        """Generate DROP INDEX SQL."""
        pass

    @abstractmethod
    def add_column_sql(self, table_name: str, column: ColumnDefinition) -> str:
        """Generate ALTER TABLE ADD COLUMN SQL."""
        pass

    @abstractmethod
    def drop_column_sql(self, table_name: str, column_name: str) -> str:
        """Generate ALTER TABLE DROP COLUMN SQL."""
        pass
