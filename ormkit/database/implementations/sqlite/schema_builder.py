"""SQLite schema builder."""

from typing import Any

from ormkit.database.interfaces.schema_builder import SchemaBuilder
from ormkit.database.schema import ColumnDefinition, TableDefinition


def _default_sql(default: Any) -> str:
    if isinstance(default, bool):
        return str(int(default))
    if isinstance(default, str):
        escaped = default.replace("'", "''")
        return f"'{escaped}'"
    return str(default)


class SQLiteSchemaBuilder(SchemaBuilder):
    """SQLite-specific schema builder."""

    def column_sql(self, column: ColumnDefinition) -> str:
        """Render one column definition.

        A primary key column never gets NOT NULL; SQLite only accepts
        AUTOINCREMENT directly after PRIMARY KEY.
        """
        parts = [column.name, column.type]

        if column.primary_key:
            parts.append("PRIMARY KEY")
            if column.auto_increment:
                parts.append("AUTOINCREMENT")
        elif not column.nullable:
            parts.append("NOT NULL")

        if column.unique and not column.primary_key:
            parts.append("UNIQUE")

        if column.default is not None:
            parts.append(f"DEFAULT {_default_sql(column.default)}")

        return " ".join(parts)

    def create_table_sql(self, table: TableDefinition, if_not_exists: bool = True) -> str:
        columns_sql = ", ".join(self.column_sql(col) for col in table.columns)
        guard = "IF NOT EXISTS " if if_not_exists else ""
        return f"CREATE TABLE {guard}{table.name} ({columns_sql})"

    def create_index_sql(
        self, table_name: str, index_name: str, columns: list[str]
    ) -> str:
        columns_sql = ", ".join(columns)
        return f"CREATE INDEX {index_name} ON {table_name} ({columns_sql})"

    def drop_table_sql(self, table_name: str) -> str:
        return f"DROP TABLE IF EXISTS {table_name}"

    def drop_index_sql(self, index_name: str) -> str:
        return f"DROP INDEX {index_name}"

    def add_column_sql(self, table_name: str, column: ColumnDefinition) -> str:
        return f"ALTER TABLE {table_name} ADD COLUMN {self.column_sql(column)}"

    def drop_column_sql(self, table_name: str, column_name: str) -> str:
        return f"ALTER TABLE {table_name} DROP COLUMN {column_name}"
