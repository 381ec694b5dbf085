"""Ready-made migrations for common schema changes."""

from collections.abc import Sequence

from ormkit.database.implementations.sqlite.schema_builder import SQLiteSchemaBuilder
from ormkit.database.migration import Migration, MigrationBuilder
from ormkit.database.model import Model

_schema = SQLiteSchemaBuilder()


def create_table(table_name: str, columns: Sequence[tuple[str, str]]) -> Migration:
    """CREATE TABLE from ``(name, definition)`` pairs.

    Example:
        >>> create_table("posts", [("id", "INTEGER PRIMARY KEY"), ("title", "TEXT")]).sql
        'CREATE TABLE posts (id INTEGER PRIMARY KEY, title TEXT)'
    """
    definitions = ", ".join(f"{name} {definition}" for name, definition in columns)
    return (
        MigrationBuilder(f"create_table_{table_name}")
        .up(f"CREATE TABLE {table_name} ({definitions})")
        .build()
    )


def add_column(table_name: str, column_name: str, definition: str) -> Migration:
    return (
        MigrationBuilder(f"add_column_{table_name}_{column_name}")
        .up(f"ALTER TABLE {table_name} ADD COLUMN {column_name} {definition}")
        .build()
    )


def drop_column(table_name: str, column_name: str) -> Migration:
    return (
        MigrationBuilder(f"drop_column_{table_name}_{column_name}")
        .up(_schema.drop_column_sql(table_name, column_name))
        .build()
    )


def create_index(index_name: str, table_name: str, columns: Sequence[str]) -> Migration:
    return (
        MigrationBuilder(f"create_index_{index_name}")
        .up(_schema.create_index_sql(table_name, index_name, list(columns)))
        .build()
    )


def drop_index(index_name: str) -> Migration:
    return (
        MigrationBuilder(f"drop_index_{index_name}")
        .up(_schema.drop_index_sql(index_name))
        .build()
    )


def migration_for(model: type[Model]) -> Migration:
    """Create-table migration derived from a model's columns."""
    return (
        MigrationBuilder(f"create_table_{model.table_name()}")
        .up(model.migration_sql())
        .build()
    )
