"""Query building, persistence and migrations."""

from .engine import Database, Transaction, create_connection, create_database
from .filters import And, Filter, FilterOperator, Operator, Or, Single
from .migration import Migration, MigrationBuilder, MigrationManager
from .model import ColumnInfo, Model, column
from .pagination import PaginatedResult, Pagination, SearchFilter
from .query_builder import QueryBuilder
from .repository import Repository
from .sql_builder import Sort, SqlBuilder
from .values import Value, ValueKind

__all__ = [
    "And",
    "ColumnInfo",
    "Database",
    "Filter",
    "FilterOperator",
    "Migration",
    "MigrationBuilder",
    "MigrationManager",
    "Model",
    "Operator",
    "Or",
    "PaginatedResult",
    "Pagination",
    "QueryBuilder",
    "Repository",
    "SearchFilter",
    "Single",
    "Sort",
    "SqlBuilder",
    "Transaction",
    "Value",
    "ValueKind",
    "column",
    "create_connection",
    "create_database",
]
