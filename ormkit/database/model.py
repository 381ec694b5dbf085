"""Model contract for persisted entity types.

An entity is a pydantic model that declares its table with ``__tablename__`` and
its columns with ordinary fields. :func:`column` attaches SQL metadata to a field;
fields declared without it get their SQL type from the annotation.

    class User(Model):
        __tablename__ = "users"

        id: int | None = column(None, primary_key=True, auto_increment=True)
        name: str
        age: int | None = None
        is_active: bool = True
"""

import types
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Self, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.fields import FieldInfo

from ormkit.database.implementations.sqlite.schema_builder import SQLiteSchemaBuilder
from ormkit.database.interfaces import Row
from ormkit.database.schema import ColumnDefinition, TableDefinition
from ormkit.database.values import Value
from ormkit.exceptions import DecodeError

_SQL_TYPES: list[tuple[type, str]] = [
    # bool first: it is an int subclass
    (bool, "INTEGER"),
    (int, "INTEGER"),
    (float, "REAL"),
    (str, "TEXT"),
    (bytes, "BLOB"),
    (datetime, "TEXT"),
    (date, "TEXT"),
]


@dataclass(frozen=True)
class ColumnInfo:
    """Column metadata derived from a model field."""

    name: str
    sql_type: str
    primary_key: bool = False
    optional: bool = False
    auto_increment: bool = False
    unique: bool = False
    default: Any = None

    def to_definition(self) -> ColumnDefinition:
        return ColumnDefinition(
            name=self.name,
            type=self.sql_type,
            nullable=self.optional,
            primary_key=self.primary_key,
            unique=self.unique,
            default=self.default,
            auto_increment=self.auto_increment,
        )


def column(
    default: Any = ...,
    *,
    sql_type: str | None = None,
    primary_key: bool = False,
    auto_increment: bool = False,
    unique: bool = False,
    server_default: Any = None,
    **kwargs: Any,
) -> Any:
    """Declare a model field with SQL column metadata.

    Args:
        default: Field default (``...`` for required)
        sql_type: Explicit SQL type; inferred from the annotation when omitted
        primary_key: Whether this is the primary key column
        auto_increment: Whether the database generates the key
        unique: Whether the column carries a UNIQUE constraint
        server_default: DEFAULT clause value in the generated DDL
        **kwargs: Passed through to :func:`pydantic.Field`
    """
    extra = {
        "sql_type": sql_type,
        "primary_key": primary_key,
        "auto_increment": auto_increment,
        "unique": unique,
        "server_default": server_default,
    }
    return Field(default, json_schema_extra=extra, **kwargs)


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        optional = len(args) != len(get_args(annotation))
        if len(args) == 1:
            return args[0], optional
        return annotation, optional
    return annotation, False


def _infer_sql_type(name: str, annotation: Any) -> str:
    if isinstance(annotation, type):
        if issubclass(annotation, Enum):
            return "INTEGER" if issubclass(annotation, int) else "TEXT"
        for python_type, sql_type in _SQL_TYPES:
            if issubclass(annotation, python_type):
                return sql_type
    raise TypeError(f"Cannot infer SQL type for field '{name}': {annotation!r}")


def _column_info(name: str, field: FieldInfo) -> ColumnInfo:
    extra = field.json_schema_extra if isinstance(field.json_schema_extra, dict) else {}
    annotation, optional = _unwrap_optional(field.annotation)
    sql_type = extra.get("sql_type") or _infer_sql_type(name, annotation)
    return ColumnInfo(
        name=name,
        sql_type=str(sql_type),
        primary_key=bool(extra.get("primary_key", False)),
        optional=optional,
        auto_increment=bool(extra.get("auto_increment", False)),
        unique=bool(extra.get("unique", False)),
        default=extra.get("server_default"),
    )


class Model(BaseModel):
    """Base class for persisted entities."""

    __tablename__: ClassVar[str]

    model_config = ConfigDict(validate_assignment=True)

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        primary_keys = [col.name for col in cls.columns() if col.primary_key]
        if len(primary_keys) > 1:
            raise TypeError(
                f"{cls.__name__} declares more than one primary key: {primary_keys}"
            )

    @classmethod
    def table_name(cls) -> str:
        return cls.__tablename__

    @classmethod
    def columns(cls) -> list[ColumnInfo]:
        """Columns in declaration order."""
        return [_column_info(name, field) for name, field in cls.model_fields.items()]

    @classmethod
    def column_names(cls) -> list[str]:
        return list(cls.model_fields)

    @classmethod
    def primary_key_column(cls) -> ColumnInfo | None:
        for col in cls.columns():
            if col.primary_key:
                return col
        return None

    def primary_key_value(self) -> Value | None:
        """Value of the primary key, or None when unset or undeclared."""
        pk = self.primary_key_column()
        if pk is None:
            return None
        value = getattr(self, pk.name)
        if value is None:
            return None
        return Value.from_python(value)

    def encode(self) -> list[tuple[str, Value]]:
        """Column/Value pairs in column order."""
        return [
            (name, Value.from_python(getattr(self, name)))
            for name in self.column_names()
        ]

    @classmethod
    def decode(cls, row: Row) -> Self:
        """Build an instance from a row holding every column in column order.

        Raises:
            DecodeError: If the row shape or a cell type does not fit the model
        """
        names = cls.column_names()
        if row.column_count != len(names):
            raise DecodeError(
                f"{cls.__name__} expects {len(names)} columns, "
                f"row has {row.column_count}"
            )

        data = {name: row.get(index).to_python() for index, name in enumerate(names)}
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Cannot decode {cls.__name__} row: {e}") from e

    @classmethod
    def table_definition(cls) -> TableDefinition:
        return TableDefinition(
            name=cls.table_name(),
            columns=[col.to_definition() for col in cls.columns()],
        )

    @classmethod
    def migration_sql(cls) -> str:
        """CREATE TABLE statement for this model."""
        return SQLiteSchemaBuilder().create_table_sql(cls.table_definition())
