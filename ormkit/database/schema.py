"""Table and column definitions used to generate DDL."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ColumnDefinition:
    """Database column definition."""

    name: str
    type: str
    nullable: bool = True
    primary_key: bool = False
    unique: bool = False
    default: Any = None
    auto_increment: bool = False


@dataclass(frozen=True)
class TableDefinition:
    """Database table definition."""

    name: str
    columns: Sequence[ColumnDefinition]
    indexes: Sequence[str] = field(default_factory=tuple)

    @property
    def primary_keys(self) -> list[ColumnDefinition]:
        return [col for col in self.columns if col.primary_key]
