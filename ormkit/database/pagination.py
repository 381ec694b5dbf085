"""Pagination and free-text search helpers."""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from ormkit.database.filters import Filter, Or, Single

T = TypeVar("T")


class Pagination(BaseModel):
    """A 1-indexed page request.

    ``total`` and ``total_pages`` stay None until a count query fills them.
    Page and per_page below 1 are rejected with a ValidationError.
    """

    page: int = Field(ge=1, description="1-indexed page number")
    per_page: int = Field(ge=1, description="Rows per page")
    total: int | None = Field(default=None, ge=0)
    total_pages: int | None = Field(default=None, ge=0)

    @classmethod
    def new(cls, page: int, per_page: int) -> "Pagination":
        return cls(page=page, per_page=per_page)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page

    def with_total(self, total: int) -> "Pagination":
        """Copy of this request with total and total_pages filled in."""
        return self.model_copy(
            update={
                "total": total,
                "total_pages": math.ceil(total / self.per_page),
            }
        )


@dataclass
class PaginatedResult(Generic[T]):
    """One page of rows plus the filled-in pagination."""

    data: list[T]
    pagination: Pagination

    @property
    def has_next(self) -> bool:
        total_pages = self.pagination.total_pages or 0
        return self.pagination.page < total_pages


@dataclass(frozen=True)
class SearchFilter:
    """Match ``term`` as a substring of any of ``columns``.

    Case sensitivity follows the database collation.
    """

    term: str
    columns: Sequence[str] = field(default_factory=tuple)

    @classmethod
    def new(cls, term: str, columns: Sequence[str]) -> "SearchFilter":
        return cls(term, tuple(columns))

    def to_filter(self) -> Or:
        pattern = f"%{self.term}%"
        return Or([Single(Filter.like(column, pattern)) for column in self.columns])
