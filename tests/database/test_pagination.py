"""Tests for pagination and search."""

import pytest
from pydantic import ValidationError

from ormkit.database import (
    Filter,
    Or,
    PaginatedResult,
    Pagination,
    Repository,
    SearchFilter,
    Single,
    Sort,
)

from tests.database.models import User


def test_pagination_window() -> None:
    """Test offset and limit derived from a page request."""
    pagination = Pagination.new(page=3, per_page=20)

    assert pagination.offset == 40
    assert pagination.limit == 20
    assert pagination.total is None
    assert pagination.total_pages is None


def test_pagination_rejects_zero() -> None:
    """Test that pages and page sizes start at 1."""
    with pytest.raises(ValidationError):
        Pagination.new(page=0, per_page=10)
    with pytest.raises(ValidationError):
        Pagination.new(page=1, per_page=0)


def test_with_total() -> None:
    """Test filling in totals."""
    pagination = Pagination.new(page=1, per_page=2)

    assert pagination.with_total(5).total_pages == 3
    assert pagination.with_total(4).total_pages == 2
    assert pagination.with_total(0).total_pages == 0
    assert pagination.total is None


def test_has_next() -> None:
    """Test detection of a following page."""
    first = PaginatedResult(data=[], pagination=Pagination.new(1, 2).with_total(5))
    last = PaginatedResult(data=[], pagination=Pagination.new(3, 2).with_total(5))

    assert first.has_next is True
    assert last.has_next is False


def test_search_filter() -> None:
    """Test the OR of LIKE filters built from a search."""
    search = SearchFilter.new("ali", ["name", "email"])

    assert search.to_filter() == Or(
        [
            Single(Filter.like("name", "%ali%")),
            Single(Filter.like("email", "%ali%")),
        ]
    )


def test_search_filter_without_columns() -> None:
    """Test that a search over no columns matches nothing."""
    assert SearchFilter.new("x", []).to_filter() == Or([])


@pytest.mark.asyncio
async def test_find_paginated(
    user_repo: Repository[User], sample_users: list[User]
) -> None:
    """Test paging through five rows two at a time."""
    for user in sample_users:
        await user_repo.create(user)
    order = [Sort.asc("id")]

    page1 = await user_repo.find_paginated(Pagination.new(1, 2), order_by=order)
    page3 = await user_repo.find_paginated(Pagination.new(3, 2), order_by=order)
    page4 = await user_repo.find_paginated(Pagination.new(4, 2), order_by=order)

    assert [u.name for u in page1.data] == ["Alice", "Bob"]
    assert page1.pagination.total == 5
    assert page1.pagination.total_pages == 3
    assert [u.name for u in page3.data] == ["Eve"]
    assert page4.data == []
    assert page4.pagination.total == 5


@pytest.mark.asyncio
async def test_find_where_paginated(
    user_repo: Repository[User], sample_users: list[User]
) -> None:
    """Test that the total counts only filtered rows."""
    for user in sample_users:
        await user_repo.create(user)

    result = await user_repo.find_where_paginated(
        Filter.gt("age", 26), Pagination.new(1, 2), order_by=[Sort.desc("age")]
    )

    assert [u.name for u in result.data] == ["Diana", "Charlie"]
    assert result.pagination.total == 3
    assert result.pagination.total_pages == 2
    assert result.has_next is True


@pytest.mark.asyncio
async def test_search(user_repo: Repository[User], sample_users: list[User]) -> None:
    """Test substring search without and with pagination."""
    for user in sample_users:
        await user_repo.create(user)
    search = SearchFilter.new("li", ["name", "email"])

    everything = await user_repo.search(search)
    paged = await user_repo.search(search, Pagination.new(1, 1))

    assert sorted(u.name for u in everything.data) == ["Alice", "Charlie"]
    assert everything.pagination.total == 2
    assert everything.pagination.total_pages == 1
    assert len(paged.data) == 1
    assert paged.pagination.total == 2
    assert paged.pagination.total_pages == 2


@pytest.mark.asyncio
async def test_search_without_matches(user_repo: Repository[User]) -> None:
    """Test an empty search result."""
    result = await user_repo.search(SearchFilter.new("zzz", ["name"]))

    assert result.data == []
    assert result.pagination.total == 0
    assert result.pagination.total_pages == 0
