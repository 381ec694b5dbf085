"""Tests for the SQLite connection."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio

from ormkit.database import Value, ValueKind
from ormkit.database.implementations import SQLiteConnection
from ormkit.exceptions import DatabaseConnectionError, DecodeError, QueryError


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path using pytest's tmp_path."""
    return tmp_path / "nested" / "test.db"


@pytest_asyncio.fixture
async def connection(temp_db_path: Path) -> AsyncGenerator[SQLiteConnection, None]:
    """Connected SQLite connection with a scratch table."""
    conn = SQLiteConnection(temp_db_path)
    async with conn:
        await conn.execute(
            "CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT, "
            "price REAL, data BLOB)"
        )
        yield conn


@pytest.mark.asyncio
async def test_connect_creates_parent_directory(temp_db_path: Path) -> None:
    """Test that connecting creates the database file and its directory."""
    conn = SQLiteConnection(temp_db_path)

    await conn.connect()
    assert conn.is_connected is True
    await conn.disconnect()

    assert temp_db_path.exists()
    assert conn.is_connected is False


@pytest.mark.asyncio
async def test_not_connected() -> None:
    """Test statements on a closed connection."""
    conn = SQLiteConnection(":memory:")

    with pytest.raises(DatabaseConnectionError):
        await conn.execute("SELECT 1")
    with pytest.raises(DatabaseConnectionError):
        await conn.query("SELECT 1")


@pytest.mark.asyncio
async def test_connect_failure(tmp_path: Path) -> None:
    """Test that an unopenable path is a connection error."""
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    conn = SQLiteConnection(blocker / "test.db")

    with pytest.raises(DatabaseConnectionError):
        await conn.connect()
    assert conn.is_connected is False


@pytest.mark.asyncio
async def test_execute_reports_affected_rows(connection: SQLiteConnection) -> None:
    """Test affected row counts."""
    for name in ["a", "b", "c"]:
        inserted = await connection.execute(
            "INSERT INTO items (name) VALUES (?)", [Value.text(name)]
        )
        assert inserted == 1

    updated = await connection.execute(
        "UPDATE items SET price = ? WHERE name != ?",
        [Value.real(1.5), Value.text("a")],
    )

    assert updated == 2
    deleted = await connection.execute(
        "DELETE FROM items WHERE id = ?", [Value.integer(99)]
    )
    assert deleted == 0


@pytest.mark.asyncio
async def test_query_values(connection: SQLiteConnection) -> None:
    """Test that every storage class comes back as the matching Value."""
    await connection.execute(
        "INSERT INTO items (name, price, data) VALUES (?, ?, ?)",
        [Value.text("a"), Value.real(2.25), Value.blob(b"\x01\x02")],
    )

    cursor = await connection.query("SELECT id, name, price, data, NULL FROM items")
    rows = await cursor.fetch_all()

    assert len(rows) == 1
    row = rows[0]
    assert [row.get(i).kind for i in range(5)] == [
        ValueKind.INTEGER,
        ValueKind.TEXT,
        ValueKind.REAL,
        ValueKind.BLOB,
        ValueKind.NULL,
    ]
    assert row.get(3) == Value.blob(b"\x01\x02")
    assert row.column_name(1) == "name"
    assert row.column_count == 5
    with pytest.raises(DecodeError):
        row.get(5)


@pytest.mark.asyncio
async def test_cursor_iteration(connection: SQLiteConnection) -> None:
    """Test async iteration over a cursor."""
    for name in ["a", "b"]:
        await connection.execute(
            "INSERT INTO items (name) VALUES (?)", [Value.text(name)]
        )

    cursor = await connection.query("SELECT name FROM items ORDER BY name")
    names = [row.get(0).to_python() async for row in cursor]

    assert names == ["a", "b"]
    assert await cursor.next() is None


@pytest.mark.asyncio
async def test_query_error(connection: SQLiteConnection) -> None:
    """Test that driver errors are wrapped with the failing SQL."""
    with pytest.raises(QueryError) as exc_info:
        await connection.execute("SELECT * FROM nowhere")

    assert exc_info.value.sql == "SELECT * FROM nowhere"
    assert exc_info.value.__cause__ is not None


@pytest.mark.asyncio
async def test_transaction_statements(connection: SQLiteConnection) -> None:
    """Test that BEGIN/ROLLBACK control the autocommit connection."""
    await connection.execute("BEGIN")
    await connection.execute("INSERT INTO items (name) VALUES (?)", [Value.text("a")])
    await connection.execute("ROLLBACK")

    cursor = await connection.query("SELECT COUNT(*) FROM items")
    row = await cursor.next()

    assert row is not None
    assert row.get(0) == Value.integer(0)
