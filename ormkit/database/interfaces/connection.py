"""Database driver interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from types import TracebackType

from ormkit.database.values import Value
from ormkit.exceptions import DecodeError


class Row:
    """A single result row of Values, addressed by column index."""

    def __init__(self, values: Sequence[Value], columns: Sequence[str] = ()) -> None:
        self._values = tuple(values)
        self._columns = tuple(columns)

    def get(self, index: int) -> Value:
        """Get the value at a column index.

        Raises:
            DecodeError: If the index is out of range
        """
        if index < 0 or index >= len(self._values):
            raise DecodeError(
                f"Column index {index} out of range for row of {len(self._values)}"
            )
        return self._values[index]

    def column_name(self, index: int) -> str | None:
        if 0 <= index < len(self._columns):
            return self._columns[index]
        return None

    @property
    def column_count(self) -> int:
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Row({list(self._values)!r})"


class RowCursor(ABC):
    """Forward-only cursor over query results.

    A cursor is consumed once; it cannot be restarted.
    """

    @abstractmethod
    async def next(self) -> Row | None:
        """Fetch the next row, or None when exhausted."""
        pass

    async def fetch_all(self) -> list[Row]:
        """Drain the remaining rows."""
        rows: list[Row] = []
        while (row := await self.next()) is not None:
            rows.append(row)
        return rows

    def __aiter__(self) -> AsyncIterator[Row]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[Row]:
        while (row := await self.next()) is not None:
            yield row


class ListRowCursor(RowCursor):
    """Cursor over rows already held in memory."""

    def __init__(self, rows: Sequence[Row]) -> None:
        self._rows = list(rows)
        self._index = 0

    async def next(self) -> Row | None:
        if self._index >= len(self._rows):
            return None
        row = self._rows[self._index]
        self._index += 1
        return row


class DatabaseConnection(ABC):
    """Abstract database connection.

    Implementations wrap exactly one underlying connection and translate driver
    failures into :class:`~ormkit.exceptions.QueryError` or
    :class:`~ormkit.exceptions.DatabaseConnectionError`.
    """

    def __init__(self) -> None:
        self._is_connected = False

    @abstractmethod
    async def connect(self) -> None:
        """Establish the connection."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the connection."""
        pass

    @abstractmethod
    async def query(self, sql: str, params: Sequence[Value] = ()) -> RowCursor:
        """Run a statement that returns rows.

        Args:
            sql: SQL statement with ``?`` placeholders
            params: Values bound to the placeholders, in order

        Returns:
            Cursor over the result rows
        """
        pass

    @abstractmethod
    async def execute(self, sql: str, params: Sequence[Value] = ()) -> int:
        """Run a statement that does not return rows.

        Args:
            sql: SQL statement with ``?`` placeholders
            params: Values bound to the placeholders, in order

        Returns:
            Number of affected rows (0 for statements that change no rows)
        """
        pass

    @property
    def is_connected(self) -> bool:
        """Check if connection is active."""
        return self._is_connected

    async def __aenter__(self) -> "DatabaseConnection":
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.disconnect()
