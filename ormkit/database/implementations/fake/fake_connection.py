"""In-memory fake connection that records statements instead of running them."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from ormkit.database.interfaces import DatabaseConnection, ListRowCursor, Row, RowCursor
from ormkit.database.values import Value
from ormkit.exceptions import DatabaseConnectionError, QueryError
from ormkit.log import get_logger

logger = get_logger(__name__)


@dataclass
class RecordedStatement:
    """A statement received by the fake connection."""

    sql: str
    params: list[Value] = field(default_factory=list)

    @property
    def keyword(self) -> str:
        """First SQL keyword, upper-cased (e.g. BEGIN, INSERT)."""
        stripped = self.sql.strip()
        return stripped.split(None, 1)[0].upper() if stripped else ""


class FakeConnection(DatabaseConnection):
    """Driver double for tests.

    Every statement is appended to :attr:`statements`. Query results and affected
    row counts are scripted with :meth:`add_result` and :meth:`set_affected_rows`;
    :meth:`fail_on` makes statements containing a substring raise QueryError.
    """

    def __init__(self) -> None:
        super().__init__()
        self.statements: list[RecordedStatement] = []
        self._results: list[tuple[str, list[Row]]] = []
        self._failures: list[str] = []
        self._affected_rows = 0

    async def connect(self) -> None:
        self._is_connected = True

    async def disconnect(self) -> None:
        self._is_connected = False

    def add_result(self, sql_fragment: str, rows: Sequence[Sequence[object]]) -> None:
        """Serve rows to the next query whose SQL contains ``sql_fragment``."""
        converted = [Row([Value.from_python(cell) for cell in row]) for row in rows]
        self._results.append((sql_fragment, converted))

    def set_affected_rows(self, count: int) -> None:
        self._affected_rows = count

    def fail_on(self, sql_fragment: str) -> None:
        self._failures.append(sql_fragment)

    def keywords(self) -> list[str]:
        return [statement.keyword for statement in self.statements]

    async def query(self, sql: str, params: Sequence[Value] = ()) -> RowCursor:
        self._record(sql, params)
        for index, (fragment, rows) in enumerate(self._results):
            if fragment in sql:
                del self._results[index]
                return ListRowCursor(rows)
        return ListRowCursor([])

    async def execute(self, sql: str, params: Sequence[Value] = ()) -> int:
        self._record(sql, params)
        return self._affected_rows

    def _record(self, sql: str, params: Sequence[Value]) -> None:
        if not self._is_connected:
            raise DatabaseConnectionError("Database not connected")
        self.statements.append(RecordedStatement(sql, list(params)))
        for fragment in self._failures:
            if fragment in sql:
                logger.debug(f"Injected failure for: {sql.strip()}")
                raise QueryError(f"Injected failure on '{fragment}'", sql)
