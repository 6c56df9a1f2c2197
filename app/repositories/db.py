"""DuckDB connection management."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import duckdb
from loguru import logger

from app.models import ALL_DDL
from settings import DB_PATH


def init_tables(conn: duckdb.DuckDBPyConnection) -> None:
    """Initialize all tables from DDL statements (idempotent - uses IF NOT EXISTS)."""
    for ddl in ALL_DDL:
        conn.execute(ddl)
    logger.info("DB tables initialized")


class Database:
    """One root duckdb connection shared by the process; each thread works on its own cursor.

    duckdb connections are not safe to share across threads, cursors of the same
    connection are, and they all see the same database.
    """

    def __init__(self, path: str | Path = DB_PATH):
        self.path = str(path)
        if self.path != ":memory:" and not Path(self.path).exists():
            logger.warning("DB not found: {}. Creating empty DB.", self.path)
        self._root = duckdb.connect(self.path)
        self._local = threading.local()
        self._cursors: list[duckdb.DuckDBPyConnection] = []
        self._lock = threading.Lock()
        init_tables(self._root)
        logger.debug("DB connected: {}", self.path)

    def cursor(self) -> duckdb.DuckDBPyConnection:
        """Thread-local cursor over the root connection."""
        cur = getattr(self._local, "cursor", None)
        if cur is None:
            cur = self._root.cursor()
            self._local.cursor = cur
            with self._lock:
                self._cursors.append(cur)
        return cur

    @contextmanager
    def transaction(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """Run statements on this thread's cursor in one transaction; rolled back on error."""
        cur = self.cursor()
        cur.execute("BEGIN TRANSACTION")
        try:
            yield cur
        except BaseException:
            cur.execute("ROLLBACK")
            raise
        cur.execute("COMMIT")

    def close(self) -> None:
        """Close every cursor and the root connection."""
        with self._lock:
            cursors, self._cursors = self._cursors, []
        for cur in cursors:
            cur.close()
        self._root.close()
        self._local = threading.local()
        logger.debug("DB connection closed")
