"""Database session plumbing for catalog reads.

Reads run inside a transaction that is opened per database and always rolled
back afterwards; nothing here ever commits.
"""

from __future__ import annotations

import importlib
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, List, Protocol, Sequence

from schema_catalog.core.errors import TransactionError


logger = logging.getLogger(__name__)


class Transaction(Protocol):
    """An open transaction able to run one read query."""

    def query(self, sql: str, params: Sequence[Any] = ()) -> Iterable[Sequence[Any]]:
        ...


Connector = Callable[[str], Any]


class DBAPITransaction:
    """Transaction backed by a DB-API 2.0 connection (``%s`` placeholders)."""

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Sequence[Any]]:
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, list(params) or None)
            return list(cursor.fetchall())
        finally:
            cursor.close()


@contextmanager
def start_transaction(connect: Connector, database: str) -> Iterator[DBAPITransaction]:
    """Open a transaction on ``database`` and release it on every exit path.

    ``connect`` receives the database name and returns a DB-API connection.
    DB-API connections start a transaction implicitly; on exit it is rolled
    back and the connection closed, whether the body succeeded or raised.

    Raises:
        TransactionError: If the connection cannot be opened.
    """
    try:
        connection = connect(database)
    except Exception as e:
        raise TransactionError(database, e) from e

    logger.debug("Opened transaction on %s", database)
    body_failed = True
    try:
        yield DBAPITransaction(connection)
        body_failed = False
    finally:
        _release(connection, database, quiet=body_failed)


def _release(connection: Any, database: str, *, quiet: bool) -> None:
    """Roll back and close ``connection``.

    With ``quiet`` set a release failure is logged instead of raised, so it
    does not replace the exception already leaving the transaction body.
    """
    try:
        try:
            connection.rollback()
        finally:
            connection.close()
    except Exception as e:
        if not quiet:
            raise
        logger.warning("Could not release transaction on %s: %s", database, e)
        return
    logger.debug("Released transaction on %s", database)


def psycopg_connector(dsn: str) -> Connector:
    """Return a ``connect(database)`` callable using psycopg.

    The returned connections target ``database`` on the server named by
    ``dsn`` and are read-only. psycopg is imported lazily so the rest of the
    package works without it.

    Raises:
        ImportError: If psycopg is not installed.
    """
    psycopg = importlib.import_module("psycopg")

    def connect(database: str) -> Any:
        connection = psycopg.connect(dsn, dbname=database)
        connection.read_only = True
        return connection

    return connect


__all__ = [
    "Connector",
    "DBAPITransaction",
    "Transaction",
    "psycopg_connector",
    "start_transaction",
]
