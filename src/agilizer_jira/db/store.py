"""
PostgreSQL store for issue events and issue state snapshots.

Owns a pooled psycopg2 connection and exposes fixed-shape insert paths for
the two record kinds, plus the destructive `reset` / `drop_tables` operations
used by tests and bootstrap. Every failure is raised as a `StoreError`
subclass carrying the operation name and the underlying cause; whether to
retry or abort is left to the caller.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple, Type

import psycopg2
from psycopg2.pool import ThreadedConnectionPool

from agilizer_jira.config import config, get_database_url
from agilizer_jira.db.models import IssueEvent, IssueState
from agilizer_jira.db.schema import (
    INSERT_ISSUE_EVENT,
    INSERT_ISSUE_STATE,
    drop_statements,
    reset_statements,
)

logger = logging.getLogger(__name__)

# Maximum number of open connections to the DB (Heroku Postgres hobby tier)
MAX_OPEN_CONNS = 5


class StoreError(Exception):
    """Base exception for store operations."""

    def __init__(self, operation: str, cause: object):
        super().__init__(f"error in `{operation}`: {cause}")
        self.operation = operation
        self.cause = cause


class StoreConnectionError(StoreError):
    """Raised when the database cannot be reached or the DSN is invalid."""

    pass


class QueryError(StoreError):
    """Raised when an insert fails."""

    pass


class SchemaError(StoreError):
    """Raised when a schema statement (create/drop) fails."""

    pass


def issue_event_params(event: IssueEvent, state: IssueState) -> Tuple:
    """Parameters for INSERT_ISSUE_EVENT, in column order."""
    return (
        event.event_time,
        event.event_kind,
        event.event_author,
        event.comment_body,
        event.status_change_from,
        event.status_change_to,
        event.issue_key,
    ) + _issue_columns(state)


def issue_state_params(state: IssueState) -> Tuple:
    """Parameters for INSERT_ISSUE_STATE, in column order."""
    return (
        state.created_at,
        state.updated_at,
        state.key,
    ) + _issue_columns(state)[2:]


def _issue_columns(state: IssueState) -> Tuple:
    return (
        state.created_at,
        state.updated_at,
        state.project,
        state.status,
        state.resolved_at,
        state.priority,
        state.summary,
        state.description,
        state.type,
        state.labels,
        state.assignee,
        state.developer_backend,
        state.developer_frontend,
        state.reviewer,
        state.product_owner,
        state.bug_cause,
        state.epic,
        state.tribe,
        state.components,
        state.fix_versions,
    )


class IssueStore:
    """
    Pooled access to the issue history tables.

    Usable as a context manager:

        with IssueStore(dsn) as store:
            store.insert_issue_event(event, state)
    """

    def __init__(self, dsn: Optional[str] = None, max_open_conns: Optional[int] = None):
        """
        Args:
            dsn: libpq connection string; defaults to the configured database URL.
            max_open_conns: Upper bound on simultaneously open connections;
                defaults to `database.max_open_conns`, then MAX_OPEN_CONNS.
        """
        self.dsn = dsn if dsn is not None else get_database_url()
        if max_open_conns is None:
            max_open_conns = (config.get("database") or {}).get("max_open_conns") or MAX_OPEN_CONNS
        self.max_open_conns = max_open_conns
        self._pool: Optional[ThreadedConnectionPool] = None
        self._pool_lock = threading.Lock()
        # ThreadedConnectionPool raises when exhausted; callers wait here instead
        self._slots = threading.BoundedSemaphore(max_open_conns)

    def open(self) -> "IssueStore":
        """
        Creates the connection pool. One connection is opened right away so an
        invalid DSN or an unreachable server is reported here.

        Raises:
            StoreConnectionError: If the connection cannot be established.
        """
        with self._pool_lock:
            if self._pool is not None:
                return self
            if not self.dsn:
                raise StoreConnectionError("open", "no database URL configured (set DB_URL)")
            try:
                self._pool = ThreadedConnectionPool(1, self.max_open_conns, dsn=self.dsn)
            except psycopg2.Error as e:
                logger.critical(f"Failed to open database connection pool: {e}")
                raise StoreConnectionError("open", e) from e
            logger.info(f"Opened database connection pool (max {self.max_open_conns} connections)")
        return self

    def close(self) -> None:
        with self._pool_lock:
            if self._pool is not None:
                self._pool.closeall()
                self._pool = None
                logger.info("Closed database connection pool")

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def __enter__(self) -> "IssueStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def connection(self) -> Iterator["psycopg2.extensions.connection"]:
        """
        Checks a connection out of the pool for the duration of the block.

        Blocks while `max_open_conns` connections are already checked out.

        Raises:
            StoreConnectionError: If the store is not open or a new pooled
                connection cannot be established.
        """
        pool = self._pool
        if pool is None:
            raise StoreConnectionError("connection", "store is not open")
        with self._slots:
            try:
                conn = pool.getconn()
            except psycopg2.Error as e:
                logger.error(f"Failed to get a connection from the pool: {e}")
                raise StoreConnectionError("connection", e) from e
            try:
                yield conn
            finally:
                pool.putconn(conn, close=bool(conn.closed))

    @contextmanager
    def transaction(
        self, operation: str, error_class: Type[StoreError] = QueryError
    ) -> Iterator["psycopg2.extensions.cursor"]:
        """
        Runs the block in a single transaction on one pooled connection.

        Commits when the block completes and rolls back if anything in it
        fails. Database errors are raised as `error_class(operation, cause)`.
        """
        with self.connection() as conn:
            try:
                with conn:
                    with conn.cursor() as cursor:
                        yield cursor
            except psycopg2.Error as e:
                logger.error(f"Database error in `{operation}`, transaction rolled back: {e}")
                raise error_class(operation, e) from e

    def insert_issue_event(self, event: IssueEvent, state: IssueState) -> None:
        """
        Appends an event together with the issue state as of that event.

        The event row and the matching state row are written in one
        transaction, so an event never exists without its state snapshot.

        Raises:
            ValueError: If the event and the state are about different issues.
            QueryError: If either insert fails; nothing is written.
        """
        if event.issue_key != state.key:
            raise ValueError(
                f"event issue key `{event.issue_key}` does not match state key `{state.key}`"
            )
        with self.transaction("insert_issue_event") as cursor:
            cursor.execute(INSERT_ISSUE_EVENT, issue_event_params(event, state))
            cursor.execute(INSERT_ISSUE_STATE, issue_state_params(state))
        logger.debug(f"Inserted `{event.event_kind}` event for issue {event.issue_key}")

    def insert_issue_state(self, state: IssueState) -> None:
        """
        Appends one state snapshot.

        Raises:
            QueryError: If the insert fails.
        """
        with self.transaction("insert_issue_state") as cursor:
            cursor.execute(INSERT_ISSUE_STATE, issue_state_params(state))
        logger.debug(f"Inserted state snapshot for issue {state.key}")

    def reset(self) -> None:
        """
        Drops and recreates both tables. Destructive; meant for tests and bootstrap.

        Raises:
            SchemaError: If a schema statement fails; the previous tables are kept.
        """
        self._run_schema_statements("reset", reset_statements())
        logger.info("Reset issue history tables")

    def drop_tables(self) -> None:
        """
        Drops both tables if they exist.

        Raises:
            SchemaError: If a drop statement fails.
        """
        self._run_schema_statements("drop_tables", drop_statements())
        logger.info("Dropped issue history tables")

    def _run_schema_statements(self, operation: str, statements: List[str]) -> None:
        with self.transaction(operation, error_class=SchemaError) as cursor:
            for statement in statements:
                cursor.execute(statement)


# Global store instance for application use
_global_store: Optional[IssueStore] = None


def get_issue_store(dsn: Optional[str] = None) -> IssueStore:
    """
    Returns the global, opened IssueStore.

    Args:
        dsn: Connection string, only used on first call (defaults to configuration).

    Raises:
        StoreConnectionError: If the store cannot be opened.
    """
    global _global_store

    if _global_store is None:
        store = IssueStore(dsn=dsn)
        store.open()
        _global_store = store

    return _global_store


def close_global_store() -> None:
    """Closes the global store's connection pool."""
    global _global_store

    if _global_store is not None:
        _global_store.close()
        _global_store = None
