"""AsyncMy MySQL execution channel.

Owns a single lazily-opened asyncmy connection, converts the builder's ``?``
placeholders to asyncmy's ``%s`` style and shapes cursor results.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Optional, Union

import asyncmy
from asyncmy.cursors import Cursor

from mysqlb.builder import Query
from mysqlb.config import validate_connection_config
from mysqlb.parameters import convert_placeholders, validate_parameter_alignment
from mysqlb.result import ExecutionResult

if TYPE_CHECKING:
    from types import TracebackType

    from asyncmy.connection import Connection

    from mysqlb.config import ConnectionConfig
    from mysqlb.typing import DictRow

__all__ = ("AsyncmyCursor", "AsyncmyDriver")

logger = logging.getLogger(__name__)


class AsyncmyCursor:
    """Context manager for AsyncMy cursor operations.

    Provides automatic cursor acquisition and cleanup for database operations.
    """

    __slots__ = ("connection", "cursor")

    def __init__(self, connection: "Connection") -> None:
        self.connection = connection
        self.cursor: Optional[Cursor] = None

    async def __aenter__(self) -> Cursor:
        self.cursor = self.connection.cursor()
        return self.cursor

    async def __aexit__(self, *_: Any) -> None:
        if self.cursor is not None:
            await self.cursor.close()


class AsyncmyDriver:
    """Execution channel backed by one asyncmy connection.

    The connection is opened on first use and reused until :meth:`close`; a
    later statement opens a new one. Statements on the connection run one at a
    time, in the order they were issued.

    Args:
        config: Connection options. ``host``, ``port``, ``user``, ``password``
            and ``database`` are required.
    """

    __slots__ = ("_connection", "_connection_config", "_execute_lock", "_lock")

    def __init__(self, config: "ConnectionConfig") -> None:
        self._connection_config = validate_connection_config(config)
        self._connection: Optional[Connection] = None
        self._lock = asyncio.Lock()
        self._execute_lock = asyncio.Lock()

    async def __aenter__(self) -> "AsyncmyDriver":
        return self

    async def __aexit__(
        self,
        exc_type: "Optional[type[BaseException]]",
        exc_val: "Optional[BaseException]",
        exc_tb: "Optional[TracebackType]",
    ) -> None:
        await self.close()

    @property
    def connection(self) -> "Optional[Connection]":
        """The open connection, or ``None`` before first use and after :meth:`close`."""
        return self._connection

    def use(self, table: str) -> Query:
        """Start a query against ``table``.

        Returns:
            Query: A fresh builder bound to this driver.
        """
        return Query(table, self)

    async def connected(self) -> "Connection":
        """Return the open connection, opening it first if needed.

        Returns:
            The asyncmy connection.
        """
        if self._connection is not None:
            return self._connection
        async with self._lock:
            if self._connection is None:
                self._connection = await asyncmy.connect(**self._connection_config)
                logger.debug(
                    "Opened connection to %s:%s/%s",
                    self._connection_config["host"],
                    self._connection_config["port"],
                    self._connection_config["database"],
                )
        return self._connection

    async def close(self) -> None:
        """Close the connection, if open, and forget it.

        Waits for the statement in flight, if any, to finish first.
        """
        async with self._execute_lock, self._lock:
            connection, self._connection = self._connection, None
            if connection is None:
                return
            try:
                await connection.ensure_closed()
            finally:
                logger.debug("Closed connection to %s", self._connection_config["host"])

    async def execute(self, sql: str, parameters: Sequence[Any] = ()) -> "Union[list[DictRow], ExecutionResult]":
        """Run ``sql`` with ``parameters`` bound to its ``?`` placeholders.

        Args:
            sql: Statement text using ``?`` placeholders.
            parameters: Positional values.

        Raises:
            ParameterError: If placeholders and values do not line up.

        Returns:
            Rows as dicts for row-returning statements, otherwise write metadata.
        """
        parameters = tuple(parameters)
        validate_parameter_alignment(sql, parameters)
        statement = convert_placeholders(sql)
        async with self._execute_lock:
            connection = await self.connected()
            async with AsyncmyCursor(connection) as cursor:
                await cursor.execute(statement, parameters)
                if cursor.description:
                    column_names = [desc[0] for desc in cursor.description]
                    return [dict(zip(column_names, row)) for row in await cursor.fetchall()]
                affected_rows = cursor.rowcount if cursor.rowcount is not None else -1
                return ExecutionResult(rows_affected=affected_rows, last_inserted_id=cursor.lastrowid or None)
