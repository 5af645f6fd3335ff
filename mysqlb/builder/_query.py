# ruff: noqa: PLR0904
"""Fluent per-table query builder.

A :class:`Query` accumulates WHERE, JOIN, ORDER BY, LIMIT and OFFSET clauses and
compiles them into one parameterized statement when a terminal method runs.
Clause methods never raise: the first misuse is recorded and raised by the
terminal method before anything reaches the execution channel.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Optional, Union

from mysqlb.builder._base import (
    FORBIDDEN_CLAUSES,
    Clause,
    SafeQuery,
    StatementKind,
    flatten_parameters,
    qualify,
)
from mysqlb.exceptions import SQLBuilderError
from mysqlb.pagination import Paginator
from mysqlb.result import ExecutionResult

if TYPE_CHECKING:
    from mysqlb.protocols import ExecutionChannel
    from mysqlb.typing import DictRow

__all__ = ("Query",)

logger = logging.getLogger(__name__)

COUNT_COLUMN = "count"
ORDER_DIRECTIONS = ("ASC", "DESC")


class Query:
    """Builder for statements against a single table.

    Args:
        table: Table every statement of this builder targets.
        channel: Execution channel the compiled statement is handed to.
    """

    __slots__ = (
        "_channel",
        "_error",
        "_executed",
        "_joins",
        "_limit",
        "_offset",
        "_order",
        "_select",
        "_table",
        "_wheres",
    )

    def __init__(self, table: str, channel: "ExecutionChannel") -> None:
        if not table:
            msg = "A table name is required"
            raise SQLBuilderError(msg)
        self._table = table
        self._channel = channel
        self._select: Optional[tuple[str, ...]] = None
        self._wheres: list[Clause] = []
        self._joins: list[str] = []
        self._order: Optional[tuple[str, str]] = None
        self._limit: Optional[int] = None
        self._offset: Optional[int] = None
        self._error: Optional[SQLBuilderError] = None
        self._executed = False

    def __repr__(self) -> str:
        return f"Query(table={self._table!r}, valid={self.is_valid})"

    @property
    def table(self) -> str:
        return self._table

    @property
    def channel(self) -> "ExecutionChannel":
        return self._channel

    @property
    def error(self) -> Optional[SQLBuilderError]:
        """First validation failure recorded by a clause method, if any."""
        return self._error

    @property
    def is_valid(self) -> bool:
        return self._error is None

    def _fail(self, message: str) -> "Query":
        if self._error is None:
            logger.debug("Query on %s rejected clause: %s", self._table, message)
            self._error = SQLBuilderError(message)
        return self

    # -- WHERE --

    def where(self, field: str, comparator: str, value: Any) -> "Query":
        """Add an ``AND field comparator ?`` condition.

        Args:
            field: Column name. Bare names are qualified with the builder table.
            comparator: SQL comparison operator, e.g. ``=``, ``>``, ``LIKE``.
            value: Value bound to the placeholder.

        Returns:
            Query: The current builder instance for method chaining.
        """
        if not field:
            return self._fail("WHERE requires a field name")
        if not comparator or not str(comparator).strip():
            return self._fail(f"WHERE on {field!r} requires a comparison operator")
        column = qualify(self._table, field)
        self._wheres.append(Clause(f"{column} {str(comparator).strip()} ?", (value,)))
        return self

    def where_raw(self, sql: str, parameters: Optional[Sequence[Any]] = None) -> "Query":
        """Add a verbatim condition.

        Only ``parameters`` are bound; the fragment text is used as-is.

        Args:
            sql: Condition text, with ``?`` placeholders for values.
            parameters: Values for the placeholders of ``sql``.

        Returns:
            Query: The current builder instance for method chaining.
        """
        if not sql:
            return self._fail("Raw WHERE requires a condition")
        self._wheres.append(Clause(sql, tuple(parameters or ())))
        return self

    def where_in(self, field: str, values: Optional[Sequence[Any]]) -> "Query":
        """Add an ``AND field IN (?, ...)`` condition.

        An empty (or ``None``) ``values`` compiles to ``IN ()``.

        Args:
            field: Column name. Bare names are qualified with the builder table.
            values: Values bound one placeholder each, in order.

        Returns:
            Query: The current builder instance for method chaining.
        """
        if not field:
            return self._fail("WHERE IN requires a field name")
        bound = tuple(values or ())
        marks = ", ".join("?" for _ in bound)
        self._wheres.append(Clause(f"{qualify(self._table, field)} IN ({marks})", bound))
        return self

    def like(self, field: str, value: Any) -> "Query":
        return self.where(field, "LIKE", value)

    # -- JOIN --

    def _join(self, join_type: str, table: str, local_field: str, remote_field: str, comparator: str) -> "Query":
        if not table or not local_field or not remote_field:
            return self._fail(f"{join_type} JOIN requires a table, a local field and a remote field")
        comparator = comparator or "="
        self._joins.append(
            f"{join_type} JOIN {table} ON {self._table}.{local_field} {comparator} {table}.{remote_field}"
        )
        return self

    def left_join(self, table: str, local_field: str, remote_field: str, comparator: str = "=") -> "Query":
        """Add a LEFT JOIN of ``table`` on ``<builder table>.local_field comparator table.remote_field``.

        Returns:
            Query: The current builder instance for method chaining.
        """
        return self._join("LEFT", table, local_field, remote_field, comparator)

    def right_join(self, table: str, local_field: str, remote_field: str, comparator: str = "=") -> "Query":
        """Add a RIGHT JOIN of ``table``.

        Returns:
            Query: The current builder instance for method chaining.
        """
        return self._join("RIGHT", table, local_field, remote_field, comparator)

    def inner_join(self, table: str, local_field: str, remote_field: str, comparator: str = "=") -> "Query":
        """Add an INNER JOIN of ``table``.

        Returns:
            Query: The current builder instance for method chaining.
        """
        return self._join("INNER", table, local_field, remote_field, comparator)

    # -- single-set clauses --

    def only(self, fields: Union[str, Sequence[str]]) -> "Query":
        """Restrict the SELECT list to ``fields``. Can be set once.

        Returns:
            Query: The current builder instance for method chaining.
        """
        if self._select is not None:
            return self._fail("Fields could be set only once")
        columns = (fields,) if isinstance(fields, str) else tuple(fields)
        if not columns:
            return self._fail("At least one field is required")
        self._select = columns
        return self

    def order_by(self, field: str, direction: str = "ASC") -> "Query":
        """Order the result by ``field``. Can be set once.

        Args:
            field: Column name. Bare names are qualified with the builder table.
            direction: ``ASC`` or ``DESC``, in any case.

        Returns:
            Query: The current builder instance for method chaining.
        """
        normalized = str(direction).upper()
        if normalized not in ORDER_DIRECTIONS:
            return self._fail(f"Invalid order value: {direction!r}")
        if self._order is not None:
            return self._fail("Order could be set only once")
        if not field:
            return self._fail("ORDER BY requires a field name")
        self._order = (qualify(self._table, field), normalized)
        return self

    @staticmethod
    def _is_count(value: Any) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0

    def limit(self, quantity: int) -> "Query":
        """Limit the number of returned rows. Can be set once.

        Returns:
            Query: The current builder instance for method chaining.
        """
        if not self._is_count(quantity):
            return self._fail(f"Limit value is not a non-negative integer: {quantity!r}")
        if self._limit is not None:
            return self._fail("Limit could be set only once")
        self._limit = quantity
        return self

    def offset(self, quantity: int) -> "Query":
        """Skip ``quantity`` rows. Can be set once.

        Returns:
            Query: The current builder instance for method chaining.
        """
        if not self._is_count(quantity):
            return self._fail(f"Offset value is not a non-negative integer: {quantity!r}")
        if self._offset is not None:
            return self._fail("Offset could be set only once")
        self._offset = quantity
        return self

    def clone_scope(self) -> "Query":
        """Copy the filtering state into a fresh builder.

        The select list, WHERE and JOIN clauses and any recorded failure are copied;
        ORDER BY, LIMIT and OFFSET are not. The copy shares no mutable state with
        this builder.

        Returns:
            Query: A new, unexecuted builder.
        """
        clone = Query(self._table, self._channel)
        clone._select = self._select
        clone._wheres = list(self._wheres)
        clone._joins = list(self._joins)
        clone._error = self._error
        return clone

    # -- compilation --

    def _present_clauses(self) -> "dict[str, bool]":
        return {
            "only": self._select is not None,
            "order_by": self._order is not None,
            "limit": self._limit is not None,
            "offset": self._offset is not None,
            "where": bool(self._wheres),
            "join": bool(self._joins),
        }

    def _check(self, kind: StatementKind) -> None:
        if self._error is not None:
            raise self._error
        present = self._present_clauses()
        for clause in FORBIDDEN_CLAUSES[kind]:
            if present[clause]:
                msg = f"Parameter {clause!r} is forbidden in {kind} query"
                raise SQLBuilderError(msg)

    def _where_sql(self) -> str:
        return " ".join(["WHERE 1", *(f"AND {clause.sql}" for clause in self._wheres)])

    @staticmethod
    def _assignments(data: "Mapping[str, Any]", columns: Sequence[str]) -> Clause:
        return Clause(", ".join(f"{column}=?" for column in columns), tuple(data.values()))

    @staticmethod
    def _require_values(data: "Mapping[str, Any]", kind: StatementKind) -> None:
        if not data:
            msg = f"{kind} query requires at least one field value"
            raise SQLBuilderError(msg)

    @staticmethod
    def _assemble(*parts: str) -> str:
        return " ".join(part for part in parts if part)

    def build_select(self, fields: Optional[Sequence[str]] = None) -> SafeQuery:
        """Compile the SELECT statement.

        Args:
            fields: Overrides the select list, used for count queries.

        Returns:
            SafeQuery: The statement and its parameters.
        """
        self._check(StatementKind.SELECT)
        columns = fields or self._select or ("*",)
        order = f"ORDER BY {self._order[0]} {self._order[1]}" if self._order else ""
        limit = f"LIMIT {self._limit}" if self._limit is not None else ""
        offset = f"OFFSET {self._offset}" if self._offset is not None else ""
        sql = self._assemble(
            f"SELECT {', '.join(columns)} FROM {self._table}",
            *self._joins,
            self._where_sql(),
            order,
            limit,
            offset,
        )
        return SafeQuery(sql, flatten_parameters(self._wheres), StatementKind.SELECT)

    def build_insert(self, data: "Mapping[str, Any]", with_update: bool = False) -> SafeQuery:
        """Compile the INSERT statement, optionally with ``ON DUPLICATE KEY UPDATE``.

        Args:
            data: Column to value mapping.
            with_update: Overwrite the same columns when a unique key collides.

        Returns:
            SafeQuery: The statement and its parameters.
        """
        self._check(StatementKind.INSERT)
        self._require_values(data, StatementKind.INSERT)
        values = self._assignments(data, list(data))
        clauses = [values]
        sql = f"INSERT INTO {self._table} SET {values.sql}"
        if with_update:
            sql = f"{sql} ON DUPLICATE KEY UPDATE {values.sql}"
            clauses.append(values)
        return SafeQuery(sql, flatten_parameters(clauses), StatementKind.INSERT)

    def build_update(self, data: "Mapping[str, Any]") -> SafeQuery:
        """Compile the UPDATE statement.

        Bare column names in ``data`` are qualified with the builder table.

        Returns:
            SafeQuery: The statement and its parameters.
        """
        self._check(StatementKind.UPDATE)
        self._require_values(data, StatementKind.UPDATE)
        assignments = self._assignments(data, [qualify(self._table, column) for column in data])
        sql = self._assemble(f"UPDATE {self._table}", *self._joins, f"SET {assignments.sql}", self._where_sql())
        return SafeQuery(sql, flatten_parameters([assignments, *self._wheres]), StatementKind.UPDATE)

    def build_delete(self) -> SafeQuery:
        """Compile the DELETE statement.

        Returns:
            SafeQuery: The statement and its parameters.
        """
        self._check(StatementKind.DELETE)
        sql = self._assemble(f"DELETE FROM {self._table}", *self._joins, self._where_sql())
        return SafeQuery(sql, flatten_parameters(self._wheres), StatementKind.DELETE)

    # -- execution --

    async def _execute(self, query: SafeQuery) -> Any:
        if self._executed:
            msg = "Query has already been executed"
            raise SQLBuilderError(msg)
        self._executed = True
        logger.debug("Executing %s on %s with %d parameter(s)", query.kind, self._table, len(query.parameters))
        return await self._channel.execute(query.sql, query.parameters)

    async def get(self) -> "list[DictRow]":
        """Run the SELECT and return every row.

        Returns:
            The rows, possibly empty.
        """
        return list(await self._execute(self.build_select()))

    async def get_first(self) -> "Optional[DictRow]":
        """Run the SELECT with ``LIMIT 1``.

        Returns:
            The first row, or ``None`` when nothing matches.
        """
        rows = await self.limit(1).get()
        return rows[0] if rows else None

    async def find(self, id: Any) -> "Optional[DictRow]":  # noqa: A002
        """Fetch the row whose ``id`` column equals ``id``.

        Returns:
            The row, or ``None`` when it does not exist.
        """
        return await self.where("id", "=", id).get_first()

    async def get_count(self) -> int:
        """Run ``SELECT COUNT(*)`` over the current scope.

        Returns:
            The number of matching rows.
        """
        rows = await self._execute(self.build_select((f"COUNT(*) AS {COUNT_COLUMN}",)))
        row = rows[0]
        value = row[COUNT_COLUMN] if isinstance(row, Mapping) else row[0]
        return int(value)

    async def create(self, data: "Mapping[str, Any]", with_update: bool = False) -> ExecutionResult:
        """Insert a row, or upsert it when ``with_update`` is true.

        Returns:
            ExecutionResult: Write metadata, including ``last_inserted_id``.
        """
        return await self._execute(self.build_insert(data, with_update))  # type: ignore[no-any-return]

    async def update(self, data: "Mapping[str, Any]") -> ExecutionResult:
        """Update the rows in scope.

        Returns:
            ExecutionResult: Write metadata, including ``rows_affected``.
        """
        return await self._execute(self.build_update(data))  # type: ignore[no-any-return]

    async def delete(self) -> ExecutionResult:
        """Delete the rows in scope.

        Returns:
            ExecutionResult: Write metadata, including ``rows_affected``.
        """
        return await self._execute(self.build_delete())  # type: ignore[no-any-return]

    async def get_paginated(self, page_size: int, page: int = 1) -> "Paginator[DictRow]":
        """Fetch one page of the SELECT and the total number of matching rows.

        The total comes from a count query over a copy of the WHERE/JOIN scope; the
        page comes from this builder with LIMIT and OFFSET applied. The two
        statements run one after the other without a transaction, so concurrent
        writers may make them disagree.

        Args:
            page_size: Rows per page. Must be a positive integer.
            page: Page number, starting at 1.

        Raises:
            SQLBuilderError: If ``page_size`` is missing or ``page`` is below 1.

        Returns:
            Paginator: The page and its arithmetic.
        """
        if self._error is not None:
            raise self._error
        if not page_size:
            msg = "Limit is required"
            raise SQLBuilderError(msg)
        if not self._is_count(page_size):
            msg = f"Limit value is not a non-negative integer: {page_size!r}"
            raise SQLBuilderError(msg)
        page = page or 1
        if not isinstance(page, int) or isinstance(page, bool) or page < 1:
            msg = f"Page number must be a positive integer: {page!r}"
            raise SQLBuilderError(msg)
        if self._limit is not None or self._offset is not None:
            msg = "Limit and offset are set by pagination and must not be set beforehand"
            raise SQLBuilderError(msg)
        if self._executed:
            msg = "Query has already been executed"
            raise SQLBuilderError(msg)
        total = await self.clone_scope().get_count()
        items = await self.limit(page_size).offset(page_size * (page - 1)).get()
        return Paginator(total=total, limit=page_size, current=page, items=items)
