"""Fluent SQL statement builder with parameter binding.

This module provides a per-table builder that accumulates clauses and compiles
them into one ``?``-parameterized statement.
"""

from typing import TYPE_CHECKING

from mysqlb.builder._base import FORBIDDEN_CLAUSES, Clause, SafeQuery, StatementKind, qualify
from mysqlb.builder._query import Query
from mysqlb.exceptions import SQLBuilderError

if TYPE_CHECKING:
    from mysqlb.protocols import ExecutionChannel

__all__ = (
    "FORBIDDEN_CLAUSES",
    "Clause",
    "Query",
    "SQLBuilderError",
    "SafeQuery",
    "StatementKind",
    "qualify",
    "use",
)


def use(channel: "ExecutionChannel", table: str) -> Query:
    """Create a new :class:`Query` for ``table`` bound to ``channel``.

    Args:
        channel: The execution channel statements are sent to.
        table: The table the builder targets.

    Returns:
        Query: A fresh builder.
    """
    return Query(table, channel)
