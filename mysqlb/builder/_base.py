"""Building blocks shared by the query builder.

Clause fragments, the compiled statement container and the table of clauses
each statement kind accepts.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

from mysqlb.typing import StatementParameters

__all__ = (
    "FORBIDDEN_CLAUSES",
    "Clause",
    "SafeQuery",
    "StatementKind",
    "flatten_parameters",
    "qualify",
)


class StatementKind(str, Enum):
    """Kind of statement a builder commits to when a terminal method runs."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Clause:
    """A piece of SQL text and the values bound to its placeholders."""

    sql: str
    parameters: StatementParameters = ()


@dataclass(frozen=True)
class SafeQuery:
    """A compiled statement ready to hand to an execution channel."""

    sql: str
    parameters: StatementParameters = field(default_factory=tuple)
    kind: StatementKind = StatementKind.SELECT

    def __str__(self) -> str:
        return self.sql


FORBIDDEN_CLAUSES: "Final[dict[StatementKind, tuple[str, ...]]]" = {
    StatementKind.SELECT: (),
    StatementKind.INSERT: ("only", "order_by", "limit", "offset", "where", "join"),
    StatementKind.UPDATE: ("only", "order_by", "limit", "offset"),
    StatementKind.DELETE: ("only", "order_by", "limit", "offset"),
}
"""Clauses a statement kind rejects, in the order they are checked."""


def qualify(table: str, column: str) -> str:
    """Prefix ``column`` with ``table`` unless it is already qualified.

    Args:
        table: Table the builder is bound to.
        column: Bare or ``table.column`` style name.

    Returns:
        The qualified column name.
    """
    if "." in column:
        return column
    return f"{table}.{column}"


def flatten_parameters(clauses: "list[Clause]") -> "tuple[Any, ...]":
    """Concatenate clause parameters in append order."""
    return tuple(value for clause in clauses for value in clause.parameters)
