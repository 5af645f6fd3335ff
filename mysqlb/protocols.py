"""Runtime-checkable protocols for the collaborators of the query builder."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from mysqlb.result import ExecutionResult
    from mysqlb.typing import DictRow

__all__ = ("ExecutionChannel",)


@runtime_checkable
class ExecutionChannel(Protocol):
    """Anything able to run a compiled statement.

    Row-returning statements resolve to a list of row mappings, write statements
    to an :class:`~mysqlb.result.ExecutionResult`. Failures are raised as-is.
    """

    async def execute(
        self, sql: str, parameters: Sequence[Any]
    ) -> "Union[list[DictRow], ExecutionResult]":  # pragma: no cover
        """Execute ``sql`` with positional ``parameters`` bound to its ``?`` placeholders."""
        ...

