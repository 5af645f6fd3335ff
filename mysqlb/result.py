"""Metadata returned by the execution channel for write statements."""

from typing import Any, Optional, Union

__all__ = ("ExecutionResult",)


class ExecutionResult:
    """Outcome of an INSERT, UPDATE or DELETE statement.

    Args:
        rows_affected: Number of rows affected by the operation.
        last_inserted_id: Identifier generated by the last INSERT, if any.
        metadata: Additional driver specific metadata.
    """

    __slots__ = ("last_inserted_id", "metadata", "rows_affected")

    def __init__(
        self,
        rows_affected: int = 0,
        last_inserted_id: Optional[Union[int, str]] = None,
        metadata: "Optional[dict[str, Any]]" = None,
    ) -> None:
        self.rows_affected = rows_affected
        self.last_inserted_id = last_inserted_id
        self.metadata = metadata if metadata is not None else {}

    def __repr__(self) -> str:
        return (
            f"ExecutionResult(rows_affected={self.rows_affected!r}, "
            f"last_inserted_id={self.last_inserted_id!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExecutionResult):
            return NotImplemented
        return (self.rows_affected, self.last_inserted_id) == (other.rows_affected, other.last_inserted_id)

    __hash__ = None  # type: ignore[assignment]

    def is_success(self) -> bool:
        """Check if the statement touched at least one row.

        Returns:
            True when one or more rows were affected.
        """
        return self.rows_affected > 0
