from typing import Any

from typing_extensions import TypeAlias

__all__ = (
    "DictRow",
    "StatementParameters",
)

DictRow: TypeAlias = dict[str, Any]
"""Row shape returned by the execution channel for row-returning statements."""

StatementParameters: TypeAlias = tuple[Any, ...]
"""Positional parameters bound to ``?`` placeholders, in placeholder order."""
