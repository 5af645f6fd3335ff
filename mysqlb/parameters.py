"""Placeholder handling for compiled statements.

The builder emits ``?`` (qmark) placeholders. Drivers of the PyMySQL family,
asyncmy included, format statements with ``%s`` placeholders and the ``%``
operator, so statements are converted before they are sent.
"""

from collections.abc import Sequence
from typing import Any

import sqlglot
from sqlglot.errors import TokenError
from sqlglot.tokens import TokenType

from mysqlb.exceptions import ParameterError

__all__ = (
    "convert_placeholders",
    "placeholder_spans",
    "validate_parameter_alignment",
)

DIALECT = "mysql"


def placeholder_spans(sql: str) -> "list[tuple[int, int]]":
    """Locate the ``?`` placeholders of ``sql``.

    Question marks inside string literals, quoted identifiers and comments are
    not placeholders.

    Args:
        sql: Statement text.

    Raises:
        ParameterError: If the statement cannot be tokenized.

    Returns:
        ``(start, end)`` offsets of every placeholder, ``end`` exclusive.
    """
    try:
        tokens = sqlglot.tokenize(sql, read=DIALECT)
    except TokenError as exc:
        msg = f"Unable to tokenize statement: {exc}"
        raise ParameterError(msg, sql) from exc
    return [
        (token.start, token.end + 1)
        for token in tokens
        if token.token_type == TokenType.PLACEHOLDER and token.text == "?"
    ]


def validate_parameter_alignment(sql: str, parameters: Sequence[Any]) -> int:
    """Check that every placeholder has exactly one bound value.

    Args:
        sql: Statement text with ``?`` placeholders.
        parameters: Positional values.

    Raises:
        ParameterError: If placeholder and value counts differ.

    Returns:
        The number of placeholders.
    """
    expected = len(placeholder_spans(sql))
    if expected != len(parameters):
        msg = f"Parameter count mismatch: {expected} placeholder(s) but {len(parameters)} value(s)"
        raise ParameterError(msg, sql)
    return expected


def convert_placeholders(sql: str) -> str:
    """Rewrite ``?`` placeholders into ``%s`` placeholders.

    Every literal ``%`` is doubled, since the driver applies ``%`` formatting
    to the whole statement.

    Args:
        sql: Statement text with ``?`` placeholders.

    Returns:
        The converted statement.
    """
    pieces: list[str] = []
    cursor = 0
    for start, end in placeholder_spans(sql):
        pieces.append(sql[cursor:start].replace("%", "%%"))
        pieces.append("%s")
        cursor = end
    pieces.append(sql[cursor:].replace("%", "%%"))
    return "".join(pieces)
