from typing import Any, Optional

__all__ = (
    "ImproperConfigurationError",
    "MysqlbError",
    "ParameterError",
    "SQLBuilderError",
)


class MysqlbError(Exception):
    """Base exception class from which all mysqlb exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``MysqlbError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class SQLBuilderError(MysqlbError):
    """Invalid use of the query builder.

    Raised before anything is sent to the database: duplicate single-set clauses,
    bad ORDER BY directions, non-integer LIMIT/OFFSET values, clauses that are
    forbidden for the chosen statement kind and missing required values.
    """

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "Issues building SQL statement."
        super().__init__(message)


class ParameterError(MysqlbError):
    """Bound parameters do not line up with the placeholders of a statement."""

    sql: Optional[str]

    def __init__(self, message: str, sql: Optional[str] = None) -> None:
        """Initialize with optional SQL context."""
        detail_message = message
        if sql:
            detail_message = f"{message}\nSQL: {sql}"
        super().__init__(detail=detail_message)
        self.sql = sql


class ImproperConfigurationError(MysqlbError):
    """Improper Configuration error.

    Raised when required connection options are missing or invalid.
    """
