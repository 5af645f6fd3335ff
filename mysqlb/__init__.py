"""mysqlb: fluent, parameterized SQL statement building for MySQL."""

from mysqlb import adapters, builder, exceptions, utils
from mysqlb.__metadata__ import __version__
from mysqlb.adapters.asyncmy import AsyncmyDriver
from mysqlb.builder import Query, SafeQuery, StatementKind, use
from mysqlb.callbacks import CallbackQuery, run_with_callback
from mysqlb.config import ConnectionConfig, config_from_env
from mysqlb.exceptions import ImproperConfigurationError, MysqlbError, ParameterError, SQLBuilderError
from mysqlb.pagination import Paginator
from mysqlb.protocols import ExecutionChannel
from mysqlb.result import ExecutionResult

__all__ = (
    "AsyncmyDriver",
    "CallbackQuery",
    "ConnectionConfig",
    "ExecutionChannel",
    "ExecutionResult",
    "ImproperConfigurationError",
    "MysqlbError",
    "Paginator",
    "ParameterError",
    "Query",
    "SQLBuilderError",
    "SafeQuery",
    "StatementKind",
    "__version__",
    "adapters",
    "builder",
    "config_from_env",
    "exceptions",
    "run_with_callback",
    "use",
    "utils",
)
