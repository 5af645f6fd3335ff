from mysqlb.adapters.asyncmy.driver import AsyncmyCursor, AsyncmyDriver
from mysqlb.config import ConnectionConfig, config_from_env

__all__ = ("AsyncmyCursor", "AsyncmyDriver", "ConnectionConfig", "config_from_env")
