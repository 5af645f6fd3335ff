"""Callback-style access to the asynchronous terminal methods.

``callback(error, result)`` is invoked exactly once: with the error when the
statement fails, otherwise with ``None`` and the result.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Final, Optional, TypeVar

if TYPE_CHECKING:
    from mysqlb.builder import Query

__all__ = ("Callback", "CallbackQuery", "run_with_callback")

T = TypeVar("T")

Callback = Callable[[Optional[BaseException], Any], None]

TERMINAL_METHODS: Final = frozenset(
    {"create", "delete", "find", "get", "get_count", "get_first", "get_paginated", "update"}
)


def run_with_callback(awaitable: "Awaitable[T]", callback: Callback) -> "asyncio.Task[T]":
    """Schedule ``awaitable`` on the running loop and report its outcome to ``callback``.

    Args:
        awaitable: Coroutine produced by a terminal method.
        callback: Called as ``callback(error, None)`` or ``callback(None, result)``.

    Returns:
        The scheduled task.
    """

    async def _runner() -> T:
        return await awaitable

    def _done(task: "asyncio.Task[T]") -> None:
        if task.cancelled():
            callback(asyncio.CancelledError(), None)
            return
        error = task.exception()
        if error is not None:
            callback(error, None)
            return
        callback(None, task.result())

    task = asyncio.ensure_future(_runner())
    task.add_done_callback(_done)
    return task


class CallbackQuery:
    """Wrap a :class:`~mysqlb.builder.Query` for callback-style use.

    Clause methods chain on the wrapper. Terminal methods take a keyword-only
    ``callback`` and return the scheduled task.
    """

    __slots__ = ("_query",)

    def __init__(self, query: "Query") -> None:
        self._query = query

    @property
    def query(self) -> "Query":
        return self._query

    def __getattr__(self, name: str) -> Any:
        attribute = getattr(self._query, name)
        if not callable(attribute):
            return attribute
        if name in TERMINAL_METHODS:

            def _terminal(*args: Any, callback: Callback, **kwargs: Any) -> "asyncio.Task[Any]":
                return run_with_callback(attribute(*args, **kwargs), callback)

            return _terminal

        def _chain(*args: Any, **kwargs: Any) -> Any:
            result = attribute(*args, **kwargs)
            return self if result is self._query else result

        return _chain
