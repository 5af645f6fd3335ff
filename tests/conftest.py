from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from mysqlb import Query


class RecordingChannel:
    """Execution channel stub that records statements and replays queued results."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self._results: list[Any] = []

    def queue(self, *results: Any) -> RecordingChannel:
        self._results.extend(results)
        return self

    @property
    def executed(self) -> bool:
        return bool(self.calls)

    @property
    def last_sql(self) -> str:
        return self.calls[-1][0]

    @property
    def last_parameters(self) -> tuple[Any, ...]:
        return self.calls[-1][1]

    async def execute(self, sql: str, parameters: Sequence[Any]) -> Any:
        self.calls.append((sql, tuple(parameters)))
        if not self._results:
            return []
        result = self._results.pop(0)
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def users(channel: RecordingChannel) -> Query:
    return Query("users", channel)


@pytest.fixture
def user_rows() -> list[dict[str, Any]]:
    return [
        {"id": 1, "f_name": "Hohn", "l_name": "Snow", "age": 25},
        {"id": 2, "f_name": "Peter", "l_name": "Jeneson", "age": 23},
        {"id": 3, "f_name": "Olivia", "l_name": "Clarke", "age": 23},
        {"id": 4, "f_name": "Julia", "l_name": "Rose", "age": 23},
        {"id": 5, "f_name": "Irene", "l_name": "Williams", "age": 23},
    ]
