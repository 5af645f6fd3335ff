"""Tests for Query terminal methods and result shaping."""

from typing import TYPE_CHECKING, Any

import pytest

from mysqlb import ExecutionResult, Paginator, Query, SQLBuilderError

if TYPE_CHECKING:
    from tests.conftest import RecordingChannel


async def test_get_returns_rows(channel: "RecordingChannel", users: Query, user_rows: "list[dict[str, Any]]") -> None:
    channel.queue(user_rows[3:])

    rows = await users.where("id", ">", 3).get()

    assert rows == user_rows[3:]
    assert channel.calls == [("SELECT * FROM users WHERE 1 AND users.id > ?", (3,))]


async def test_get_empty(channel: "RecordingChannel", users: Query) -> None:
    assert await users.where("id", ">", 100).get() == []


async def test_get_first_forces_limit_one(
    channel: "RecordingChannel", users: Query, user_rows: "list[dict[str, Any]]"
) -> None:
    channel.queue([user_rows[4]])

    row = await users.order_by("id", "desc").get_first()

    assert row == user_rows[4]
    assert channel.last_sql == "SELECT * FROM users WHERE 1 ORDER BY users.id DESC LIMIT 1"


async def test_get_first_without_match_returns_none(channel: "RecordingChannel", users: Query) -> None:
    channel.queue([])

    assert await users.where("id", "=", 42).get_first() is None


async def test_get_first_after_limit_fails_before_execution(channel: "RecordingChannel", users: Query) -> None:
    with pytest.raises(SQLBuilderError, match="Limit could be set only once"):
        await users.limit(3).get_first()

    assert not channel.executed


async def test_find(channel: "RecordingChannel", users: Query, user_rows: "list[dict[str, Any]]") -> None:
    channel.queue([user_rows[1]])

    assert await users.find(2) == user_rows[1]
    assert channel.calls == [("SELECT * FROM users WHERE 1 AND users.id = ? LIMIT 1", (2,))]


async def test_find_missing(channel: "RecordingChannel", users: Query) -> None:
    assert await users.find(99) is None


async def test_get_count(channel: "RecordingChannel", users: Query) -> None:
    channel.queue([{"count": 5}])

    assert await users.only(["id"]).get_count() == 5
    assert channel.last_sql == "SELECT COUNT(*) AS count FROM users WHERE 1"


async def test_get_count_from_sequence_row(channel: "RecordingChannel", users: Query) -> None:
    channel.queue([(3,)])

    assert await users.where("age", "=", 23).get_count() == 3


async def test_create(channel: "RecordingChannel", users: Query) -> None:
    channel.queue(ExecutionResult(rows_affected=1, last_inserted_id=6))

    result = await users.create({"f_name": "x", "l_name": "y", "age": 18}, False)

    assert result.last_inserted_id == 6
    assert channel.calls == [("INSERT INTO users SET f_name=?, l_name=?, age=?", ("x", "y", 18))]


async def test_create_with_update(channel: "RecordingChannel") -> None:
    channel.queue(ExecutionResult(rows_affected=2, last_inserted_id=2))
    professions = Query("professions", channel)

    result = await professions.create({"user_id": 2, "name": "lawyer"}, with_update=True)

    assert result.last_inserted_id == 2
    assert channel.last_parameters == (2, "lawyer", 2, "lawyer")


async def test_update(channel: "RecordingChannel", users: Query) -> None:
    channel.queue(ExecutionResult(rows_affected=1))

    result = await users.where("id", "=", 2).update({"f_name": "inserted"})

    assert result.rows_affected == 1
    assert channel.last_parameters == ("inserted", 2)


async def test_delete(channel: "RecordingChannel", users: Query) -> None:
    channel.queue(ExecutionResult(rows_affected=2))

    result = await users.where("id", ">", 3).delete()

    assert result.rows_affected == 2
    assert channel.last_sql == "DELETE FROM users WHERE 1 AND users.id > ?"


async def test_execution_errors_propagate_unchanged(channel: "RecordingChannel", users: Query) -> None:
    failure = RuntimeError("connection lost")
    channel.queue(failure)

    with pytest.raises(RuntimeError) as exc_info:
        await users.get()

    assert exc_info.value is failure


async def test_query_is_single_use(channel: "RecordingChannel", users: Query) -> None:
    await users.get()

    with pytest.raises(SQLBuilderError, match="already been executed"):
        await users.get()

    assert len(channel.calls) == 1


async def test_recorded_failure_is_raised_by_terminal(channel: "RecordingChannel", users: Query) -> None:
    users.order_by("id", "upwards")

    for terminal in (users.get, users.get_first, users.get_count, users.delete):
        with pytest.raises(SQLBuilderError, match="Invalid order value"):
            await terminal()

    assert not channel.executed


async def test_get_paginated(channel: "RecordingChannel", users: Query, user_rows: "list[dict[str, Any]]") -> None:
    channel.queue([{"count": 5}], [user_rows[2], user_rows[1]])

    page = await users.where("id", ">", 0).order_by("id", "desc").get_paginated(2, 2)

    assert isinstance(page, Paginator)
    assert channel.calls == [
        ("SELECT COUNT(*) AS count FROM users WHERE 1 AND users.id > ?", (0,)),
        ("SELECT * FROM users WHERE 1 AND users.id > ? ORDER BY users.id DESC LIMIT 2 OFFSET 2", (0,)),
    ]
    assert page.items == (user_rows[2], user_rows[1])
    assert page.total == 5
    assert page.total_pages == 3
    assert page.next_page == 3
    assert page.prev_page == 1


async def test_get_paginated_defaults_to_first_page(channel: "RecordingChannel", users: Query) -> None:
    channel.queue([{"count": 1}], [{"id": 1}])

    page = await users.inner_join("professions", "id", "user_id").get_paginated(10)

    assert page.current == 1
    assert page.prev_page is None
    assert page.next_page is None
    assert channel.calls[0][0] == (
        "SELECT COUNT(*) AS count FROM users INNER JOIN professions ON users.id = professions.user_id WHERE 1"
    )
    assert channel.calls[1][0].endswith("LIMIT 10 OFFSET 0")


@pytest.mark.parametrize(("page_size", "page"), [(0, 1), (None, 1), (5, -1), (-5, 1)])
async def test_get_paginated_validates_arguments(
    channel: "RecordingChannel", users: Query, page_size: Any, page: Any
) -> None:
    with pytest.raises(SQLBuilderError):
        await users.get_paginated(page_size, page)

    assert not channel.executed


async def test_get_paginated_rejects_preset_bounds(channel: "RecordingChannel", users: Query) -> None:
    with pytest.raises(SQLBuilderError, match="set by pagination"):
        await users.limit(5).get_paginated(2)

    assert not channel.executed


async def test_get_paginated_count_failure_skips_page_query(channel: "RecordingChannel", users: Query) -> None:
    channel.queue(ConnectionError("gone"))

    with pytest.raises(ConnectionError):
        await users.get_paginated(2)

    assert len(channel.calls) == 1


@pytest.mark.parametrize(("rows_affected", "expected"), [(1, True), (0, False), (-1, False)])
def test_execution_result_success(rows_affected: int, expected: bool) -> None:
    assert ExecutionResult(rows_affected=rows_affected).is_success() is expected
