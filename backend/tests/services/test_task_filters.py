"""Task Filtering — GET /api/tasks query parameters and their SQL rendering.

Invariants:
    - titleCont, assigneeId, status and labelId combine with AND
    - No parameters → every task, ordered by id
    - X-Total-Count equals the number of tasks returned
    - TaskService.list_tasks agrees with core.task_filter.build_task_predicate
    - Title matching folds case beyond ASCII
    - Listing is read-only: repeating a query returns the same result
"""

import itertools

import pytest

from task_manager.core.task_filter import TaskFilter, build_task_predicate
from task_manager.schemas.task import TaskCreate
from task_manager.services.label_service import LabelService
from task_manager.services.task_service import TaskService


@pytest.fixture
async def board(test_db, user, create_user, defaults):
    """Three tasks across two users, two statuses and two labels."""
    alice = user
    bob = await create_user("bob@example.com")
    labels = {label.name: label.id for label in await LabelService(test_db).list_labels()}
    service = TaskService(test_db)
    specs = [
        ("Write docs", alice.id, "draft", [labels["feature"]]),
        ("Fix login BUG", bob.id, "to_review", [labels["bug"]]),
        ("Review docs 100%", None, "to_review", [labels["feature"], labels["bug"]]),
    ]
    for title, assignee_id, status, label_ids in specs:
        await service.create_task(TaskCreate(
            title=title, status=status, assignee_id=assignee_id, label_ids=label_ids,
        ))
    await test_db.commit()
    return {"alice": alice, "bob": bob, "labels": labels}


async def _titles(client, headers, **params):
    res = await client.get("/api/tasks", params=params, headers=headers)
    assert res.status_code == 200
    assert res.headers["X-Total-Count"] == str(len(res.json()))
    return [t["title"] for t in res.json()]


async def test_no_filters_returns_all_in_id_order(client, board, auth_headers):
    assert await _titles(client, auth_headers) == [
        "Write docs", "Fix login BUG", "Review docs 100%",
    ]


async def test_title_contains_ignores_case(client, board, auth_headers):
    assert await _titles(client, auth_headers, titleCont="DOCS") == [
        "Write docs", "Review docs 100%",
    ]
    assert await _titles(client, auth_headers, titleCont="bug") == ["Fix login BUG"]


async def test_title_wildcards_are_literal(client, board, auth_headers):
    assert await _titles(client, auth_headers, titleCont="100%") == ["Review docs 100%"]
    assert await _titles(client, auth_headers, titleCont="_") == []


async def test_filter_by_assignee(client, board, auth_headers):
    assert await _titles(
        client, auth_headers, assigneeId=board["bob"].id,
    ) == ["Fix login BUG"]


async def test_filter_by_status(client, board, auth_headers):
    assert await _titles(client, auth_headers, status="to_review") == [
        "Fix login BUG", "Review docs 100%",
    ]


async def test_filter_by_label(client, board, auth_headers):
    assert await _titles(
        client, auth_headers, labelId=board["labels"]["feature"],
    ) == ["Write docs", "Review docs 100%"]


async def test_filters_combine_with_and(client, board, auth_headers):
    assert await _titles(
        client, auth_headers,
        titleCont="docs", status="to_review", labelId=board["labels"]["bug"],
    ) == ["Review docs 100%"]


async def test_unmatched_filter_returns_empty_list(client, board, auth_headers):
    assert await _titles(client, auth_headers, status="published") == []


async def test_title_contains_folds_non_ascii_case(client, board, auth_headers):
    res = await client.post(
        "/api/tasks", json={"title": "Задача для ревью", "status": "draft"},
        headers=auth_headers,
    )
    assert res.status_code == 201
    assert await _titles(client, auth_headers, titleCont="задача") == [
        "Задача для ревью",
    ]
    assert await _titles(client, auth_headers, titleCont="РЕВЬЮ") == [
        "Задача для ревью",
    ]


async def test_repeated_query_returns_same_result(client, board, auth_headers):
    first = await client.get(
        "/api/tasks", params={"status": "draft"}, headers=auth_headers,
    )
    second = await client.get(
        "/api/tasks", params={"status": "draft"}, headers=auth_headers,
    )
    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert first.headers["X-Total-Count"] == second.headers["X-Total-Count"] == "1"


async def test_non_integer_assignee_is_400(client, board, auth_headers):
    res = await client.get(
        "/api/tasks", params={"assigneeId": "abc"}, headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.json()["errors"][0].startswith("assigneeId: ")


async def test_sql_filter_agrees_with_predicate(test_db, board):
    """Every combination of criteria selects the same tasks both ways."""
    service = TaskService(test_db)
    everything = await service.list_tasks()
    options = {
        "title_contains": [None, "docs", "BUG"],
        "assignee_id": [None, board["alice"].id, board["bob"].id],
        "status_slug": [None, "draft", "to_review"],
        "label_id": [None, board["labels"]["feature"], board["labels"]["bug"]],
    }
    for values in itertools.product(*options.values()):
        params = TaskFilter(**dict(zip(options, values)))
        predicate = build_task_predicate(params)
        expected = [t.id for t in everything if predicate(t)]
        actual = [t.id for t in await service.list_tasks(params)]
        assert actual == expected, params


async def test_non_ascii_title_filter_agrees_with_predicate(test_db, board):
    service = TaskService(test_db)
    await service.create_task(TaskCreate(title="Задача для ревью", status="draft"))
    await test_db.commit()
    everything = await service.list_tasks()
    for fragment in ("задача", "ЗАДАЧА", "Ревью"):
        params = TaskFilter(title_contains=fragment)
        predicate = build_task_predicate(params)
        expected = [t.id for t in everything if predicate(t)]
        actual = [t.id for t in await service.list_tasks(params)]
        assert actual == expected != [], fragment
