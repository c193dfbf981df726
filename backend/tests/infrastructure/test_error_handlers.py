"""Validation error formatting — Pydantic error dicts to "field: message" strings."""

from task_manager.api.error_handlers import format_validation_errors


def test_body_and_query_prefixes_are_dropped():
    errors = [
        {"loc": ("body", "title"), "msg": "Field required", "type": "missing"},
        {"loc": ("query", "assigneeId"), "msg": "Input should be a valid integer", "type": "int_parsing"},
    ]
    assert format_validation_errors(errors) == [
        "title: Field required",
        "assigneeId: Input should be a valid integer",
    ]


def test_nested_locations_are_dotted():
    errors = [{"loc": ("body", "taskLabelIds", 1), "msg": "bad", "type": "int_parsing"}]
    assert format_validation_errors(errors) == ["taskLabelIds.1: bad"]


def test_whole_body_errors_name_the_request():
    errors = [{"loc": ("body",), "msg": "Field required", "type": "missing"}]
    assert format_validation_errors(errors) == ["request: Field required"]
