"""Task Filter Builder — sparse query parameters to a composable task predicate.

Invariants:
    - A task matches iff ALL supplied (non-None) criteria hold (conjunction)
    - No criteria supplied → predicate is always true (unfiltered collection)
    - title_contains is case-insensitive substring on the task name
    - assignee_id and status_slug are exact matches
    - label_id is existential: the task carries at least one label with that id

Design Decisions:
    - Plain dataclass of optional fields + composed closures instead of a generic
      criteria-builder abstraction
    - The SQL rendering of the same criteria lives in services/task_service.py;
      build_task_predicate() is the reference semantics it must agree with
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol


class FilterableTask(Protocol):
    """Structural contract for anything the predicate is evaluated against."""
    name: str
    assignee_id: int | None
    status_slug: str
    label_ids: set[int]


TaskPredicate = Callable[[FilterableTask], bool]


@dataclass(frozen=True)
class TaskFilter:
    """Optional task listing criteria (titleCont, assigneeId, status, labelId)."""
    title_contains: str | None = None
    assignee_id: int | None = None
    status_slug: str | None = None
    label_id: int | None = None

    @property
    def is_unconstrained(self) -> bool:
        return (
            self.title_contains is None
            and self.assignee_id is None
            and self.status_slug is None
            and self.label_id is None
        )


def _title_contains(fragment: str) -> TaskPredicate:
    needle = fragment.lower()
    return lambda task: needle in (task.name or "").lower()


def _assigned_to(assignee_id: int) -> TaskPredicate:
    return lambda task: task.assignee_id == assignee_id


def _has_status(slug: str) -> TaskPredicate:
    return lambda task: task.status_slug == slug


def _has_label(label_id: int) -> TaskPredicate:
    return lambda task: label_id in task.label_ids


def build_task_predicate(params: TaskFilter) -> TaskPredicate:
    """Compose one predicate per supplied criterion with logical AND."""
    predicates: list[TaskPredicate] = []
    if params.title_contains is not None:
        predicates.append(_title_contains(params.title_contains))
    if params.assignee_id is not None:
        predicates.append(_assigned_to(params.assignee_id))
    if params.status_slug is not None:
        predicates.append(_has_status(params.status_slug))
    if params.label_id is not None:
        predicates.append(_has_label(params.label_id))

    def matches(task: FilterableTask) -> bool:
        return all(predicate(task) for predicate in predicates)

    return matches
