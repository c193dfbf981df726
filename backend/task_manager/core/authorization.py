"""Authorization Policy — pure ownership predicates over the current principal.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Predicates return bool; ensure_* variants raise ForbiddenError on denial
    - An unassigned task has no assignee, so nobody is its assignee

Design Decisions:
    - Kept apart from the entity services so ownership rules are testable without
      persistence; the lookup-backed is_task_assignee lives in services/authorization.py
    - Principal passed explicitly (no ambient security context)
"""

from task_manager.core.domain_types import Principal
from task_manager.core.errors import ForbiddenError


def is_self(principal_id: int, target_user_id: int) -> bool:
    """True when the principal is the user being acted upon."""
    return principal_id == target_user_id


def is_task_assignee(principal_id: int, assignee_id: int | None) -> bool:
    """True when the principal is the task's assignee."""
    return assignee_id is not None and principal_id == assignee_id


def ensure_self(principal: Principal, target_user_id: int) -> None:
    """Users may only modify or delete their own profile."""
    if not is_self(principal.id, target_user_id):
        raise ForbiddenError(
            f"user {principal.id} cannot modify user {target_user_id}",
        )
