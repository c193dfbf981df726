"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, TaskId, TaskStatusId, LabelId wrap ints — never mix ids of different entities
    - Principal is immutable once established for a request
    - All token failure modes encoded as TokenErrorKind — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Principal carries email as well as id: the token subject is the email, the
      ownership checks compare ids, both are needed downstream
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
TaskId = NewType("TaskId", int)
TaskStatusId = NewType("TaskStatusId", int)
LabelId = NewType("LabelId", int)


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to the current request."""
    id: UserId
    email: str


# ─── Enums ───────────────────────────────────────────────────────

class TokenErrorKind(str, Enum):
    """Why a bearer token was rejected."""
    EXPIRED = "expired"
    MALFORMED = "malformed"
    INVALID_SIGNATURE = "invalid_signature"


# ─── Seed Data ───────────────────────────────────────────────────

DEFAULT_TASK_STATUS_SLUGS = (
    "draft", "to_review", "to_be_fixed", "to_publish", "published",
)
DEFAULT_LABEL_NAMES = ("feature", "bug")

LABEL_NAME_MIN_LENGTH = 3
LABEL_NAME_MAX_LENGTH = 1000
PASSWORD_MIN_LENGTH = 3
