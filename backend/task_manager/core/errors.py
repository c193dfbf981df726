"""Error Hierarchy — typed, categorized exceptions for all Task Manager failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() produces the REST envelope: {"error": msg} or {"errors": [...]}
    - No internal details leaked in user-facing messages
    - 404 is reserved for missing resources; duplicates and in-use deletes are 409

Design Decisions:
    - Single hierarchy with TaskManagerError base: one global handler catches all
    - Conflict split into DuplicateResourceError / ResourceInUseError so callers and
      logs can tell a uniqueness violation from an integrity-guard refusal
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class TaskManagerError(Exception):
    """Base exception for all Task Manager errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationFailedError(TaskManagerError):
    """Request body violates field constraints or references unknown entities."""
    def __init__(self, errors: list[str]):
        super().__init__(
            "; ".join(errors), "VALIDATION_ERROR", ErrorCategory.VALIDATION, 400,
        )
        self.errors = errors

    def to_response(self) -> dict:
        return {"errors": self.errors}


class UnauthenticatedError(TaskManagerError):
    """Protected route reached without a valid principal."""
    def __init__(self, reason: str = "Full authentication is required to access this resource"):
        super().__init__(
            f"Unauthorized: {reason}",
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION, 401,
        )
        self.reason = reason


class InvalidCredentialsError(TaskManagerError):
    """Login with unknown email or wrong password."""
    def __init__(self):
        super().__init__(
            "Invalid credentials",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION, 401,
        )


class ForbiddenError(TaskManagerError):
    """Authenticated, but not permitted to act on this resource."""
    def __init__(self, message: str):
        super().__init__(
            f"Access denied: {message}",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION, 403,
        )


class ResourceNotFoundError(TaskManagerError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, field: str = "id",
    ):
        super().__init__(
            f"{resource_type} with {field} {resource_id} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(TaskManagerError):
    """Write refused because it collides with existing state."""
    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, code, ErrorCategory.CONFLICT, 409)


class DuplicateResourceError(ConflictError):
    """Unique field (email, slug, label name) already taken."""
    def __init__(self, resource_type: str, field: str, value: str):
        super().__init__(
            f"{resource_type} with {field} '{value}' already exists",
            "DUPLICATE_RESOURCE",
        )
        self.field = field


class ResourceInUseError(ConflictError):
    """Delete refused: at least one task still references the resource."""
    def __init__(self, resource_type: str, resource_id: object):
        super().__init__(
            f"Cannot delete {resource_type.lower()} {resource_id}: it is used in tasks",
            "RESOURCE_IN_USE",
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TaskManagerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, 503,
        )
        self.operation = operation
