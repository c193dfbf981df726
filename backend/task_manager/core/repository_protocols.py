"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Credential lookups and password hashing accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in CredentialStore: implementations do IO; PasswordHasher is sync because
      bcrypt is CPU-bound and called inline
"""

from typing import Protocol


class CredentialRecord(Protocol):
    """Structural contract for a stored user as seen by authentication."""
    id: int
    email: str
    password_hash: str


class CredentialStore(Protocol):
    """Contract for user credential persistence — implemented by shell."""
    async def get_by_email(self, email: str) -> CredentialRecord | None: ...
    async def save(self, user: CredentialRecord) -> CredentialRecord: ...


class PasswordHasher(Protocol):
    """One-way password hashing — implemented by shell."""
    def hash(self, plain_password: str) -> str: ...
    def verify(self, plain_password: str, password_hash: str) -> bool: ...
