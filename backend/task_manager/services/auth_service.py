"""Auth Service — exchanges email + password for a signed bearer token.

Invariants:
    - Unknown email and wrong password fail identically (InvalidCredentialsError)
    - The token subject is the stored (normalized) email
"""

import logging

from task_manager.core.errors import InvalidCredentialsError
from task_manager.core.repository_protocols import CredentialStore, PasswordHasher
from task_manager.core.tokens import TokenService

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(
        self,
        credential_store: CredentialStore,
        hasher: PasswordHasher,
        token_service: TokenService,
    ):
        self.credential_store = credential_store
        self.hasher = hasher
        self.token_service = token_service

    async def login(self, username: str, password: str) -> str:
        """Return a fresh token, or raise InvalidCredentialsError."""
        user = await self.credential_store.get_by_email(username)
        if user is None or not self.hasher.verify(password, user.password_hash):
            logger.info("Login rejected", extra={"error_code": "INVALID_CREDENTIALS"})
            raise InvalidCredentialsError()
        logger.info("Login succeeded", extra={"user_id": user.id})
        return self.token_service.issue(user.email)
