"""Password Hasher — bcrypt implementation of core.repository_protocols.PasswordHasher.

Invariants:
    - hash() output is opaque and salted; the same plaintext never hashes identically
    - verify() never raises on a malformed stored hash, it returns False
    - Input is truncated to bcrypt's 72-byte limit on both hash and verify
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

_BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class BcryptPasswordHasher:
    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, plain: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(plain), salt).decode("utf-8")

    def verify(self, plain: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False
