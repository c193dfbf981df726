"""Root conftest — shared test configuration.

Environment defaults are set before any task_manager import so the cached
Settings instance sees them.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault(
    "JWT_SECRET", "test-secret-that-is-long-enough-for-hs256-signing",
)
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("SEED_DEFAULTS", "false")
os.environ.setdefault("LOG_FORMAT", "text")
