"""Database Session Manager — error mapping and rollback.

Tests cover:
    - IntegrityError escaping a session → ConflictError (409)
    - Foreign-key violations are reported as "in use", not as duplicates
    - SQLite lower() folds non-ASCII case on managed connections
    - Other SQLAlchemy errors → DatabaseError (503)
    - Domain errors pass through untouched and the session is rolled back
    - A service-level unique violation surfaces as DuplicateResourceError
"""

import pytest
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError

from task_manager.core.errors import ConflictError, DatabaseError, DuplicateResourceError, ForbiddenError
from task_manager.models.label import Label
from task_manager.infrastructure.database import is_foreign_key_violation
from task_manager.services.integrity import flush_unique


async def test_integrity_error_maps_to_conflict(test_manager):
    with pytest.raises(ConflictError) as exc_info:
        async with test_manager.session() as db:
            db.add_all([Label(name="dup"), Label(name="dup")])
            await db.flush()
    assert exc_info.value.http_status == 409
    assert exc_info.value.code == "DUPLICATE_RESOURCE"
    assert "already exists" in exc_info.value.message


async def test_sqlalchemy_error_maps_to_database_error(test_manager):
    with pytest.raises(DatabaseError):
        async with test_manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))


async def test_domain_error_rolls_back(test_manager):
    with pytest.raises(ForbiddenError):
        async with test_manager.session() as db:
            db.add(Label(name="pending"))
            await db.flush()
            raise ForbiddenError("nope")

    async with test_manager.session() as db:
        assert (await db.execute(select(Label))).scalars().all() == []


async def test_flush_unique_reports_duplicate(test_db):
    test_db.add_all([Label(name="same"), Label(name="same")])
    with pytest.raises(DuplicateResourceError) as exc_info:
        await flush_unique(test_db, "Label", "name", "same")
    assert exc_info.value.http_status == 409


async def test_health_check(test_manager):
    assert await test_manager.health_check()


# --- Foreign-key violations ----------------------------------------------------

class _DriverError(Exception):
    def __init__(self, message, sqlstate=None):
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity(orig) -> IntegrityError:
    return IntegrityError("DELETE FROM labels WHERE id = 1", {}, orig)


def test_foreign_key_violation_detection():
    assert is_foreign_key_violation(_integrity(
        _DriverError("update or delete violates foreign key constraint", "23503"),
    ))
    assert is_foreign_key_violation(_integrity(
        _DriverError("FOREIGN KEY constraint failed"),
    ))
    assert not is_foreign_key_violation(_integrity(
        _DriverError("duplicate key value violates unique constraint", "23505"),
    ))
    assert not is_foreign_key_violation(_integrity(
        _DriverError("UNIQUE constraint failed: labels.name"),
    ))


@pytest.mark.parametrize("orig", [
    _DriverError("violates foreign key constraint", "23503"),
    _DriverError("FOREIGN KEY constraint failed"),
])
async def test_foreign_key_violation_maps_to_in_use(test_manager, orig):
    with pytest.raises(ConflictError) as exc_info:
        async with test_manager.session():
            raise _integrity(orig)
    assert exc_info.value.http_status == 409
    assert exc_info.value.code == "RESOURCE_IN_USE"
    assert "in use" in exc_info.value.message


async def test_real_foreign_key_violation_maps_to_in_use(test_manager):
    with pytest.raises(ConflictError) as exc_info:
        async with test_manager.session() as db:
            await db.execute(text("PRAGMA foreign_keys = ON"))
            await db.execute(text(
                "INSERT INTO task_labels (task_id, label_id) VALUES (999, 999)"
            ))
    assert exc_info.value.code == "RESOURCE_IN_USE"


# --- SQLite functions -----------------------------------------------------------

async def test_sqlite_lower_folds_non_ascii(test_manager):
    async with test_manager.session() as db:
        assert await db.scalar(select(func.lower("ЗАДАЧА Ä"))) == "задача ä"
        assert await db.scalar(select(func.lower(None))) is None
