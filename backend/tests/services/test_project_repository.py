"""SQL Project Repository — persistence details and driver-error mapping.

Tests cover:
    - add() assigns a uuid4 id, ACTIVE status and timestamps
    - apply() bumps updated_at and writes only the given columns
    - get_for_update() asks the database for a row lock; get() does not
    - list() keeps insert order even when created_at values tie
    - SQLAlchemy errors are rolled back and surface as DatabaseError
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from app.core.domain_types import ProjectStatus
from app.core.errors import DatabaseError
from app.services.project_repository import SqlProjectRepository


class _BrokenSession:
    """Stands in for AsyncSession; every statement fails at the driver."""

    def __init__(self, exc: Exception):
        self._exc = exc
        self.rollbacks = 0

    def get_bind(self):
        return SimpleNamespace(
            dialect=SimpleNamespace(supports_identity_columns=False),
        )

    def add(self, obj):
        pass

    async def execute(self, *args, **kwargs):
        raise self._exc

    async def flush(self):
        raise self._exc

    async def commit(self):
        raise self._exc

    async def rollback(self):
        self.rollbacks += 1


class _RecordingSession:
    """Stands in for AsyncSession; records statements, finds no rows."""

    def __init__(self):
        self.statements = []

    async def execute(self, statement, *args, **kwargs):
        self.statements.append(statement)
        return SimpleNamespace(scalar_one_or_none=lambda: None)


def _operational_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


def _postgres_sql(statement) -> str:
    return str(statement.compile(dialect=postgresql.dialect()))


async def test_add_assigns_identity_and_initial_status(test_db):
    repo = SqlProjectRepository(test_db)

    project = await repo.add({"name": "Bridge A"})

    assert project.id is not None
    assert project.status == ProjectStatus.ACTIVE.value
    assert project.created_at == project.updated_at


async def test_add_is_not_visible_after_rollback(test_db):
    repo = SqlProjectRepository(test_db)
    project = await repo.add({"name": "Bridge A"})

    await test_db.rollback()

    assert await repo.get(project.id) is None


async def test_get_for_update_returns_row(test_db):
    repo = SqlProjectRepository(test_db)
    project = await repo.add({"name": "Bridge A"})
    await repo.commit()

    locked = await repo.get_for_update(project.id)

    assert locked is not None
    assert locked.id == project.id


async def test_get_unknown_returns_none(test_db):
    repo = SqlProjectRepository(test_db)
    assert await repo.get(uuid4()) is None
    assert await repo.get_for_update(uuid4()) is None


async def test_apply_writes_changes_and_bumps_updated_at(test_db):
    repo = SqlProjectRepository(test_db)
    project = await repo.add({"name": "Bridge A", "location": "Khon Kaen"})
    created_at = project.created_at

    await repo.apply(project, {"name": "Bridge B"})
    await repo.commit()

    assert project.name == "Bridge B"
    assert project.location == "Khon Kaen"
    assert project.updated_at >= created_at


@pytest.mark.parametrize("call", ["get", "get_for_update", "list", "commit"])
async def test_operational_error_maps_to_database_error(call):
    session = _BrokenSession(_operational_error())
    repo = SqlProjectRepository(session)

    with pytest.raises(DatabaseError) as exc_info:
        if call == "list":
            await repo.list()
        elif call == "commit":
            await repo.commit()
        else:
            await getattr(repo, call)(uuid4())

    assert "operational" in exc_info.value.message
    assert session.rollbacks == 1


async def test_generic_sqlalchemy_error_maps_to_database_error():
    session = _BrokenSession(SQLAlchemyError("boom"))
    repo = SqlProjectRepository(session)

    with pytest.raises(DatabaseError) as exc_info:
        await repo.add({"name": "Bridge A"})

    assert exc_info.value.operation == "insert"
    assert exc_info.value.context.project_id is not None
    assert session.rollbacks == 1


async def test_get_for_update_locks_the_row():
    session = _RecordingSession()
    repo = SqlProjectRepository(session)

    await repo.get_for_update(uuid4())

    (statement,) = session.statements
    assert "FOR UPDATE" in _postgres_sql(statement)


async def test_plain_get_does_not_lock():
    session = _RecordingSession()
    repo = SqlProjectRepository(session)

    await repo.get(uuid4())

    (statement,) = session.statements
    assert "FOR UPDATE" not in _postgres_sql(statement)


async def test_list_keeps_insert_order_when_timestamps_tie(test_db, monkeypatch):
    frozen = datetime(2026, 1, 1, tzinfo=timezone.utc)

    class _FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            return frozen

    monkeypatch.setattr(
        "app.services.project_repository.datetime", _FrozenDatetime,
    )
    repo = SqlProjectRepository(test_db)
    created = []
    for i in range(8):
        created.append((await repo.add({"name": f"Site {i}"})).id)
        await repo.commit()

    listed = await repo.list()

    assert [p.id for p in listed] == created
    assert len({p.created_at for p in listed}) == 1
