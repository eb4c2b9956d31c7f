"""SQLAlchemy Project Repository — ProjectRepository implementation over AsyncSession.

Invariants:
    - Every SQLAlchemyError is rolled back and re-raised as DatabaseError (core/errors.py)
    - Nothing is committed except by commit(); a request that fails mid-way leaves no write
    - get_for_update takes a row lock (SELECT ... FOR UPDATE) on backends that support it
    - list() orders by seq, the insert counter: creation order even when
      created_at values tie
    - seq comes from the identity column; SQLite has none, so add() takes
      max(seq) + 1 inside the insert transaction (the unique index rejects a race)

Design Decisions:
    - Thin shell: no lifecycle decisions here, only reads/writes the manager asks for
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import ProjectStatus, INITIAL_STATUS
from app.core.errors import DatabaseError, ErrorContext
from app.models.project import Project

logger = logging.getLogger(__name__)


class SqlProjectRepository:
    """Project persistence bound to one request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _translate_errors(
        self, operation: str, project_id: UUID | None = None,
    ) -> AsyncGenerator[None, None]:
        ctx = ErrorContext(project_id=str(project_id) if project_id else None)
        try:
            yield
        except IntegrityError as e:
            await self._db.rollback()
            logger.error(f"DB integrity error: {e}", extra={"operation": operation})
            raise DatabaseError("Integrity constraint violated", operation, ctx) from e
        except OperationalError as e:
            await self._db.rollback()
            logger.error(f"DB operational error: {e}", extra={"operation": operation})
            raise DatabaseError("Connection or operational error", operation, ctx) from e
        except DBAPIError as e:
            await self._db.rollback()
            logger.error(f"DB driver error: {e}", extra={"operation": operation})
            raise DatabaseError("Database driver error", operation, ctx) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"SQLAlchemy error: {e}", extra={"operation": operation})
            raise DatabaseError("Database operation failed", operation, ctx) from e

    async def add(self, fields: dict[str, Any]) -> Project:
        now = datetime.now(timezone.utc)
        project = Project(
            id=uuid.uuid4(),
            status=INITIAL_STATUS.value,
            created_at=now,
            updated_at=now,
            **fields,
        )
        async with self._translate_errors("insert", project.id):
            if not self._db.get_bind().dialect.supports_identity_columns:
                project.seq = await self._next_seq()
            self._db.add(project)
            await self._db.flush()
        return project

    async def _next_seq(self) -> int:
        """Insert counter for backends without identity columns (SQLite)."""
        result = await self._db.execute(
            select(func.coalesce(func.max(Project.seq), 0) + 1),
        )
        return result.scalar_one()

    async def get(self, project_id: UUID) -> Project | None:
        async with self._translate_errors("select", project_id):
            result = await self._db.execute(
                select(Project).where(Project.id == project_id),
            )
            return result.scalar_one_or_none()

    async def get_for_update(self, project_id: UUID) -> Project | None:
        async with self._translate_errors("select_for_update", project_id):
            result = await self._db.execute(
                select(Project)
                .where(Project.id == project_id)
                .with_for_update(),
            )
            return result.scalar_one_or_none()

    async def list(
        self,
        status: ProjectStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Project]:
        query = select(Project).order_by(Project.seq.asc())
        if status is not None:
            query = query.where(Project.status == status.value)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        async with self._translate_errors("list"):
            result = await self._db.execute(query)
            return list(result.scalars().all())

    async def apply(self, project: Project, changes: dict[str, Any]) -> None:
        for key, value in changes.items():
            setattr(project, key, value)
        project.updated_at = datetime.now(timezone.utc)
        async with self._translate_errors("update", project.id):
            await self._db.flush()

    async def commit(self) -> None:
        async with self._translate_errors("commit"):
            await self._db.commit()
