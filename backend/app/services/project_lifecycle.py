"""Project Lifecycle Manager — the sole arbiter of project state transitions.

Invariants:
    - Identifier assigned once, at create (by the repository, uuid4); never changed
    - Initial status is ACTIVE; CANCELLED is terminal (update/cancel -> ProjectConflictError)
    - update() never touches status or id; cancel() never touches descriptive fields
    - Each mutating call is one transaction: lock/read -> validate -> write -> commit
    - Any raised error means nothing was committed
    - No retries, no swallowed errors: DatabaseError propagates to the caller

Design Decisions:
    - Impureim sandwich: IO (repository) around pure rules (core/enforce_lifecycle.py)
    - Depends on the ProjectRepository protocol, not on SQLAlchemy
"""

import logging
from datetime import datetime, timezone
from typing import Any

from app.core.domain_types import (
    LifecycleAction, ProjectId, ProjectStatus, PROJECT_FIELDS,
)
from app.core.enforce_lifecycle import (
    check_transition_allowed,
    validate_new_project,
    validate_project_changes,
)
from app.core.errors import ResourceNotFoundError
from app.core.repository_protocols import ProjectLike, ProjectRepository
from app.schemas.project import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


def project_fields(project: ProjectLike) -> dict[str, Any]:
    """Descriptive fields of a stored project as a plain mapping."""
    return {name: getattr(project, name) for name in PROJECT_FIELDS}


class ProjectLifecycleManager:
    """Create, update, read, list and cancel projects against a repository."""

    def __init__(self, repository: ProjectRepository):
        self._repo = repository

    async def create(self, command: ProjectCreate) -> ProjectLike:
        fields = validate_new_project(command.to_fields())
        project = await self._repo.add(fields)
        await self._repo.commit()
        logger.info(
            f"Project created: {project.name}",
            extra={"project_id": str(project.id)},
        )
        return project

    async def update(self, project_id: ProjectId, command: ProjectUpdate) -> None:
        project = await self._get_for_update_or_raise(project_id)
        check_transition_allowed(
            str(project_id), project.status, LifecycleAction.UPDATE,
        )
        changes = validate_project_changes(
            project_fields(project), command.to_changes(),
        )
        await self._repo.apply(project, changes)
        await self._repo.commit()
        logger.info(
            f"Project updated: {sorted(changes)}",
            extra={"project_id": str(project_id)},
        )

    async def get_by_id(self, project_id: ProjectId) -> ProjectLike:
        project = await self._repo.get(project_id)
        if project is None:
            raise ResourceNotFoundError("Project", str(project_id))
        return project

    async def list(
        self,
        status: ProjectStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ProjectLike]:
        return await self._repo.list(status=status, limit=limit, offset=offset)

    async def cancel(self, project_id: ProjectId) -> None:
        project = await self._get_for_update_or_raise(project_id)
        check_transition_allowed(
            str(project_id), project.status, LifecycleAction.CANCEL,
        )
        await self._repo.apply(project, {
            "status": ProjectStatus.CANCELLED.value,
            "cancelled_at": datetime.now(timezone.utc),
        })
        await self._repo.commit()
        logger.info("Project cancelled", extra={"project_id": str(project_id)})

    async def _get_for_update_or_raise(self, project_id: ProjectId) -> ProjectLike:
        project = await self._repo.get_for_update(project_id)
        if project is None:
            raise ResourceNotFoundError("Project", str(project_id))
        return project
