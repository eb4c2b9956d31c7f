"""Project Routes — HTTP translation for the project lifecycle manager.

Invariants:
    - Handlers hold no business logic: parse → ProjectLifecycleManager → envelope
    - Path identifiers are parsed as UUID by FastAPI; malformed ids never reach the manager (400)
    - Success envelope is {"message": str, "data": ...}; update/cancel return no data
    - Routes come from PROJECT_ROUTES, an explicit (method, path, handler, status) table

Design Decisions:
    - No decorator self-registration: build_project_router() turns the table into an
      APIRouter and the application factory decides when to mount it
"""

from typing import Any, Callable
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.domain_types import ProjectId, ProjectStatus
from app.infrastructure.database import get_db
from app.schemas.project import (
    MessageResponse,
    ProjectCreate,
    ProjectEnvelope,
    ProjectListEnvelope,
    ProjectResponse,
    ProjectUpdate,
)
from app.services.project_lifecycle import ProjectLifecycleManager
from app.services.project_repository import SqlProjectRepository

PREFIX = "/api/v1/projects"


async def get_project_lifecycle(
    db: AsyncSession = Depends(get_db),
) -> ProjectLifecycleManager:
    """FastAPI dependency — one manager per request, bound to its DB session."""
    return ProjectLifecycleManager(SqlProjectRepository(db))


def _max_limit() -> int:
    return get_settings().project_list_max_limit


async def create_project(
    body: ProjectCreate,
    manager: ProjectLifecycleManager = Depends(get_project_lifecycle),
) -> ProjectEnvelope:
    """Create a new project."""
    project = await manager.create(body)
    return ProjectEnvelope(
        message="Project created successfully",
        data=ProjectResponse.model_validate(project),
    )


async def list_projects(
    status_filter: ProjectStatus | None = Query(None, alias="status"),
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    manager: ProjectLifecycleManager = Depends(get_project_lifecycle),
) -> ProjectListEnvelope:
    """List projects in creation order. Without limit, returns all of them."""
    if limit is not None:
        limit = min(limit, _max_limit())
    projects = await manager.list(
        status=status_filter, limit=limit, offset=offset,
    )
    return ProjectListEnvelope(
        message="Projects retrieved successfully",
        data=[ProjectResponse.model_validate(p) for p in projects],
    )


async def get_project(
    project_id: UUID,
    manager: ProjectLifecycleManager = Depends(get_project_lifecycle),
) -> ProjectEnvelope:
    """Get project details."""
    project = await manager.get_by_id(ProjectId(project_id))
    return ProjectEnvelope(
        message="Project retrieved successfully",
        data=ProjectResponse.model_validate(project),
    )


async def update_project(
    project_id: UUID,
    body: ProjectUpdate,
    manager: ProjectLifecycleManager = Depends(get_project_lifecycle),
) -> MessageResponse:
    """Apply a partial field update to an active project."""
    await manager.update(ProjectId(project_id), body)
    return MessageResponse(message="Project updated successfully")


async def cancel_project(
    project_id: UUID,
    manager: ProjectLifecycleManager = Depends(get_project_lifecycle),
) -> MessageResponse:
    """Cancel an active project. Cancelled is terminal."""
    await manager.cancel(ProjectId(project_id))
    return MessageResponse(message="Project cancelled successfully")


# (method, path, handler, status_code, response_model)
PROJECT_ROUTES: tuple[tuple[str, str, Callable[..., Any], int, type], ...] = (
    ("POST", "", create_project, status.HTTP_201_CREATED, ProjectEnvelope),
    ("GET", "", list_projects, status.HTTP_200_OK, ProjectListEnvelope),
    ("GET", "/{project_id}", get_project, status.HTTP_200_OK, ProjectEnvelope),
    ("PUT", "/{project_id}/cancel", cancel_project, status.HTTP_200_OK, MessageResponse),
    ("PUT", "/{project_id}", update_project, status.HTTP_200_OK, MessageResponse),
)


def build_project_router(prefix: str = PREFIX) -> APIRouter:
    """Build a fresh APIRouter from PROJECT_ROUTES."""
    router = APIRouter(prefix=prefix, tags=["projects"])
    for method, path, handler, status_code, response_model in PROJECT_ROUTES:
        router.add_api_route(
            path,
            handler,
            methods=[method],
            status_code=status_code,
            response_model=response_model,
            name=handler.__name__,
        )
    return router
