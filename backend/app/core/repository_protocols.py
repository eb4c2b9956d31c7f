"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - get_for_update is a separate method: the storage layer owns per-record
      write serialization, the manager only asks for it
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Protocol
from uuid import UUID

from app.core.domain_types import ProjectStatus


class ProjectLike(Protocol):
    """Structural contract for Project objects handed back by a repository."""
    id: UUID
    name: str
    description: str | None
    client_name: str | None
    location: str | None
    budget: Decimal | None
    start_date: date | None
    end_date: date | None
    status: str
    created_at: datetime
    updated_at: datetime
    cancelled_at: datetime | None


class ProjectRepository(Protocol):
    """Contract for project persistence — implemented by shell."""
    async def add(self, fields: dict[str, Any]) -> ProjectLike: ...
    async def get(self, project_id: UUID) -> ProjectLike | None: ...
    async def get_for_update(self, project_id: UUID) -> ProjectLike | None: ...
    async def list(
        self,
        status: ProjectStatus | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ProjectLike]: ...
    async def apply(self, project: ProjectLike, changes: dict[str, Any]) -> None: ...
    async def commit(self) -> None: ...
