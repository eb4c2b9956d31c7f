"""Project Schemas — Pydantic commands and responses for the project endpoints.

Invariants:
    - ProjectCreate.name: 1-255 chars, required
    - ProjectUpdate: every field optional; only fields sent by the client are applied
      (model_fields_set), so an explicit null differs from an omitted field
    - Unknown fields rejected (extra="forbid")
    - ProjectResponse never exposes ORM internals beyond the persisted columns

Design Decisions:
    - Shape checks live here (types, lengths); lifecycle rules (blank name,
      date order against stored values, terminal status) live in core/enforce_lifecycle.py
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.domain_types import ProjectStatus


class ProjectCreate(BaseModel):
    """Create command — field mapping for a new project, no identifier."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    client_name: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=500)
    budget: Decimal | None = Field(None, max_digits=14, decimal_places=2)
    start_date: date | None = None
    end_date: date | None = None

    def to_fields(self) -> dict:
        return self.model_dump()


class ProjectUpdate(BaseModel):
    """Update command — partial field mapping paired with a path identifier."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=5000)
    client_name: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=500)
    budget: Decimal | None = Field(None, max_digits=14, decimal_places=2)
    start_date: date | None = None
    end_date: date | None = None

    def to_changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class ProjectResponse(BaseModel):
    """Project response — public-facing project data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    client_name: str | None = None
    location: str | None = None
    budget: Decimal | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime
    cancelled_at: datetime | None = None


class ProjectEnvelope(BaseModel):
    """Single-project response envelope."""
    message: str
    data: ProjectResponse


class ProjectListEnvelope(BaseModel):
    """Project list response envelope."""
    message: str
    data: list[ProjectResponse]


class MessageResponse(BaseModel):
    """Confirmation with no payload (update, cancel)."""
    message: str
