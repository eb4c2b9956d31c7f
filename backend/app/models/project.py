"""Project ORM — persists one construction/engineering project per row.

Invariants:
    - id is UUID primary key, assigned once at insert (uuid4), never updated
    - name is non-nullable
    - status holds a ProjectStatus value; transitions: active -> cancelled
    - rows are never deleted (cancellation is a status change)

Design Decisions:
    - Numeric(14, 2) for budget: exact currency arithmetic, no float rounding
    - seq is a database-generated, strictly increasing insert counter: the list
      ordering key, independent of clock resolution
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import BigInteger, Identity, String, Text, Date, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.core.domain_types import ProjectStatus
from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """Project entity — identifier, descriptive fields, lifecycle status."""
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    seq: Mapped[int] = mapped_column(
        BigInteger, Identity(), nullable=False, unique=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    client_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(500), nullable=True)
    budget: Mapped[Decimal | None] = mapped_column(
        Numeric(14, 2), nullable=True,
    )
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ProjectStatus.ACTIVE.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    cancelled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
