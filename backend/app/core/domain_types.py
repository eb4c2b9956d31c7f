"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProjectId wraps UUID — never use a bare string id in domain logic
    - All valid project states encoded as ProjectStatus — no raw string matching
    - TERMINAL_STATUSES is the single source of truth for "no further transitions"

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and to the DB `status` column without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ProjectId = NewType("ProjectId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class ProjectStatus(str, Enum):
    """Project lifecycle states — maps to DB `status` column."""
    ACTIVE = "active"
    CANCELLED = "cancelled"


class LifecycleAction(str, Enum):
    """Mutating operations checked against the current status."""
    UPDATE = "update"
    CANCEL = "cancel"


INITIAL_STATUS: ProjectStatus = ProjectStatus.ACTIVE
TERMINAL_STATUSES: frozenset[ProjectStatus] = frozenset({ProjectStatus.CANCELLED})


# ─── Field Set ───────────────────────────────────────────────────

REQUIRED_FIELDS: tuple[str, ...] = ("name",)
OPTIONAL_FIELDS: tuple[str, ...] = (
    "description", "client_name", "location",
    "budget", "start_date", "end_date",
)
PROJECT_FIELDS: tuple[str, ...] = REQUIRED_FIELDS + OPTIONAL_FIELDS
TEXT_FIELDS: tuple[str, ...] = (
    "name", "description", "client_name", "location",
)
