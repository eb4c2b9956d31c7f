"""Project Lifecycle Enforcement — pure field and transition rules.

Invariants:
    - Every function here is PURE: no IO, no async, inputs never mutated
    - Rules run against the merged field state, never against a partial update alone
    - A status in TERMINAL_STATUSES admits no further update or cancel
    - Violations raise typed errors from core/errors.py (never return flags)

Design Decisions:
    - Separated from the lifecycle manager: the manager orchestrates IO around these
      checks, so every rule is testable without a database
"""

from datetime import date
from decimal import Decimal
from typing import Any

from app.core.domain_types import (
    LifecycleAction, ProjectStatus, PROJECT_FIELDS,
    REQUIRED_FIELDS, TERMINAL_STATUSES, TEXT_FIELDS,
)
from app.core.errors import ProjectConflictError, ProjectValidationError


def normalize_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Strip text values; blank optional text becomes None. Unknown keys dropped."""
    normalized: dict[str, Any] = {}
    for key, value in fields.items():
        if key not in PROJECT_FIELDS:
            continue
        if key in TEXT_FIELDS and isinstance(value, str):
            value = value.strip()
            if not value and key not in REQUIRED_FIELDS:
                value = None
        normalized[key] = value
    return normalized


def check_required_fields(fields: dict[str, Any]) -> None:
    """Required fields must be present, non-null and non-blank."""
    for name in REQUIRED_FIELDS:
        value = fields.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ProjectValidationError(f"'{name}' is required", field=name)


def check_field_rules(fields: dict[str, Any]) -> None:
    """Cross-field rules: non-negative budget, end_date not before start_date."""
    budget = fields.get("budget")
    if budget is not None and Decimal(budget) < 0:
        raise ProjectValidationError("'budget' must not be negative", field="budget")

    start: date | None = fields.get("start_date")
    end: date | None = fields.get("end_date")
    if start is not None and end is not None and end < start:
        raise ProjectValidationError(
            f"'end_date' ({end.isoformat()}) is before 'start_date' ({start.isoformat()})",
            field="end_date",
        )


def check_update_not_empty(changes: dict[str, Any]) -> None:
    if not changes:
        raise ProjectValidationError("Update must set at least one field")


def check_transition_allowed(
    project_id: str, status: ProjectStatus | str, action: LifecycleAction,
) -> None:
    """Reject any mutation of a project in a terminal status."""
    current = ProjectStatus(status)
    if current in TERMINAL_STATUSES:
        raise ProjectConflictError(project_id, current.value, action.value)


def merge_fields(
    current: dict[str, Any], changes: dict[str, Any],
) -> dict[str, Any]:
    """Overlay changes onto the current field mapping. Returns a new dict."""
    merged = dict(current)
    merged.update(changes)
    return merged


def validate_new_project(fields: dict[str, Any]) -> dict[str, Any]:
    """Normalize + validate a create payload. Returns the fields to persist."""
    normalized = normalize_fields(fields)
    check_required_fields(normalized)
    check_field_rules(normalized)
    return normalized


def validate_project_changes(
    current: dict[str, Any], changes: dict[str, Any],
) -> dict[str, Any]:
    """Normalize + validate an update against the stored fields.

    Returns only the changed fields (normalized); the merged state is what gets
    checked, so a new end_date is compared with the stored start_date.
    """
    normalized = normalize_fields(changes)
    check_update_not_empty(normalized)
    merged = merge_fields(current, normalized)
    check_required_fields(merged)
    check_field_rules(merged)
    return normalized
