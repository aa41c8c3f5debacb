"""ValidationPolicy — field-level checks run before an assignment is saved.

Every check returns a list of FieldError instead of raising, so one save can
report all of its problems at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.entities.assignment import Assignment
from app.domain.entities.assignment_override import AssignmentOverride
from app.domain.value_objects.enums import OverrideSetType
from app.domain.value_objects.field_error import FieldError

MAX_NAME_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 16384

OVERRIDES = "assignment_overrides"


@dataclass(frozen=True)
class CourseRoster:
    """What overrides in one course may legitimately target."""

    sections: dict[int, str] = field(default_factory=dict)  # id -> name
    groups: dict[int, str] = field(default_factory=dict)  # id -> name
    student_ids: frozenset[int] = field(default_factory=frozenset)


def validate_dates(
    due_at: datetime | None,
    lock_at: datetime | None,
    unlock_at: datetime | None,
    prefix: str = "",
) -> list[FieldError]:
    """Due date must fall inside the availability window; the window must not be inverted."""
    errors: list[FieldError] = []
    if due_at is not None and unlock_at is not None and due_at < unlock_at:
        errors.append(FieldError(f"{prefix}due_at", "must be after unlock date"))
    if due_at is not None and lock_at is not None and due_at > lock_at:
        errors.append(FieldError(f"{prefix}due_at", "must be before lock date"))
    if lock_at is not None and unlock_at is not None and lock_at < unlock_at:
        errors.append(FieldError(f"{prefix}lock_at", "must be after unlock date"))
    return errors


def validate_assignment(assignment: Assignment) -> list[FieldError]:
    errors: list[FieldError] = []

    name = (assignment.name or "").strip()
    if not name:
        errors.append(FieldError("name", "can't be blank"))
    elif len(assignment.name) > MAX_NAME_LENGTH:
        errors.append(
            FieldError("name", f"is too long (maximum is {MAX_NAME_LENGTH} characters)")
        )

    if assignment.description and len(assignment.description) > MAX_DESCRIPTION_LENGTH:
        errors.append(
            FieldError(
                "description",
                f"is too long (maximum is {MAX_DESCRIPTION_LENGTH} characters)",
            )
        )

    errors.extend(validate_dates(assignment.due_at, assignment.lock_at, assignment.unlock_at))
    return errors


def validate_override_target(
    section_id: int | None,
    group_id: int | None,
    student_ids: list[int] | None,
) -> list[FieldError]:
    """An override targets exactly one of: a section, a group, a set of students."""
    given = sum(1 for t in (section_id, group_id, student_ids) if t is not None)
    if given == 0:
        return [FieldError(OVERRIDES, "one of section_id, group_id or student_ids is required")]
    if given > 1:
        return [FieldError(OVERRIDES, "only one of section_id, group_id or student_ids may be set")]
    if student_ids is not None and not student_ids:
        return [FieldError(OVERRIDES, "student_ids must not be empty")]
    return []


def validate_override(override: AssignmentOverride, roster: CourseRoster) -> list[FieldError]:
    errors: list[FieldError] = []

    if override.set_type == OverrideSetType.COURSE_SECTION:
        if override.set_id not in roster.sections:
            errors.append(FieldError(OVERRIDES, f"unknown section: {override.set_id}"))
    elif override.set_type == OverrideSetType.GROUP:
        if override.set_id not in roster.groups:
            errors.append(FieldError(OVERRIDES, f"unknown group: {override.set_id}"))
    else:
        unknown = [sid for sid in override.student_ids if sid not in roster.student_ids]
        if unknown:
            ids = ", ".join(str(sid) for sid in unknown)
            errors.append(FieldError(OVERRIDES, f"unknown student ids: {ids}"))

    errors.extend(
        validate_dates(
            override.due_at, override.lock_at, override.unlock_at, prefix=f"{OVERRIDES}."
        )
    )
    return errors


def validate_override_set(overrides: list[AssignmentOverride]) -> list[FieldError]:
    """No two active overrides may target the same section or group."""
    errors: list[FieldError] = []
    seen: set[tuple[str, int]] = set()
    for override in overrides:
        if not override.is_active():
            continue
        key = override.target_key()
        if key is None:
            continue
        if key in seen:
            errors.append(FieldError(OVERRIDES, f"duplicate override for {key[0]} {key[1]}"))
        seen.add(key)
    return errors
