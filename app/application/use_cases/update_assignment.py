"""UpdateAssignmentUseCase — edit an assignment's fields, lifecycle state and date overrides."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.course_repo import CourseRepository
from app.application.ports.enrollment_repo import EnrollmentRepository
from app.domain.entities.assignment import Assignment
from app.domain.entities.assignment_override import AssignmentOverride, adhoc_title
from app.domain.entities.enrollment import Enrollment
from app.domain.entities.user import User
from app.domain.errors import AssignmentNotFoundError, InsufficientPermissionError
from app.domain.policies.permissions import grants_right
from app.domain.policies.state_transition import SideEffect, StateChange, plan_state_change
from app.domain.policies.validation import (
    OVERRIDES,
    CourseRoster,
    validate_assignment,
    validate_override,
    validate_override_set,
    validate_override_target,
)
from app.domain.value_objects.enums import AssignmentState, OverrideSetType, Right
from app.domain.value_objects.field_error import FieldError

logger = logging.getLogger(__name__)


class _Unset:
    """Marks an input key that was not supplied at all (as opposed to null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()


@dataclass
class OverrideInput:
    """One override entry, with every id already decoded to an internal id."""

    id: int | None = None
    section_id: int | None = None
    group_id: int | None = None
    student_ids: list[int] | None = None
    due_at: datetime | None | _Unset = UNSET
    lock_at: datetime | None | _Unset = UNSET
    unlock_at: datetime | None | _Unset = UNSET


@dataclass
class UpdateAssignmentCommand:
    assignment_id: int
    name: str | _Unset = UNSET
    state: AssignmentState | str | _Unset = UNSET
    due_at: datetime | None | _Unset = UNSET
    description: str | None | _Unset = UNSET
    assignment_overrides: list[OverrideInput] | _Unset = UNSET


@dataclass
class UpdateAssignmentResult:
    """Either the saved assignment or the reasons it was not saved."""

    assignment: Assignment | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UpdateAssignmentUseCase:
    """Orchestrates one assignment update, from lookup to persistence."""

    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        course_repo: CourseRepository,
        enrollment_repo: EnrollmentRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._assignments = assignment_repo
        self._courses = course_repo
        self._enrollments = enrollment_repo
        self._clock = clock

    async def execute(
        self,
        command: UpdateAssignmentCommand,
        current_user: User | None,
    ) -> UpdateAssignmentResult:
        """Update one assignment.

        Pipeline:
        1. Load the assignment (not found → AssignmentNotFoundError)
        2. Check the update right before anything else
        3. Translate a requested state into a publish flag + lifecycle action
        4. Run the lifecycle action (destroy / restore, needs the delete right)
        5. Apply fields and replace overrides, collecting validation errors
        6. Persist only when there are no errors
        """
        assignment = await self._assignments.get_by_id(command.assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(command.assignment_id)

        enrollments = await self._load_enrollments(current_user, assignment)
        if not grants_right(current_user, enrollments, assignment, Right.UPDATE):
            raise InsufficientPermissionError()

        state_change: StateChange | None = None
        if command.state is not UNSET:
            state_change = plan_state_change(command.state)
            logger.info(
                "Assignment %s: requested state=%s (current=%s)",
                assignment.id, getattr(command.state, "value", command.state),
                assignment.workflow_state.value,
            )
            self._run_side_effect(state_change.side_effect, assignment, current_user, enrollments)

        assignment.touch(current_user.id if current_user else None, self._clock())

        errors = await self._apply_update(assignment, command, state_change)
        if errors:
            logger.info(
                "Assignment %s: update rejected with %d error(s)", assignment.id, len(errors)
            )
            return UpdateAssignmentResult(errors=errors)

        await self._assignments.update(assignment)
        logger.info(
            "Assignment %s updated by user %s (state=%s, overrides=%d)",
            assignment.id, assignment.updated_by_id,
            assignment.workflow_state.value, len(assignment.active_overrides()),
        )
        return UpdateAssignmentResult(assignment=assignment)

    async def _load_enrollments(
        self, user: User | None, assignment: Assignment
    ) -> list[Enrollment]:
        if user is None or user.id is None:
            return []
        return await self._enrollments.get_for_user_in_course(user.id, assignment.course_id)

    # ─── Lifecycle actions ───────────────────────────────────────────

    def _run_side_effect(
        self,
        side_effect: SideEffect,
        assignment: Assignment,
        user: User | None,
        enrollments: list[Enrollment],
    ) -> None:
        if side_effect == SideEffect.ENSURE_DESTROYED:
            self._ensure_destroyed(assignment, user, enrollments)
        else:
            self._ensure_restored(assignment, user, enrollments)

    def _ensure_destroyed(
        self, assignment: Assignment, user: User | None, enrollments: list[Enrollment]
    ) -> None:
        # the delete right is required even when there is nothing to do
        if not grants_right(user, enrollments, assignment, Right.DELETE):
            raise InsufficientPermissionError()
        if assignment.is_deleted():
            return
        assignment.destroy()
        logger.info("Assignment %s destroyed", assignment.id)

    def _ensure_restored(
        self, assignment: Assignment, user: User | None, enrollments: list[Enrollment]
    ) -> None:
        if not grants_right(user, enrollments, assignment, Right.DELETE):
            raise InsufficientPermissionError()
        if not assignment.is_deleted():
            return
        assignment.restore()
        logger.info("Assignment %s restored as %s", assignment.id, assignment.workflow_state.value)

    # ─── Field update ────────────────────────────────────────────────

    async def _apply_update(
        self,
        assignment: Assignment,
        command: UpdateAssignmentCommand,
        state_change: StateChange | None,
    ) -> list[FieldError]:
        errors: list[FieldError] = []

        if command.name is not UNSET:
            assignment.name = command.name
        if command.description is not UNSET:
            assignment.description = command.description
        if command.due_at is not UNSET:
            assignment.due_at = command.due_at

        if state_change is not None and state_change.published is not None:
            if (
                not state_change.published
                and assignment.published
                and not assignment.can_unpublish()
            ):
                errors.append(
                    FieldError(
                        "published",
                        f"Can't unpublish {assignment.name} if there are student submissions",
                    )
                )
            else:
                assignment.published = state_change.published

        errors.extend(validate_assignment(assignment))

        # a deleted assignment keeps its overrides deleted
        if command.assignment_overrides is not UNSET and not assignment.is_deleted():
            errors.extend(await self._replace_overrides(assignment, command.assignment_overrides))

        return errors

    async def _replace_overrides(
        self, assignment: Assignment, inputs: list[OverrideInput]
    ) -> list[FieldError]:
        """Make the active overrides match *inputs* exactly.

        Entries with an id update that override, entries without one create a
        new override, and active overrides missing from *inputs* are deleted.
        """
        roster = await self._courses.get_roster(assignment.course_id)
        existing = {o.id: o for o in assignment.active_overrides() if o.id is not None}

        errors: list[FieldError] = []
        seen_ids: set[int] = set()
        kept_ids: set[int] = set()
        created: list[AssignmentOverride] = []

        for entry in inputs:
            target_errors = validate_override_target(
                entry.section_id, entry.group_id, entry.student_ids
            )
            if target_errors:
                errors.extend(target_errors)
                continue

            if entry.id is not None:
                if entry.id in seen_ids:
                    errors.append(FieldError(OVERRIDES, f"duplicate override id: {entry.id}"))
                    continue
                seen_ids.add(entry.id)
                override = existing.get(entry.id)
                if override is None:
                    errors.append(FieldError(OVERRIDES, f"unknown override id: {entry.id}"))
                    continue
                kept_ids.add(entry.id)
            else:
                override = AssignmentOverride(
                    id=None, assignment_id=assignment.id, set_type=OverrideSetType.ADHOC
                )
                created.append(override)

            _retarget(override, entry, roster)
            _apply_dates(override, entry)
            errors.extend(validate_override(override, roster))

        for override_id, override in existing.items():
            if override_id not in kept_ids:
                override.destroy()

        assignment.overrides.extend(created)
        errors.extend(validate_override_set(assignment.overrides))
        return errors


def _retarget(override: AssignmentOverride, entry: OverrideInput, roster: CourseRoster) -> None:
    if entry.section_id is not None:
        override.set_type = OverrideSetType.COURSE_SECTION
        override.set_id = entry.section_id
        override.student_ids = []
        override.title = roster.sections.get(entry.section_id)
    elif entry.group_id is not None:
        override.set_type = OverrideSetType.GROUP
        override.set_id = entry.group_id
        override.student_ids = []
        override.title = roster.groups.get(entry.group_id)
    else:
        student_ids = list(dict.fromkeys(entry.student_ids or []))
        override.set_type = OverrideSetType.ADHOC
        override.set_id = None
        override.student_ids = student_ids
        override.title = adhoc_title(len(student_ids))


def _apply_dates(override: AssignmentOverride, entry: OverrideInput) -> None:
    # omitted date keys fall back to the assignment's own date
    if entry.due_at is UNSET:
        override.clear_due_at()
    else:
        override.override_due_at(entry.due_at)

    if entry.lock_at is UNSET:
        override.clear_lock_at()
    else:
        override.override_lock_at(entry.lock_at)

    if entry.unlock_at is UNSET:
        override.clear_unlock_at()
    else:
        override.override_unlock_at(entry.unlock_at)
