"""GraphQL schema — the assignment query and the UpdateAssignment mutation."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import strawberry
from strawberry.types import Info

from app.application.use_cases.update_assignment import OverrideInput, UpdateAssignmentCommand
from app.domain.errors import DomainError
from app.domain.value_objects.enums import AssignmentState
from app.infrastructure.graphql.ids import parse_relay_or_legacy_id
from app.infrastructure.graphql.types import (
    AssignmentOverrideCreateOrUpdate,
    AssignmentType,
    UpdateAssignmentInput,
    UpdateAssignmentPayload,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _given(value) -> bool:
    return value is not strawberry.UNSET


def _aware(value: datetime | None) -> datetime | None:
    # naive timestamps from clients are taken as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _override_input(raw: AssignmentOverrideCreateOrUpdate) -> OverrideInput:
    """Decode every id in one override entry; blank override id means "create"."""
    entry = OverrideInput()
    if _given(raw.id) and raw.id and raw.id.strip():
        entry.id = parse_relay_or_legacy_id(raw.id, "AssignmentOverride")
    if _given(raw.section_id) and raw.section_id is not None:
        entry.section_id = parse_relay_or_legacy_id(raw.section_id, "Section")
    if _given(raw.group_id) and raw.group_id is not None:
        entry.group_id = parse_relay_or_legacy_id(raw.group_id, "Group")
    if _given(raw.student_ids) and raw.student_ids is not None:
        entry.student_ids = [parse_relay_or_legacy_id(sid, "User") for sid in raw.student_ids]
    if _given(raw.due_at):
        entry.due_at = _aware(raw.due_at)
    if _given(raw.lock_at):
        entry.lock_at = _aware(raw.lock_at)
    if _given(raw.unlock_at):
        entry.unlock_at = _aware(raw.unlock_at)
    return entry


def build_command(input: UpdateAssignmentInput) -> UpdateAssignmentCommand:
    command = UpdateAssignmentCommand(
        assignment_id=parse_relay_or_legacy_id(input.id, "Assignment")
    )
    if _given(input.name):
        command.name = input.name
    if _given(input.state) and input.state is not None:
        command.state = AssignmentState(input.state.value)
    if _given(input.due_at):
        command.due_at = _aware(input.due_at)
    if _given(input.description):
        command.description = input.description
    if _given(input.assignment_overrides) and input.assignment_overrides is not None:
        command.assignment_overrides = [_override_input(o) for o in input.assignment_overrides]
    return command


@strawberry.type
class Query:
    @strawberry.field
    async def assignment(self, info: Info, id: strawberry.ID) -> Optional[AssignmentType]:
        assignment_id = parse_relay_or_legacy_id(id, "Assignment")
        assignment = await info.context.get_assignment.execute(
            assignment_id, info.context.current_user
        )
        return AssignmentType.from_domain(assignment) if assignment else None


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def update_assignment(
        self, info: Info, input: UpdateAssignmentInput
    ) -> UpdateAssignmentPayload:
        ctx = info.context
        try:
            command = build_command(input)
            result = await ctx.update_assignment.execute(command, ctx.current_user)
        except DomainError:
            await ctx.rollback()
            raise

        if not result.ok:
            await ctx.rollback()
            return UpdateAssignmentPayload(
                errors=[ValidationError.from_domain(e) for e in result.errors]
            )

        await ctx.commit()
        return UpdateAssignmentPayload(assignment=AssignmentType.from_domain(result.assignment))


class LmsSchema(strawberry.Schema):
    def process_errors(self, errors, execution_context=None) -> None:
        # Domain errors are expected outcomes (bad id, no permission); only log the rest.
        unexpected = [e for e in errors if not isinstance(e.original_error, DomainError)]
        for error in errors:
            if isinstance(error.original_error, DomainError):
                logger.info("GraphQL request rejected: %s", error.message)
        if unexpected:
            super().process_errors(unexpected, execution_context)


schema = LmsSchema(query=Query, mutation=Mutation)
