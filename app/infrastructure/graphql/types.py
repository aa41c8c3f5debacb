"""Strawberry output types and inputs for assignments."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

import strawberry

from app.domain.entities.assignment import Assignment
from app.domain.entities.assignment_override import AssignmentOverride
from app.domain.value_objects.enums import OverrideSetType
from app.domain.value_objects.field_error import FieldError
from app.infrastructure.graphql.ids import to_global_id


# GraphQL enum values are the lowercase state names clients already send.
@strawberry.enum(name="AssignmentState")
class AssignmentStateType(Enum):
    unpublished = "unpublished"
    published = "published"
    deleted = "deleted"
    duplicating = "duplicating"
    importing = "importing"
    migrating = "migrating"


_SET_TYPE_NODE = {
    OverrideSetType.COURSE_SECTION: "Section",
    OverrideSetType.GROUP: "Group",
}


@strawberry.type(name="AssignmentOverride")
class AssignmentOverrideType:
    id: strawberry.ID
    legacy_id: strawberry.ID = strawberry.field(name="_id")
    title: Optional[str]
    set_type: str
    set_id: Optional[strawberry.ID]
    student_ids: list[strawberry.ID]
    due_at: Optional[datetime]
    lock_at: Optional[datetime]
    unlock_at: Optional[datetime]

    @classmethod
    def from_domain(cls, o: AssignmentOverride) -> "AssignmentOverrideType":
        node = _SET_TYPE_NODE.get(o.set_type)
        return cls(
            id=strawberry.ID(to_global_id("AssignmentOverride", o.id)),
            legacy_id=strawberry.ID(str(o.id)),
            title=o.title,
            set_type=o.set_type.value,
            set_id=strawberry.ID(to_global_id(node, o.set_id)) if node and o.set_id else None,
            student_ids=[strawberry.ID(to_global_id("User", sid)) for sid in o.student_ids],
            due_at=o.due_at if o.due_at_overridden else None,
            lock_at=o.lock_at if o.lock_at_overridden else None,
            unlock_at=o.unlock_at if o.unlock_at_overridden else None,
        )


@strawberry.type(name="Assignment")
class AssignmentType:
    id: strawberry.ID
    legacy_id: strawberry.ID = strawberry.field(name="_id")
    name: str
    description: Optional[str]
    state: AssignmentStateType
    due_at: Optional[datetime]
    lock_at: Optional[datetime]
    unlock_at: Optional[datetime]
    assignment_overrides: list[AssignmentOverrideType]

    @classmethod
    def from_domain(cls, a: Assignment) -> "AssignmentType":
        return cls(
            id=strawberry.ID(to_global_id("Assignment", a.id)),
            legacy_id=strawberry.ID(str(a.id)),
            name=a.name,
            description=a.description,
            state=AssignmentStateType(a.state.value),
            due_at=a.due_at,
            lock_at=a.lock_at,
            unlock_at=a.unlock_at,
            assignment_overrides=[
                AssignmentOverrideType.from_domain(o) for o in a.active_overrides()
            ],
        )


@strawberry.type
class ValidationError:
    attribute: str
    message: str

    @classmethod
    def from_domain(cls, e: FieldError) -> "ValidationError":
        return cls(attribute=e.attribute, message=e.message)


@strawberry.type
class UpdateAssignmentPayload:
    assignment: Optional[AssignmentType] = None
    errors: Optional[list[ValidationError]] = None


@strawberry.input
class AssignmentOverrideCreateOrUpdate:
    id: Optional[strawberry.ID] = strawberry.UNSET
    due_at: Optional[datetime] = strawberry.UNSET
    lock_at: Optional[datetime] = strawberry.UNSET
    unlock_at: Optional[datetime] = strawberry.UNSET
    section_id: Optional[strawberry.ID] = strawberry.UNSET
    group_id: Optional[strawberry.ID] = strawberry.UNSET
    student_ids: Optional[list[strawberry.ID]] = strawberry.UNSET


@strawberry.input
class UpdateAssignmentInput:
    id: strawberry.ID
    name: Optional[str] = strawberry.UNSET
    state: Optional[AssignmentStateType] = strawberry.UNSET
    due_at: Optional[datetime] = strawberry.UNSET
    description: Optional[str] = strawberry.UNSET
    assignment_overrides: Optional[list[AssignmentOverrideCreateOrUpdate]] = strawberry.UNSET
