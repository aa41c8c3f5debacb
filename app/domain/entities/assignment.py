"""Assignment entity — a gradable unit of coursework with default scheduling dates."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.entities.assignment_override import AssignmentOverride
from app.domain.value_objects.enums import AssignmentState, WorkflowState


@dataclass
class Assignment:
    id: int | None
    course_id: int
    name: str
    description: str | None = None
    due_at: datetime | None = None
    lock_at: datetime | None = None
    unlock_at: datetime | None = None
    workflow_state: WorkflowState = WorkflowState.UNPUBLISHED
    has_student_submissions: bool = False
    updated_by_id: int | None = None
    updated_at: datetime | None = None
    overrides: list[AssignmentOverride] = field(default_factory=list)

    @property
    def published(self) -> bool:
        return self.workflow_state == WorkflowState.PUBLISHED

    @published.setter
    def published(self, value: bool) -> None:
        if self.is_deleted():
            return
        self.workflow_state = WorkflowState.PUBLISHED if value else WorkflowState.UNPUBLISHED

    @property
    def state(self) -> AssignmentState:
        return AssignmentState(self.workflow_state.value)

    def is_deleted(self) -> bool:
        return self.workflow_state == WorkflowState.DELETED

    def can_unpublish(self) -> bool:
        return not self.has_student_submissions

    def active_overrides(self) -> list[AssignmentOverride]:
        return [o for o in self.overrides if o.is_active()]

    def destroy(self) -> None:
        self.workflow_state = WorkflowState.DELETED
        for override in self.active_overrides():
            override.destroy()

    def restore(self) -> None:
        # Anything students already turned in stays visible.
        if self.has_student_submissions:
            self.workflow_state = WorkflowState.PUBLISHED
        else:
            self.workflow_state = WorkflowState.UNPUBLISHED

    def touch(self, user_id: int | None, at: datetime) -> None:
        """Record who saved the assignment and when."""
        self.updated_by_id = user_id
        self.updated_at = at
