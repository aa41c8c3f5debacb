"""AssignmentOverride entity — per-section/group/student exception to an assignment's dates."""

from dataclasses import dataclass, field
from datetime import datetime

from app.domain.value_objects.enums import OverrideSetType

ACTIVE = "active"
DELETED = "deleted"


@dataclass
class AssignmentOverride:
    id: int | None
    assignment_id: int
    set_type: OverrideSetType
    set_id: int | None = None
    student_ids: list[int] = field(default_factory=list)
    title: str | None = None
    due_at: datetime | None = None
    due_at_overridden: bool = False
    lock_at: datetime | None = None
    lock_at_overridden: bool = False
    unlock_at: datetime | None = None
    unlock_at_overridden: bool = False
    workflow_state: str = ACTIVE

    def is_active(self) -> bool:
        return self.workflow_state == ACTIVE

    def destroy(self) -> None:
        self.workflow_state = DELETED

    def override_due_at(self, value: datetime | None) -> None:
        self.due_at = value
        self.due_at_overridden = True

    def override_lock_at(self, value: datetime | None) -> None:
        self.lock_at = value
        self.lock_at_overridden = True

    def override_unlock_at(self, value: datetime | None) -> None:
        self.unlock_at = value
        self.unlock_at_overridden = True

    def clear_due_at(self) -> None:
        self.due_at = None
        self.due_at_overridden = False

    def clear_lock_at(self) -> None:
        self.lock_at = None
        self.lock_at_overridden = False

    def clear_unlock_at(self) -> None:
        self.unlock_at = None
        self.unlock_at_overridden = False

    def target_key(self) -> tuple[str, int] | None:
        """(set_type, set_id) for section/group overrides, None for ADHOC."""
        if self.set_type == OverrideSetType.ADHOC or self.set_id is None:
            return None
        return self.set_type.value, self.set_id


def adhoc_title(student_count: int) -> str:
    return "1 student" if student_count == 1 else f"{student_count} students"
