"""GetAssignmentUseCase — load one assignment the current user may see."""

from __future__ import annotations

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.enrollment_repo import EnrollmentRepository
from app.domain.entities.assignment import Assignment
from app.domain.entities.user import User
from app.domain.policies.permissions import grants_right
from app.domain.value_objects.enums import Right


class GetAssignmentUseCase:
    def __init__(
        self,
        assignment_repo: AssignmentRepository,
        enrollment_repo: EnrollmentRepository,
    ):
        self._assignments = assignment_repo
        self._enrollments = enrollment_repo

    async def execute(self, assignment_id: int, current_user: User | None) -> Assignment | None:
        """Return the assignment, or None when it is missing or not visible."""
        assignment = await self._assignments.get_by_id(assignment_id)
        if assignment is None or current_user is None or current_user.id is None:
            return None

        enrollments = await self._enrollments.get_for_user_in_course(
            current_user.id, assignment.course_id
        )
        if not grants_right(current_user, enrollments, assignment, Right.READ):
            return None
        return assignment
