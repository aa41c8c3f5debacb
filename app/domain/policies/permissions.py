"""PermissionPolicy — which rights a user holds on an assignment."""

from __future__ import annotations

from app.domain.entities.assignment import Assignment
from app.domain.entities.enrollment import Enrollment
from app.domain.entities.user import User
from app.domain.value_objects.enums import EnrollmentRole, Right

STAFF_RIGHTS = frozenset({Right.READ, Right.UPDATE, Right.DELETE})
TA_RIGHTS = frozenset({Right.READ, Right.UPDATE})
VIEWER_ROLES = frozenset({EnrollmentRole.STUDENT, EnrollmentRole.OBSERVER})


def rights_for(
    user: User | None,
    enrollments: list[Enrollment],
    assignment: Assignment,
) -> frozenset[Right]:
    """Pure function: collect every right the user holds on the assignment.

    Business rules:
      1. Anonymous users hold nothing.
      2. Site admins hold every right.
      3. Teacher / designer in the assignment's course → read, update, delete.
      4. TA in the course → read, update (no delete, so no state changes).
      5. Student / observer in the course → read, only once the assignment is published.

    Enrollments in other courses are ignored.
    """
    if user is None:
        return frozenset()
    if user.site_admin:
        return STAFF_RIGHTS

    rights: set[Right] = set()
    for enrollment in enrollments:
        if enrollment.user_id != user.id or enrollment.course_id != assignment.course_id:
            continue
        if enrollment.role == EnrollmentRole.TA:
            rights.update(TA_RIGHTS)
        elif enrollment.is_staff():
            return STAFF_RIGHTS
        if enrollment.role in VIEWER_ROLES and assignment.published:
            rights.add(Right.READ)

    return frozenset(rights)


def grants_right(
    user: User | None,
    enrollments: list[Enrollment],
    assignment: Assignment,
    right: Right,
) -> bool:
    return right in rights_for(user, enrollments, assignment)
