"""Tests for PermissionPolicy."""

from app.domain.entities.assignment import Assignment
from app.domain.entities.enrollment import Enrollment
from app.domain.entities.user import User
from app.domain.policies.permissions import grants_right, rights_for
from app.domain.value_objects.enums import EnrollmentRole, Right, WorkflowState


def _assignment(state=WorkflowState.PUBLISHED) -> Assignment:
    return Assignment(id=1, course_id=1, name="HW", workflow_state=state)


def _enrolled(user_id: int, role: EnrollmentRole, course_id: int = 1) -> list[Enrollment]:
    return [Enrollment(id=1, user_id=user_id, course_id=course_id, role=role)]


def test_anonymous_has_nothing():
    assert rights_for(None, [], _assignment()) == frozenset()


def test_site_admin_has_everything_without_enrollment():
    admin = User(id=9, name="Root", site_admin=True)
    assert rights_for(admin, [], _assignment()) == {Right.READ, Right.UPDATE, Right.DELETE}


def test_teacher_and_designer_have_everything():
    for role in (EnrollmentRole.TEACHER, EnrollmentRole.DESIGNER):
        user = User(id=1, name="T")
        assert rights_for(user, _enrolled(1, role), _assignment()) == {
            Right.READ, Right.UPDATE, Right.DELETE,
        }


def test_ta_cannot_delete():
    user = User(id=2, name="TA")
    rights = rights_for(user, _enrolled(2, EnrollmentRole.TA), _assignment())
    assert rights == {Right.READ, Right.UPDATE}


def test_student_reads_published_only():
    user = User(id=3, name="S")
    enr = _enrolled(3, EnrollmentRole.STUDENT)
    assert rights_for(user, enr, _assignment()) == {Right.READ}
    assert rights_for(user, enr, _assignment(WorkflowState.UNPUBLISHED)) == frozenset()


def test_enrollment_in_other_course_ignored():
    user = User(id=1, name="T")
    enr = _enrolled(1, EnrollmentRole.TEACHER, course_id=2)
    assert grants_right(user, enr, _assignment(), Right.UPDATE) is False


def test_someone_elses_enrollment_ignored():
    user = User(id=5, name="X")
    assert grants_right(user, _enrolled(1, EnrollmentRole.TEACHER), _assignment(), Right.READ) is False


def test_grants_right():
    user = User(id=1, name="T")
    enr = _enrolled(1, EnrollmentRole.TEACHER)
    assert grants_right(user, enr, _assignment(), Right.DELETE) is True
