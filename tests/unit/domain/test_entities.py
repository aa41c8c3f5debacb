"""Tests for domain entities."""

from datetime import datetime, timezone

from app.domain.entities.assignment import Assignment
from app.domain.entities.assignment_override import AssignmentOverride, adhoc_title
from app.domain.entities.enrollment import Enrollment
from app.domain.value_objects.enums import (
    AssignmentState,
    EnrollmentRole,
    OverrideSetType,
    WorkflowState,
)


def _assignment(state=WorkflowState.PUBLISHED, submissions=False, overrides=None) -> Assignment:
    return Assignment(
        id=1, course_id=1, name="HW", workflow_state=state,
        has_student_submissions=submissions, overrides=overrides or [],
    )


def _override(oid=1, set_type=OverrideSetType.COURSE_SECTION, set_id=10) -> AssignmentOverride:
    return AssignmentOverride(id=oid, assignment_id=1, set_type=set_type, set_id=set_id)


def test_published_setter_toggles_state():
    a = _assignment(state=WorkflowState.UNPUBLISHED)
    a.published = True
    assert a.workflow_state == WorkflowState.PUBLISHED
    a.published = False
    assert a.workflow_state == WorkflowState.UNPUBLISHED


def test_published_setter_ignored_when_deleted():
    a = _assignment(state=WorkflowState.DELETED)
    a.published = True
    assert a.is_deleted() is True


def test_state_mirrors_workflow_state():
    assert _assignment(state=WorkflowState.DELETED).state == AssignmentState.DELETED
    assert _assignment(state=WorkflowState.PUBLISHED).state == AssignmentState.PUBLISHED


def test_destroy_soft_deletes_active_overrides():
    a = _assignment(overrides=[_override(1), _override(2, set_id=11)])
    a.destroy()
    assert a.is_deleted() is True
    assert a.active_overrides() == []
    assert len(a.overrides) == 2


def test_restore_without_submissions_is_unpublished():
    a = _assignment(state=WorkflowState.DELETED)
    a.restore()
    assert a.workflow_state == WorkflowState.UNPUBLISHED


def test_restore_with_submissions_is_published():
    a = _assignment(state=WorkflowState.DELETED, submissions=True)
    a.restore()
    assert a.workflow_state == WorkflowState.PUBLISHED


def test_can_unpublish():
    assert _assignment().can_unpublish() is True
    assert _assignment(submissions=True).can_unpublish() is False


def test_touch_records_editor():
    a = _assignment()
    at = datetime(2026, 1, 1, tzinfo=timezone.utc)
    a.touch(42, at)
    assert a.updated_by_id == 42
    assert a.updated_at == at


def test_override_date_flags():
    o = _override()
    o.override_due_at(None)
    assert o.due_at is None
    assert o.due_at_overridden is True
    o.clear_due_at()
    assert o.due_at_overridden is False


def test_override_target_key():
    assert _override(set_type=OverrideSetType.GROUP, set_id=20).target_key() == ("Group", 20)
    adhoc = AssignmentOverride(id=1, assignment_id=1, set_type=OverrideSetType.ADHOC, student_ids=[3])
    assert adhoc.target_key() is None


def test_adhoc_title():
    assert adhoc_title(1) == "1 student"
    assert adhoc_title(3) == "3 students"


def test_enrollment_roles():
    teacher = Enrollment(id=1, user_id=1, course_id=1, role=EnrollmentRole.TEACHER)
    student = Enrollment(id=2, user_id=2, course_id=1, role=EnrollmentRole.STUDENT)
    assert teacher.is_staff() is True
    assert student.is_staff() is False
    assert student.is_student() is True
