"""Tests for domain enums."""

from app.domain.value_objects.enums import (
    AssignmentState,
    EnrollmentRole,
    OverrideSetType,
    Right,
    WorkflowState,
)


def test_workflow_states_are_requestable_states():
    requestable = {AssignmentState.UNPUBLISHED, AssignmentState.PUBLISHED, AssignmentState.DELETED}
    assert {AssignmentState(s.value) for s in WorkflowState} == requestable


def test_assignment_state_count():
    assert len(AssignmentState) == 6


def test_override_set_type_values():
    assert OverrideSetType.COURSE_SECTION.value == "CourseSection"
    assert OverrideSetType.GROUP.value == "Group"
    assert OverrideSetType.ADHOC.value == "ADHOC"


def test_enrollment_role_values():
    assert [r.value for r in EnrollmentRole] == ["teacher", "ta", "designer", "student", "observer"]


def test_right_values():
    assert {r.value for r in Right} == {"read", "update", "delete"}
