"""Pytest configuration and shared fixtures.

One small course is modelled with in-memory fakes:

    course 1 "Statistics"  sections 10 "Section A", 11 "Section B"; group 20 "Team 1"
    users: 1 teacher, 2 ta, 3-5 students, 6 outsider, 7 site admin
    assignment 100 "Homework 1" (published) with override 500 on section 10
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone

import pytest

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.course_repo import CourseRepository
from app.application.ports.enrollment_repo import EnrollmentRepository
from app.application.use_cases.get_assignment import GetAssignmentUseCase
from app.application.use_cases.update_assignment import UpdateAssignmentUseCase
from app.domain.entities.assignment import Assignment
from app.domain.entities.assignment_override import AssignmentOverride
from app.domain.entities.course import Course
from app.domain.entities.enrollment import Enrollment
from app.domain.entities.user import User
from app.domain.policies.validation import CourseRoster
from app.domain.value_objects.enums import EnrollmentRole, OverrideSetType, WorkflowState

COURSE_ID = 1
OTHER_COURSE_ID = 2
ASSIGNMENT_ID = 100
OVERRIDE_ID = 500
NOW = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
DUE = datetime(2026, 3, 10, 23, 59, tzinfo=timezone.utc)

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeAssignmentRepo(AssignmentRepository):
    """Hands out copies so unsaved edits never leak into the store."""

    def __init__(self, assignments: list[Assignment]):
        self.assignments = {a.id: a for a in assignments}
        self.update_calls = 0
        self._next_override_id = 1000

    async def get_by_id(self, assignment_id):
        stored = self.assignments.get(assignment_id)
        return copy.deepcopy(stored) if stored else None

    async def update(self, assignment):
        self.update_calls += 1
        for override in assignment.overrides:
            if override.id is None:
                override.id = self._next_override_id
                self._next_override_id += 1
        self.assignments[assignment.id] = copy.deepcopy(assignment)
        return assignment


class FakeCourseRepo(CourseRepository):
    def __init__(self, rosters: dict[int, CourseRoster]):
        self._rosters = rosters

    async def get_by_id(self, course_id):
        return Course(id=course_id, name="Statistics") if course_id in self._rosters else None

    async def get_roster(self, course_id):
        return self._rosters.get(course_id, CourseRoster())


class FakeEnrollmentRepo(EnrollmentRepository):
    def __init__(self, enrollments: list[Enrollment]):
        self._enrollments = enrollments

    async def get_for_user_in_course(self, user_id, course_id):
        return [
            e for e in self._enrollments
            if e.user_id == user_id and e.course_id == course_id
        ]


# ─── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def teacher():
    return User(id=1, name="Dana Teacher")


@pytest.fixture
def ta():
    return User(id=2, name="Tom Assistant")


@pytest.fixture
def student():
    return User(id=3, name="Alice Student")


@pytest.fixture
def outsider():
    return User(id=6, name="Olga Outsider")


@pytest.fixture
def admin():
    return User(id=7, name="Root", site_admin=True)


@pytest.fixture
def enrollments():
    return [
        Enrollment(id=1, user_id=1, course_id=COURSE_ID, role=EnrollmentRole.TEACHER),
        Enrollment(id=2, user_id=2, course_id=COURSE_ID, role=EnrollmentRole.TA),
        Enrollment(id=3, user_id=3, course_id=COURSE_ID, role=EnrollmentRole.STUDENT, course_section_id=10),
        Enrollment(id=4, user_id=4, course_id=COURSE_ID, role=EnrollmentRole.STUDENT, course_section_id=10),
        Enrollment(id=5, user_id=5, course_id=COURSE_ID, role=EnrollmentRole.STUDENT, course_section_id=11),
        Enrollment(id=6, user_id=6, course_id=OTHER_COURSE_ID, role=EnrollmentRole.TEACHER),
    ]


@pytest.fixture
def roster():
    return CourseRoster(
        sections={10: "Section A", 11: "Section B"},
        groups={20: "Team 1"},
        student_ids=frozenset({3, 4, 5}),
    )


@pytest.fixture
def assignment():
    return Assignment(
        id=ASSIGNMENT_ID,
        course_id=COURSE_ID,
        name="Homework 1",
        description="Chapters 1-3",
        due_at=DUE,
        workflow_state=WorkflowState.PUBLISHED,
        overrides=[
            AssignmentOverride(
                id=OVERRIDE_ID,
                assignment_id=ASSIGNMENT_ID,
                set_type=OverrideSetType.COURSE_SECTION,
                set_id=10,
                title="Section A",
                due_at=datetime(2026, 3, 12, 23, 59, tzinfo=timezone.utc),
                due_at_overridden=True,
            )
        ],
    )


@pytest.fixture
def assignment_repo(assignment):
    return FakeAssignmentRepo([assignment])


@pytest.fixture
def course_repo(roster):
    return FakeCourseRepo({COURSE_ID: roster})


@pytest.fixture
def enrollment_repo(enrollments):
    return FakeEnrollmentRepo(enrollments)


@pytest.fixture
def update_uc(assignment_repo, course_repo, enrollment_repo):
    return UpdateAssignmentUseCase(
        assignment_repo=assignment_repo,
        course_repo=course_repo,
        enrollment_repo=enrollment_repo,
        clock=lambda: NOW,
    )


@pytest.fixture
def get_uc(assignment_repo, enrollment_repo):
    return GetAssignmentUseCase(assignment_repo=assignment_repo, enrollment_repo=enrollment_repo)
