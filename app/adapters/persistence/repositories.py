"""SQLAlchemy repository implementations."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.adapters.persistence.models import (
    AssignmentModel,
    AssignmentOverrideModel,
    AssignmentOverrideStudentModel,
    CourseModel,
    CourseSectionModel,
    EnrollmentModel,
    GroupModel,
    UserModel,
)
from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.course_repo import CourseRepository
from app.application.ports.enrollment_repo import EnrollmentRepository
from app.application.ports.user_repo import UserRepository
from app.domain.entities.assignment import Assignment
from app.domain.entities.assignment_override import AssignmentOverride
from app.domain.entities.course import Course
from app.domain.entities.enrollment import Enrollment
from app.domain.entities.user import User
from app.domain.policies.validation import CourseRoster
from app.domain.value_objects.enums import EnrollmentRole, OverrideSetType, WorkflowState

logger = logging.getLogger(__name__)

# ─── Mappers ─────────────────────────────────────────────────────────


def _user_to_domain(m: UserModel) -> User:
    return User(id=m.id, name=m.name, site_admin=m.site_admin)


def _enrollment_to_domain(m: EnrollmentModel) -> Enrollment:
    return Enrollment(
        id=m.id,
        user_id=m.user_id,
        course_id=m.course_id,
        role=EnrollmentRole(m.role),
        course_section_id=m.course_section_id,
    )


def _override_to_domain(m: AssignmentOverrideModel) -> AssignmentOverride:
    return AssignmentOverride(
        id=m.id,
        assignment_id=m.assignment_id,
        set_type=OverrideSetType(m.set_type),
        set_id=m.set_id,
        student_ids=[s.user_id for s in m.students],
        title=m.title,
        due_at=m.due_at,
        due_at_overridden=m.due_at_overridden,
        lock_at=m.lock_at,
        lock_at_overridden=m.lock_at_overridden,
        unlock_at=m.unlock_at,
        unlock_at_overridden=m.unlock_at_overridden,
        workflow_state=m.workflow_state,
    )


def _assignment_to_domain(m: AssignmentModel) -> Assignment:
    return Assignment(
        id=m.id,
        course_id=m.course_id,
        name=m.name,
        description=m.description,
        due_at=m.due_at,
        lock_at=m.lock_at,
        unlock_at=m.unlock_at,
        workflow_state=WorkflowState(m.workflow_state),
        has_student_submissions=m.has_student_submissions,
        updated_by_id=m.updated_by_id,
        updated_at=m.updated_at,
        overrides=[_override_to_domain(o) for o in m.overrides],
    )


def _copy_override_fields(override: AssignmentOverride, m: AssignmentOverrideModel) -> None:
    m.set_type = override.set_type.value
    m.set_id = override.set_id
    m.title = override.title
    m.due_at = override.due_at
    m.due_at_overridden = override.due_at_overridden
    m.lock_at = override.lock_at
    m.lock_at_overridden = override.lock_at_overridden
    m.unlock_at = override.unlock_at
    m.unlock_at_overridden = override.unlock_at_overridden
    m.workflow_state = override.workflow_state

    # diff the student list so unchanged rows are not deleted and re-inserted
    wanted = list(dict.fromkeys(override.student_ids))
    m.students = [s for s in m.students if s.user_id in wanted]
    present = {s.user_id for s in m.students}
    for user_id in wanted:
        if user_id not in present:
            m.students.append(AssignmentOverrideStudentModel(user_id=user_id))


# ─── Repositories ────────────────────────────────────────────────────


class SqlUserRepository(UserRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, user_id: int) -> User | None:
        m = await self._s.get(UserModel, user_id)
        return _user_to_domain(m) if m else None


class SqlEnrollmentRepository(EnrollmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_for_user_in_course(self, user_id: int, course_id: int) -> list[Enrollment]:
        result = await self._s.execute(
            select(EnrollmentModel)
            .where(EnrollmentModel.user_id == user_id, EnrollmentModel.course_id == course_id)
            .order_by(EnrollmentModel.id)
        )
        return [_enrollment_to_domain(m) for m in result.scalars()]


class SqlCourseRepository(CourseRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_id(self, course_id: int) -> Course | None:
        m = await self._s.get(CourseModel, course_id)
        return Course(id=m.id, name=m.name) if m else None

    async def get_roster(self, course_id: int) -> CourseRoster:
        sections = await self._s.execute(
            select(CourseSectionModel.id, CourseSectionModel.name).where(
                CourseSectionModel.course_id == course_id
            )
        )
        groups = await self._s.execute(
            select(GroupModel.id, GroupModel.name).where(GroupModel.course_id == course_id)
        )
        students = await self._s.execute(
            select(EnrollmentModel.user_id).where(
                EnrollmentModel.course_id == course_id,
                EnrollmentModel.role == EnrollmentRole.STUDENT.value,
            )
        )
        return CourseRoster(
            sections={row.id: row.name for row in sections},
            groups={row.id: row.name for row in groups},
            student_ids=frozenset(students.scalars()),
        )


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def _load(self, assignment_id: int) -> AssignmentModel | None:
        result = await self._s.execute(
            select(AssignmentModel)
            .options(
                selectinload(AssignmentModel.overrides).selectinload(
                    AssignmentOverrideModel.students
                )
            )
            .where(AssignmentModel.id == assignment_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, assignment_id: int) -> Assignment | None:
        m = await self._load(assignment_id)
        return _assignment_to_domain(m) if m else None

    async def update(self, assignment: Assignment) -> Assignment:
        m = await self._load(assignment.id)
        if m is None:
            raise LookupError(f"assignment {assignment.id} disappeared during update")

        m.name = assignment.name
        m.description = assignment.description
        m.due_at = assignment.due_at
        m.lock_at = assignment.lock_at
        m.unlock_at = assignment.unlock_at
        m.workflow_state = assignment.workflow_state.value
        m.updated_by_id = assignment.updated_by_id
        if assignment.updated_at is not None:
            m.updated_at = assignment.updated_at

        by_id = {o.id: o for o in m.overrides}
        created: list[tuple[AssignmentOverride, AssignmentOverrideModel]] = []
        for override in assignment.overrides:
            if override.id is None:
                om = AssignmentOverrideModel(students=[])
                _copy_override_fields(override, om)
                m.overrides.append(om)
                created.append((override, om))
            elif override.id in by_id:
                _copy_override_fields(override, by_id[override.id])

        await self._s.flush()
        for override, om in created:
            override.id = om.id
            override.assignment_id = m.id

        logger.debug(
            "Persisted assignment %s (%d new override(s))", assignment.id, len(created)
        )
        return assignment
