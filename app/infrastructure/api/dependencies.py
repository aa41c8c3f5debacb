"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import get_session
from app.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlCourseRepository,
    SqlEnrollmentRepository,
    SqlUserRepository,
)
from app.application.use_cases.get_assignment import GetAssignmentUseCase
from app.application.use_cases.update_assignment import UpdateAssignmentUseCase

# Re-export session dependency
get_db_session = get_session


def get_user_repo(session: AsyncSession = Depends(get_session)) -> SqlUserRepository:
    return SqlUserRepository(session)


def get_update_assignment_uc(
    session: AsyncSession = Depends(get_session),
) -> UpdateAssignmentUseCase:
    return UpdateAssignmentUseCase(
        assignment_repo=SqlAssignmentRepository(session),
        course_repo=SqlCourseRepository(session),
        enrollment_repo=SqlEnrollmentRepository(session),
    )


def get_get_assignment_uc(
    session: AsyncSession = Depends(get_session),
) -> GetAssignmentUseCase:
    return GetAssignmentUseCase(
        assignment_repo=SqlAssignmentRepository(session),
        enrollment_repo=SqlEnrollmentRepository(session),
    )
