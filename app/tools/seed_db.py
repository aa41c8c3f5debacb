"""Seed the database with a small demo course.

Usage:
    python -m app.tools.seed_db
    python -m app.tools.seed_db --drop  # drop existing data first
    python -m app.tools.seed_db --verify-only
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import async_session_factory
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
from app.domain.value_objects.enums import EnrollmentRole, WorkflowState
from app.infrastructure.api.auth import create_access_token

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)

DEMO_COURSE = "Introduction to Statistics"

# (name, role, section index or None)
DEMO_PEOPLE: list[tuple[str, EnrollmentRole, int | None]] = [
    ("Dana Teacher", EnrollmentRole.TEACHER, None),
    ("Tom Assistant", EnrollmentRole.TA, None),
    ("Alice Student", EnrollmentRole.STUDENT, 0),
    ("Bob Student", EnrollmentRole.STUDENT, 0),
    ("Carol Student", EnrollmentRole.STUDENT, 1),
]


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in correct order (respecting FK constraints)."""
    for model in [
        AssignmentOverrideStudentModel,
        AssignmentOverrideModel,
        AssignmentModel,
        EnrollmentModel,
        GroupModel,
        CourseSectionModel,
        CourseModel,
        UserModel,
    ]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


async def seed(drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns ids of the records a client needs to try the API."""
    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        existing = await session.execute(select(CourseModel).where(CourseModel.name == DEMO_COURSE))
        if existing.scalar_one_or_none():
            logger.info("Course '%s' already exists, skipping", DEMO_COURSE)
            return {}

        course = CourseModel(name=DEMO_COURSE)
        session.add(course)
        await session.flush()

        sections = [
            CourseSectionModel(course_id=course.id, name="Section A"),
            CourseSectionModel(course_id=course.id, name="Section B"),
        ]
        group = GroupModel(course_id=course.id, name="Project Team 1")
        session.add_all([*sections, group])
        await session.flush()

        ids: dict[str, int] = {"course": course.id, "group": group.id}
        for i, section in enumerate(sections):
            ids[f"section_{i}"] = section.id

        for name, role, section_idx in DEMO_PEOPLE:
            user = UserModel(name=name, site_admin=False)
            session.add(user)
            await session.flush()
            session.add(
                EnrollmentModel(
                    user_id=user.id,
                    course_id=course.id,
                    role=role.value,
                    course_section_id=sections[section_idx].id if section_idx is not None else None,
                )
            )
            ids[name] = user.id

        now = datetime.now(timezone.utc).replace(microsecond=0)
        assignment = AssignmentModel(
            course_id=course.id,
            name="Homework 1: Descriptive statistics",
            description="Chapters 1-3, exercises at the end of each chapter.",
            due_at=now + timedelta(days=7),
            workflow_state=WorkflowState.UNPUBLISHED.value,
        )
        session.add(assignment)
        await session.flush()
        ids["assignment"] = assignment.id

        await session.commit()

    logger.info("Seed complete: course=%s assignment=%s", ids["course"], ids["assignment"])
    return ids


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        counts = {}
        for label, model in [
            ("Courses", CourseModel),
            ("Users", UserModel),
            ("Enrollments", EnrollmentModel),
            ("Assignments", AssignmentModel),
            ("Overrides", AssignmentOverrideModel),
        ]:
            counts[label] = await session.scalar(select(func.count()).select_from(model))

        users = (await session.execute(select(UserModel).order_by(UserModel.id))).scalars().all()

    print(f"\n{'='*50}")
    print("SEED VERIFICATION")
    print(f"{'='*50}")
    for label, count in counts.items():
        print(f"{label + ':':<13}{count}")
    print("\nBearer tokens:")
    for u in users:
        print(f"  {u.name:<16} {create_access_token(u.id)}")
    print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed the LMS database with a demo course")
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(drop=args.drop)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
