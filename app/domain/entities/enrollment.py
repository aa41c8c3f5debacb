"""Enrollment entity — a user's role in a course."""

from dataclasses import dataclass

from app.domain.value_objects.enums import EnrollmentRole

STAFF_ROLES = frozenset({EnrollmentRole.TEACHER, EnrollmentRole.TA, EnrollmentRole.DESIGNER})


@dataclass
class Enrollment:
    id: int | None
    user_id: int
    course_id: int
    role: EnrollmentRole
    course_section_id: int | None = None

    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    def is_student(self) -> bool:
        return self.role == EnrollmentRole.STUDENT
