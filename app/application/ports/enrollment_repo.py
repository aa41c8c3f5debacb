"""Port interface for enrollment lookups."""

from abc import ABC, abstractmethod

from app.domain.entities.enrollment import Enrollment


class EnrollmentRepository(ABC):
    @abstractmethod
    async def get_for_user_in_course(self, user_id: int, course_id: int) -> list[Enrollment]:
        ...
