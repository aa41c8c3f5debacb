"""Port interface for course structure lookups."""

from abc import ABC, abstractmethod

from app.domain.entities.course import Course
from app.domain.policies.validation import CourseRoster


class CourseRepository(ABC):
    @abstractmethod
    async def get_by_id(self, course_id: int) -> Course | None:
        ...

    @abstractmethod
    async def get_roster(self, course_id: int) -> CourseRoster:
        """Sections, groups and enrolled students of a course."""
        ...
