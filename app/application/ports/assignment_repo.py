"""Port interface for assignment persistence."""

from abc import ABC, abstractmethod

from app.domain.entities.assignment import Assignment


class AssignmentRepository(ABC):
    @abstractmethod
    async def get_by_id(self, assignment_id: int) -> Assignment | None:
        """Return the assignment with all of its overrides, deleted ones included."""
        ...

    @abstractmethod
    async def update(self, assignment: Assignment) -> Assignment:
        """Persist assignment fields and its overrides.

        Overrides without an id are inserted and receive one.
        """
        ...
