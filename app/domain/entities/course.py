"""Course entity and the sub-populations overrides can target."""

from dataclasses import dataclass


@dataclass
class Course:
    id: int | None
    name: str


@dataclass
class CourseSection:
    id: int | None
    course_id: int
    name: str


@dataclass
class Group:
    id: int | None
    course_id: int
    name: str
