"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class WorkflowState(str, Enum):
    """Persisted lifecycle state of an assignment."""

    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"
    DELETED = "deleted"


class AssignmentState(str, Enum):
    """Public state exposed through the API.

    Only the first three can be requested; the rest are reported while a
    background copy/import is running.
    """

    UNPUBLISHED = "unpublished"
    PUBLISHED = "published"
    DELETED = "deleted"
    DUPLICATING = "duplicating"
    IMPORTING = "importing"
    MIGRATING = "migrating"


class EnrollmentRole(str, Enum):
    TEACHER = "teacher"
    TA = "ta"
    DESIGNER = "designer"
    STUDENT = "student"
    OBSERVER = "observer"


class OverrideSetType(str, Enum):
    COURSE_SECTION = "CourseSection"
    GROUP = "Group"
    ADHOC = "ADHOC"


class Right(str, Enum):
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
