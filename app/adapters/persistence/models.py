"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.adapters.persistence.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    site_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    enrollments: Mapped[list["EnrollmentModel"]] = relationship(back_populates="user")


class CourseModel(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    sections: Mapped[list["CourseSectionModel"]] = relationship(back_populates="course")
    groups: Mapped[list["GroupModel"]] = relationship(back_populates="course")
    enrollments: Mapped[list["EnrollmentModel"]] = relationship(back_populates="course")
    assignments: Mapped[list["AssignmentModel"]] = relationship(back_populates="course")


class CourseSectionModel(Base):
    __tablename__ = "course_sections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    course_id: Mapped[int] = mapped_column(Integer, ForeignKey("courses.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    course: Mapped["CourseModel"] = relationship(back_populates="sections")

    __table_args__ = (Index("idx_course_sections_course", "course_id"),)


class GroupModel(Base):
    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    course_id: Mapped[int] = mapped_column(Integer, ForeignKey("courses.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    course: Mapped["CourseModel"] = relationship(back_populates="groups")

    __table_args__ = (Index("idx_groups_course", "course_id"),)


class EnrollmentModel(Base):
    __tablename__ = "enrollments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    course_id: Mapped[int] = mapped_column(Integer, ForeignKey("courses.id"), nullable=False)
    course_section_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("course_sections.id"), nullable=True
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)

    user: Mapped["UserModel"] = relationship(back_populates="enrollments")
    course: Mapped["CourseModel"] = relationship(back_populates="enrollments")

    __table_args__ = (
        Index("idx_enrollments_user_course", "user_id", "course_id"),
        Index("idx_enrollments_course_role", "course_id", "role"),
    )


class AssignmentModel(Base):
    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    course_id: Mapped[int] = mapped_column(Integer, ForeignKey("courses.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    lock_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    unlock_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    workflow_state: Mapped[str] = mapped_column(
        String(20), nullable=False, default="unpublished"
    )
    has_student_submissions: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    updated_by_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    course: Mapped["CourseModel"] = relationship(back_populates="assignments")
    overrides: Mapped[list["AssignmentOverrideModel"]] = relationship(
        back_populates="assignment", order_by="AssignmentOverrideModel.id"
    )

    __table_args__ = (
        Index("idx_assignments_course", "course_id"),
        Index("idx_assignments_workflow_state", "workflow_state"),
    )


class AssignmentOverrideModel(Base):
    __tablename__ = "assignment_overrides"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    assignment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False
    )
    set_type: Mapped[str] = mapped_column(String(20), nullable=False)
    set_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    due_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    due_at_overridden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    lock_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    lock_at_overridden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    unlock_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    unlock_at_overridden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    workflow_state: Mapped[str] = mapped_column(String(20), nullable=False, default="active")

    assignment: Mapped["AssignmentModel"] = relationship(back_populates="overrides")
    students: Mapped[list["AssignmentOverrideStudentModel"]] = relationship(
        back_populates="override",
        cascade="all, delete-orphan",
        order_by="AssignmentOverrideStudentModel.id",
    )

    __table_args__ = (
        Index("idx_overrides_assignment", "assignment_id"),
        Index("idx_overrides_set", "set_type", "set_id"),
    )


class AssignmentOverrideStudentModel(Base):
    __tablename__ = "assignment_override_students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    assignment_override_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("assignment_overrides.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)

    override: Mapped["AssignmentOverrideModel"] = relationship(back_populates="students")

    __table_args__ = (
        UniqueConstraint("assignment_override_id", "user_id", name="uq_override_student"),
    )
