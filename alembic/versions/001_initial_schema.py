"""Initial schema — courses, enrollments, assignments and their overrides.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("site_admin", sa.Boolean, nullable=False, server_default="false"),
    )

    # Courses
    op.create_table(
        "courses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
    )

    # Sections
    op.create_table(
        "course_sections",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("course_id", sa.Integer, sa.ForeignKey("courses.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
    )
    op.create_index("idx_course_sections_course", "course_sections", ["course_id"])

    # Groups
    op.create_table(
        "groups",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("course_id", sa.Integer, sa.ForeignKey("courses.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
    )
    op.create_index("idx_groups_course", "groups", ["course_id"])

    # Enrollments
    op.create_table(
        "enrollments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("course_id", sa.Integer, sa.ForeignKey("courses.id"), nullable=False),
        sa.Column(
            "course_section_id",
            sa.Integer,
            sa.ForeignKey("course_sections.id"),
            nullable=True,
        ),
        sa.Column("role", sa.String(20), nullable=False),
    )
    op.create_index("idx_enrollments_user_course", "enrollments", ["user_id", "course_id"])
    op.create_index("idx_enrollments_course_role", "enrollments", ["course_id", "role"])

    # Assignments
    op.create_table(
        "assignments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("course_id", sa.Integer, sa.ForeignKey("courses.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("lock_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("unlock_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "workflow_state", sa.String(20), nullable=False, server_default="unpublished"
        ),
        sa.Column(
            "has_student_submissions", sa.Boolean, nullable=False, server_default="false"
        ),
        sa.Column("updated_by_id", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_assignments_course", "assignments", ["course_id"])
    op.create_index("idx_assignments_workflow_state", "assignments", ["workflow_state"])

    # Assignment overrides
    op.create_table(
        "assignment_overrides",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "assignment_id",
            sa.Integer,
            sa.ForeignKey("assignments.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("set_type", sa.String(20), nullable=False),
        sa.Column("set_id", sa.Integer, nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("due_at_overridden", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("lock_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("lock_at_overridden", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("unlock_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("unlock_at_overridden", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("workflow_state", sa.String(20), nullable=False, server_default="active"),
    )
    op.create_index("idx_overrides_assignment", "assignment_overrides", ["assignment_id"])
    op.create_index("idx_overrides_set", "assignment_overrides", ["set_type", "set_id"])

    # ADHOC override members
    op.create_table(
        "assignment_override_students",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "assignment_override_id",
            sa.Integer,
            sa.ForeignKey("assignment_overrides.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.UniqueConstraint("assignment_override_id", "user_id", name="uq_override_student"),
    )


def downgrade() -> None:
    op.drop_table("assignment_override_students")
    op.drop_table("assignment_overrides")
    op.drop_table("assignments")
    op.drop_table("enrollments")
    op.drop_table("groups")
    op.drop_table("course_sections")
    op.drop_table("courses")
    op.drop_table("users")
