"""Initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("first_name", sa.String(120), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(120), nullable=False, server_default=""),
        sa.Column("role", sa.String(20), nullable=False, server_default="bidder"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(64), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("first_name", sa.String(120), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(120), nullable=False, server_default=""),
        sa.Column("title", sa.String(255), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("phone", sa.String(60), nullable=False, server_default=""),
        sa.Column("location", sa.String(255), nullable=False, server_default=""),
        sa.Column("linkedin", sa.String(500), nullable=False, server_default=""),
        sa.Column("portfolio", sa.String(500), nullable=False, server_default=""),
        sa.Column("summary", sa.Text(), nullable=False, server_default=""),
        sa.Column("skills_json", sa.JSON(), nullable=False),
        sa.Column("resume_filename_format", sa.String(40), nullable=False, server_default="first_last"),
        sa.Column("check_duplicate_applications", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"])

    op.create_table(
        "experiences",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("profile_id", sa.Integer(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("company", sa.String(255), nullable=False, server_default=""),
        sa.Column("position", sa.String(255), nullable=False, server_default=""),
        sa.Column("start_date", sa.String(40), nullable=False, server_default=""),
        sa.Column("end_date", sa.String(40), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("address", sa.String(255), nullable=False, server_default=""),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_experiences_profile_id", "experiences", ["profile_id"])

    op.create_table(
        "educations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("profile_id", sa.Integer(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("school", sa.String(255), nullable=False, server_default=""),
        sa.Column("degree", sa.String(255), nullable=False, server_default=""),
        sa.Column("field", sa.String(255), nullable=False, server_default=""),
        sa.Column("start_date", sa.String(40), nullable=False, server_default=""),
        sa.Column("end_date", sa.String(40), nullable=False, server_default=""),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_educations_profile_id", "educations", ["profile_id"])

    op.create_table(
        "profile_assignments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("profile_id", sa.Integer(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("bidder_id", sa.String(64), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("assigned_by", sa.String(64), sa.ForeignKey("users.id"), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("profile_id", "bidder_id", name="uq_profile_assignment"),
    )
    op.create_index("ix_profile_assignments_profile_id", "profile_assignments", ["profile_id"])
    op.create_index("ix_profile_assignments_bidder_id", "profile_assignments", ["bidder_id"])

    op.create_table(
        "job_applications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("profile_id", sa.Integer(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("bidder_id", sa.String(64), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("job_title", sa.String(255), nullable=False, server_default=""),
        sa.Column("company_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("job_description", sa.Text(), nullable=False, server_default=""),
        sa.Column("job_description_link", sa.String(1000), nullable=False, server_default=""),
        sa.Column("resume_file_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("generated_summary", sa.Text(), nullable=False, server_default=""),
        sa.Column("generated_experience", sa.JSON(), nullable=False),
        sa.Column("generated_skills", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("rejected_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("withdrawn_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_job_applications_profile_id", "job_applications", ["profile_id"])
    op.create_index("ix_job_applications_bidder_id", "job_applications", ["bidder_id"])
    op.create_index("ix_job_applications_company_name", "job_applications", ["company_name"])
    op.create_index("ix_job_applications_status", "job_applications", ["status"])


def downgrade() -> None:
    op.drop_table("job_applications")
    op.drop_table("profile_assignments")
    op.drop_table("educations")
    op.drop_table("experiences")
    op.drop_table("profiles")
    op.drop_table("users")
