"""create users, projects, project workflow and activity tables

Revision ID: 3b7e1c9a5d21
Revises:
Create Date: 2025-12-03 09:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b7e1c9a5d21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_role_enum = sa.Enum("ADMIN", "MANAGER", "USER", name="userrole")
project_status_enum = sa.Enum("IN_PROGRESS", "PENDING_APPROVAL", "COMPLETED", name="projectstatus")
workflow_status_enum = sa.Enum(
    "RECEIVED",
    "IN_PROGRESS",
    "COMPLETED",
    "SENT_TO_CUSTOMER",
    name="workflowstatus",
)


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("position", sa.String(length=255), nullable=True),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("role", user_role_enum, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "projects",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("duration", sa.String(length=100), nullable=True),
        sa.Column("group", sa.String(length=100), nullable=True),
        sa.Column("value", sa.Float(), nullable=True),
        sa.Column("progress_method", sa.String(length=100), nullable=False),
        sa.Column("attachment", sa.String(length=500), nullable=True),
        sa.Column("status", project_status_enum, nullable=False),
        sa.Column("progress", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("manager_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_deleted", sa.Boolean(), nullable=True),
    )
    op.create_index("ix_projects_id", "projects", ["id"])
    op.create_index("ix_projects_code", "projects", ["code"], unique=True)
    op.create_index("ix_projects_name", "projects", ["name"])

    for table_name in ("project_implementers", "project_followers"):
        op.create_table(
            table_name,
            sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        )

    op.create_table(
        "project_workflows",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("current_status", workflow_status_enum, nullable=False),
        sa.Column("received_start_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("received_confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("in_progress_start_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("in_progress_confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_start_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_approved_by_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("completed_confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("sent_to_customer_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_project_workflows_id", "project_workflows", ["id"])

    op.create_table(
        "project_activities",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("project_id", sa.Integer(), sa.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("action", sa.Text(), nullable=False),
        sa.Column("field_name", sa.String(length=100), nullable=True),
        sa.Column("old_value", sa.Text(), nullable=True),
        sa.Column("new_value", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index("ix_project_activities_id", "project_activities", ["id"])
    op.create_index("ix_project_activities_project_id", "project_activities", ["project_id"])


def downgrade():
    op.drop_table("project_activities")
    op.drop_table("project_workflows")
    op.drop_table("project_followers")
    op.drop_table("project_implementers")
    op.drop_table("projects")
    op.drop_table("users")

    bind = op.get_bind()
    workflow_status_enum.drop(bind, checkfirst=True)
    project_status_enum.drop(bind, checkfirst=True)
    user_role_enum.drop(bind, checkfirst=True)
