"""initial schema: employees, todos, messages, assigned_tasks

Revision ID: 5b1e7c2d9a40
Revises:
Create Date: 2026-10-19 10:12:03.418230
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "5b1e7c2d9a40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Before the role column existed, "manager" meant manager_id == 1
LEGACY_MANAGER_SENTINEL = 1


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("employee_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("department", sa.String(100), nullable=True),
        sa.Column(
            "manager_id",
            sa.Integer(),
            sa.ForeignKey("employees.employee_id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("role", sa.String(20), nullable=False, server_default="STAFF"),
        sa.Column("phone_number", sa.String(50), nullable=True),
        sa.Column("photo_url", sa.String(500), nullable=True),
    )
    op.create_index("ix_employees_email", "employees", ["email"], unique=True)
    op.create_index("ix_employees_department", "employees", ["department"])

    op.create_table(
        "todos",
        sa.Column("todo_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("employees.employee_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_todos_user_id", "todos", ["user_id"])

    op.create_table(
        "messages",
        sa.Column("message_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("department", sa.String(100), nullable=True),
        sa.Column("recipient_email", sa.String(320), nullable=True),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_messages_timestamp", "messages", ["timestamp"])

    op.create_table(
        "assigned_tasks",
        sa.Column("task_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "employee_id",
            sa.Integer(),
            sa.ForeignKey("employees.employee_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "assigned_by",
            sa.Integer(),
            sa.ForeignKey("employees.employee_id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_assigned_tasks_employee_id", "assigned_tasks", ["employee_id"])

    # Backfill explicit roles for databases imported from the old schema
    op.execute(
        f"UPDATE employees SET role = 'MANAGER' WHERE manager_id = {LEGACY_MANAGER_SENTINEL}"
    )


def downgrade() -> None:
    op.drop_index("ix_assigned_tasks_employee_id", table_name="assigned_tasks")
    op.drop_table("assigned_tasks")
    op.drop_index("ix_messages_timestamp", table_name="messages")
    op.drop_table("messages")
    op.drop_index("ix_todos_user_id", table_name="todos")
    op.drop_table("todos")
    op.drop_index("ix_employees_department", table_name="employees")
    op.drop_index("ix_employees_email", table_name="employees")
    op.drop_table("employees")
