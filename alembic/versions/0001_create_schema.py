from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "0001_create_schema"
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum("USER", "ADMIN", "BARBER", name="user_role")


def upgrade() -> None:
    bind = op.get_bind()
    existing = set(inspect(bind).get_table_names())

    if "users" not in existing:
        op.create_table(
            "users",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("password_hash", sa.String(), nullable=False),
            sa.Column("phone_number", sa.String(), nullable=True),
            sa.Column("image", sa.String(), nullable=True),
            sa.Column("role", user_role, nullable=False, server_default="USER"),
            sa.Column("created_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_users_email", "users", ["email"], unique=True)

    if "barbershops" not in existing:
        op.create_table(
            "barbershops",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("address", sa.String(), nullable=False, server_default=""),
            sa.Column("description", sa.Text(), nullable=False, server_default=""),
            sa.Column("image_url", sa.String(), nullable=False, server_default=""),
            sa.Column("phones", sa.JSON(), nullable=False),
        )

    if "barbershop_services" not in existing:
        op.create_table(
            "barbershop_services",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("barbershop_id", sa.String(length=36), sa.ForeignKey("barbershops.id"), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("image_url", sa.String(), nullable=True),
            sa.Column("price", sa.Numeric(10, 2), nullable=False),
        )
        op.create_index("ix_barbershop_services_barbershop_id", "barbershop_services", ["barbershop_id"])

    if "bookings" not in existing:
        op.create_table(
            "bookings",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("service_id", sa.String(length=36), sa.ForeignKey("barbershop_services.id"), nullable=False),
            sa.Column("date", sa.DateTime(), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
        op.create_index("ix_bookings_service_id", "bookings", ["service_id"])
        op.create_index("ix_bookings_date", "bookings", ["date"])

    if "logs" not in existing:
        op.create_table(
            "logs",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("action", sa.String(), nullable=False),
            sa.Column("details", sa.Text(), nullable=False),
            sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_logs_id", "logs", ["id"])
        op.create_index("ix_logs_action", "logs", ["action"])
        op.create_index("ix_logs_user_id", "logs", ["user_id"])
        op.create_index("ix_logs_created_at", "logs", ["created_at"])

    if "login_attempts" not in existing:
        op.create_table(
            "login_attempts",
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("failed_count", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("first_failed_at", sa.DateTime(), nullable=True),
            sa.Column("last_failed_at", sa.DateTime(), nullable=True),
            sa.Column("locked_until", sa.DateTime(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_login_attempts_id", "login_attempts", ["id"])
        op.create_index("ix_login_attempts_email", "login_attempts", ["email"], unique=True)


def downgrade() -> None:
    for table in ("login_attempts", "logs", "bookings", "barbershop_services", "barbershops", "users"):
        op.drop_table(table)
    user_role.drop(op.get_bind(), checkfirst=True)
