"""create_access_tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-18

Creates users/roles, the content and taxonomy tables the decision engine
reads, and the grant, schedule, template, access-log and settings tables.
"""

import sqlalchemy as sa

from alembic import op

# revision identifiers
revision = "a1b2c3d4e5f6"
down_revision = None
branch_labels = None
depends_on = None

content_status = sa.Enum("DRAFT", "PENDING", "PRIVATE", "PUBLISHED", "INHERIT", name="contentstatus")


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_roles_id", "roles", ["id"], unique=False)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "role_id"),
    )

    op.create_table(
        "content",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("content_type", sa.String(length=20), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("status", content_status, nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=True),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("featured_image_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["parent_id"], ["content.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["featured_image_id"], ["content.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_content_id", "content", ["id"], unique=False)
    op.create_index("idx_content_type", "content", ["content_type"], unique=False)
    op.create_index("idx_content_parent", "content", ["parent_id"], unique=False)
    op.create_index("idx_content_author", "content", ["author_id"], unique=False)

    op.create_table(
        "terms",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("taxonomy", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_terms_id", "terms", ["id"], unique=False)
    op.create_index("ix_terms_taxonomy", "terms", ["taxonomy"], unique=False)

    op.create_table(
        "content_terms",
        sa.Column("content_id", sa.Integer(), nullable=False),
        sa.Column("term_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["content_id"], ["content.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["term_id"], ["terms.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("content_id", "term_id"),
    )

    op.create_table(
        "taxonomy_object_types",
        sa.Column("taxonomy", sa.String(length=32), nullable=False),
        sa.Column("content_type", sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint("taxonomy", "content_type"),
    )

    op.create_table(
        "access_grants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("content_key", sa.String(length=64), nullable=False),
        sa.Column("ids", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "content_key", name="uq_access_grant_user_key"),
    )
    op.create_index("ix_access_grants_id", "access_grants", ["id"], unique=False)
    op.create_index("ix_access_grants_user_id", "access_grants", ["user_id"], unique=False)

    op.create_table(
        "access_schedules",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "access_templates",
        sa.Column("id", sa.String(length=40), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("content", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("modified_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "access_logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("time", sa.DateTime(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("user_login", sa.String(), nullable=False),
        sa.Column("content_id", sa.Integer(), nullable=False),
        sa.Column("content_title", sa.String(), nullable=False),
        sa.Column("ip", sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_access_logs_id", "access_logs", ["id"], unique=False)
    op.create_index("ix_access_logs_time", "access_logs", ["time"], unique=False)

    op.create_table(
        "restriction_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("restriction_settings")
    op.drop_index("ix_access_logs_time", table_name="access_logs")
    op.drop_index("ix_access_logs_id", table_name="access_logs")
    op.drop_table("access_logs")
    op.drop_table("access_templates")
    op.drop_table("access_schedules")
    op.drop_index("ix_access_grants_user_id", table_name="access_grants")
    op.drop_index("ix_access_grants_id", table_name="access_grants")
    op.drop_table("access_grants")
    op.drop_table("taxonomy_object_types")
    op.drop_table("content_terms")
    op.drop_index("ix_terms_taxonomy", table_name="terms")
    op.drop_index("ix_terms_id", table_name="terms")
    op.drop_table("terms")
    op.drop_index("idx_content_author", table_name="content")
    op.drop_index("idx_content_parent", table_name="content")
    op.drop_index("idx_content_type", table_name="content")
    op.drop_index("ix_content_id", table_name="content")
    op.drop_table("content")
    content_status.drop(op.get_bind(), checkfirst=True)
    op.drop_table("user_roles")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
    op.drop_index("ix_roles_id", table_name="roles")
    op.drop_table("roles")
