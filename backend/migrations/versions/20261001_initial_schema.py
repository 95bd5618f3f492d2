"""Initial schema: profiles, sessions, invites and the inventory tree

Revision ID: 20261001_initial
Revises:
Create Date: 2026-10-01
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False),
        sa.Column("boss_id", sa.Integer(), nullable=True),
        sa.Column("theme", sa.String(length=8), nullable=False, server_default="dark"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("role IN ('boss', 'worker')", name="ck_profiles_role"),
        sa.CheckConstraint(
            "(role = 'worker' AND boss_id IS NOT NULL) OR (role = 'boss' AND boss_id IS NULL)",
            name="ck_profiles_boss_link",
        ),
        sa.ForeignKeyConstraint(["boss_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_profiles_boss_id", "profiles", ["boss_id"])

    op.create_table(
        "session_tokens",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("profile_id", sa.Integer(), nullable=False),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_revoked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("revoked_reason", sa.String(length=64), nullable=True),
        sa.ForeignKeyConstraint(["profile_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token_hash"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_session_tokens_profile_id", "session_tokens", ["profile_id"])

    op.create_table(
        "invites",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("boss_id", sa.Integer(), nullable=False),
        sa.Column("worker_email", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("accepted_profile_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["boss_id"], ["profiles.id"]),
        sa.ForeignKeyConstraint(["accepted_profile_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("boss_id", "worker_email", name="uq_invites_boss_email"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_invites_boss_id", "invites", ["boss_id"])
    op.create_index("ix_invites_worker_email", "invites", ["worker_email"])

    op.create_table(
        "main_categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["owner_id"], ["profiles.id"]),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_main_categories_owner_id", "main_categories", ["owner_id"])
    op.create_index("ix_main_categories_owner_name", "main_categories", ["owner_id", "name"])

    op.create_table(
        "sub_categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("main_category_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("buying_price_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("selling_price_cents", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("buying_price_cents >= 0", name="ck_sub_categories_buying_price"),
        sa.CheckConstraint("selling_price_cents >= 0", name="ck_sub_categories_selling_price"),
        sa.ForeignKeyConstraint(["main_category_id"], ["main_categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_sub_categories_main_category_id", "sub_categories", ["main_category_id"])

    op.create_table(
        "items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("sub_category_id", sa.Integer(), nullable=False),
        sa.Column("item_number", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False, server_default="available"),
        sa.Column("sold_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("item_number > 0", name="ck_items_item_number"),
        sa.CheckConstraint(
            "(status = 'sold' AND sold_date IS NOT NULL) OR (status = 'available' AND sold_date IS NULL)",
            name="ck_items_status_sold_date",
        ),
        sa.ForeignKeyConstraint(["sub_category_id"], ["sub_categories.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("sub_category_id", "item_number", name="uq_items_sub_category_number"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_items_sub_category_id", "items", ["sub_category_id"])
    op.create_index("ix_items_sold_date", "items", ["sold_date"])
    op.create_index("ix_items_sub_category_status", "items", ["sub_category_id", "status"])


def downgrade():
    op.drop_table("items")
    op.drop_table("sub_categories")
    op.drop_table("main_categories")
    op.drop_table("invites")
    op.drop_table("session_tokens")
    op.drop_table("profiles")
