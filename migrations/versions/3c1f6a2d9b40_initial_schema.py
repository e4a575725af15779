"""initial_schema

Create the foundational schema for the deals marketplace:
- Categories (category and tag forest, keyed by path)
- Stores
- Users (one per external identity)
- Deals (identifier columns for poster, store, category, tags and voters)

Revision ID: 3c1f6a2d9b40
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f6a2d9b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE deal_status AS ENUM ('ACTIVE', 'EXPIRED', 'REMOVED');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # CATEGORIES table
    # ========================================================================
    op.create_table(
        "categories",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("path", sa.String(255), nullable=False),
        sa.Column("parent", sa.String(255), nullable=False),  # '/' for top level
        sa.Column("names", postgresql.JSONB(), nullable=False),
        sa.Column("icon", postgresql.JSONB(), nullable=True),
        sa.Column("is_tag", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("path", name="uq_category_path"),
    )
    op.create_index("idx_categories_parent", "categories", ["parent"])
    op.create_index(
        "idx_categories_tags",
        "categories",
        ["path"],
        postgresql_where=sa.text("is_tag"),
    )

    # ========================================================================
    # STORES table
    # ========================================================================
    op.create_table(
        "stores",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("logo", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_stores_name", "stores", ["name"])

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("uid", sa.String(128), nullable=False),  # external identity
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("nickname", sa.String(50), nullable=False),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("uid", name="uq_user_uid"),
    )
    op.create_index("idx_users_email", "users", ["email"])

    # ========================================================================
    # DEALS table
    # ========================================================================
    op.create_table(
        "deals",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("posted_by", sa.UUID(), nullable=False),
        sa.Column("store_id", sa.UUID(), nullable=False),
        sa.Column("category", sa.String(255), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("original_price", sa.Float(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("deal_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "upvoters",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "downvoters",
            postgresql.ARRAY(sa.UUID()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "status",
            postgresql.ENUM(
                "ACTIVE", "EXPIRED", "REMOVED", name="deal_status", create_type=False
            ),
            nullable=False,
            server_default="ACTIVE",
        ),
        sa.Column(
            "photos", postgresql.ARRAY(sa.Text()), nullable=False, server_default="{}"
        ),
        sa.Column("cover_photo", sa.Text(), nullable=True),
        sa.Column("deal_url", sa.Text(), nullable=True),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String(255)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["posted_by"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["store_id"], ["stores.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(
            ["category"], ["categories.path"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("original_price >= 0", name="original_price_non_negative"),
        sa.CheckConstraint("price >= 0", name="price_non_negative"),
        sa.CheckConstraint("views >= 0", name="views_non_negative"),
    )
    op.create_index(
        "idx_deals_category",
        "deals",
        ["category"],
        postgresql_ops={"category": "text_pattern_ops"},
    )
    op.create_index("idx_deals_store_created", "deals", ["store_id", "created_at"])
    op.create_index(
        "idx_deals_natural_key", "deals", ["posted_by", "store_id", "title"]
    )
    op.create_index("idx_deals_status_created", "deals", ["status", "created_at"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("deals")
    op.drop_table("users")
    op.drop_table("stores")
    op.drop_table("categories")
    op.execute("DROP TYPE IF EXISTS deal_status")
