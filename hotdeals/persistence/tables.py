"""SQLAlchemy table definitions for the deals marketplace.

These Core tables are used for manual row <-> model mapping.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# CATEGORIES TABLE (categories and tags share one forest)
# ============================================================================
categories_table = Table(
    "categories",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("path", String(255), nullable=False, unique=True),
    Column("parent", String(255), nullable=False),  # '/' for top level
    Column("names", JSONB, nullable=False),  # locale -> display name
    Column("icon", JSONB, nullable=True),  # {"ligature", "font_family"}
    Column("is_tag", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_categories_parent", categories_table.c.parent)
Index(
    "idx_categories_tags",
    categories_table.c.path,
    postgresql_where=categories_table.c.is_tag,
)

# ============================================================================
# STORES TABLE
# ============================================================================
stores_table = Table(
    "stores",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("name", String(100), nullable=False),
    Column("logo", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_stores_name", stores_table.c.name)

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("uid", String(128), nullable=False, unique=True),  # external identity
    Column("email", String(255), nullable=True),
    Column("nickname", String(50), nullable=False),
    Column("avatar", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=True),
)

Index("idx_users_email", users_table.c.email)

# ============================================================================
# DEALS TABLE
# ============================================================================
deals_table = Table(
    "deals",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "posted_by",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column(
        "store_id",
        UUID(as_uuid=True),
        ForeignKey("stores.id", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column(
        "category",
        String(255),
        ForeignKey("categories.path", ondelete="RESTRICT"),
        nullable=False,
    ),
    Column("title", String(300), nullable=False),
    Column("description", Text, nullable=False),
    Column("original_price", Float, nullable=False),
    Column("price", Float, nullable=False),
    Column("deal_score", Integer, nullable=False, server_default="0"),
    Column("upvoters", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"),
    Column(
        "downvoters", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"
    ),
    Column(
        "status",
        Enum("ACTIVE", "EXPIRED", "REMOVED", name="deal_status", create_type=False),
        nullable=False,
        server_default="ACTIVE",
    ),
    Column("photos", ARRAY(Text), nullable=False, server_default="{}"),
    Column("cover_photo", Text, nullable=True),
    Column("deal_url", Text, nullable=True),
    Column("tags", ARRAY(String(255)), nullable=False, server_default="{}"),
    Column("location", Text, nullable=True),
    Column("views", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("original_price >= 0", name="original_price_non_negative"),
    CheckConstraint("price >= 0", name="price_non_negative"),
    CheckConstraint("views >= 0", name="views_non_negative"),
)

Index(
    "idx_deals_category",
    deals_table.c.category,
    postgresql_ops={"category": "text_pattern_ops"},
)
Index("idx_deals_store_created", deals_table.c.store_id, deals_table.c.created_at)
Index(
    "idx_deals_natural_key",
    deals_table.c.posted_by,
    deals_table.c.store_id,
    deals_table.c.title,
)
Index("idx_deals_status_created", deals_table.c.status, deals_table.c.created_at)
