"""SQLAlchemy table definitions for the forum.

Core tables only; rows are mapped to the immutable domain models by hand in
``mappers``. They match the schema created by the Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    MetaData,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("username", String(30), nullable=False),
    Column("email", String(255), nullable=False),
    Column("password_hash", Text, nullable=False),
    Column("role", String(20), nullable=False, server_default="user"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("banned_until", TIMESTAMP(timezone=True), nullable=True),
    Column("profile_picture_url", Text, nullable=True),
    Column("bio", String(500), nullable=True),
    Column("major", String(100), nullable=True),
    Column("class_year", String(20), nullable=True),
    Column("location", String(100), nullable=True),
    Column("emplid", BigInteger, nullable=True),  # Student ID
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "role IN ('user', 'admin_level_1', 'admin_level_2')", name="ck_users_role"
    ),
)

Index("uq_users_username_lower", func.lower(users_table.c.username), unique=True)
Index("uq_users_email_lower", func.lower(users_table.c.email), unique=True)
Index("idx_users_is_active", users_table.c.is_active)

# ============================================================================
# THREADS TABLE
# ============================================================================
threads_table = Table(
    "threads",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("title", String(200), nullable=False),
    Column("content", Text, nullable=False),
    Column("category", String(100), nullable=False),
    Column(
        "author_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("likes", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"),
    Column("views", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "attachments", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "status IN ('pending', 'approved', 'rejected')", name="ck_threads_status"
    ),
    CheckConstraint("views >= 0", name="ck_threads_views"),
    CheckConstraint("comment_count >= 0", name="ck_threads_comment_count"),
)

Index(
    "idx_threads_listing",
    threads_table.c.is_active,
    threads_table.c.status,
    threads_table.c.created_at.desc(),
)
Index("idx_threads_category", threads_table.c.category)
Index("idx_threads_author_id", threads_table.c.author_id)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("content", Text, nullable=False),
    Column(
        "author_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "thread_id",
        UUID(as_uuid=True),
        ForeignKey("threads.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "parent_comment_id",
        UUID(as_uuid=True),
        ForeignKey("comments.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("likes", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"),
    Column(
        "attachments", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "char_length(content) BETWEEN 1 AND 2000", name="ck_comments_content_length"
    ),
)

Index(
    "idx_comments_thread_created",
    comments_table.c.thread_id,
    comments_table.c.created_at,
)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# ATTACHMENTS TABLE (blob store)
# ============================================================================
attachments_table = Table(
    "attachments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("filename", String(255), nullable=False),
    Column("content_type", String(255), nullable=False),
    Column("size", BigInteger, nullable=False),
    Column("data", LargeBinary, nullable=False),
    Column(
        "uploaded_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)
