"""SQLAlchemy table definitions for the remote store."""

from sqlalchemy import (
    Column,
    Float,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

metadata = MetaData()

# ============================================================================
# PROFILES TABLE (one opaque progress blob per identity)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("user_id", String(80), primary_key=True),
    Column("email", String(255), nullable=False, server_default=""),
    Column("display_name", String(255), nullable=True),
    Column("xp_state", JSONB, nullable=False, server_default="{}"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_profiles_email", profiles_table.c.email)

# ============================================================================
# JOURNAL ENTRIES TABLE (append-only)
# ============================================================================
journal_entries_table = Table(
    "journal_entries",
    metadata,
    Column("id", String(80), primary_key=True),
    Column("user_id", String(80), nullable=False),
    Column("entry_date", String(10), nullable=False),  # YYYY-MM-DD
    Column("movie_id", Integer, nullable=False, server_default="0"),
    Column("movie_title", Text, nullable=False, server_default=""),
    Column("text", Text, nullable=False, server_default=""),
    Column("genre", String(80), nullable=True),
    Column("rating", Float, nullable=True),
    Column("poster_path", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_journal_entries_user_created",
    journal_entries_table.c.user_id,
    journal_entries_table.c.created_at.desc(),
)

# ============================================================================
# FOLLOWS TABLE (directed edges)
# ============================================================================
follows_table = Table(
    "follows",
    metadata,
    Column("follower_user_id", String(80), nullable=False),
    Column("followed_key", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("follower_user_id", "followed_key", name="pk_follows"),
)

Index("idx_follows_followed_key", follows_table.c.followed_key)

# ============================================================================
# REFERRAL INVITES TABLE (one code per owner)
# ============================================================================
referral_invites_table = Table(
    "referral_invites",
    metadata,
    Column("code", String(12), primary_key=True),
    Column("inviter_user_id", String(80), nullable=False, unique=True),
    Column("inviter_email", String(255), nullable=False, server_default=""),
    Column("claim_count", Integer, nullable=False, server_default="0"),
    Column("last_claim_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)
