"""Database models.

Only accounts and favorites are persisted. Quotes are fetched on demand from
the provider and never stored.
"""
from datetime import datetime

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from quotewatch.utils import utc_now


class User(SQLModel, table=True):
    """User account. `email` is stored lowercased so lookups are case-insensitive."""

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    is_premium: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Favorite(SQLModel, table=True):
    """A stock symbol a user follows. One row per (user, symbol)."""

    __tablename__ = "favorites"
    __table_args__ = (UniqueConstraint("user_id", "symbol", name="uq_favorites_user_symbol"),)

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    symbol: str = Field(max_length=10)
    company_name: str = Field(default="", max_length=255)
    added_at: datetime = Field(default_factory=utc_now)
