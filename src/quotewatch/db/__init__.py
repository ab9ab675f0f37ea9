"""Database package: models and session management."""
from quotewatch.db.models import Favorite, User

__all__ = ["Favorite", "User"]
