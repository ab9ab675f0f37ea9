"""Service layer: favorites persistence and quote-provider orchestration."""
from quotewatch.services.favorites import FavoriteStore
from quotewatch.services.quotes import QuoteService

__all__ = ["FavoriteStore", "QuoteService"]
