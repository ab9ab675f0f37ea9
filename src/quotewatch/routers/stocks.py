"""Stock quote routes (Yahoo Finance via QuoteService).

Quotes are public; the caller's favorite flag is added when a valid session
is present. History is a premium feature.
"""
import logging
from typing import Any

from fastapi import APIRouter, Query
from fastapi.concurrency import run_in_threadpool

from quotewatch.auth.guards import OptionalUser, PremiumUser
from quotewatch.deps import FavoriteStoreDep, QuoteServiceDep

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/stocks", tags=["stocks"])


@router.get("/overview")
async def get_stocks_overview(quotes: QuoteServiceDep) -> dict[str, Any]:
    """Quotes for the provider's default set of top stocks."""
    data = await quotes.get_overview_quotes()
    return {"success": True, "data": [q.model_dump(mode="json") for q in data]}


@router.get("/{symbol}")
async def get_stock_quote(
    symbol: str,
    quotes: QuoteServiceDep,
    user: OptionalUser,
    favorites: FavoriteStoreDep,
) -> dict[str, Any]:
    """Current quote for a symbol (e.g. "AAPL").

    Anonymous callers get the quote only; authenticated callers also get
    `is_favorite`.
    """
    quote = await quotes.get_quote(symbol)
    body: dict[str, Any] = {"success": True, "data": quote.model_dump(mode="json")}
    if user is not None:
        body["is_favorite"] = await run_in_threadpool(
            favorites.is_favorite, user.id, quote.symbol
        )
    return body


@router.get("/{symbol}/profile")
async def get_stock_profile(symbol: str, quotes: QuoteServiceDep) -> dict[str, Any]:
    profile = await quotes.get_profile(symbol)
    return {"success": True, "data": profile.model_dump(mode="json")}


@router.get("/{symbol}/history")
async def get_stock_history(
    symbol: str,
    user: PremiumUser,
    quotes: QuoteServiceDep,
    days: int = Query(default=30, ge=1, le=365, description="Number of days of history"),
) -> dict[str, Any]:
    """Daily bars for the last `days` days. Premium accounts only."""
    data = await quotes.get_history(symbol, days)
    logger.debug("User %s fetched %s bars for %s", user.id, len(data), symbol)
    return {"success": True, "data": [q.model_dump(mode="json") for q in data]}
