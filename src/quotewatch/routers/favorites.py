"""Favorites routes. Every route requires an authenticated user."""
import logging
from typing import Any

from fastapi import APIRouter, Query, status

from quotewatch.auth.guards import CurrentUser, FavoritesQuota
from quotewatch.deps import FavoriteStoreDep, SettingsDep
from quotewatch.errors import NotFoundError, ValidationError
from quotewatch.schemas import AddFavoriteRequest
from quotewatch.schemas.favorites import favorite_to_dict
from quotewatch.utils import sanitize_string
from quotewatch.validation import validate_company_name, validate_stock_symbol

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/favorites", tags=["favorites"])


def _clean_symbol(raw: str | None) -> str:
    symbol = sanitize_string(raw).upper()
    errors = validate_stock_symbol(symbol)
    if errors:
        raise ValidationError(errors)
    return symbol


@router.get("")
def list_favorites(user: CurrentUser, favorites: FavoriteStoreDep) -> dict[str, Any]:
    items = [favorite_to_dict(f) for f in favorites.list_for_user(user.id)]
    return {"success": True, "data": items, "count": len(items)}


@router.post("", status_code=status.HTTP_201_CREATED)
def add_favorite(
    body: AddFavoriteRequest,
    user: CurrentUser,
    quota: FavoritesQuota,
    favorites: FavoriteStoreDep,
) -> dict[str, Any]:
    symbol = _clean_symbol(body.symbol)
    company_name = sanitize_string(body.company_name)
    errors = validate_company_name(company_name)
    if errors:
        raise ValidationError(errors)

    favorite = favorites.add(user.id, symbol, company_name)
    return {
        "success": True,
        "message": "Added to favorites",
        "data": favorite_to_dict(favorite),
        "favorites_info": quota.model_dump(),
    }


@router.get("/search")
def search_favorites(
    user: CurrentUser,
    favorites: FavoriteStoreDep,
    q: str = Query(default=""),
) -> dict[str, Any]:
    term = sanitize_string(q)
    if not term:
        raise ValidationError(["Search term is required"])
    items = [favorite_to_dict(f) for f in favorites.search(user.id, term)]
    return {"success": True, "data": items, "count": len(items), "search_term": term}


@router.get("/stats")
def favorites_stats(
    user: CurrentUser,
    favorites: FavoriteStoreDep,
    settings: SettingsDep,
) -> dict[str, Any]:
    items = favorites.list_for_user(user.id)
    count = len(items)
    limit = None if user.is_premium else settings.free_favorites_limit
    return {
        "success": True,
        "data": {
            "total_count": count,
            "limit": limit,
            "remaining": None if limit is None else max(0, limit - count),
            "oldest_favorite": favorite_to_dict(items[-1]) if items else None,
            "newest_favorite": favorite_to_dict(items[0]) if items else None,
            "is_premium": user.is_premium,
        },
    }


@router.delete("")
def clear_favorites(user: CurrentUser, favorites: FavoriteStoreDep) -> dict[str, Any]:
    removed = favorites.remove_all(user.id)
    logger.info("User %s cleared %s favorites", user.id, removed)
    return {
        "success": True,
        "message": f"{removed} favorites removed",
        "removed_count": removed,
    }


@router.get("/{symbol}/check")
def check_favorite(
    symbol: str, user: CurrentUser, favorites: FavoriteStoreDep
) -> dict[str, Any]:
    symbol = _clean_symbol(symbol)
    return {
        "success": True,
        "data": {"symbol": symbol, "is_favorite": favorites.is_favorite(user.id, symbol)},
    }


@router.delete("/{symbol}")
def remove_favorite(
    symbol: str, user: CurrentUser, favorites: FavoriteStoreDep
) -> dict[str, Any]:
    symbol = _clean_symbol(symbol)
    if not favorites.remove(user.id, symbol):
        raise NotFoundError("Stock not found in your favorites")
    return {"success": True, "message": "Removed from favorites"}
