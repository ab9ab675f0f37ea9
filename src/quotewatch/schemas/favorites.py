"""Favorites payloads."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AddFavoriteRequest(BaseModel):
    symbol: str | None = None
    company_name: str | None = None


class FavoriteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    symbol: str
    company_name: str
    added_at: datetime


class QuotaInfo(BaseModel):
    """Favorites budget for the current user; `limit` is None for premium accounts."""

    current_count: int
    limit: int | None = None
    remaining: int | None = None


def favorite_to_dict(favorite: object) -> dict:
    return FavoriteOut.model_validate(favorite).model_dump(mode="json")
