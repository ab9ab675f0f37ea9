"""Quote payloads returned by the stock provider."""
from datetime import datetime

from pydantic import BaseModel, Field

from quotewatch.utils import utc_now


class StockQuote(BaseModel):
    """Current (or historical bar) price for a stock symbol."""

    symbol: str
    value: float
    volume: float | None = None
    timestamp: datetime = Field(default_factory=utc_now)
    metadata: dict | None = None


class CompanyProfile(BaseModel):
    symbol: str
    name: str | None = None
    sector: str | None = None
    industry: str | None = None
    currency: str | None = None
    exchange: str | None = None
    website: str | None = None
