"""Daily bar as read from a yfinance history frame."""
from datetime import datetime

from pydantic import BaseModel

from quotewatch.providers.core import round2
from quotewatch.schemas import StockQuote


class DailyBar(BaseModel):
    """One OHLCV row. `close` becomes the quote value; the rest goes into metadata."""

    symbol: str
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float | None = None

    def to_quote(self) -> StockQuote:
        return StockQuote(
            symbol=self.symbol,
            value=round2(self.close),
            volume=round2(self.volume) if self.volume else None,
            timestamp=self.timestamp,
            metadata={
                "open": round2(self.open),
                "high": round2(self.high),
                "low": round2(self.low),
                "provider": "yfinance",
            },
        )
