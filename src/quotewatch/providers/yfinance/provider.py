"""Yahoo Finance quote provider for stocks."""
import asyncio
from datetime import datetime

import yfinance as yf

from quotewatch.providers.core import (StockProviderABC,
                                       normalize_stock_symbol, round2)
from quotewatch.providers.yfinance.models import DailyBar
from quotewatch.schemas import CompanyProfile, StockQuote
from quotewatch.utils import utc_now


class YFinanceProvider(StockProviderABC):
    """Stock quotes, profiles and daily history via Yahoo Finance.

    yfinance is synchronous, so every call runs in a worker thread.
    No API key required.
    """

    OVERVIEW_SYMBOLS = ("AAPL", "MSFT", "GOOGL", "AMZN", "NVDA")

    def _extract_price_volume(
        self, ticker: yf.Ticker, symbol: str
    ) -> tuple[float, float | None]:
        """Extract price and volume from ticker; raises if price unavailable."""
        info = getattr(ticker, "fast_info", None)
        if info and (price := info.get("lastPrice") or info.get("regularMarketPrice")):
            vol = info.get("lastVolume")
            return float(price), float(vol) if vol is not None else None
        full = ticker.info
        price = full.get("currentPrice") or full.get("regularMarketPrice")
        if price is None:
            raise ValueError(f"Stock '{symbol}' not found or has no price data")
        vol = full.get("volume")
        return float(price), float(vol) if vol is not None else None

    def _fetch_quote_sync(self, symbol: str) -> StockQuote:
        """Fetch a single quote synchronously (run in thread)."""
        ticker = yf.Ticker(symbol)
        try:
            price, volume = self._extract_price_volume(ticker, symbol)
        except ValueError:
            raise
        except Exception as e:
            raise ValueError(f"Failed to fetch quote for '{symbol}': {e}") from e
        return StockQuote(
            symbol=symbol,
            value=round2(price),
            volume=round2(volume),
            timestamp=utc_now(),
            metadata={"provider": "yfinance"},
        )

    def _fetch_profile_sync(self, symbol: str) -> CompanyProfile:
        try:
            info = yf.Ticker(symbol).info or {}
        except Exception as e:
            raise ValueError(f"Failed to fetch profile for '{symbol}': {e}") from e
        name = info.get("longName") or info.get("shortName")
        if not name:
            raise ValueError(f"Stock '{symbol}' not found")
        return CompanyProfile(
            symbol=symbol,
            name=name,
            sector=info.get("sector"),
            industry=info.get("industry"),
            currency=info.get("currency"),
            exchange=info.get("exchange"),
            website=info.get("website"),
        )

    async def get_quote(self, symbol: str) -> StockQuote:
        sym = normalize_stock_symbol(symbol)
        return await asyncio.to_thread(self._fetch_quote_sync, sym)

    async def get_profile(self, symbol: str) -> CompanyProfile:
        sym = normalize_stock_symbol(symbol)
        return await asyncio.to_thread(self._fetch_profile_sync, sym)

    async def get_overview_quotes(self) -> list[StockQuote]:
        """Fetch quotes for the overview symbols in parallel; failures are dropped."""
        results = await asyncio.gather(
            *[self.get_quote(s) for s in self.OVERVIEW_SYMBOLS],
            return_exceptions=True,
        )
        return [q for q in results if isinstance(q, StockQuote)]

    async def get_history(
        self, symbol: str, start: datetime, end: datetime
    ) -> list[StockQuote]:
        """Fetch daily bars for a stock."""
        sym = normalize_stock_symbol(symbol)
        try:
            df = await asyncio.to_thread(
                lambda: yf.Ticker(sym).history(start=start, end=end, interval="1d")
            )
        except Exception as e:
            raise ValueError(f"Failed to fetch history for '{sym}': {e}") from e
        # Rows with any NaN (halted sessions, partial days) are skipped.
        return [
            DailyBar(
                symbol=sym,
                timestamp=ts.to_pydatetime(),
                open=float(row["Open"]),
                high=float(row["High"]),
                low=float(row["Low"]),
                close=float(row["Close"]),
                volume=float(row["Volume"]),
            ).to_quote()
            for ts, row in df.iterrows()
            if not row.isna().any()
        ]
