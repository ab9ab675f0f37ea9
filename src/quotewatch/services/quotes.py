"""Quote service: wraps the stock provider with timeouts and error mapping."""
import asyncio
from datetime import timedelta

import httpx

from quotewatch.providers.core import (ProviderErrorMapper, StockProviderABC,
                                       normalize_stock_symbol)
from quotewatch.schemas import CompanyProfile, StockQuote
from quotewatch.utils import utc_now

# Exceptions from providers we map to HTTP; all others propagate to the global handler.
_PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    ValueError,
    KeyError,
    TypeError,
    TimeoutError,
    OSError,
    NotImplementedError,
    asyncio.TimeoutError,
    httpx.HTTPStatusError,
)


class QuoteService:
    """Thin service over a StockProviderABC; maps provider errors to HTTP."""

    def __init__(
        self,
        provider: StockProviderABC,
        error_mapper: ProviderErrorMapper | None = None,
        *,
        timeout: float = 10.0,
    ) -> None:
        self._provider = provider
        self._error_mapper = error_mapper or ProviderErrorMapper(
            resource_name="Stock", api_name="Stocks API"
        )
        self._timeout = timeout

    async def get_quote(self, symbol: str) -> StockQuote:
        """Get current quote. Raises HTTPException on provider errors."""
        norm = normalize_stock_symbol(symbol)
        try:
            return await asyncio.wait_for(self._provider.get_quote(norm), self._timeout)
        except _PROVIDER_EXCEPTIONS as e:
            self._error_mapper.raise_http(e, symbol=norm)

    async def get_profile(self, symbol: str) -> CompanyProfile:
        norm = normalize_stock_symbol(symbol)
        try:
            return await asyncio.wait_for(self._provider.get_profile(norm), self._timeout)
        except _PROVIDER_EXCEPTIONS as e:
            self._error_mapper.raise_http(e, symbol=norm)

    async def get_overview_quotes(self) -> list[StockQuote]:
        try:
            return await asyncio.wait_for(
                self._provider.get_overview_quotes(), self._timeout
            )
        except _PROVIDER_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

    async def get_history(self, symbol: str, days: int) -> list[StockQuote]:
        """Daily bars for the last `days` days."""
        norm = normalize_stock_symbol(symbol)
        end = utc_now()
        start = end - timedelta(days=days)
        try:
            return await asyncio.wait_for(
                self._provider.get_history(norm, start, end), self._timeout
            )
        except _PROVIDER_EXCEPTIONS as e:
            self._error_mapper.raise_http(e, symbol=norm)

    async def close(self) -> None:
        await self._provider.close()
