"""Abstract base class for stock quote providers."""
from abc import ABC, abstractmethod
from datetime import datetime

from quotewatch.schemas import CompanyProfile, StockQuote


class StockProviderABC(ABC):
    """Base interface for the external quote source.

    The app only depends on this interface; the concrete provider is wired at
    startup and can be swapped (tests use an in-memory fake).
    """

    @abstractmethod
    async def get_quote(self, symbol: str) -> StockQuote:
        """Fetch the current quote for a symbol.

        Raises:
            ValueError: Unknown symbol or no price data.
        """

    @abstractmethod
    async def get_profile(self, symbol: str) -> CompanyProfile:
        """Fetch company profile data (name, sector, exchange) for a symbol."""

    @abstractmethod
    async def get_overview_quotes(self) -> list[StockQuote]:
        """Fetch quotes for the provider's default overview symbols."""

    async def get_history(
        self, symbol: str, start: datetime, end: datetime
    ) -> list[StockQuote]:
        """Fetch daily bars within a time range, ordered by timestamp.

        Default implementation raises NotImplementedError.
        """
        raise NotImplementedError("Historical data is not supported by this provider")

    async def close(self) -> None:
        """Clean up resources (connections, clients)."""

    async def __aenter__(self) -> "StockProviderABC":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.close()
