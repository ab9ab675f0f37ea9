"""Stock quote providers.

The quote source is an external collaborator: the rest of the app only talks
to StockProviderABC. YFinanceProvider is the default implementation.

Example:
    async with YFinanceProvider() as provider:
        quote = await provider.get_quote("AAPL")
        print(f"{quote.symbol}: ${quote.value}")
"""
from quotewatch.providers.core import ProviderErrorMapper, StockProviderABC
from quotewatch.providers.yfinance import YFinanceProvider

__all__ = ["ProviderErrorMapper", "StockProviderABC", "YFinanceProvider"]
