"""Yahoo Finance provider."""
from quotewatch.providers.yfinance.provider import YFinanceProvider

__all__ = ["YFinanceProvider"]
