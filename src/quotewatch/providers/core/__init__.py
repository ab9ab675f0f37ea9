"""Core provider abstractions."""
from quotewatch.providers.core.error_mapper import ProviderErrorMapper
from quotewatch.providers.core.stock_provider_abc import StockProviderABC
from quotewatch.providers.core.utils import normalize_stock_symbol, round2

__all__ = [
    "ProviderErrorMapper",
    "StockProviderABC",
    "normalize_stock_symbol",
    "round2",
]
