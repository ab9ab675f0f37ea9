"""Maps provider exceptions to HTTP responses."""
import asyncio
from dataclasses import dataclass

import httpx
from fastapi import HTTPException


@dataclass(frozen=True)
class ProviderErrorMapper:
    """Maps provider/backend exceptions to HTTP (status_code, detail)."""

    resource_name: str = "Resource"
    api_name: str = "API"

    def _not_found(self, symbol: str | None) -> str:
        if symbol is None:
            return f"{self.resource_name} not found"
        return f"{self.resource_name} '{symbol}' not found"

    def to_http(self, exc: Exception, symbol: str | None = None) -> tuple[int, str]:
        """Map a provider exception to (status_code, detail).

        Args:
            exc: The exception raised by the provider.
            symbol: Optional symbol to include in the detail (e.g. "AAPL").
        """
        if isinstance(exc, ValueError):
            detail = str(exc) or self._not_found(symbol)
            if symbol is not None and "not found" in detail.lower():
                detail = self._not_found(symbol)
            return (404, detail)
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            if status == 404:
                return (404, self._not_found(symbol))
            if status >= 500:
                return (502, f"{self.api_name} error")
            return (status, f"{self.api_name} error")
        if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
            if symbol is not None:
                return (504, f"Request to {self.api_name} timed out for '{symbol}'")
            return (504, "Request timed out")
        if isinstance(exc, NotImplementedError):
            return (501, str(exc) or "Not supported")
        if isinstance(exc, (KeyError, TypeError)):
            return (404, self._not_found(symbol))
        return (502, f"{self.api_name} error")

    def raise_http(self, exc: Exception, symbol: str | None = None) -> None:
        """Map provider exception to HTTP and raise HTTPException. Never returns."""
        status_code, detail = self.to_http(exc, symbol=symbol)
        raise HTTPException(status_code=status_code, detail=detail) from exc
