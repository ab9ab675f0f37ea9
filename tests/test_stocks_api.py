"""Tests for /api/stocks and the provider error mapping behind it."""
import asyncio
import threading

import httpx
import pytest
from fastapi.testclient import TestClient

from quotewatch.main import create_app
from quotewatch.providers import ProviderErrorMapper
from quotewatch.services import FavoriteStore
from tests.conftest import make_settings


def test_quote_is_public(client: TestClient):
    response = client.get("/api/stocks/aapl")

    assert response.status_code == 200
    body = response.json()
    assert body["data"]["symbol"] == "AAPL"
    assert body["data"]["value"] == 190.12
    assert "is_favorite" not in body


def test_quote_flags_favorites_for_signed_in_users(client: TestClient, registered):
    assert client.get("/api/stocks/AAPL").json()["is_favorite"] is False

    client.post("/api/favorites", json={"symbol": "AAPL", "company_name": "Apple Inc."})
    assert client.get("/api/stocks/AAPL").json()["is_favorite"] is True


def test_quote_with_bad_token_is_still_served(client: TestClient):
    response = client.get("/api/stocks/AAPL", headers={"Authorization": "Bearer junk"})
    assert response.status_code == 200
    assert "is_favorite" not in response.json()


def test_unknown_symbol_is_404(client: TestClient):
    response = client.get("/api/stocks/ZZZZ")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Stock 'ZZZZ' not found"}


def test_overview_and_profile(client: TestClient):
    overview = client.get("/api/stocks/overview").json()["data"]
    assert [q["symbol"] for q in overview] == ["AAPL", "MSFT", "NVDA"]

    profile = client.get("/api/stocks/MSFT/profile").json()["data"]
    assert profile["name"] == "Microsoft Corporation"


def test_favorite_lookup_runs_off_the_event_loop(
    client: TestClient, registered, provider, monkeypatch: pytest.MonkeyPatch
):
    threads: dict[str, int] = {}
    original_quote = provider.get_quote
    original_is_favorite = FavoriteStore.is_favorite

    async def quote_on_loop(symbol: str):
        threads["loop"] = threading.get_ident()
        return await original_quote(symbol)

    def is_favorite_in_worker(self, user_id: int, symbol: str) -> bool:
        threads["lookup"] = threading.get_ident()
        return original_is_favorite(self, user_id, symbol)

    monkeypatch.setattr(provider, "get_quote", quote_on_loop)
    monkeypatch.setattr(FavoriteStore, "is_favorite", is_favorite_in_worker)

    response = client.get("/api/stocks/AAPL")

    assert response.json()["is_favorite"] is False
    assert threads["lookup"] != threads["loop"]


def test_history_requires_a_session(client: TestClient):
    assert client.get("/api/stocks/AAPL/history").status_code == 401


def test_history_for_premium_users(client: TestClient, registered):
    client.post("/api/user/upgrade-premium")

    response = client.get("/api/stocks/AAPL/history", params={"days": 5})
    assert response.status_code == 200
    assert len(response.json()["data"]) == 3

    assert client.get("/api/stocks/AAPL/history", params={"days": 0}).status_code == 400


def test_slow_provider_times_out(engine, provider, monkeypatch: pytest.MonkeyPatch):
    async def slow_quote(symbol: str):
        await asyncio.sleep(1)

    monkeypatch.setattr(provider, "get_quote", slow_quote)
    app = create_app(make_settings(quote_timeout=0.05), engine=engine, quote_provider=provider)

    with TestClient(app) as client:
        response = client.get("/api/stocks/AAPL")

    assert response.status_code == 504
    assert response.json()["error"] == "Request to Stocks API timed out for 'AAPL'"


def test_provider_is_closed_on_shutdown(app, provider):
    with TestClient(app):
        assert provider.closed is False
    assert provider.closed is True


def _status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://example.test/quote")
    return httpx.HTTPStatusError("boom", request=request, response=httpx.Response(code, request=request))


@pytest.mark.parametrize(
    "exc, expected",
    [
        (ValueError("Stock 'X' not found"), (404, "Stock 'X' not found")),
        (KeyError("price"), (404, "Stock 'X' not found")),
        (asyncio.TimeoutError(), (504, "Request to Stocks API timed out for 'X'")),
        (NotImplementedError("History not supported"), (501, "History not supported")),
        (_status_error(404), (404, "Stock 'X' not found")),
        (_status_error(503), (502, "Stocks API error")),
        (_status_error(429), (429, "Stocks API error")),
        (OSError("connection reset"), (502, "Stocks API error")),
    ],
)
def test_error_mapper(exc, expected):
    mapper = ProviderErrorMapper(resource_name="Stock", api_name="Stocks API")
    assert mapper.to_http(exc, symbol="X") == expected
