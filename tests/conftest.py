"""Shared fixtures: an app on in-memory SQLite with a fake quote provider.

Nothing here touches the network or a real database.
"""
from datetime import datetime, timedelta
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from quotewatch.config import RateLimit, Settings
from quotewatch.db.sessions import create_db_engine, init_db
from quotewatch.main import create_app
from quotewatch.providers import StockProviderABC
from quotewatch.schemas import CompanyProfile, StockQuote

PASSWORD = "secret123"


class FakeStockProvider(StockProviderABC):
    """In-memory quote source with a fixed price table."""

    PRICES = {"AAPL": 190.12, "MSFT": 410.5, "NVDA": 120.0}
    NAMES = {"AAPL": "Apple Inc.", "MSFT": "Microsoft Corporation", "NVDA": "NVIDIA Corporation"}

    def __init__(self) -> None:
        self.closed = False

    async def get_quote(self, symbol: str) -> StockQuote:
        if symbol not in self.PRICES:
            raise ValueError(f"Stock '{symbol}' not found or has no price data")
        return StockQuote(symbol=symbol, value=self.PRICES[symbol], metadata={"provider": "fake"})

    async def get_profile(self, symbol: str) -> CompanyProfile:
        if symbol not in self.NAMES:
            raise ValueError(f"Stock '{symbol}' not found")
        return CompanyProfile(symbol=symbol, name=self.NAMES[symbol])

    async def get_overview_quotes(self) -> list[StockQuote]:
        return [await self.get_quote(s) for s in self.PRICES]

    async def get_history(
        self, symbol: str, start: datetime, end: datetime
    ) -> list[StockQuote]:
        price = (await self.get_quote(symbol)).value
        return [
            StockQuote(symbol=symbol, value=price - i, timestamp=end - timedelta(days=i))
            for i in range(3)
        ]

    async def close(self) -> None:
        self.closed = True


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "jwt_secret": "test-secret",
        "database_url": "sqlite://",
        "bcrypt_rounds": 4,
        "login_rate_limit": RateLimit(count=1000, window_seconds=900),
        "register_rate_limit": RateLimit(count=1000, window_seconds=3600),
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def provider() -> FakeStockProvider:
    return FakeStockProvider()


@pytest.fixture
def app(settings, engine, provider):
    return create_app(settings, engine=engine, quote_provider=provider)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def registration(email: str = "jane@example.com", **overrides: Any) -> dict[str, Any]:
    body = {
        "email": email,
        "password": PASSWORD,
        "confirmPassword": PASSWORD,
        "firstName": "Jane",
        "lastName": "Doe",
    }
    body.update(overrides)
    return body


def register(client: TestClient, email: str = "jane@example.com", **overrides: Any) -> dict[str, Any]:
    """Register through the API (leaves the session cookie on `client`) and return the user."""
    response = client.post("/api/auth/register", json=registration(email, **overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]["user"]


@pytest.fixture
def registered(client) -> dict[str, Any]:
    return register(client)
