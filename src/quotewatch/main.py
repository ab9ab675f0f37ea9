"""Main module for the quotewatch API service."""
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from quotewatch.auth.passwords import build_password_context
from quotewatch.auth.rate_limit import SlidingWindowRateLimiter
from quotewatch.auth.tokens import TokenService
from quotewatch.config import ConfigError, Settings, get_settings
from quotewatch.db.sessions import create_db_engine, init_db
from quotewatch.errors import register_exception_handlers
from quotewatch.providers import StockProviderABC, YFinanceProvider
from quotewatch.routers import (auth_router, favorites_router, health_router,
                                stocks_router, user_router)
from quotewatch.services import QuoteService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Create tables at startup; release the provider and the pool on shutdown."""
    settings: Settings = fastapi_app.state.settings
    engine: Engine = fastapi_app.state.engine
    init_db(engine)
    logger.info(
        "quotewatch started (database=%s, token lifetime=%s, production=%s)",
        engine.url.render_as_string(hide_password=True),
        settings.jwt_lifetime,
        settings.is_production,
    )

    yield

    try:
        await fastapi_app.state.quote_service.close()
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Error closing quote provider: %s", exc)
    if fastapi_app.state.owns_engine:
        engine.dispose()


def create_app(
    settings: Settings | None = None,
    *,
    engine: Engine | None = None,
    quote_provider: StockProviderABC | None = None,
) -> FastAPI:
    """Composition root: build singletons and attach them to app.state.

    Raises:
        ConfigError: When settings come from the environment and JWT_SECRET is unset.
    """
    if settings is None:
        settings = get_settings()
        configure_logging(settings.log_level)

    app = FastAPI(
        title="quotewatch",
        description="Stock quotes with user accounts, favorites and a premium tier",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.owns_engine = engine is None
    app.state.engine = engine or create_db_engine(
        settings.database_url, echo=settings.sql_echo
    )
    app.state.pwd_context = build_password_context(settings.bcrypt_rounds)
    app.state.token_service = TokenService(
        settings.jwt_secret,
        lifetime=settings.jwt_lifetime,
        issuer=settings.jwt_issuer,
        algorithm=settings.jwt_algorithm,
    )
    app.state.quote_service = QuoteService(
        quote_provider or YFinanceProvider(), timeout=settings.quote_timeout
    )
    app.state.login_limiter = SlidingWindowRateLimiter(settings.login_rate_limit)
    app.state.register_limiter = SlidingWindowRateLimiter(settings.register_rate_limit)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(favorites_router)
    app.include_router(stocks_router)
    app.include_router(health_router)

    return app


def _settings_or_exit() -> Settings:
    try:
        settings = get_settings()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    configure_logging(settings.log_level)
    return settings


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    _settings_or_exit()
    uvicorn.run("quotewatch.main:create_app", factory=True, host="127.0.0.1", port=8001)


def run_dev():
    """Run the development server with auto-reload."""
    _settings_or_exit()
    uvicorn.run(
        "quotewatch.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
