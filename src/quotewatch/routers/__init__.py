"""API routers.

- /api/auth      account lifecycle (register, login, logout, status, verify)
- /api/user      profile, password, premium simulation, account deletion
- /api/favorites per-user favorites, quota-gated for free accounts
- /api/stocks    quote proxy; history is premium-only
- /api/health    liveness and store connectivity
"""
from quotewatch.routers.auth import router as auth_router
from quotewatch.routers.favorites import router as favorites_router
from quotewatch.routers.health import router as health_router
from quotewatch.routers.stocks import router as stocks_router
from quotewatch.routers.user import router as user_router

__all__ = [
    "auth_router",
    "favorites_router",
    "health_router",
    "stocks_router",
    "user_router",
]
