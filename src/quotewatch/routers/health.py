"""Health check route."""
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from quotewatch.db.sessions import check_connection
from quotewatch.utils import utc_now

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health(request: Request) -> JSONResponse:
    """Report whether the store is reachable; 503 when it is not."""
    db_ok = check_connection(request.app.state.engine)
    body: dict[str, Any] = {
        "success": db_ok,
        "status": "healthy" if db_ok else "unhealthy",
        "timestamp": utc_now().isoformat(),
        "services": {"database": "connected" if db_ok else "disconnected"},
    }
    return JSONResponse(status_code=200 if db_ok else 503, content=body)
