"""Session transport: the token travels in an HttpOnly cookie or a Bearer header."""
from fastapi import Request, Response

from quotewatch.config import Settings

BEARER_PREFIX = "Bearer "


def extract_token(request: Request, cookie_name: str = "token") -> str | None:
    """Return the session token, or None.

    The cookie is consulted first; when it is present the Authorization
    header is ignored, even if it carries a different token or the cookie
    is empty.
    """
    if cookie_name in request.cookies:
        return request.cookies[cookie_name] or None
    header = request.headers.get("authorization", "")
    if header.startswith(BEARER_PREFIX):
        token = header[len(BEARER_PREFIX):].strip()
        return token or None
    return None


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=int(settings.jwt_lifetime.total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )
