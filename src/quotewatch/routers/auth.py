"""Account lifecycle routes: register, login, logout, status, verify."""
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status

from quotewatch.auth.guards import CurrentUser
from quotewatch.auth.rate_limit import rate_limited
from quotewatch.auth.transport import (clear_session_cookie, extract_token,
                                       set_session_cookie)
from quotewatch.deps import (CredentialStoreDep, SettingsDep,
                             TokenServiceDep)
from quotewatch.errors import (AuthError, InvalidCredentialsError,
                               ValidationError)
from quotewatch.schemas import LoginRequest, RegisterRequest
from quotewatch.schemas.account import sanitize_user
from quotewatch.utils import sanitize_string
from quotewatch.validation import validate_login, validate_registration

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])

login_limit = rate_limited(
    "login_limiter", "Too many login attempts. Try again in 15 minutes."
)
register_limit = rate_limited(
    "register_limiter", "Too many sign-up attempts. Try again in an hour."
)


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(register_limit)],
)
def register(
    body: RegisterRequest,
    response: Response,
    settings: SettingsDep,
    tokens: TokenServiceDep,
    credentials: CredentialStoreDep,
) -> dict[str, Any]:
    email = sanitize_string(body.email).lower()
    first_name = sanitize_string(body.first_name)
    last_name = sanitize_string(body.last_name)

    errors = validate_registration(
        email, body.password, body.confirm_password, first_name, last_name
    )
    if errors:
        raise ValidationError(errors)

    user = credentials.create(email, body.password, first_name, last_name)
    set_session_cookie(response, tokens.issue(user), settings)
    return {
        "success": True,
        "message": "Account created",
        "data": {"user": sanitize_user(user)},
    }


@router.post("/login", dependencies=[Depends(login_limit)])
def login(
    body: LoginRequest,
    response: Response,
    settings: SettingsDep,
    tokens: TokenServiceDep,
    credentials: CredentialStoreDep,
) -> dict[str, Any]:
    email = sanitize_string(body.email).lower()
    errors = validate_login(email, body.password)
    if errors:
        raise ValidationError(errors)

    # Unknown email and wrong password must be indistinguishable to the caller.
    user = credentials.authenticate(email, body.password)
    if user is None:
        logger.info("Failed login attempt")
        raise InvalidCredentialsError()

    set_session_cookie(response, tokens.issue(user), settings)
    logger.info("User %s logged in", user.id)
    return {
        "success": True,
        "message": "Logged in",
        "data": {"user": sanitize_user(user)},
    }


@router.post("/logout")
def logout(response: Response, settings: SettingsDep) -> dict[str, Any]:
    """Clear the session cookie. Tokens are stateless, so this is client-side only."""
    clear_session_cookie(response, settings)
    return {"success": True, "message": "Logged out"}


@router.get("/status")
def auth_status(
    request: Request,
    settings: SettingsDep,
    tokens: TokenServiceDep,
    credentials: CredentialStoreDep,
) -> dict[str, Any]:
    """Best-effort session check; never fails on a missing or bad token."""
    token = extract_token(request, settings.cookie_name)
    if not token:
        return {"success": True, "authenticated": False}
    try:
        claims = tokens.verify(token)
    except AuthError:
        return {"success": True, "authenticated": False}
    user = credentials.find_by_id(claims.user_id)
    if user is None:
        return {"success": True, "authenticated": False}
    return {
        "success": True,
        "authenticated": True,
        "data": {"user": sanitize_user(user)},
    }


@router.get("/verify")
def verify(user: CurrentUser) -> dict[str, Any]:
    return {"success": True, "data": {"user": sanitize_user(user)}}
