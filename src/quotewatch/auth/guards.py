"""Authorization chain as composable FastAPI dependencies.

get_current_user
    token (cookie, then Bearer) -> verify -> reload the user from the store
    -> attach to request.state.user. The store is authoritative: premium
    status is never taken from token claims.
get_optional_user
    Same, but any failure yields None instead of a 401.
require_premium / check_favorites_quota
    Policy gates that run after get_current_user.
"""
import logging
from typing import Annotated

from fastapi import Depends, Request

from quotewatch.auth.transport import extract_token
from quotewatch.db.models import User
from quotewatch.deps import (CredentialStoreDep, FavoriteStoreDep, SettingsDep,
                             TokenServiceDep)
from quotewatch.errors import (AuthError, MissingTokenError,
                               PremiumRequiredError, QuotaExceededError,
                               UserNotFoundError)
from quotewatch.schemas import QuotaInfo

logger = logging.getLogger(__name__)


def get_current_user(
    request: Request,
    settings: SettingsDep,
    tokens: TokenServiceDep,
    credentials: CredentialStoreDep,
) -> User:
    token = extract_token(request, settings.cookie_name)
    if not token:
        raise MissingTokenError()
    try:
        claims = tokens.verify(token)
    except AuthError as e:
        logger.info("Rejected token on %s: %s", request.url.path, type(e).__name__)
        raise
    user = credentials.find_by_id(claims.user_id)
    if user is None:
        logger.info("Token for missing user %s on %s", claims.user_id, request.url.path)
        raise UserNotFoundError()
    request.state.user = user
    return user


def get_optional_user(
    request: Request,
    settings: SettingsDep,
    tokens: TokenServiceDep,
    credentials: CredentialStoreDep,
) -> User | None:
    try:
        return get_current_user(request, settings, tokens, credentials)
    except AuthError:
        request.state.user = None
        return None


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]


def require_premium(user: CurrentUser) -> User:
    if not user.is_premium:
        logger.info("User %s denied premium resource", user.id)
        raise PremiumRequiredError()
    return user


def check_favorites_quota(
    request: Request,
    user: CurrentUser,
    favorites: FavoriteStoreDep,
    settings: SettingsDep,
) -> QuotaInfo:
    """Enforce the free-tier favorites limit; premium accounts are unlimited."""
    if user.is_premium:
        info = QuotaInfo(current_count=favorites.count(user.id))
    else:
        limit = settings.free_favorites_limit
        current = favorites.count(user.id)
        if current >= limit:
            logger.info("User %s reached favorites quota (%s/%s)", user.id, current, limit)
            raise QuotaExceededError(current_count=current, limit=limit)
        info = QuotaInfo(current_count=current, limit=limit, remaining=limit - current)
    request.state.favorites_quota = info
    return info


PremiumUser = Annotated[User, Depends(require_premium)]
FavoritesQuota = Annotated[QuotaInfo, Depends(check_favorites_quota)]
