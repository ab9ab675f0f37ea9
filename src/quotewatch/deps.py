"""FastAPI dependency injection: app.state holds singletons; Depends() resolves them.

create_app() builds settings, the engine, the token service, the quote
service and the rate limiters once and attaches them to app.state; these
getters are used by Depends(). Database sessions are borrowed per request.
"""
from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlmodel import Session

from quotewatch.auth.credentials import CredentialStore
from quotewatch.auth.tokens import TokenService
from quotewatch.config import Settings
from quotewatch.db.sessions import session_scope
from quotewatch.services import FavoriteStore, QuoteService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session(request: Request) -> Generator[Session, None, None]:
    """Borrow a pooled session for the duration of the request."""
    with session_scope(request.app.state.engine) as session:
        yield session


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_quote_service(request: Request) -> QuoteService:
    return request.app.state.quote_service


SettingsDep = Annotated[Settings, Depends(get_settings)]
SessionDep = Annotated[Session, Depends(get_session)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
QuoteServiceDep = Annotated[QuoteService, Depends(get_quote_service)]


def get_credential_store(request: Request, session: SessionDep) -> CredentialStore:
    return CredentialStore(session, request.app.state.pwd_context)


def get_favorite_store(session: SessionDep) -> FavoriteStore:
    return FavoriteStore(session)


CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store)]
FavoriteStoreDep = Annotated[FavoriteStore, Depends(get_favorite_store)]
