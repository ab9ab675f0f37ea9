"""Favorites store: per-user followed symbols."""
import logging

from sqlalchemy import delete, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, func, select

from quotewatch.db.models import Favorite
from quotewatch.errors import DuplicateFavoriteError

logger = logging.getLogger(__name__)


class FavoriteStore:
    """Favorites persistence over one request-scoped session.

    `(user_id, symbol)` is unique at the table level; a lost insert race
    surfaces as DuplicateFavoriteError.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, user_id: int, symbol: str, company_name: str) -> Favorite:
        symbol = symbol.upper()
        if self.is_favorite(user_id, symbol):
            raise DuplicateFavoriteError()
        favorite = Favorite(user_id=user_id, symbol=symbol, company_name=company_name)
        self._session.add(favorite)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise DuplicateFavoriteError() from e
        self._session.refresh(favorite)
        logger.debug("User %s added favorite %s", user_id, symbol)
        return favorite

    def remove(self, user_id: int, symbol: str) -> bool:
        """Remove one favorite; False if it was not there."""
        result = self._session.exec(
            delete(Favorite).where(
                Favorite.user_id == user_id, Favorite.symbol == symbol.upper()
            )
        )
        self._session.commit()
        return result.rowcount > 0

    def remove_all(self, user_id: int) -> int:
        result = self._session.exec(delete(Favorite).where(Favorite.user_id == user_id))
        self._session.commit()
        return result.rowcount

    def list_for_user(self, user_id: int) -> list[Favorite]:
        """Newest first."""
        return list(
            self._session.exec(
                select(Favorite)
                .where(Favorite.user_id == user_id)
                .order_by(col(Favorite.added_at).desc(), col(Favorite.id).desc())
            ).all()
        )

    def is_favorite(self, user_id: int, symbol: str) -> bool:
        return (
            self._session.exec(
                select(Favorite.id).where(
                    Favorite.user_id == user_id, Favorite.symbol == symbol.upper()
                )
            ).first()
            is not None
        )

    def count(self, user_id: int) -> int:
        return int(
            self._session.exec(
                select(func.count()).select_from(Favorite).where(Favorite.user_id == user_id)
            ).one()
        )

    def search(self, user_id: int, term: str) -> list[Favorite]:
        """Case-insensitive substring match on symbol or company name."""
        pattern = f"%{term.lower()}%"
        return list(
            self._session.exec(
                select(Favorite)
                .where(
                    Favorite.user_id == user_id,
                    or_(
                        func.lower(Favorite.symbol).like(pattern),
                        func.lower(Favorite.company_name).like(pattern),
                    ),
                )
                .order_by(col(Favorite.added_at).desc(), col(Favorite.id).desc())
            ).all()
        )
