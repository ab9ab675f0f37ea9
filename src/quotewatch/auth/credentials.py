"""Credential store: user records, password hashing and account mutations."""
import logging
from typing import Any

from passlib.context import CryptContext
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, func, select

from quotewatch.auth.passwords import get_password_hash, verify_password
from quotewatch.db.models import Favorite, User
from quotewatch.errors import DuplicateEmailError
from quotewatch.utils import utc_now

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    """User persistence over one request-scoped session.

    Emails are stored lowercased; uniqueness is enforced by the table's unique
    index, so concurrent registrations of the same address cannot both succeed.
    """

    def __init__(self, session: Session, pwd_context: CryptContext) -> None:
        self._session = session
        self._pwd_context = pwd_context

    def create(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> User:
        """Hash the password and insert the user. Raises DuplicateEmailError."""
        email = normalize_email(email)
        if self.email_exists(email):
            raise DuplicateEmailError()
        user = User(
            email=email,
            password_hash=get_password_hash(self._pwd_context, password),
            first_name=first_name,
            last_name=last_name,
        )
        self._session.add(user)
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise DuplicateEmailError() from e
        self._session.refresh(user)
        logger.info("Created user %s", user.id)
        return user

    def find_by_email(self, email: str) -> User | None:
        return self._session.exec(
            select(User).where(User.email == normalize_email(email))
        ).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self._session.get(User, user_id)

    def email_exists(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def verify_password(self, password: str, password_hash: str) -> bool:
        return verify_password(self._pwd_context, password, password_hash)

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user if `password` matches, else None.

        An unknown email still pays for one bcrypt verify, so response time
        does not reveal whether the account exists.
        """
        user = self.find_by_email(email)
        if user is None:
            self._pwd_context.dummy_verify()
            return None
        if not self.verify_password(password, user.password_hash):
            return None
        return user

    def update_profile(self, user: User, first_name: str, last_name: str) -> User:
        user.first_name = first_name
        user.last_name = last_name
        return self._save(user)

    def update_premium_status(self, user: User, is_premium: bool) -> User:
        user.is_premium = is_premium
        user = self._save(user)
        logger.info("User %s premium status set to %s", user.id, is_premium)
        return user

    def change_password(self, user: User, new_password: str) -> User:
        user.password_hash = get_password_hash(self._pwd_context, new_password)
        user = self._save(user)
        logger.info("User %s changed password", user.id)
        return user

    def delete(self, user: User) -> None:
        """Delete the user and their favorites in one transaction."""
        user_id = user.id
        self._session.exec(delete(Favorite).where(Favorite.user_id == user_id))
        self._session.delete(user)
        self._session.commit()
        logger.info("Deleted user %s", user_id)

    def get_stats(self, user: User) -> dict[str, Any]:
        count = self._session.exec(
            select(func.count()).select_from(Favorite).where(Favorite.user_id == user.id)
        ).one()
        return {"favorites_count": int(count), "member_since": user.created_at}

    def _save(self, user: User) -> User:
        user.updated_at = utc_now()
        self._session.add(user)
        self._session.commit()
        self._session.refresh(user)
        return user
