"""Password hashing (bcrypt via passlib)."""
from passlib.context import CryptContext

DEFAULT_ROUNDS = 12


def build_password_context(rounds: int = DEFAULT_ROUNDS) -> CryptContext:
    """bcrypt context with the given cost factor (12 is roughly 250ms per verify)."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def get_password_hash(pwd_context: CryptContext, password: str) -> str:
    return pwd_context.hash(password)


def verify_password(pwd_context: CryptContext, password: str, password_hash: str) -> bool:
    """Constant-time verify; a malformed or unknown hash counts as a mismatch."""
    if not password or not password_hash:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False
