"""Application settings loaded from the environment (and an optional .env file)."""
import os
import re
from dataclasses import dataclass, field
from datetime import timedelta
from functools import lru_cache

from dotenv import load_dotenv

_DEFAULT_DATABASE_URL = "sqlite:///./quotewatch.db"
_DURATION_RE = re.compile(r"^\s*(\d+)\s*([dhms]?)\s*$")
_DURATION_UNITS = {"d": "days", "h": "hours", "m": "minutes", "s": "seconds", "": "seconds"}


class ConfigError(RuntimeError):
    """Raised when required configuration is missing or malformed."""


@dataclass(frozen=True)
class RateLimit:
    """A `count` per `window_seconds` budget for one source address."""

    count: int
    window_seconds: int

    @classmethod
    def parse(cls, raw: str) -> "RateLimit":
        """Parse `count/seconds`, e.g. `5/900`."""
        try:
            count, window = raw.split("/", 1)
            return cls(count=int(count), window_seconds=int(window))
        except ValueError as e:
            raise ConfigError(f"Invalid rate limit '{raw}' (expected count/seconds)") from e


def parse_duration(raw: str) -> timedelta:
    """Parse a lifetime such as `7d`, `12h`, `30m`, `45s` or a bare number of seconds."""
    match = _DURATION_RE.match(raw)
    if not match:
        raise ConfigError(f"Invalid duration '{raw}'")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got '{raw}'") from e


@dataclass(frozen=True)
class Settings:
    jwt_secret: str
    jwt_lifetime: timedelta = timedelta(days=7)
    jwt_issuer: str = "quotewatch"
    jwt_algorithm: str = "HS256"
    cookie_secret: str = ""
    cookie_name: str = "token"
    database_url: str = _DEFAULT_DATABASE_URL
    sql_echo: bool = False
    environment: str = "development"
    bcrypt_rounds: int = 12
    free_favorites_limit: int = 5
    login_rate_limit: RateLimit = RateLimit(count=5, window_seconds=15 * 60)
    register_rate_limit: RateLimit = RateLimit(count=3, window_seconds=60 * 60)
    quote_timeout: float = 10.0
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.jwt_secret or not self.jwt_secret.strip():
            raise ConfigError("JWT_SECRET must be set")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables. Raises ConfigError if JWT_SECRET is missing."""
        load_dotenv(override=False)
        origins = os.getenv("CORS_ORIGINS", "")
        return cls(
            jwt_secret=os.getenv("JWT_SECRET", ""),
            jwt_lifetime=parse_duration(os.getenv("JWT_EXPIRES_IN", "7d")),
            jwt_issuer=os.getenv("JWT_ISSUER", "quotewatch"),
            cookie_secret=os.getenv("COOKIE_SECRET", ""),
            database_url=os.getenv("DATABASE_URL", _DEFAULT_DATABASE_URL),
            sql_echo=os.getenv("SQL_ECHO", "0") == "1",
            environment=os.getenv("ENVIRONMENT", "development"),
            bcrypt_rounds=_get_int("BCRYPT_ROUNDS", 12),
            free_favorites_limit=_get_int("FREE_FAVORITES_LIMIT", 5),
            login_rate_limit=RateLimit.parse(os.getenv("LOGIN_RATE_LIMIT", "5/900")),
            register_rate_limit=RateLimit.parse(os.getenv("REGISTER_RATE_LIMIT", "3/3600")),
            quote_timeout=float(os.getenv("QUOTE_POLL_TIMEOUT", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        )


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, read once from the environment."""
    return Settings.from_env()
