"""Shared utilities."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def sanitize_string(value: object) -> str:
    """Trim and collapse internal whitespace; non-strings become ''."""
    if not isinstance(value, str):
        return ""
    return " ".join(value.split())
