"""Input validation for account and favorites payloads.

Each validator returns a list of messages; an empty list means valid.
"""
import re

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NAME_RE = re.compile(r"^[a-zA-ZÀ-ÿ\s\-']+$")
SYMBOL_RE = re.compile(r"^[A-Z.]+$")
PASSWORD_MIN = 6
# bcrypt only reads the first 72 bytes of a secret.
PASSWORD_MAX_BYTES = 72
NAME_MIN, NAME_MAX = 2, 50
SYMBOL_MAX = 10
COMPANY_NAME_MAX = 255


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_RE.match(email) is not None


def validate_password(password: str | None) -> list[str]:
    if not password:
        return ["Password is required"]
    errors = []
    if len(password) < PASSWORD_MIN:
        errors.append(f"Password must be at least {PASSWORD_MIN} characters")
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        errors.append(f"Password cannot exceed {PASSWORD_MAX_BYTES} bytes")
    if not (re.search(r"[a-zA-Z]", password) and re.search(r"\d", password)):
        errors.append("Password must contain at least one letter and one digit")
    return errors


def validate_name(name: str | None, field_name: str) -> list[str]:
    if not name or not isinstance(name, str):
        return [f"{field_name} is required"]
    name = name.strip()
    errors = []
    if len(name) < NAME_MIN:
        errors.append(f"{field_name} must be at least {NAME_MIN} characters")
    if len(name) > NAME_MAX:
        errors.append(f"{field_name} cannot exceed {NAME_MAX} characters")
    if not NAME_RE.match(name):
        errors.append(
            f"{field_name} may only contain letters, spaces, hyphens and apostrophes"
        )
    return errors


def validate_stock_symbol(symbol: str | None) -> list[str]:
    if not symbol or not isinstance(symbol, str):
        return ["Symbol is required"]
    symbol = symbol.strip().upper()
    errors = []
    if not 1 <= len(symbol) <= SYMBOL_MAX:
        errors.append(f"Symbol must be between 1 and {SYMBOL_MAX} characters")
    if not SYMBOL_RE.match(symbol):
        errors.append("Symbol may only contain letters and dots")
    return errors


def validate_company_name(company_name: str | None) -> list[str]:
    if not company_name:
        return ["Company name is required"]
    if len(company_name) > COMPANY_NAME_MAX:
        return [f"Company name cannot exceed {COMPANY_NAME_MAX} characters"]
    return []


def validate_registration(
    email: str | None,
    password: str | None,
    confirm_password: str | None,
    first_name: str | None,
    last_name: str | None,
) -> list[str]:
    errors = []
    if not is_valid_email(email):
        errors.append("Invalid email address")
    errors.extend(validate_password(password))
    if password != confirm_password:
        errors.append("Passwords do not match")
    errors.extend(validate_name(first_name, "First name"))
    errors.extend(validate_name(last_name, "Last name"))
    return errors


def validate_login(email: str | None, password: str | None) -> list[str]:
    errors = []
    if not is_valid_email(email):
        errors.append("Invalid email address")
    if not password:
        errors.append("Password is required")
    return errors
