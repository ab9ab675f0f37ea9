"""Account request bodies and the sanitized user projection.

Request fields are optional so that missing values reach the validators and
come back as one joined 400 message instead of a schema error.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(_CamelModel):
    email: str | None = None
    password: str | None = None
    confirm_password: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class LoginRequest(_CamelModel):
    email: str | None = None
    password: str | None = None


class ProfileUpdateRequest(_CamelModel):
    first_name: str | None = None
    last_name: str | None = None


class ChangePasswordRequest(_CamelModel):
    current_password: str | None = None
    new_password: str | None = None
    confirm_password: str | None = None


class DeleteAccountRequest(_CamelModel):
    password: str | None = None


class UserOut(_CamelModel):
    """What clients see of a user. Never carries the password hash."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    email: str
    first_name: str
    last_name: str
    is_premium: bool = Field(default=False)
    created_at: datetime
    updated_at: datetime | None = None


def sanitize_user(user: object) -> dict:
    """Serialize a User row to its public camelCase JSON shape."""
    return UserOut.model_validate(user).model_dump(mode="json", by_alias=True)
