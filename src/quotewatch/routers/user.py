"""Account management routes. Every route requires an authenticated user."""
import logging
from typing import Any

from fastapi import APIRouter, Response

from quotewatch.auth.guards import CurrentUser
from quotewatch.auth.transport import clear_session_cookie
from quotewatch.deps import CredentialStoreDep, SettingsDep
from quotewatch.errors import InvalidCredentialsError, ValidationError
from quotewatch.schemas import (ChangePasswordRequest, DeleteAccountRequest,
                                ProfileUpdateRequest)
from quotewatch.schemas.account import sanitize_user
from quotewatch.utils import sanitize_string
from quotewatch.validation import validate_name, validate_password

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/profile")
def get_profile(user: CurrentUser) -> dict[str, Any]:
    return {"success": True, "data": sanitize_user(user)}


@router.put("/profile")
def update_profile(
    body: ProfileUpdateRequest,
    user: CurrentUser,
    credentials: CredentialStoreDep,
) -> dict[str, Any]:
    first_name = sanitize_string(body.first_name)
    last_name = sanitize_string(body.last_name)
    errors = validate_name(first_name, "First name") + validate_name(last_name, "Last name")
    if errors:
        raise ValidationError(errors)
    user = credentials.update_profile(user, first_name, last_name)
    return {"success": True, "message": "Profile updated", "data": sanitize_user(user)}


@router.put("/password")
def change_password(
    body: ChangePasswordRequest,
    user: CurrentUser,
    credentials: CredentialStoreDep,
) -> dict[str, Any]:
    if not credentials.verify_password(body.current_password or "", user.password_hash):
        raise InvalidCredentialsError("Current password is incorrect")
    errors = validate_password(body.new_password)
    if body.new_password != body.confirm_password:
        errors.append("Passwords do not match")
    if errors:
        raise ValidationError(errors)
    credentials.change_password(user, body.new_password)
    return {"success": True, "message": "Password changed"}


@router.get("/stats")
def get_stats(user: CurrentUser, credentials: CredentialStoreDep) -> dict[str, Any]:
    stats = credentials.get_stats(user)
    return {
        "success": True,
        "data": {
            "favorites_count": stats["favorites_count"],
            "member_since": stats["member_since"].isoformat(),
        },
    }


@router.post("/upgrade-premium")
def upgrade_premium(user: CurrentUser, credentials: CredentialStoreDep) -> dict[str, Any]:
    """Simulated upgrade: no payment is taken."""
    user = credentials.update_premium_status(user, True)
    return {"success": True, "message": "You are now Premium", "data": sanitize_user(user)}


@router.post("/downgrade-premium")
def downgrade_premium(user: CurrentUser, credentials: CredentialStoreDep) -> dict[str, Any]:
    user = credentials.update_premium_status(user, False)
    return {
        "success": True,
        "message": "Your account is back on the free plan",
        "data": sanitize_user(user),
    }


@router.delete("/account")
def delete_account(
    body: DeleteAccountRequest,
    response: Response,
    user: CurrentUser,
    credentials: CredentialStoreDep,
    settings: SettingsDep,
) -> dict[str, Any]:
    if not body.password:
        raise ValidationError(["Password is required to delete the account"])
    if not credentials.verify_password(body.password, user.password_hash):
        raise InvalidCredentialsError("Incorrect password")
    credentials.delete(user)
    clear_session_cookie(response, settings)
    return {"success": True, "message": "Account deleted"}
