"""Pydantic schemas for API payloads and runtime use. Not persisted to DB."""
from quotewatch.schemas.account import (ChangePasswordRequest,
                                        DeleteAccountRequest, LoginRequest,
                                        ProfileUpdateRequest, RegisterRequest,
                                        UserOut)
from quotewatch.schemas.favorites import (AddFavoriteRequest, FavoriteOut,
                                          QuotaInfo)
from quotewatch.schemas.quotes import CompanyProfile, StockQuote

__all__ = [
    "AddFavoriteRequest",
    "ChangePasswordRequest",
    "CompanyProfile",
    "DeleteAccountRequest",
    "FavoriteOut",
    "LoginRequest",
    "ProfileUpdateRequest",
    "QuotaInfo",
    "RegisterRequest",
    "StockQuote",
    "UserOut",
]
