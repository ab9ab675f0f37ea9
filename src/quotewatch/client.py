"""Python client for the quotewatch API.

AuthClient keeps the session cookie in its httpx client, so one instance
represents one signed-in (or anonymous) session.

Example:
    with AuthClient("http://localhost:8000") as client:
        client.sign_in_with_password("me@example.com", "secret123")
        print(client.get_session().user)
        client.add_favorite("AAPL", "Apple Inc.")
"""
from dataclasses import dataclass
from typing import Any

import httpx


class ApiError(Exception):
    """Non-2xx API response, carrying the `{success: false, error}` body."""

    def __init__(self, status_code: int, body: dict[str, Any]) -> None:
        self.status_code = status_code
        self.body = body
        self.message = body.get("error") or f"HTTP {status_code}"
        super().__init__(f"{status_code}: {self.message}")

    @property
    def premium_required(self) -> bool:
        return bool(self.body.get("premium_required"))


@dataclass
class Session:
    """Snapshot of the server-side view of this client's session."""

    authenticated: bool
    user: dict[str, Any] | None = None


class AuthClient:
    """Explicit client for account and favorites operations."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        timeout: float = 30.0,
        http: httpx.Client | None = None,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def __enter__(self) -> "AuthClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        response = self._http.request(method, path, **kwargs)
        try:
            body = response.json()
        except ValueError:
            body = {"success": False, "error": response.text}
        if response.is_error:
            raise ApiError(response.status_code, body)
        return body

    def sign_up(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        *,
        confirm_password: str | None = None,
    ) -> dict[str, Any]:
        """Register and start a session. Returns the sanitized user."""
        body = self._request(
            "POST",
            "/api/auth/register",
            json={
                "email": email,
                "password": password,
                "confirmPassword": password if confirm_password is None else confirm_password,
                "firstName": first_name,
                "lastName": last_name,
            },
        )
        return body["data"]["user"]

    def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        """Log in and start a session. Returns the sanitized user."""
        body = self._request(
            "POST", "/api/auth/login", json={"email": email, "password": password}
        )
        return body["data"]["user"]

    def sign_out(self) -> None:
        self._request("POST", "/api/auth/logout")
        self._http.cookies.clear()

    def get_session(self) -> Session:
        """Ask the server whether this client is authenticated. Never raises on auth failure."""
        body = self._request("GET", "/api/auth/status")
        data = body.get("data") or {}
        return Session(authenticated=bool(body.get("authenticated")), user=data.get("user"))

    def list_favorites(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/favorites")["data"]

    def add_favorite(self, symbol: str, company_name: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/api/favorites",
            json={"symbol": symbol, "company_name": company_name},
        )

    def remove_favorite(self, symbol: str) -> None:
        self._request("DELETE", f"/api/favorites/{symbol}")

    def upgrade_premium(self) -> dict[str, Any]:
        return self._request("POST", "/api/user/upgrade-premium")["data"]

    def downgrade_premium(self) -> dict[str, Any]:
        return self._request("POST", "/api/user/downgrade-premium")["data"]

    def get_quote(self, symbol: str) -> dict[str, Any]:
        return self._request("GET", f"/api/stocks/{symbol}")

    def health(self) -> dict[str, Any]:
        return self._request("GET", "/api/health")
