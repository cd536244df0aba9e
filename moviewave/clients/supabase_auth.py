"""
Thin async wrapper around the Supabase auth (GoTrue) REST API.

All calls use the service role key; user-scoped calls additionally pass the
user's access token. Failures are raised as AuthPlatformError carrying a
closed AuthErrorKind so callers never inspect message text.
"""

import enum
import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class AuthErrorKind(str, enum.Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_TOKEN = "invalid_token"
    USER_EXISTS = "user_exists"
    WEAK_PASSWORD = "weak_password"
    REJECTED = "rejected"
    UNAVAILABLE = "unavailable"


class AuthPlatformError(Exception):
    def __init__(self, kind: AuthErrorKind, detail: str = "", status_code: Optional[int] = None):
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)
        self.kind = kind
        self.detail = detail
        self.status_code = status_code


USER_EXISTS_CODES = {"user_already_exists", "email_exists"}
INVALID_CREDENTIALS_CODES = {"invalid_credentials", "invalid_grant", "email_not_confirmed"}
INVALID_TOKEN_CODES = {"bad_jwt", "session_not_found", "user_not_found", "no_authorization"}


def classify_error(status_code: int, error_code: Optional[str], operation: str) -> AuthErrorKind:
    if status_code >= 500:
        return AuthErrorKind.UNAVAILABLE
    if error_code in USER_EXISTS_CODES:
        return AuthErrorKind.USER_EXISTS
    if error_code == "weak_password":
        return AuthErrorKind.WEAK_PASSWORD
    if operation == "sign_in" and (status_code in (400, 401) or error_code in INVALID_CREDENTIALS_CODES):
        return AuthErrorKind.INVALID_CREDENTIALS
    if operation == "get_user" and (status_code in (401, 403) or error_code in INVALID_TOKEN_CODES):
        return AuthErrorKind.INVALID_TOKEN
    return AuthErrorKind.REJECTED


class SupabaseAuthClient:
    AUTH_PATH = "/auth/v1"
    ADMIN_PAGE_SIZE = 1000

    def __init__(self, http: httpx.AsyncClient, supabase_url: str, service_role_key: str):
        self.http = http
        self.base_url = supabase_url.rstrip("/") + self.AUTH_PATH
        self.service_role_key = service_role_key

    def _headers(self, access_token: Optional[str] = None) -> Dict[str, str]:
        return {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {access_token or self.service_role_key}",
        }

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        access_token: Optional[str] = None,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        try:
            response = await self.http.request(
                method, f"{self.base_url}{path}", headers=self._headers(access_token), **kwargs
            )
        except httpx.HTTPError as exc:
            logger.error(f"Auth platform unreachable during {operation}: {exc}")
            raise AuthPlatformError(AuthErrorKind.UNAVAILABLE, str(exc)) from exc

        if response.is_success:
            return response.json() if response.content else {}

        try:
            body = response.json()
        except ValueError:
            body = {}
        error_code = body.get("error_code") or body.get("error")
        detail = body.get("msg") or body.get("error_description") or body.get("message") or response.text
        kind = classify_error(response.status_code, error_code, operation)
        logger.warning(
            f"Auth platform rejected {operation} ({response.status_code})",
            extra={"kind": kind.value, "status_code": response.status_code},
        )
        raise AuthPlatformError(kind, detail, response.status_code)

    async def sign_up(self, email: str, password: str, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Returns {"user": ..., "session": ... | None}.
        With email confirmation enabled the platform answers with a bare user.
        """
        body = await self._request(
            "sign_up", "POST", "/signup",
            json={"email": email, "password": password, "data": metadata or {}},
        )
        if "user" in body:
            session = body if body.get("access_token") else None
            return {"user": body["user"], "session": session}
        return {"user": body, "session": None}

    async def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        body = await self._request(
            "sign_in", "POST", "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return {"user": body.get("user"), "session": body}

    async def get_user(self, access_token: str) -> Dict[str, Any]:
        return await self._request("get_user", "GET", "/user", access_token=access_token)

    async def admin_update_user_by_id(self, user_id: str, attributes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("admin_update_user", "PUT", f"/admin/users/{user_id}", json=attributes)

    async def admin_list_users(self, page: int = 1, per_page: int = ADMIN_PAGE_SIZE) -> List[Dict[str, Any]]:
        body = await self._request(
            "admin_list_users", "GET", "/admin/users",
            params={"page": page, "per_page": per_page},
        )
        return body.get("users", [])

    async def admin_find_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Walk the admin user listing page by page until the email is found."""
        wanted = email.strip().lower()
        page = 1
        while True:
            users = await self.admin_list_users(page=page)
            for user in users:
                if (user.get("email") or "").lower() == wanted:
                    return user
            if len(users) < self.ADMIN_PAGE_SIZE:
                return None
            page += 1
