import logging
from typing import Any, Dict

from ..clients.supabase_auth import AuthErrorKind, AuthPlatformError, SupabaseAuthClient
from ..exceptions import Unauthorized, UpstreamFailure

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Turns a bearer token into the auth platform user it belongs to."""

    def __init__(self, auth_client: SupabaseAuthClient):
        self.auth_client = auth_client

    async def resolve_user(self, token: str) -> Dict[str, Any]:
        try:
            user = await self.auth_client.get_user(token)
        except AuthPlatformError as exc:
            if exc.kind == AuthErrorKind.UNAVAILABLE:
                raise UpstreamFailure("Authentication service unavailable") from exc
            raise Unauthorized("Invalid or expired token") from exc

        if not user or not user.get("id"):
            raise Unauthorized("Invalid or expired token")
        return user

    async def resolve(self, token: str) -> str:
        user = await self.resolve_user(token)
        return user["id"]
