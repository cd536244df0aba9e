import logging
import time
from datetime import date, timedelta
from typing import Any, Dict, Optional

import asyncpg

from ..clients.supabase_auth import AuthErrorKind, AuthPlatformError, SupabaseAuthClient
from ..core.security import InvalidResetToken, create_reset_token, decode_reset_token
from ..exceptions import BadRequest, NotFound, ProcessingFailed, Unauthorized, UpstreamFailure
from ..repositories.user_repository import UserRepository
from ..schemas.auth import UserCreate, UserLogin, UserUpdate
from .email_service import EmailService

logger = logging.getLogger(__name__)

DB_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


def calculate_age(birthdate: date, today: Optional[date] = None) -> int:
    today = today or date.today()
    age = today.year - birthdate.year
    if (today.month, today.day) < (birthdate.month, birthdate.day):
        age -= 1
    return age


def profile_to_user(profile: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(profile["id_usuario"]),
        "name": profile.get("nombre"),
        "lastname": profile.get("apellido"),
        "email": profile.get("correo"),
        "birthdate": profile.get("edad"),
    }


def auth_user_to_user(user: Dict[str, Any]) -> Dict[str, Any]:
    metadata = user.get("user_metadata") or {}
    return {
        "id": user["id"],
        "name": metadata.get("nombre"),
        "lastname": metadata.get("apellido"),
        "email": user.get("email"),
        "birthdate": metadata.get("edad"),
    }


def deleted_email_sentinel() -> str:
    return f"deleted_{int(time.time() * 1000)}@deleted.account"


def raise_for_auth_error(exc: AuthPlatformError, rejected_message: str):
    if exc.kind == AuthErrorKind.UNAVAILABLE:
        raise UpstreamFailure("Authentication service unavailable") from exc
    if exc.kind == AuthErrorKind.USER_EXISTS:
        raise BadRequest("Email already registered") from exc
    if exc.kind == AuthErrorKind.WEAK_PASSWORD:
        raise BadRequest("Password does not meet the security requirements") from exc
    raise BadRequest(rejected_message) from exc


class AuthService:
    def __init__(
        self,
        auth_client: SupabaseAuthClient,
        user_repo: UserRepository,
        email_service: EmailService,
        jwt_secret: str,
        reset_token_ttl: timedelta = timedelta(hours=1),
        expose_reset_token: bool = False,
    ):
        self.auth_client = auth_client
        self.user_repo = user_repo
        self.email_service = email_service
        self.jwt_secret = jwt_secret
        self.reset_token_ttl = reset_token_ttl
        self.expose_reset_token = expose_reset_token

    async def register_user(self, user_data: UserCreate) -> Dict[str, Any]:
        metadata = {
            "nombre": user_data.name,
            "apellido": user_data.lastname,
            "edad": user_data.birthdate.isoformat() if user_data.birthdate else None,
        }
        try:
            result = await self.auth_client.sign_up(user_data.email, user_data.password, metadata)
        except AuthPlatformError as exc:
            raise_for_auth_error(exc, "Registration rejected")

        auth_user = result.get("user") or {}
        if not auth_user.get("id"):
            raise BadRequest("Could not create user")

        try:
            profile = await self.user_repo.upsert_profile(
                auth_user["id"], user_data.name, user_data.lastname, user_data.email, user_data.birthdate
            )
            user = profile_to_user(profile)
        except DB_ERRORS as exc:
            # No compensation: the auth account exists without a profile row
            logger.warning(
                f"Registered user has no profile row: {exc}",
                extra={"user_id": auth_user["id"]},
            )
            user = auth_user_to_user(auth_user)

        session = result.get("session")
        logger.info("User registered", extra={"user_id": auth_user["id"]})
        return {
            "message": "User registered successfully",
            "user": user,
            "session": session,
            "token": session.get("access_token") if session else None,
        }

    async def authenticate_user(self, login_data: UserLogin) -> Dict[str, Any]:
        try:
            result = await self.auth_client.sign_in_with_password(login_data.email, login_data.password)
        except AuthPlatformError as exc:
            if exc.kind == AuthErrorKind.UNAVAILABLE:
                raise UpstreamFailure("Authentication service unavailable") from exc
            raise Unauthorized("Invalid credentials") from exc

        auth_user = result.get("user") or {}
        if not auth_user.get("id"):
            raise Unauthorized("Invalid credentials")

        profile = await self.user_repo.get_by_id(auth_user["id"])
        if profile is None:
            logger.warning("Authenticated user has no profile row", extra={"user_id": auth_user["id"]})
            raise NotFound("User not found in database")

        session = result.get("session") or {}
        return {
            "message": "Login successful",
            "user": profile_to_user(profile),
            "session": session,
            "token": session.get("access_token"),
            "refresh_token": session.get("refresh_token"),
        }

    async def get_profile(self, user_id: str) -> Dict[str, Any]:
        profile = await self.user_repo.get_by_id(user_id)
        if profile is None:
            raise NotFound("User profile not found")
        user = profile_to_user(profile)
        user["age"] = calculate_age(user["birthdate"]) if user["birthdate"] else None
        return user

    async def update_user(self, auth_user: Dict[str, Any], update: UserUpdate) -> Dict[str, Any]:
        user_id = auth_user["id"]
        fields = {name: getattr(update, name) for name in update.model_fields_set if getattr(update, name) is not None}

        attributes: Dict[str, Any] = {}
        if "email" in fields:
            attributes["email"] = fields["email"]
        if "password" in fields:
            attributes["password"] = fields["password"]
        if "name" in fields or "lastname" in fields:
            metadata = dict(auth_user.get("user_metadata") or {})
            if "name" in fields:
                metadata["nombre"] = fields["name"]
            if "lastname" in fields:
                metadata["apellido"] = fields["lastname"]
            attributes["user_metadata"] = metadata

        if attributes:
            try:
                await self.auth_client.admin_update_user_by_id(user_id, attributes)
            except AuthPlatformError as exc:
                raise_for_auth_error(exc, "Update rejected by the authentication service")

        column_map = {"name": "nombre", "lastname": "apellido", "email": "correo", "birthdate": "edad"}
        profile_fields = {column: fields[name] for name, column in column_map.items() if name in fields}
        try:
            profile = await self.user_repo.update_profile(user_id, profile_fields)
        except DB_ERRORS as exc:
            raise ProcessingFailed("Error updating user") from exc
        if profile is None:
            raise NotFound("User profile not found")

        logger.info("User updated", extra={"user_id": user_id})
        return {"message": "User updated successfully", "user": profile_to_user(profile)}

    async def delete_account(self, auth_user: Dict[str, Any]) -> Dict[str, Any]:
        user_id = auth_user["id"]
        try:
            await self.user_repo.delete(user_id)
        except DB_ERRORS as exc:
            raise ProcessingFailed("Error deleting account") from exc

        # The auth account is kept but made unusable by rewriting its email
        try:
            await self.auth_client.admin_update_user_by_id(user_id, {"email": deleted_email_sentinel()})
        except AuthPlatformError as exc:
            logger.warning(f"Could not deactivate auth account: {exc}", extra={"user_id": user_id})

        logger.info("Account deleted", extra={"user_id": user_id})
        return {"message": "Account deleted successfully", "original_email": auth_user.get("email")}

    async def forgot_password(self, email: str) -> Dict[str, Any]:
        reset_token = create_reset_token(email, self.jwt_secret, self.reset_token_ttl)
        await self.email_service.send_recovery_email(email, reset_token)

        response = {"message": "Recovery email sent"}
        if self.expose_reset_token:
            response["token"] = reset_token
        return response

    async def reset_password(self, token: str, new_password: str) -> Dict[str, Any]:
        try:
            email = decode_reset_token(token, self.jwt_secret)
        except InvalidResetToken as exc:
            raise BadRequest("Invalid or expired token") from exc

        try:
            user = await self.auth_client.admin_find_user_by_email(email)
        except AuthPlatformError as exc:
            raise UpstreamFailure("Authentication service unavailable") from exc
        if user is None:
            raise NotFound("User not found")

        try:
            await self.auth_client.admin_update_user_by_id(user["id"], {"password": new_password})
        except AuthPlatformError as exc:
            if exc.kind == AuthErrorKind.WEAK_PASSWORD:
                raise BadRequest("Password does not meet the security requirements") from exc
            raise UpstreamFailure("Error updating password") from exc

        logger.info("Password reset", extra={"user_id": user["id"]})
        return {"message": "Password updated successfully"}
