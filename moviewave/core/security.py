
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt

ALGORITHM = "HS256"
RESET_TOKEN_EXPIRE_MINUTES = 60


class InvalidResetToken(Exception):
    """Recovery token is malformed, tampered with or expired"""


def create_reset_token(email: str, secret: str, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=RESET_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    return jwt.encode({"email": email, "exp": expire}, secret, algorithm=ALGORITHM)


def decode_reset_token(token: str, secret: str) -> str:
    """Return the email the recovery token was issued for."""
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidResetToken(str(exc)) from exc

    email = payload.get("email")
    if not email:
        raise InvalidResetToken("token carries no email")
    return email

