import jwt
import bcrypt
from typing import Any, Union
from app.core.config import settings
from datetime import datetime, timedelta, timezone

def create_access_token(user_id: Union[str, Any]) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS
    )
    to_encode = {
        "exp": expire, "user_id": str(user_id)
    }
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.SECURITY_ALGORITHM)
    return encoded_jwt


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def create_email_token(email: str, purpose: str, expires_seconds: int) -> str:
    """Signed single-purpose token for the e-mail verification and password reset links."""
    expire = datetime.now(timezone.utc) + timedelta(seconds=expires_seconds)
    to_encode = {
        "exp": expire, "email": email, "purpose": purpose
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.SECURITY_ALGORITHM)


def decode_email_token(token: str, purpose: str) -> str:
    """
    Returns the e-mail carried by a token minted for ``purpose``.
    Raises jwt.PyJWTError when the token is invalid, expired or minted for another purpose.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.SECURITY_ALGORITHM])
    if payload.get("purpose") != purpose or not payload.get("email"):
        raise jwt.InvalidTokenError("token purpose mismatch")
    return payload["email"]
