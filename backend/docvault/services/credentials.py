# backend/docvault/services/credentials.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from ..config import settings
from ..errors import AuthenticationMissing
from ..models.user import User
from ..utils.logging import auth_logger
from .access import Requester
from .roles import is_admin

TOKEN_REQUIRED = "Please sign in or register to get a token"
TOKEN_INVALID = "Invalid token, please sign in again"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def create_access_token(user: User, expires_minutes: Optional[int] = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = {"sub": str(user.id), "role_id": user.role_id, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def authenticate(db: Session, token: Optional[str]) -> Requester:
    """Resolve a bearer token to the requester it was issued for.

    The role comes from the stored user rather than the token so a role change
    takes effect on the next request.
    """
    if not token:
        raise AuthenticationMissing(TOKEN_REQUIRED)

    try:
        payload = decode_token(token)
        user_id = int(payload["sub"])
    except (JWTError, KeyError, TypeError, ValueError):
        auth_logger.warning("Rejected undecodable token")
        raise AuthenticationMissing(TOKEN_INVALID)

    user = db.get(User, user_id)
    if user is None or not user.active:
        auth_logger.warning("Token refers to a missing or inactive user", extra={"user_id": user_id})
        raise AuthenticationMissing(TOKEN_INVALID)

    return Requester(user_id=user.id, role_id=user.role_id, is_admin=is_admin(user.role_id))
