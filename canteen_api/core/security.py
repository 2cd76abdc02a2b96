"""
core/security.py – Password hashing (bcrypt) and bearer credentials (JWT).
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from ..config import settings
from .access import Principal, Role
from .errors import Unauthorized


def hash_password(password: str) -> str:
    # Bcrypt has a 72 byte limit
    password_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.bcrypt_rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check of a password against its bcrypt hash."""
    password_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        # malformed hash in storage
        return False


def create_access_token(
    user_id: str,
    role: Role,
    canteen_id: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims: Dict[str, Any] = {
        "sub": user_id,
        "role": Role(role).value,
        "canteen_id": canteen_id,
        "exp": expire,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Principal:
    """Verify signature + expiry and return the Principal, else Unauthorized."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise Unauthorized("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("Invalid token")
    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise Unauthorized("Invalid token")
    return Principal(user_id=user_id, role=role, canteen_id=payload.get("canteen_id"))
