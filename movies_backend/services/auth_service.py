import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from pydantic import BaseModel

from movies_backend.config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRE_HOURS
from movies_backend.services.errors import InvalidToken


class UserClaims(BaseModel):
    """Authenticated identity carried by a verified session token."""
    user_id: str
    email: str
    token_id: str


# ---------------- PASSWORD HASHING ----------------

def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


# ---------------- JWT TOKENS ----------------

def create_access_token(user_id: str, email: str, now: Optional[datetime] = None) -> str:
    """Generate a signed session token. Every token gets its own jti so tokens can be revoked one by one."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "email": email,
        "jti": str(uuid.uuid4()),
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=JWT_EXPIRE_HOURS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> UserClaims:
    """Verify signature and expiry. Raises InvalidToken on any failure."""
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "email", "jti", "exp"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidToken(str(e)) from e
    return UserClaims(user_id=payload["sub"], email=payload["email"], token_id=payload["jti"])


def token_expiry(token: str) -> Optional[datetime]:
    """Read the exp claim without verifying the token. None if it can't be read."""
    try:
        payload = jwt.decode(token, options={"verify_signature": False, "verify_exp": False})
    except jwt.PyJWTError:
        return None
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from 'Bearer <token>', or None when the header has no bearer token."""
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]
