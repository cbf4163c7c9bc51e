# movies_backend/services/session_service.py
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from movies_backend.models.revoked_token import RevokedToken
from movies_backend.services.auth_service import (
    UserClaims,
    decode_access_token,
    extract_bearer_token,
    token_expiry,
)
from movies_backend.services.errors import AlreadyRevoked, MissingToken, TokenRevoked

logger = logging.getLogger("movies_backend.session")


async def is_revoked(db: AsyncSession, token: str) -> bool:
    q = await db.execute(select(RevokedToken.id).filter_by(token=token))
    return q.scalars().first() is not None


async def authenticate(db: AsyncSession, authorization: Optional[str]) -> UserClaims:
    """
    Validate the bearer token of a request.
    The blacklist is checked before the signature, so a revoked token is
    always reported as TokenRevoked even once it has also expired.
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise MissingToken()
    if await is_revoked(db, token):
        raise TokenRevoked()
    return decode_access_token(token)


async def revoke(db: AsyncSession, authorization: Optional[str]) -> None:
    """Blacklist the exact token string. Revoking the same token twice raises AlreadyRevoked."""
    token = extract_bearer_token(authorization)
    if not token:
        raise MissingToken()
    db.add(RevokedToken(token=token, expires_at=token_expiry(token)))
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise AlreadyRevoked() from e


async def prune_revoked_tokens(db: AsyncSession, now: Optional[datetime] = None) -> int:
    """Delete blacklist rows whose token has expired on its own. Returns the number of rows removed."""
    cutoff = now or datetime.now(timezone.utc)
    result = await db.execute(
        delete(RevokedToken).where(RevokedToken.expires_at.is_not(None), RevokedToken.expires_at < cutoff)
    )
    await db.commit()
    logger.info(f"Pruned {result.rowcount} expired revoked tokens")
    return result.rowcount
