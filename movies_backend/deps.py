# movies_backend/deps.py
from fastapi import Depends, HTTPException, Header
from sqlalchemy.ext.asyncio import AsyncSession

from movies_backend.utils.database import get_db
from movies_backend.utils.messages import MessageCatalog, get_messages
from movies_backend.services.auth_service import UserClaims
from movies_backend.services.errors import AuthError
from movies_backend.services.session_service import authenticate


async def get_current_user(
    authorization: str = Header(None),
    db: AsyncSession = Depends(get_db),
    messages: MessageCatalog = Depends(get_messages),
) -> UserClaims:
    """
    Expect Authorization: Bearer <token>
    Returns the token's claims or raises 401.
    """
    try:
        return await authenticate(db, authorization)
    except AuthError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail=messages.get(e.message_key),
            headers={"WWW-Authenticate": "Bearer"},
        )
