# movies_backend/services/user_service.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from movies_backend.models.user import User, new_user_id
from movies_backend.services.auth_service import hash_password, verify_password
from movies_backend.services.errors import EmailInUse, InvalidCredentials

logger = logging.getLogger("movies_backend.users")

# Compared against when the email is unknown, so both failure paths cost one bcrypt check.
_DUMMY_HASH = hash_password("not-a-real-password")


async def register_user(db: AsyncSession, email: str, first_name: str, last_name: str, password: str) -> str:
    user = User(
        id=new_user_id(),
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=hash_password(password),
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        # the only unique column besides the fresh uuid is email
        await db.rollback()
        raise EmailInUse() from e
    logger.info(f"User registered: {email}")
    return user.id


async def verify_credentials(db: AsyncSession, email: str, password: str) -> User:
    q = await db.execute(select(User).filter_by(email=email))
    user = q.scalars().first()
    if not user:
        verify_password(password, _DUMMY_HASH)
        raise InvalidCredentials()
    if not verify_password(password, user.password_hash):
        raise InvalidCredentials()
    return user


async def get_user(db: AsyncSession, user_id: str):
    return await db.get(User, user_id)
