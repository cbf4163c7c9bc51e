# movies_backend/services/favorite_service.py
import logging

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from movies_backend.models.favorite import Favorite
from movies_backend.models.movie import Movie
from movies_backend.models.user import User
from movies_backend.services.catalog_service import ensure_cached
from movies_backend.services.errors import AlreadyFavorited, UserNotFound
from movies_backend.utils.clients import CatalogClient

logger = logging.getLogger("movies_backend.favorites")


async def add_favorite(db: AsyncSession, catalog: CatalogClient, user_id: str, movie_id: int) -> None:
    # checked explicitly so a missing user is not reported as a generic constraint failure
    if await db.get(User, user_id) is None:
        raise UserNotFound()

    await ensure_cached(db, catalog, movie_id)

    try:
        await db.execute(insert(Favorite).values(user_id=user_id, movie_id=movie_id))
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise AlreadyFavorited() from e
    logger.info(f"User {user_id} added movie {movie_id} to favorites")


async def list_favorites(db: AsyncSession, user_id: str) -> list:
    q = await db.execute(
        select(Movie).join(Favorite, Favorite.movie_id == Movie.id).where(Favorite.user_id == user_id)
    )
    return [movie.to_dict() for movie in q.scalars().all()]
