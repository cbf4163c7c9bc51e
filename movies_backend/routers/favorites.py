# movies_backend/routers/favorites.py
import logging
import random

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from movies_backend.deps import get_current_user
from movies_backend.utils.clients import CatalogClient, get_catalog_client
from movies_backend.utils.database import get_db
from movies_backend.utils.messages import MessageCatalog, get_messages
from movies_backend.services.auth_service import UserClaims
from movies_backend.services.errors import AlreadyFavorited, MovieNotAvailable, UserNotFound
from movies_backend.services.favorite_service import add_favorite, list_favorites
from movies_backend.services.ranker import get_rng, rank

router = APIRouter(prefix="/api/favorites", tags=["favorites"])
logger = logging.getLogger("movies_backend.favorites")


class FavoriteIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    movie_id: int = Field(alias="movieId", gt=0, le=2_147_483_647)


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_favorite_movie(
    payload: FavoriteIn,
    current_user: UserClaims = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: CatalogClient = Depends(get_catalog_client),
    messages: MessageCatalog = Depends(get_messages),
):
    try:
        await add_favorite(db, catalog, current_user.user_id, payload.movie_id)
    except (UserNotFound, MovieNotAvailable, AlreadyFavorited) as e:
        raise HTTPException(status_code=e.status_code, detail=messages.get(e.message_key))
    return {"message": messages.get("success.favorites.added")}


@router.get("")
async def get_favorite_movies(
    current_user: UserClaims = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    rng: random.Random = Depends(get_rng),
):
    movies = await list_favorites(db, current_user.user_id)
    return rank(movies, rng, field="suggestionForTodayScore")
