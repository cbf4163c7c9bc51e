# movies_backend/routers/movies.py
import logging
import random
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from movies_backend.deps import get_current_user
from movies_backend.utils.clients import CatalogClient, get_catalog_client
from movies_backend.utils.messages import MessageCatalog, get_messages
from movies_backend.services.catalog_service import search_or_popular
from movies_backend.services.errors import CatalogUnavailable
from movies_backend.services.ranker import get_rng, rank

router = APIRouter(prefix="/api/movies", tags=["movies"], dependencies=[Depends(get_current_user)])
logger = logging.getLogger("movies_backend.movies")


@router.get("")
async def list_movies(
    search: Optional[str] = Query(None, max_length=200),
    catalog: CatalogClient = Depends(get_catalog_client),
    messages: MessageCatalog = Depends(get_messages),
    rng: random.Random = Depends(get_rng),
):
    """Keyword search, or the popular listing when no keyword is given, in random suggestion order."""
    try:
        movies = await search_or_popular(catalog, search)
    except CatalogUnavailable as e:
        logger.error(f"Movie listing failed (search={search!r}): {e}")
        raise HTTPException(status_code=e.status_code, detail=messages.get(e.message_key))
    return rank(movies, rng, field="suggestionScore")
