# movies_backend/services/catalog_service.py
import json
import logging
from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from movies_backend.models.movie import Movie
from movies_backend.services.errors import CatalogUnavailable, MovieNotAvailable
from movies_backend.utils.clients import CatalogClient

logger = logging.getLogger("movies_backend.catalog")


def flatten_movie(m: dict) -> dict:
    """Map a TMDB movie payload onto the columns of the movies table."""
    if "genre_ids" in m:
        genre_ids = list(m.get("genre_ids") or [])
    else:
        # detail responses carry genre objects instead of ids
        genre_ids = [g["id"] for g in m.get("genres") or [] if "id" in g]
    return {
        "id": int(m["id"]),
        "adult": bool(m.get("adult", False)),
        "backdrop_path": m.get("backdrop_path"),
        "genre_ids": json.dumps(genre_ids),
        "original_language": m.get("original_language"),
        "original_title": m.get("original_title"),
        "overview": m.get("overview"),
        "popularity": m.get("popularity"),
        "poster_path": m.get("poster_path"),
        "release_date": m.get("release_date"),
        "title": m.get("title") or m.get("original_title") or "",
        "video": bool(m.get("video", False)),
        "vote_average": m.get("vote_average"),
        "vote_count": m.get("vote_count"),
    }


def _insert_ignore(db: AsyncSession, values: dict):
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(Movie).values(**values).on_conflict_do_nothing(index_elements=["id"])
    if dialect == "sqlite":
        return sqlite.insert(Movie).values(**values).on_conflict_do_nothing(index_elements=["id"])
    raise NotImplementedError(f"Upsert not supported for dialect {dialect}")


async def ensure_cached(db: AsyncSession, catalog: CatalogClient, movie_id: int) -> Movie:
    """
    Return the stored movie, fetching and storing it first if it is not cached yet.
    A concurrent insert of the same id is ignored; stored rows are never refreshed.
    """
    movie = await db.get(Movie, movie_id)
    if movie:
        return movie

    try:
        payload = await catalog.movie_details(movie_id)
        values = flatten_movie(payload)
    except CatalogUnavailable as e:
        logger.warning(f"Movie {movie_id} not available from catalog: {e}")
        raise MovieNotAvailable() from e
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.warning(f"Movie {movie_id} has an unusable catalog payload: {e}")
        raise MovieNotAvailable() from e
    if values["id"] != movie_id:
        logger.warning(f"Catalog answered id {values['id']} for movie {movie_id}")
        raise MovieNotAvailable()

    await db.execute(_insert_ignore(db, values))
    await db.commit()
    logger.info(f"Movie {movie_id} cached")

    movie = await db.get(Movie, movie_id)
    if movie is None:
        raise MovieNotAvailable()
    return movie


async def search_or_popular(catalog: CatalogClient, keyword: Optional[str] = None) -> list:
    """Keyword search when a keyword is given, otherwise the popular listing. Results are not stored."""
    if keyword and keyword.strip():
        return await catalog.search_movies(keyword.strip())
    return await catalog.popular_movies()
