# movies_backend/models/movie.py
import json
import sqlalchemy as sa
from movies_backend.utils.database import Base


class Movie(Base):
    """Snapshot of a catalog entry, keyed by the catalog's own id. Never refreshed once stored."""

    __tablename__ = "movies"
    id = sa.Column(sa.Integer, primary_key=True, autoincrement=False)
    adult = sa.Column(sa.Boolean, nullable=False, default=False)
    backdrop_path = sa.Column(sa.String(255), nullable=True)
    # JSON-encoded list of genre ids, e.g. "[18, 53]"
    genre_ids = sa.Column(sa.Text, nullable=True)
    original_language = sa.Column(sa.String(16), nullable=True)
    original_title = sa.Column(sa.String(512), nullable=True)
    overview = sa.Column(sa.Text, nullable=True)
    popularity = sa.Column(sa.Float, nullable=True)
    poster_path = sa.Column(sa.String(255), nullable=True)
    release_date = sa.Column(sa.String(16), nullable=True)
    title = sa.Column(sa.String(512), nullable=False)
    video = sa.Column(sa.Boolean, nullable=False, default=False)
    vote_average = sa.Column(sa.Float, nullable=True)
    vote_count = sa.Column(sa.Integer, nullable=True)
    created_at = sa.Column(sa.DateTime(timezone=True), server_default=sa.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "adult": bool(self.adult),
            "backdrop_path": self.backdrop_path,
            "genre_ids": json.loads(self.genre_ids) if self.genre_ids else [],
            "original_language": self.original_language,
            "original_title": self.original_title,
            "overview": self.overview,
            "popularity": self.popularity,
            "poster_path": self.poster_path,
            "release_date": self.release_date,
            "title": self.title,
            "video": bool(self.video),
            "vote_average": self.vote_average,
            "vote_count": self.vote_count,
        }
