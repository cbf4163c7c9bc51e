# movies_backend/models/favorite.py
import sqlalchemy as sa
from movies_backend.utils.database import Base


class Favorite(Base):
    __tablename__ = "favorites"
    # composite key: a user favorites a given movie at most once
    movie_id = sa.Column(sa.Integer, sa.ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True)
    user_id = sa.Column(sa.String(36), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    added_at = sa.Column(sa.DateTime(timezone=True), server_default=sa.func.now())
