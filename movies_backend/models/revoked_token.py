# movies_backend/models/revoked_token.py
import sqlalchemy as sa
from movies_backend.utils.database import Base


class RevokedToken(Base):
    """A session token blacklisted at logout.

    expires_at mirrors the token's own exp claim (when it could be read) so
    rows can be pruned once the token would have expired anyway.
    """

    __tablename__ = "revoked_tokens"
    id = sa.Column(sa.Integer, primary_key=True, autoincrement=True)
    token = sa.Column(sa.Text, unique=True, nullable=False)
    revoked_at = sa.Column(sa.DateTime(timezone=True), server_default=sa.func.now())
    expires_at = sa.Column(sa.DateTime(timezone=True), nullable=True, index=True)
