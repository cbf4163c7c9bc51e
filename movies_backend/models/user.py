# movies_backend/models/user.py
import sqlalchemy as sa
import uuid
from movies_backend.utils.database import Base


def new_user_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"
    id = sa.Column(sa.String(36), primary_key=True, default=new_user_id)
    email = sa.Column(sa.String(255), unique=True, nullable=False, index=True)
    first_name = sa.Column(sa.String(255), nullable=False)
    last_name = sa.Column(sa.String(255), nullable=False)
    # bcrypt hash; the plaintext password is never stored
    password_hash = sa.Column(sa.String(512), nullable=False)
    created_at = sa.Column(sa.DateTime(timezone=True), server_default=sa.func.now())
