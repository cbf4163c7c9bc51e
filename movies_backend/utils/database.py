# movies_backend/utils/database.py
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

from movies_backend.config import DATABASE_URL


def build_engine(url: str):
    """Create the async engine; SQLite connections get foreign keys switched on."""
    if url.startswith("sqlite"):
        # aiosqlite connections are not shared across event loops
        engine = create_async_engine(url, echo=False, future=True, poolclass=NullPool)

        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine
    return create_async_engine(url, echo=False, future=True)


engine = build_engine(DATABASE_URL)
AsyncSessionLocal = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
Base = declarative_base()


# Dependency for route injection
async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables(target_engine=None):
    # models must be imported so their tables are registered on Base.metadata
    from movies_backend.models import user, movie, favorite, revoked_token  # noqa: F401

    async with (target_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables(target_engine=None):
    from movies_backend.models import user, movie, favorite, revoked_token  # noqa: F401

    async with (target_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
