"""
Database session and engine configuration.

This file sets up the async database connection using SQLAlchemy.
PostgreSQL (asyncpg) in production, SQLite (aiosqlite) for local runs and tests.
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from typing import AsyncGenerator

from app.core.config import settings


def _engine_options() -> dict:
    options = {
        "echo": settings.DEBUG,  # When DEBUG=True, prints SQL queries to console
        "future": True,
    }
    if settings.DB_ISOLATION_LEVEL:
        options["isolation_level"] = settings.DB_ISOLATION_LEVEL
    return options


# Create the async database engine
engine = create_async_engine(settings.DATABASE_URL, **_engine_options())

# Create a session factory
# Sessions are used to interact with the database (read, write, update, delete)
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Keeps data accessible after commit
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session.

    One session is one transaction: routers commit explicitly once the
    service call succeeded, and anything raised rolls the whole unit back.

    Usage in a FastAPI endpoint:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            # use db to query the database
            pass
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
