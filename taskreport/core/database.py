from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from sqlalchemy import text
from fastapi import Request
from typing import AsyncGenerator, Optional

from taskreport.core.config import settings

# Create base class for models (can be defined before engine)
Base = declarative_base()


def get_database_url(db_url: Optional[str] = None) -> str:
    """Get properly formatted async database URL"""
    db_url = db_url or settings.DATABASE_URL
    if db_url.startswith("postgresql://"):
        db_url = db_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif db_url.startswith("sqlite:///"):
        db_url = db_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return db_url


def create_engine_for_url(db_url: str) -> AsyncEngine:
    """
    Create the async engine.

    Connection pooling strategy:
    - SQLite: NullPool (required for thread safety)
    - PostgreSQL: pooled, sized from DB_POOL_* settings
    """
    if "sqlite" in db_url:
        return create_async_engine(
            db_url,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
            poolclass=NullPool,
        )

    return create_async_engine(
        db_url,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,  # Verify connections before use
    )


class Database:
    """
    Process-wide persistence handle.

    Created once by the application lifespan (or the CLI), stored on
    ``app.state.db`` and handed to request handlers through ``get_db``.
    ``dispose()`` releases the connection pool at shutdown.
    """

    def __init__(self, url: Optional[str] = None):
        self.url = get_database_url(url)
        self.engine: AsyncEngine = create_engine_for_url(self.url)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False
        )

    def session(self) -> AsyncSession:
        """Create a new async session"""
        return self.session_factory()

    async def create_all(self) -> None:
        """Create all tables known to the model metadata"""
        import taskreport.models  # noqa: F401  (registers tables on Base.metadata)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Check that the database answers a trivial query"""
        async with self.session() as session:
            await session.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Close all pooled connections"""
        await self.engine.dispose()


# Dependency to get DB session
async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session from the application's Database; roll back on error"""
    database: Database = request.app.state.db
    async with database.session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
