# sectorlog/database/connection.py
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from typing import AsyncGenerator, Callable, Generator
import logging

from sectorlog.config import DB_ECHO, get_async_database_url, get_database_url

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """Opzioni engine per backend (SQLite non supporta pool_size)"""
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
            options["poolclass"] = StaticPool
        return options

    return {
        # Connection pool settings
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 3600,  # Recycle connections after 1 hour
    }


def build_engine(url: str) -> Engine:
    return create_engine(url, echo=DB_ECHO, **_engine_options(url))


# Database engine
DATABASE_URL = get_database_url()

engine = build_engine(DATABASE_URL)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Async engine: usato solo da FastAPI-Users per la tabella utenti
async_engine = create_async_engine(get_async_database_url(DATABASE_URL), echo=DB_ECHO)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# Dependency for FastAPI
def get_db() -> Generator[Session, None, None]:
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """Async session dependency (FastAPI-Users user database)"""
    async with AsyncSessionLocal() as session:
        yield session


def get_session_factory() -> Callable[[], Session]:
    """Factory di sessioni per i loader delle subscription live"""
    return SessionLocal


# Health check function
def check_database_connection() -> bool:
    """Test database connectivity"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning("Database connection failed: %s", e)
        return False
