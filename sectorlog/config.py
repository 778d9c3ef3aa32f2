# =====================================================
# sectorlog/config.py - Environment configuration
# =====================================================
import os

from dotenv import load_dotenv

load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
VERSION = os.getenv("VERSION", "0.1.0")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR")  # file logging disabilitato se non impostato

DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"

# Fuso orario dell'organizzazione: definisce "oggi" e i confini dei giorni
TIMEZONE = os.getenv("SECTORLOG_TIMEZONE", "UTC")

# Base URL pubblica usata per i link di registrazione condivisi
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:3000").rstrip("/")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

OBSERVATION_MAX_LENGTH = 500

# Valori proposti nel form di creazione settore
DEFAULT_SECTOR_BOUNDS = {
    "temp_min": 18.0,
    "temp_max": 25.0,
    "humidity_min": 40.0,
    "humidity_max": 60.0,
}


def get_database_url() -> str:
    """Costruisce URL database da environment variables"""
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    DB_USER = os.getenv("DB_USER", "postgres")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "password")
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = os.getenv("DB_PORT", "5432")
    DB_NAME = os.getenv("DB_NAME", "sectorlog")

    return f"postgresql+psycopg2://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"


def get_async_database_url(url: str) -> str:
    """Stesso database, driver async (richiesto da FastAPI-Users)"""
    if url.startswith("postgresql+psycopg2://") or url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url.split("://", 1)[1]
    if url.startswith("sqlite+pysqlite://") or url.startswith("sqlite://"):
        return "sqlite+aiosqlite://" + url.split("://", 1)[1]
    return url
