# =====================================================
# test/conftest.py - Shared pytest configuration
# =====================================================
"""
Configurazione condivisa per tutti i test.

Database SQLite in-memory (StaticPool: una sola connessione condivisa
tra thread) impostato PRIMA di importare sectorlog, così engine e
SessionLocal dell'applicazione puntano al database di test.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["SECTORLOG_TIMEZONE"] = "UTC"
os.environ.setdefault("JWT_SECRET", "test-secret-key")

from datetime import datetime, timezone
import uuid

import pytest
from httpx import ASGITransport, AsyncClient

# Import ALL models to ensure they're registered with SQLAlchemy
from sectorlog.models import BaseModel, Reading, Sector, Shift, User
from sectorlog.database.connection import SessionLocal, engine, get_db, get_session_factory
from sectorlog.services.repository_factory import RepositoryFactory

# Mezzogiorno UTC: lontano dai confini del giorno
FIXED_NOW = datetime(2026, 3, 10, 12, 0, 0)


# =====================================================
# DATABASE FIXTURES
# =====================================================

@pytest.fixture(scope="function")
def test_db():
    """Sessione pulita per ogni test: tabelle create e poi rimosse"""
    BaseModel.metadata.create_all(engine)
    session = SessionLocal()

    yield session

    session.close()
    BaseModel.metadata.drop_all(engine)


@pytest.fixture
def repositories(test_db):
    return RepositoryFactory(test_db)


@pytest.fixture
def admin_id():
    return uuid.uuid4()


@pytest.fixture
def other_admin_id():
    return uuid.uuid4()


@pytest.fixture
def sample_sector_data(admin_id):
    """Sample sector data for testing"""
    return {
        "admin_id": admin_id,
        "name": "Cold Room A",
        "location": "Warehouse 1",
        "responsible_name": "Maria Rossi",
        "temp_min": 18.0,
        "temp_max": 25.0,
        "humidity_min": 40.0,
        "humidity_max": 60.0,
    }


@pytest.fixture
def sample_sector(repositories, sample_sector_data) -> Sector:
    return repositories.sectors.create(sample_sector_data)


@pytest.fixture
def make_reading(repositories):
    """Inserisce una lettura direttamente (senza guard)"""

    def _make(sector, timestamp=FIXED_NOW, shift=Shift.MORNING, temperature=20.0, humidity=50.0,
              observation="", temperature_ok=True, humidity_ok=True) -> Reading:
        return repositories.readings.create({
            "sector_id": sector.id,
            "admin_id": sector.admin_id,
            "timestamp": timestamp,
            "local_day": timestamp.date(),
            "temperature": temperature,
            "humidity": humidity,
            "shift": Shift(shift).value,
            "observation": observation,
            "temperature_ok": temperature_ok,
            "humidity_ok": humidity_ok,
        })

    return _make


# =====================================================
# CLOCK / ZONE
# =====================================================

@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def zone():
    return timezone.utc


# =====================================================
# API CLIENT
# =====================================================

@pytest.fixture
def current_admin(admin_id) -> User:
    """Amministratore autenticato (non persistito: l'autenticazione è sovrascritta)"""
    return User(
        id=admin_id,
        email="admin@example.com",
        hashed_password="not-used",
        is_active=True,
        is_superuser=False,
        is_verified=True,
    )


@pytest.fixture
async def client(test_db, current_admin, clock, zone):
    """AsyncClient sull'app con database, orologio e utente sovrascritti"""
    from sectorlog.main import app
    from sectorlog.auth.config import current_active_user
    from sectorlog.routes.dependencies import get_clock, get_timezone

    def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: SessionLocal
    app.dependency_overrides[current_active_user] = lambda: current_admin
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_timezone] = lambda: zone

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
