# main.py - Sector Logbook API
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime, timezone
import logging
import os
import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from sectorlog.config import CORS_ORIGINS, ENVIRONMENT, TIMEZONE, VERSION
from sectorlog.logging_config import setup_logging
from sectorlog.database.connection import check_database_connection
from sectorlog.database.exceptions import (
    DatabaseError,
    DuplicateShiftError,
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)
from sectorlog.auth.routes import auth_router
from sectorlog.routes.dashboard import router as dashboard_router
from sectorlog.routes.records import router as records_router
from sectorlog.routes.sectors import router as sectors_router

# Initialize logging before anything else
setup_logging()
logger = logging.getLogger(__name__)

# Configurazione app
app = FastAPI(
    title="Sector Logbook API",
    description="Temperature/humidity logbook for monitored sectors",
    version=VERSION,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(sectors_router)
app.include_router(records_router)
app.include_router(dashboard_router)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


# =====================================================
# ERROR HANDLING
# =====================================================

@app.exception_handler(EntityNotFoundError)
async def not_found_handler(request: Request, exc: EntityNotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(DuplicateShiftError)
async def duplicate_shift_handler(request: Request, exc: DuplicateShiftError):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": "Shift reading already recorded",
            "shift": exc.shift,
            "day": exc.day.isoformat(),
        },
    )


@app.exception_handler(DuplicateEntityError)
async def duplicate_handler(request: Request, exc: DuplicateEntityError):
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})


def _store_unavailable(request: Request, exc: Exception) -> JSONResponse:
    # Errore transitorio: nessun retry automatico, il client può ripetere
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage temporarily unavailable, please retry"},
    )


@app.exception_handler(DatabaseError)
async def database_error_handler(request: Request, exc: DatabaseError):
    return _store_unavailable(request, exc)


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    # Errori non convertiti dai repository (es. sessione o pool)
    return _store_unavailable(request, exc)


@app.on_event("startup")
async def startup_event():
    logger.info("Sector Logbook API %s starting (%s, timezone=%s)", VERSION, ENVIRONMENT, TIMEZONE)


# Health check endpoint (necessario per Docker health check)
@app.get("/health")
async def health_check():
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "version": VERSION,
            "environment": ENVIRONMENT,
            "timestamp": _timestamp()
        }
    )

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Sector Logbook API is running!",
        "version": VERSION,
        "environment": ENVIRONMENT,
        "timestamp": _timestamp()
    }

@app.get("/api/v1/status")
def api_status():
    database_ok = check_database_connection()
    return {
        "api": "sectorlog",
        "status": "operational" if database_ok else "degraded",
        "database": "connected" if database_ok else "unavailable",
        "version": VERSION,
        "environment": ENVIRONMENT,
        "timezone": TIMEZONE,
        "timestamp": _timestamp(),
        "features": [
            "sector-registry",
            "shift-readings",
            "daily-status",
            "history",
            "csv-export",
            "live-feed",
        ]
    }

# Entry point per development locale
if __name__ == "__main__":
    uvicorn.run(
        "sectorlog.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=ENVIRONMENT == "development"
    )
