# =====================================================
# sectorlog/auth/config.py - FastAPI-Users Configuration
# =====================================================
import logging
import os
import uuid
from typing import Optional
from fastapi import Depends, Request, Response
from fastapi_users import BaseUserManager, FastAPIUsers, UUIDIDMixin
from fastapi_users.authentication import (
    AuthenticationBackend,
    BearerTransport,
    JWTStrategy,
)
from fastapi_users.db import SQLAlchemyUserDatabase
from fastapi_users.exceptions import InvalidPasswordException
from sqlalchemy.ext.asyncio import AsyncSession

from sectorlog.config import ENVIRONMENT
from sectorlog.models.user import User
from sectorlog.database.connection import get_async_db

logger = logging.getLogger(__name__)

# =====================================================
# ENVIRONMENT CONFIGURATION
# =====================================================

JWT_SECRET: Optional[str] = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    if ENVIRONMENT == "production":
        raise ValueError("JWT_SECRET environment variable must be set in production")
    # Solo per development
    JWT_SECRET = "dev-secret-key-change-in-production"
    logger.warning("Using default JWT secret for development only!")
JWT_SECRET_STR: str = str(JWT_SECRET)

JWT_ALGORITHM = "HS256"

# Token expiration times
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# =====================================================
# TRANSPORT & AUTHENTICATION SETUP
# =====================================================

# Bearer token transport (Authorization: Bearer <token>)
bearer_transport = BearerTransport(tokenUrl="auth/jwt/login")

def get_jwt_strategy() -> JWTStrategy:
    return JWTStrategy(
        secret=JWT_SECRET_STR,
        algorithm=JWT_ALGORITHM,
        lifetime_seconds=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

auth_backend = AuthenticationBackend(
    name="jwt",
    transport=bearer_transport,
    get_strategy=get_jwt_strategy,
)

# =====================================================
# USER DATABASE DEPENDENCY
# =====================================================

async def get_user_db(session: AsyncSession = Depends(get_async_db)):
    """User database FastAPI-Users sulla sessione async"""
    yield SQLAlchemyUserDatabase(session, User)

# =====================================================
# USER MANAGER SETUP
# =====================================================

class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    """
    User Manager per gli amministratori dei settori.
    Login stabilisce l'identità, logout la rimuove lato client (JWT).
    """

    reset_password_token_secret = JWT_SECRET_STR
    verification_token_secret = JWT_SECRET_STR

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        logger.info("Administrator registered: %s", user.email)

    async def on_after_login(
        self,
        user: User,
        request: Optional[Request] = None,
        response: Optional[Response] = None,
    ):
        logger.info("Administrator logged in: %s", user.email)

    async def validate_password(self, password: str, user) -> None:
        if len(password) < 8:
            raise InvalidPasswordException(
                reason="Password must be at least 8 characters long"
            )

        if not any(c.isdigit() for c in password):
            raise InvalidPasswordException(
                reason="Password must contain at least one digit"
            )

        if user.email and user.email.split("@")[0].lower() in password.lower():
            raise InvalidPasswordException(
                reason="Password should not contain the e-mail"
            )

async def get_user_manager(user_db: SQLAlchemyUserDatabase = Depends(get_user_db)):
    yield UserManager(user_db)

# =====================================================
# FASTAPI-USERS MAIN INSTANCE
# =====================================================

fastapi_users = FastAPIUsers[User, uuid.UUID](
    get_user_manager,
    [auth_backend],
)

# Identità dell'amministratore corrente per tutte le route protette
current_active_user = fastapi_users.current_user(active=True)
