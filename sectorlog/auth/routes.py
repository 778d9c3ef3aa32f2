# =====================================================
# sectorlog/auth/routes.py - Authentication Routes
# =====================================================
from fastapi import APIRouter, Depends

from sectorlog.auth.config import fastapi_users, auth_backend, current_active_user
from sectorlog.auth.schemas import UserRead, UserCreate, UserUpdate
from sectorlog.models.user import User

auth_router = APIRouter(prefix="/auth", tags=["Authentication"])

# POST /auth/jwt/login - Login con email/password
# POST /auth/jwt/logout - Logout
auth_router.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/jwt"
)

# POST /auth/register - Registrazione amministratore
auth_router.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
)

# GET/PATCH /auth/users/me, gestione utenti per superuser
auth_router.include_router(
    fastapi_users.get_users_router(UserRead, UserUpdate),
    prefix="/users",
)

@auth_router.get(
    "/profile",
    response_model=UserRead,
    summary="Profilo amministratore corrente"
)
async def get_my_profile(current_user: User = Depends(current_active_user)):
    """Restituisce il profilo dell'utente correntemente loggato."""
    return current_user
