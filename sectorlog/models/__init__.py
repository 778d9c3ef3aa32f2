# =====================================================
# sectorlog/models/__init__.py
# =====================================================
"""
Models package initialization.

Import all models to ensure they are registered with SQLAlchemy metadata.
This is CRITICAL for foreign key resolution during create_all() operations.
"""

# Base model MUST be imported first
from .base import Base, BaseModel

# Order matters for foreign keys
from .user import User
from .sector import Sector
from .reading import Reading, Shift

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "Sector",
    "Reading",
    "Shift",
]
