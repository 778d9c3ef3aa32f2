# =====================================================
# sectorlog/repositories/base.py - Generic CRUD Repository
# =====================================================
from typing import Generic, TypeVar, Type, Optional, Dict, Any
from sqlalchemy.orm import Session
import uuid

from sectorlog.models.base import BaseModel
from sectorlog.database.exceptions import handle_database_errors

ModelType = TypeVar("ModelType", bound=BaseModel)

class BaseRepository(Generic[ModelType]):
    """
    Base repository con CRUD operations generiche.

    PATTERN: Repository centralizza data access logic
    - Evita query duplicate nel codebase
    - Single source of truth per data operations
    - Facilita testing e mocking

    I metodi di scrittura accettano commit=False per partecipare
    a una transazione gestita da UnitOfWork.
    """

    entity_name = "Entity"

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    # ==========================================
    # BASIC CRUD OPERATIONS
    # ==========================================

    def create(self, obj_data: Dict[str, Any], commit: bool = True) -> ModelType:
        """Create new record"""
        return self._persist(self.model(**obj_data), commit)

    @handle_database_errors()
    def _persist(self, db_obj: ModelType, commit: bool) -> ModelType:
        self.db.add(db_obj)
        if commit:
            self.db.commit()
            self.db.refresh(db_obj)
        else:
            self.db.flush()
        return db_obj

    @handle_database_errors()
    def get_by_id(self, id: uuid.UUID) -> Optional[ModelType]:
        """Get record by ID"""
        return self.db.query(self.model).filter(self.model.id == id).first()

    @handle_database_errors()
    def update(self, id: uuid.UUID, update_data: Dict[str, Any], commit: bool = True) -> Optional[ModelType]:
        """Update record by ID"""
        db_obj = self.get_by_id(id)
        if not db_obj:
            return None

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        if commit:
            self.db.commit()
            self.db.refresh(db_obj)
        else:
            self.db.flush()
        return db_obj

    @handle_database_errors()
    def delete(self, id: uuid.UUID, commit: bool = True) -> bool:
        """Delete record by ID"""
        db_obj = self.get_by_id(id)
        if not db_obj:
            return False

        self.db.delete(db_obj)
        if commit:
            self.db.commit()
        else:
            self.db.flush()
        return True

    @handle_database_errors()
    def count(self) -> int:
        """Count total records"""
        return self.db.query(self.model).count()

    @handle_database_errors()
    def exists(self, id: uuid.UUID) -> bool:
        """Check if record exists"""
        return self.db.query(self.model.id).filter(self.model.id == id).first() is not None
