# sectorlog/database/exceptions.py
"""
Custom exceptions per database operations.

Queste eccezioni forniscono error handling più specifico
e messaggi di errore più informativi rispetto alle eccezioni standard.
Vengono convertite in risposte HTTP dagli exception handler in main.py.
"""
import functools
import logging

logger = logging.getLogger(__name__)


class DatabaseError(Exception):
    """
    Base exception per errori database generici.

    Usata per errori di connessione, transazioni fallite,
    constraint violations non specifiche, etc. Lato API diventa un
    errore transitorio (503): l'operazione non viene ritentata.
    """
    pass


class EntityNotFoundError(DatabaseError):
    """
    Exception per entity non trovate.

    Examples:
        - settore cancellato o id sconosciuto nel link di registrazione
        - settore di un altro amministratore
    """
    pass


class DuplicateEntityError(DatabaseError):
    """
    Exception per violazioni di unique constraints.
    """
    pass


class DuplicateShiftError(DuplicateEntityError):
    """
    Lettura già registrata per (settore, giorno, turno).

    Sollevata dal controllo preventivo oppure dal vincolo di unicità
    quando due invii concorrenti superano entrambi il controllo.
    """

    def __init__(self, sector_id, shift, day):
        self.sector_id = sector_id
        self.shift = shift
        self.day = day
        super().__init__(f"Shift reading already recorded: {shift} on {day.isoformat()}")


class ValidationError(DatabaseError):
    """
    Exception per errori di validazione dati.

    Examples:
        - temp_max <= temp_min dopo un update parziale
        - umidità fuori da 0-100
    """
    pass


# ==========================================
# UTILITY FUNCTIONS
# ==========================================

def handle_integrity_error(error, entity_name: str = "Entity"):
    """
    Converte IntegrityError SQLAlchemy in exception custom più specifiche.

    Raises:
        DuplicateEntityError: Per unique constraint violations
        ValidationError: Per check / foreign key violations
        DatabaseError: Per altri integrity errors
    """
    error_msg = str(error.orig).lower()

    # Unique constraint violations
    if any(keyword in error_msg for keyword in ['unique', 'duplicate', 'already exists']):
        raise DuplicateEntityError(f"Duplicate {entity_name.lower()} found") from error

    # Foreign key violations
    elif any(keyword in error_msg for keyword in ['foreign key', 'referenced', 'does not exist']):
        raise ValidationError(f"Referenced {entity_name.lower()} does not exist") from error

    # Check constraint violations
    elif any(keyword in error_msg for keyword in ['check', 'constraint', 'violates']):
        raise ValidationError(f"Data validation failed for {entity_name.lower()}: {error_msg}") from error

    # Generic integrity error
    else:
        raise DatabaseError(f"Database integrity error for {entity_name.lower()}: {error_msg}") from error


def handle_sqlalchemy_error(error, operation: str = "operation", entity_name: str = "entity"):
    """
    Converte errori SQLAlchemy generici in exception custom.

    Raises:
        DatabaseError: Con messaggio appropriato
    """
    from sqlalchemy.exc import IntegrityError, SQLAlchemyError

    if isinstance(error, IntegrityError):
        handle_integrity_error(error, entity_name)
    elif isinstance(error, SQLAlchemyError):
        raise DatabaseError(f"Database error during {operation} {entity_name.lower()}: {error}") from error
    else:
        raise error


# ==========================================
# DECORATORS
# ==========================================

def handle_database_errors(entity_name: str = "Entity"):
    """
    Decorator per automatic error handling nei repository methods.

    Fa rollback della sessione (self.db) prima di convertire l'errore.

    Usage:
        @handle_database_errors("Sector")
        def create(self, data):
            ...
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except DatabaseError:
                # Re-raise custom exceptions as-is
                raise
            except Exception as e:
                self.db.rollback()
                name = getattr(self, "entity_name", entity_name)
                operation = func.__name__.strip('_').replace('_', ' ')
                logger.warning("%s %s failed: %s", name, operation, e)
                handle_sqlalchemy_error(e, operation, name)

        return wrapper
    return decorator
