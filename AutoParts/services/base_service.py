"""
Base service abstraction for consistent database session management and logging.

Key features:
- Centralized session context manager
- Consistent operation logging
- Standardized transaction management

Services raise AutoPartsException subclasses; callers switch on ``exc.kind``.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict
from abc import ABC

from sqlmodel import Session

from AutoParts.exceptions import ValidationError, InvalidReferenceError, log_exception

# Configure logging
logger = logging.getLogger(__name__)


class BaseService(ABC):
    """
    Base service class providing centralized session management.

    Services hold no mutable state of their own; every operation opens a
    session, reads the current persisted state, and issues at most one write.
    """

    def __init__(self, engine_override=None):
        """
        Initialize base service.

        Args:
            engine_override: Optional engine to use instead of global engine (for testing)
        """
        self.logger = logging.getLogger(self.__class__.__name__)
        if engine_override is not None:
            self.engine = engine_override
        else:
            from AutoParts.database.db import engine
            self.engine = engine

    @contextmanager
    def get_session(self):
        """
        Context manager for synchronous database session management.

        Provides:
        - Automatic session creation and cleanup
        - Transaction management with auto-commit on success
        - Automatic rollback on exceptions

        Instances stay readable after the block because expire_on_commit is off.

        Usage:
            with self.get_session() as session:
                result = repository.create(session, data)
                return result
        """
        session = Session(self.engine, expire_on_commit=False)
        try:
            self.logger.debug("Database session created")
            yield session
            session.commit()
            self.logger.debug("Database session committed successfully")
        except Exception as e:
            session.rollback()
            log_exception(e, context=self.__class__.__name__)
            raise
        finally:
            session.close()
            self.logger.debug("Database session closed")

    def validate_required_fields(self, data: Dict[str, Any], required_fields: list[str]) -> None:
        """
        Validate that required fields are present in the data.

        Raises:
            ValidationError: If any required fields are missing
        """
        missing_fields = []
        for field in required_fields:
            if field not in data or data[field] is None or data[field] == "":
                missing_fields.append(field)

        if missing_fields:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing_fields)}",
                missing_fields=missing_fields,
            )

    def log_operation(self, operation: str, entity_type: str, entity_id: Any = None):
        """
        Log service operations for debugging and audit purposes.

        Args:
            operation: The operation being performed (create, update, delete, etc.)
            entity_type: The type of entity being operated on
            entity_id: Optional ID of the entity
        """
        entity_info = f" (ID: {entity_id})" if entity_id is not None else ""
        self.logger.info(f"Starting {operation} operation for {entity_type}{entity_info}")

    @staticmethod
    def require_positive_id(value: Any, reference_type: str) -> None:
        """
        Reject an ID that cannot name a stored row.

        Raises:
            InvalidReferenceError: If the ID is missing, zero or negative
        """
        if value is None or value <= 0:
            raise InvalidReferenceError(
                f"Invalid {reference_type} ID: {value}",
                reference_type=reference_type,
                reference_id=value,
            )
