"""
Consolidated AutoParts Exception Hierarchy

Every failure raised by the catalog engine is an AutoPartsException carrying a
``kind`` from the closed ErrorKind set. Callers switch on the kind rather than
on the concrete class; the concrete classes exist to carry precise messages and
details for the domain-specific cases.

Architecture:
- Base exception classes, one per error kind
- Domain-specific exceptions that inherit from the base classes
- Logging and HTTP status helpers used by the outer layers
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, List

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_REFERENCE = "invalid_reference"
    INTEGRITY_VIOLATION = "integrity_violation"
    MALFORMED_INPUT = "malformed_input"
    STORAGE = "storage"


# =============================================================================
# Base Exception Classes
# =============================================================================


class AutoPartsException(Exception):
    """Base exception for all AutoParts errors."""

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "kind": self.kind.value,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(AutoPartsException):
    """Raised when input validation fails."""

    kind = ErrorKind.MALFORMED_INPUT

    def __init__(
        self,
        message: str,
        field_errors: Optional[Dict[str, str]] = None,
        missing_fields: Optional[List[str]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, error_code=error_code or "VALIDATION_ERROR")
        self.field_errors = field_errors or {}
        self.missing_fields = missing_fields or []

        if field_errors or missing_fields:
            self.details.update({"field_errors": field_errors, "missing_fields": missing_fields})


class ResourceNotFoundError(AutoPartsException):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, error_code=error_code or "RESOURCE_NOT_FOUND")
        self.resource_type = resource_type
        self.resource_id = resource_id

        if resource_type or resource_id is not None:
            self.details.update({"resource_type": resource_type, "resource_id": resource_id})


class InvalidReferenceError(AutoPartsException):
    """Raised when an invalid reference (foreign key) is provided."""

    kind = ErrorKind.INVALID_REFERENCE

    def __init__(
        self,
        message: str,
        reference_type: Optional[str] = None,
        reference_id: Optional[Any] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, error_code=error_code or "INVALID_REFERENCE")
        self.reference_type = reference_type
        self.reference_id = reference_id

        if reference_type or reference_id is not None:
            self.details.update({"reference_type": reference_type, "reference_id": reference_id})


class IntegrityViolationError(AutoPartsException):
    """Raised when a write would break a catalog invariant."""

    kind = ErrorKind.INTEGRITY_VIOLATION

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, error_code: Optional[str] = None):
        super().__init__(message, details=details, error_code=error_code or "INTEGRITY_VIOLATION")


class StorageConflictError(AutoPartsException):
    """Raised when the database rejects a write with a constraint violation."""

    kind = ErrorKind.STORAGE

    def __init__(self, message: str, constraint: Optional[str] = None):
        super().__init__(message, error_code="STORAGE_CONFLICT")
        self.constraint = constraint

        if constraint:
            self.details.update({"constraint": constraint})


# =============================================================================
# Category Exceptions
# =============================================================================


class CategoryNotFoundError(ResourceNotFoundError):
    """Raised when a category cannot be found."""

    def __init__(self, category_id: Any):
        super().__init__(
            f"Category with ID '{category_id}' not found",
            resource_type="category",
            resource_id=category_id,
            error_code="CATEGORY_NOT_FOUND",
        )


class ParentCategoryNotFoundError(InvalidReferenceError):
    """Raised when a category names a parent that does not exist."""

    def __init__(self, parent_id: Any):
        super().__init__(
            f"Parent category with ID '{parent_id}' does not exist",
            reference_type="category",
            reference_id=parent_id,
            error_code="PARENT_CATEGORY_NOT_FOUND",
        )


class CircularReferenceError(IntegrityViolationError):
    """Raised when a parent change would make a category its own ancestor."""

    def __init__(self, category_id: Any, parent_id: Any):
        super().__init__(
            f"Setting parent of category '{category_id}' to '{parent_id}' would create a circular reference",
            details={"category_id": category_id, "parent_id": parent_id},
            error_code="CIRCULAR_REFERENCE",
        )


class CategoryHasSubcategoriesError(IntegrityViolationError):
    """Raised when deleting a category that still has children."""

    def __init__(self, category_id: Any, child_ids: Optional[List[Any]] = None):
        super().__init__(
            f"Category '{category_id}' has subcategories and cannot be deleted",
            details={"category_id": category_id, "child_ids": child_ids or []},
            error_code="CATEGORY_HAS_SUBCATEGORIES",
        )


# =============================================================================
# Item and Identifier Exceptions
# =============================================================================


class ItemNotFoundError(ResourceNotFoundError):
    """Raised when an inventory item cannot be found."""

    def __init__(self, item_id: Any):
        super().__init__(
            f"Item with ID '{item_id}' not found",
            resource_type="item",
            resource_id=item_id,
            error_code="ITEM_NOT_FOUND",
        )


class DuplicatePartNumberError(IntegrityViolationError):
    """Raised when a part number already belongs to another item."""

    def __init__(self, part_number: str, existing_item_id: Any = None):
        super().__init__(
            f"Part number '{part_number}' already exists",
            details={"part_number": part_number, "existing_item_id": existing_item_id},
            error_code="DUPLICATE_PART_NUMBER",
        )


class DuplicateBarcodeError(IntegrityViolationError):
    """Raised when a scanned barcode already belongs to another item."""

    def __init__(self, barcode: str, existing_item_id: Any = None):
        super().__init__(
            f"Barcode '{barcode}' already exists",
            details={"barcode": barcode, "existing_item_id": existing_item_id},
            error_code="DUPLICATE_BARCODE",
        )


class CategoryNameTooShortError(ValidationError):
    """Raised when a category name cannot supply a two letter code prefix."""

    def __init__(self, category_name: str):
        super().__init__(
            f"Category name '{category_name}' is too short to derive a code prefix",
            field_errors={"category_name": "must be at least 2 characters"},
            error_code="CATEGORY_NAME_TOO_SHORT",
        )


class MalformedIdentifierError(ValidationError):
    """Raised when a catalog code fails its shape or check digit test."""

    def __init__(self, code: str):
        super().__init__(
            f"'{code}' is not a valid catalog code",
            field_errors={"code": "expected 2 letters, 8 digits and a valid check digit"},
            error_code="MALFORMED_IDENTIFIER",
        )


# =============================================================================
# Supplier Exceptions
# =============================================================================


class SupplierNotFoundError(ResourceNotFoundError):
    """Raised when a supplier cannot be found."""

    def __init__(self, supplier_id: Any):
        super().__init__(
            f"Supplier with ID '{supplier_id}' not found",
            resource_type="supplier",
            resource_id=supplier_id,
            error_code="SUPPLIER_NOT_FOUND",
        )


class DuplicateSupplierNameError(IntegrityViolationError):
    """Raised when a supplier name already belongs to another supplier."""

    def __init__(self, name: str, existing_supplier_id: Any = None):
        super().__init__(
            f"Supplier name '{name}' already exists",
            details={"name": name, "existing_supplier_id": existing_supplier_id},
            error_code="DUPLICATE_SUPPLIER_NAME",
        )


# =============================================================================
# Vehicle and Fitment Exceptions
# =============================================================================


class VehicleMakeNotFoundError(ResourceNotFoundError):
    """Raised when a vehicle make cannot be found."""

    def __init__(self, make_id: Any):
        super().__init__(
            f"Vehicle make with ID '{make_id}' not found",
            resource_type="vehicle_make",
            resource_id=make_id,
            error_code="MAKE_NOT_FOUND",
        )


class VehicleModelNotFoundError(ResourceNotFoundError):
    """Raised when a vehicle model cannot be found."""

    def __init__(self, model_id: Any):
        super().__init__(
            f"Vehicle model with ID '{model_id}' not found",
            resource_type="vehicle_model",
            resource_id=model_id,
            error_code="MODEL_NOT_FOUND",
        )


class SubmodelNotFoundError(ResourceNotFoundError):
    """Raised when a vehicle submodel cannot be found."""

    def __init__(self, submodel_id: Any):
        super().__init__(
            f"Submodel with ID '{submodel_id}' not found",
            resource_type="submodel",
            resource_id=submodel_id,
            error_code="SUBMODEL_NOT_FOUND",
        )


class LinkNotFoundError(ResourceNotFoundError):
    """Raised when removing a fitment link that does not exist."""

    def __init__(self, item_id: Any, submodel_id: Any):
        super().__init__(
            f"No fitment link between item '{item_id}' and submodel '{submodel_id}'",
            resource_type="compatibility",
            error_code="LINK_NOT_FOUND",
        )
        self.details.update({"item_id": item_id, "submodel_id": submodel_id})


class LinkExistsError(IntegrityViolationError):
    """Raised when an item is already linked to a submodel."""

    def __init__(self, item_id: Any, submodel_id: Any):
        super().__init__(
            f"Item '{item_id}' is already linked to submodel '{submodel_id}'",
            details={"item_id": item_id, "submodel_id": submodel_id},
            error_code="LINK_EXISTS",
        )


class DependentRecordsError(IntegrityViolationError):
    """Raised when deleting a record that other records still reference."""

    def __init__(self, resource_type: str, resource_id: Any, dependent_type: str, count: int):
        super().__init__(
            f"Cannot delete {resource_type} '{resource_id}' with {count} existing {dependent_type}",
            details={
                "resource_type": resource_type,
                "resource_id": resource_id,
                "dependent_type": dependent_type,
                "dependent_count": count,
            },
            error_code="DEPENDENT_RECORDS_EXIST",
        )


# =============================================================================
# Exception Logging Helpers
# =============================================================================


def log_exception(exception: Exception, context: str = None, extra_info: Optional[Dict[str, Any]] = None):
    """
    Centralized exception logging with consistent format.

    Domain rejections are logged at WARNING; storage faults and anything that
    is not an AutoPartsException are logged at ERROR.

    Args:
        exception: The exception to log
        context: Additional context about where the exception occurred
        extra_info: Additional information to include in the log
    """
    if isinstance(exception, AutoPartsException):
        log_data = {
            "error_kind": exception.kind.value,
            "error_code": exception.error_code,
            "error_message": exception.message,  # LogRecord reserves "message"
            "details": exception.details,
            "context": context,
        }
        if extra_info:
            log_data.update(extra_info)

        level = logging.ERROR if exception.kind is ErrorKind.STORAGE else logging.WARNING
        logger.log(level, f"AutoParts Error: {exception.message}", extra=log_data)
    else:
        log_data = {
            "exception_type": type(exception).__name__,
            "error_message": str(exception),
            "context": context,
        }
        if extra_info:
            log_data.update(extra_info)

        logger.error(f"Unexpected Error: {str(exception)}", extra=log_data)


_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_REFERENCE: 400,
    ErrorKind.INTEGRITY_VIOLATION: 409,
    ErrorKind.MALFORMED_INPUT: 422,
    ErrorKind.STORAGE: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """
    Get the HTTP status an outer API layer should use for an exception.

    Every domain kind maps to a 4xx status; storage faults and unexpected
    exceptions map to 500.
    """
    if isinstance(exception, AutoPartsException):
        return _STATUS_BY_KIND.get(exception.kind, 500)
    return 500
