import logging
from typing import List, Optional

from AutoParts.exceptions import (
    SupplierNotFoundError,
    DuplicateSupplierNameError,
    DependentRecordsError,
    ValidationError,
)
from AutoParts.models.models import SupplierModel, SupplierUpdate
from AutoParts.repositories.supplier_repositories import SupplierRepository
from AutoParts.services.base_service import BaseService

logger = logging.getLogger(__name__)


class SupplierService(BaseService):
    """
    Supplier maintenance. Names are unique, and a supplier that items still
    reference cannot be deleted.
    """

    def __init__(self, engine_override=None):
        super().__init__(engine_override)
        self.entity_name = "Supplier"

    def get_all_suppliers(self, search_term: Optional[str] = None) -> List[SupplierModel]:
        with self.get_session() as session:
            return SupplierRepository.get_all_suppliers(session, search_term)

    def get_supplier(self, supplier_id: int) -> SupplierModel:
        self.require_positive_id(supplier_id, "supplier")
        with self.get_session() as session:
            supplier = SupplierRepository.get_supplier(session, supplier_id)
            if supplier is None:
                raise SupplierNotFoundError(supplier_id)
            return supplier

    def create_supplier(self, supplier: SupplierModel) -> int:
        """
        Add a supplier.

        Raises:
            ValidationError: If the name is missing
            DuplicateSupplierNameError: If another supplier has the same name
        """
        self.validate_required_fields({"name": supplier.name}, ["name"])
        self.log_operation("create", self.entity_name, supplier.name)

        with self.get_session() as session:
            existing = SupplierRepository.get_supplier_by_name(session, supplier.name)
            if existing is not None:
                raise DuplicateSupplierNameError(supplier.name, existing.id)
            return SupplierRepository.create_supplier(session, supplier).id

    def update_supplier(self, supplier_id: int, supplier_update: SupplierUpdate) -> SupplierModel:
        """
        Update a supplier's fields. A rename is checked against the other suppliers only.

        Raises:
            InvalidReferenceError: If the ID is not positive
            SupplierNotFoundError: If the supplier does not exist
            ValidationError: If the name is set to empty
            DuplicateSupplierNameError: If the new name belongs to another supplier
        """
        self.require_positive_id(supplier_id, "supplier")
        self.log_operation("update", self.entity_name, supplier_id)
        update_dict = supplier_update.model_dump(exclude_unset=True)
        if "name" in update_dict and not update_dict["name"]:
            raise ValidationError("Supplier name cannot be empty", missing_fields=["name"])

        with self.get_session() as session:
            supplier = SupplierRepository.get_supplier(session, supplier_id)
            if supplier is None:
                raise SupplierNotFoundError(supplier_id)

            new_name = update_dict.get("name")
            if new_name is not None and new_name != supplier.name:
                existing = SupplierRepository.get_supplier_by_name(session, new_name)
                if existing is not None and existing.id != supplier_id:
                    raise DuplicateSupplierNameError(new_name, existing.id)

            return SupplierRepository.update_supplier(session, supplier, update_dict)

    def delete_supplier(self, supplier_id: int) -> SupplierModel:
        """
        Delete a supplier that no item references.

        Raises:
            InvalidReferenceError: If the ID is not positive
            SupplierNotFoundError: If the supplier does not exist
            DependentRecordsError: If any item still names the supplier
        """
        self.require_positive_id(supplier_id, "supplier")
        self.log_operation("delete", self.entity_name, supplier_id)

        with self.get_session() as session:
            supplier = SupplierRepository.get_supplier(session, supplier_id)
            if supplier is None:
                raise SupplierNotFoundError(supplier_id)

            item_count = SupplierRepository.count_items(session, supplier_id)
            if item_count:
                raise DependentRecordsError("supplier", supplier_id, "items", item_count)

            return SupplierRepository.delete_supplier(session, supplier)
