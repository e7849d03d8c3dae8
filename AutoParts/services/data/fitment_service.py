import logging
from typing import List, Optional

from AutoParts.exceptions import (
    ItemNotFoundError,
    SubmodelNotFoundError,
    LinkExistsError,
    LinkNotFoundError,
)
from AutoParts.models.models import CompatibilityModel, CompatibilityDetail, ItemModel
from AutoParts.repositories.fitment_repositories import FitmentRepository
from AutoParts.repositories.item_repositories import ItemRepository
from AutoParts.repositories.vehicle_repositories import VehicleRepository
from AutoParts.services.base_service import BaseService

logger = logging.getLogger(__name__)


class FitmentService(BaseService):
    """
    Owns the item <-> vehicle submodel compatibility matrix.

    The duplicate check reads the item's existing links and compares submodel
    IDs before inserting, so an existing pair is reported as LinkExistsError.
    The check and the insert are not atomic; the unique (item_id, submodel_id)
    constraint rejects the insert of a concurrent duplicate with a
    StorageConflictError.
    """

    def __init__(self, engine_override=None):
        super().__init__(engine_override)
        self.entity_name = "Compatibility"
        self.items = ItemRepository()

    def add_link(self, item_id: int, submodel_id: int, notes: Optional[str] = None) -> int:
        """
        Record that an item fits a submodel.

        Returns:
            int: ID of the new link

        Raises:
            InvalidReferenceError: If either ID is not positive
            ItemNotFoundError: If the item does not exist
            SubmodelNotFoundError: If the submodel does not exist
            LinkExistsError: If the pair is already linked
        """
        self._check_ids(item_id, submodel_id)
        self.log_operation("link", self.entity_name, f"{item_id}->{submodel_id}")

        with self.get_session() as session:
            if not self.items.exists(session, item_id):
                raise ItemNotFoundError(item_id)
            if not VehicleRepository.submodel_exists(session, submodel_id):
                raise SubmodelNotFoundError(submodel_id)

            existing_links = FitmentRepository.get_link_records(session, item_id)
            if any(link.submodel_id == submodel_id for link in existing_links):
                self.logger.warning(f"Item {item_id} already linked to submodel {submodel_id}")
                raise LinkExistsError(item_id, submodel_id)

            link = FitmentRepository.add_link(
                session, CompatibilityModel(item_id=item_id, submodel_id=submodel_id, notes=notes)
            )
            self.logger.info(f"Linked item {item_id} to submodel {submodel_id} (ID: {link.id})")
            return link.id

    def remove_link(self, item_id: int, submodel_id: int) -> None:
        """
        Remove the link for an (item, submodel) pair.

        Raises:
            InvalidReferenceError: If either ID is not positive
            LinkNotFoundError: If no such link exists
        """
        self._check_ids(item_id, submodel_id)
        self.log_operation("unlink", self.entity_name, f"{item_id}->{submodel_id}")

        with self.get_session() as session:
            removed = FitmentRepository.remove_link(session, item_id, submodel_id)
            if removed == 0:
                raise LinkNotFoundError(item_id, submodel_id)

    def get_links_for_item(self, item_id: int) -> List[CompatibilityDetail]:
        """Links of an item ordered by make, model and submodel name."""
        self.require_positive_id(item_id, "item")
        with self.get_session() as session:
            return FitmentRepository.get_links_for_item(session, item_id)

    def get_items_for_submodel(self, submodel_id: int) -> List[ItemModel]:
        """Active items fitting a submodel, ordered by part number."""
        self.require_positive_id(submodel_id, "submodel")
        with self.get_session() as session:
            return FitmentRepository.get_items_for_submodel(session, submodel_id)

    # --- helpers ---

    def _check_ids(self, item_id: int, submodel_id: int) -> None:
        self.require_positive_id(item_id, "item")
        self.require_positive_id(submodel_id, "submodel")
