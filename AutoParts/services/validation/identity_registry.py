"""
Catalog-wide uniqueness checks for item identifiers.

Two independent identifier domains are guarded: the catalog part number and
the optional scanned barcode. Both checks read before the write and are not
atomic with it; two concurrent writers can both pass. The unique constraints
on ``items.part_number`` and ``items.barcode`` catch that case and surface as
StorageConflictError from the repository.
"""

import logging
from typing import Optional

from sqlmodel import Session

from AutoParts.exceptions import DuplicatePartNumberError, DuplicateBarcodeError
from AutoParts.models.models import ItemModel
from AutoParts.repositories.item_repositories import ItemRepository

logger = logging.getLogger(__name__)


class IdentityRegistry:

    @staticmethod
    def ensure_unique_part_number(
        session: Session,
        part_number: str,
        item_id: Optional[int] = None,
        current: Optional[ItemModel] = None,
    ) -> None:
        """
        Reject a part number that already belongs to another item.

        Args:
            session: The database session
            part_number: Proposed part number
            item_id: ID of the item being updated, None on create
            current: Stored state of the item being updated; an unchanged
                part number is not re-checked

        Raises:
            DuplicatePartNumberError: If another item holds the part number
        """
        if current is not None and current.part_number == part_number:
            return

        existing = ItemRepository.get_item_by_part_number(session, part_number)
        if existing is not None and existing.id != item_id:
            logger.warning(f"Part number '{part_number}' already used by item {existing.id}")
            raise DuplicatePartNumberError(part_number, existing.id)

    @staticmethod
    def ensure_unique_barcode(
        session: Session,
        barcode: Optional[str],
        item_id: Optional[int] = None,
        current: Optional[ItemModel] = None,
    ) -> None:
        """
        Reject a scanned barcode that already belongs to another item.

        Skipped entirely when no barcode (or an empty one) is supplied.

        Raises:
            DuplicateBarcodeError: If another item holds the barcode
        """
        if not barcode:
            return
        if current is not None and current.barcode == barcode:
            return

        existing = ItemRepository.get_item_by_barcode(session, barcode)
        if existing is not None and existing.id != item_id:
            logger.warning(f"Barcode '{barcode}' already used by item {existing.id}")
            raise DuplicateBarcodeError(barcode, existing.id)
