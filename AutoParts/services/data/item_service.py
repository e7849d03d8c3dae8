import logging
from typing import Any, Dict, List, Optional

from sqlmodel import Session

from AutoParts.exceptions import ItemNotFoundError, InvalidReferenceError, ValidationError
from AutoParts.models.models import ItemModel, ItemUpdate, ItemFilter, CategoryModel
from AutoParts.repositories.category_repositories import CategoryRepository
from AutoParts.repositories.item_repositories import ItemRepository
from AutoParts.repositories.supplier_repositories import SupplierRepository
from AutoParts.services.base_service import BaseService
from AutoParts.services.validation.identity_registry import IdentityRegistry
from AutoParts.utils.barcode import BarcodeGenerator

logger = logging.getLogger(__name__)

ITEM_FIELDS = set(ItemUpdate.model_fields.keys()) | {"location_aisle", "location_shelf", "location_bin"}
NON_NULLABLE_FIELDS = {
    "part_number", "description", "buy_price", "sell_price", "current_stock", "minimum_stock", "is_active",
}


class ItemService(BaseService):
    """
    Item create/update with identifier integrity.

    Every write is preceded by the IdentityRegistry checks so a conflicting
    part number or barcode is reported as a domain error before the insert.
    """

    def __init__(self, engine_override=None):
        super().__init__(engine_override)
        self.entity_name = "Item"

    def create_item(self, item_data: ItemModel) -> int:
        """
        Create an item.

        When no part number is given and the item has a category, a catalog code
        is generated from the category name and the next sequence number.

        Returns:
            int: ID of the created item

        Raises:
            ValidationError: If required fields are missing or out of range
            InvalidReferenceError: If the category or supplier does not exist
            DuplicatePartNumberError: If the part number is taken
            DuplicateBarcodeError: If the barcode is taken
        """
        data = item_data.model_dump(include=ITEM_FIELDS)
        data["barcode"] = data.get("barcode") or None
        self._validate_item(data, require_part_number=False)

        self.log_operation("create", self.entity_name, data.get("part_number"))

        with self.get_session() as session:
            category = None
            if data.get("category_id") is not None:
                category = self._require_category(session, data["category_id"])
            if data.get("supplier_id") is not None:
                self._require_supplier(session, data["supplier_id"])

            if not data.get("part_number"):
                if category is None:
                    raise ValidationError(
                        "Part number is required when the item has no category",
                        missing_fields=["part_number"],
                    )
                data["part_number"] = BarcodeGenerator.generate(
                    category.name, ItemRepository.next_sequence_number(session)
                )

            IdentityRegistry.ensure_unique_part_number(session, data["part_number"])
            IdentityRegistry.ensure_unique_barcode(session, data["barcode"])

            item = ItemRepository.create_item(session, ItemModel(**data))
            self.logger.info(f"Created item {item.part_number} (ID: {item.id})")
            return item.id

    def update_item(self, item_id: int, item_update: ItemUpdate) -> ItemModel:
        """
        Update an item's fields.

        The part number and barcode are only re-checked when they change, and a
        match against the item itself never counts as a conflict. A catalog
        code is never regenerated here.

        Raises:
            ItemNotFoundError: If the item does not exist
            ValidationError: If the merged item fails validation
            InvalidReferenceError: If a new category or supplier does not exist
            DuplicatePartNumberError: If the part number is taken
            DuplicateBarcodeError: If the barcode is taken
        """
        self.log_operation("update", self.entity_name, item_id)
        update_dict = {
            key: value
            for key, value in item_update.model_dump(exclude_unset=True).items()
            if value is not None or key not in NON_NULLABLE_FIELDS
        }
        if "barcode" in update_dict:
            update_dict["barcode"] = update_dict["barcode"] or None

        with self.get_session() as session:
            current = ItemRepository.get_item(session, item_id)
            if current is None:
                raise ItemNotFoundError(item_id)

            merged = current.model_dump(include=ITEM_FIELDS)
            merged.update(update_dict)
            self._validate_item(merged, require_part_number=True)

            if update_dict.get("category_id") is not None and update_dict["category_id"] != current.category_id:
                self._require_category(session, update_dict["category_id"])
            if update_dict.get("supplier_id") is not None and update_dict["supplier_id"] != current.supplier_id:
                self._require_supplier(session, update_dict["supplier_id"])

            IdentityRegistry.ensure_unique_part_number(session, merged["part_number"], item_id, current)
            IdentityRegistry.ensure_unique_barcode(session, merged["barcode"], item_id, current)

            return ItemRepository.update_item(session, current, update_dict)

    def delete_item(self, item_id: int) -> ItemModel:
        """Delete an item and its fitment links."""
        self.log_operation("delete", self.entity_name, item_id)
        with self.get_session() as session:
            item = ItemRepository.get_item(session, item_id)
            if item is None:
                raise ItemNotFoundError(item_id)
            return ItemRepository.delete_item(session, item)

    def get_item(self, item_id: int) -> ItemModel:
        with self.get_session() as session:
            item = ItemRepository.get_item(session, item_id)
            if item is None:
                raise ItemNotFoundError(item_id)
            return item

    def get_item_by_part_number(self, part_number: str) -> Optional[ItemModel]:
        if not part_number:
            raise ValidationError("Part number is required", missing_fields=["part_number"])
        with self.get_session() as session:
            return ItemRepository.get_item_by_part_number(session, part_number)

    def get_item_by_barcode(self, barcode: str) -> Optional[ItemModel]:
        if not barcode:
            raise ValidationError("Barcode is required", missing_fields=["barcode"])
        with self.get_session() as session:
            return ItemRepository.get_item_by_barcode(session, barcode)

    def get_item_by_catalog_code(self, code: str) -> Optional[ItemModel]:
        """
        Look up an item by a generated catalog code.

        Raises:
            MalformedIdentifierError: If the code fails its shape or check digit test
        """
        BarcodeGenerator.parse(code)
        with self.get_session() as session:
            return ItemRepository.get_item_by_part_number(session, code)

    def get_low_stock_items(self) -> List[ItemModel]:
        with self.get_session() as session:
            return ItemRepository.get_low_stock_items(session)

    def get_items(self, item_filter: Optional[ItemFilter] = None) -> List[ItemModel]:
        """List items matching the filter, ordered by part number. No filter lists every item."""
        with self.get_session() as session:
            return ItemRepository.get_items(session, item_filter)

    # --- helpers ---

    @staticmethod
    def _require_category(session: Session, category_id: int) -> CategoryModel:
        category = CategoryRepository.get_category(session, category_id)
        if category is None:
            raise InvalidReferenceError(
                f"Category with ID '{category_id}' does not exist",
                reference_type="category",
                reference_id=category_id,
            )
        return category

    @staticmethod
    def _require_supplier(session: Session, supplier_id: int) -> None:
        if SupplierRepository.get_supplier(session, supplier_id) is None:
            raise InvalidReferenceError(
                f"Supplier with ID '{supplier_id}' does not exist",
                reference_type="supplier",
                reference_id=supplier_id,
            )

    @staticmethod
    def _validate_item(data: Dict[str, Any], require_part_number: bool) -> None:
        field_errors = {}
        if require_part_number and not data.get("part_number"):
            field_errors["part_number"] = "part number is required"
        if not data.get("description"):
            field_errors["description"] = "description is required"
        if (data.get("buy_price") or 0) <= 0:
            field_errors["buy_price"] = "buy price must be greater than 0"
        if (data.get("sell_price") or 0) <= 0:
            field_errors["sell_price"] = "sell price must be greater than 0"
        if (data.get("current_stock") or 0) < 0:
            field_errors["current_stock"] = "current stock cannot be negative"
        if (data.get("minimum_stock") or 0) < 0:
            field_errors["minimum_stock"] = "minimum stock cannot be negative"

        if field_errors:
            raise ValidationError(
                f"Invalid item: {', '.join(sorted(field_errors))}",
                field_errors=field_errors,
            )
