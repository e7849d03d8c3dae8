import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, List

from sqlalchemy import func, or_
from sqlmodel import Session, select

from AutoParts.models.models import ItemModel, ItemFilter, CompatibilityModel
from AutoParts.repositories.base_repository import BaseRepository, commit_or_conflict

logger = logging.getLogger(__name__)


class ItemRepository(BaseRepository[ItemModel]):

    def __init__(self):
        super().__init__(ItemModel)

    @staticmethod
    def get_item(session: Session, item_id: int) -> Optional[ItemModel]:
        return session.get(ItemModel, item_id)

    @staticmethod
    def get_item_by_part_number(session: Session, part_number: str) -> Optional[ItemModel]:
        """Look up an item by its catalog part number. Returns None when absent."""
        return session.exec(select(ItemModel).where(ItemModel.part_number == part_number)).first()

    @staticmethod
    def get_item_by_barcode(session: Session, barcode: str) -> Optional[ItemModel]:
        """Look up an item by its scanned barcode. Returns None when absent."""
        return session.exec(select(ItemModel).where(ItemModel.barcode == barcode)).first()

    @staticmethod
    def next_sequence_number(session: Session) -> int:
        """The sequence number the next generated catalog code should carry."""
        max_id = session.exec(select(func.max(ItemModel.id))).one()
        return (max_id or 0) + 1

    @staticmethod
    def create_item(session: Session, item: ItemModel) -> ItemModel:
        logger.debug(f"[REPO] Creating item in database: {item.part_number}")
        session.add(item)
        commit_or_conflict(session, "item insert")
        session.refresh(item)
        logger.debug(f"[REPO] Successfully created item: {item.part_number} (ID: {item.id})")
        return item

    @staticmethod
    def update_item(session: Session, item: ItemModel, item_data: Dict[str, Any]) -> ItemModel:
        for key, value in item_data.items():
            setattr(item, key, value)
        item.updated_at = datetime.now(timezone.utc)

        logger.debug(f"[REPO] Updating item {item.id} fields: {', '.join(item_data.keys())}")
        session.add(item)
        commit_or_conflict(session, "item update")
        session.refresh(item)
        return item

    @staticmethod
    def delete_item(session: Session, item: ItemModel) -> ItemModel:
        """Delete an item together with its fitment links."""
        links = session.exec(select(CompatibilityModel).where(CompatibilityModel.item_id == item.id)).all()
        if links:
            logger.debug(f"[REPO] Removing {len(links)} fitment links for item {item.id}")
            for link in links:
                session.delete(link)
            session.flush()
        session.delete(item)
        commit_or_conflict(session, "item delete")
        return item

    @staticmethod
    def get_low_stock_items(session: Session) -> List[ItemModel]:
        """Active items at or below their minimum stock, lowest stock first."""
        return list(
            session.exec(
                select(ItemModel)
                .where(ItemModel.current_stock <= ItemModel.minimum_stock)
                .where(ItemModel.is_active == True)  # noqa: E712
                .order_by(ItemModel.current_stock, ItemModel.part_number)
            ).all()
        )

    @staticmethod
    def get_items(session: Session, item_filter: Optional[ItemFilter] = None) -> List[ItemModel]:
        """
        List items matching every criterion set on the filter, ordered by part number.

        Text criteria are case-insensitive substring matches.
        """
        query = select(ItemModel)

        if item_filter is not None:
            if item_filter.category_id is not None:
                query = query.where(ItemModel.category_id == item_filter.category_id)
            if item_filter.supplier_id is not None:
                query = query.where(ItemModel.supplier_id == item_filter.supplier_id)
            if item_filter.part_number:
                query = query.where(ItemModel.part_number.ilike(f"%{item_filter.part_number}%"))
            if item_filter.search_term:
                search_term = f"%{item_filter.search_term}%"
                query = query.where(
                    or_(
                        ItemModel.part_number.ilike(search_term),
                        ItemModel.description.ilike(search_term),
                    )
                )
            if item_filter.low_stock:
                query = query.where(ItemModel.current_stock <= ItemModel.minimum_stock)
            if item_filter.is_active is not None:
                query = query.where(ItemModel.is_active == item_filter.is_active)

        return list(session.exec(query.order_by(ItemModel.part_number)).all())
