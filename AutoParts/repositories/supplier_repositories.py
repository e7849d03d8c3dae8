import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, List

from sqlalchemy import func
from sqlmodel import Session, select

from AutoParts.models.models import SupplierModel, ItemModel
from AutoParts.repositories.base_repository import commit_or_conflict

logger = logging.getLogger(__name__)


class SupplierRepository:

    @staticmethod
    def get_supplier(session: Session, supplier_id: int) -> Optional[SupplierModel]:
        return session.get(SupplierModel, supplier_id)

    @staticmethod
    def get_supplier_by_name(session: Session, name: str) -> Optional[SupplierModel]:
        return session.exec(select(SupplierModel).where(SupplierModel.name == name)).first()

    @staticmethod
    def get_all_suppliers(session: Session, search_term: Optional[str] = None) -> List[SupplierModel]:
        """All suppliers ordered by name, optionally narrowed by a case-insensitive name substring."""
        query = select(SupplierModel)
        if search_term:
            query = query.where(SupplierModel.name.ilike(f"%{search_term}%"))
        return list(session.exec(query.order_by(SupplierModel.name)).all())

    @staticmethod
    def count_items(session: Session, supplier_id: int) -> int:
        """Number of items, active or not, that reference the supplier."""
        return session.exec(
            select(func.count(ItemModel.id)).where(ItemModel.supplier_id == supplier_id)
        ).one()

    @staticmethod
    def create_supplier(session: Session, supplier: SupplierModel) -> SupplierModel:
        logger.debug(f"[REPO] Creating supplier in database: {supplier.name}")
        session.add(supplier)
        commit_or_conflict(session, "supplier insert")
        session.refresh(supplier)
        return supplier

    @staticmethod
    def update_supplier(session: Session, supplier: SupplierModel, supplier_data: Dict[str, Any]) -> SupplierModel:
        for key, value in supplier_data.items():
            setattr(supplier, key, value)
        supplier.updated_at = datetime.now(timezone.utc)

        logger.debug(f"[REPO] Updating supplier {supplier.id} fields: {', '.join(supplier_data.keys())}")
        session.add(supplier)
        commit_or_conflict(session, "supplier update")
        session.refresh(supplier)
        return supplier

    @staticmethod
    def delete_supplier(session: Session, supplier: SupplierModel) -> SupplierModel:
        logger.debug(f"[REPO] Removing supplier from database: {supplier.name} (ID: {supplier.id})")
        session.delete(supplier)
        commit_or_conflict(session, "supplier delete")
        return supplier
