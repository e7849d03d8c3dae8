import logging
from typing import Optional, List

from sqlmodel import Session, select

from AutoParts.models.models import (
    CompatibilityModel,
    CompatibilityDetail,
    ItemModel,
    SubmodelModel,
    VehicleModelModel,
    VehicleMakeModel,
)
from AutoParts.repositories.base_repository import commit_or_conflict

logger = logging.getLogger(__name__)


class FitmentRepository:
    """Storage access for the item <-> submodel compatibility table."""

    @staticmethod
    def get_links_for_item(session: Session, item_id: int) -> List[CompatibilityDetail]:
        """
        Get every fitment link of an item with make/model/submodel names attached.

        Ordered by make name, then model name, then submodel name.
        """
        rows = session.exec(
            select(CompatibilityModel, SubmodelModel, VehicleModelModel, VehicleMakeModel)
            .join(SubmodelModel, CompatibilityModel.submodel_id == SubmodelModel.id)
            .join(VehicleModelModel, SubmodelModel.model_id == VehicleModelModel.id)
            .join(VehicleMakeModel, VehicleModelModel.make_id == VehicleMakeModel.id)
            .where(CompatibilityModel.item_id == item_id)
            .order_by(VehicleMakeModel.name, VehicleModelModel.name, SubmodelModel.name)
        ).all()

        return [
            CompatibilityDetail(
                id=link.id,
                item_id=link.item_id,
                submodel_id=link.submodel_id,
                notes=link.notes,
                created_at=link.created_at,
                make_name=make.name,
                model_name=model.name,
                submodel_name=submodel.name,
                year_from=submodel.year_from,
                year_to=submodel.year_to,
            )
            for link, submodel, model, make in rows
        ]

    @staticmethod
    def get_link_records(session: Session, item_id: int) -> List[CompatibilityModel]:
        """Raw link rows of an item, without joining the vehicle tables."""
        return list(session.exec(select(CompatibilityModel).where(CompatibilityModel.item_id == item_id)).all())

    @staticmethod
    def get_link(session: Session, item_id: int, submodel_id: int) -> Optional[CompatibilityModel]:
        return session.exec(
            select(CompatibilityModel)
            .where(CompatibilityModel.item_id == item_id)
            .where(CompatibilityModel.submodel_id == submodel_id)
        ).first()

    @staticmethod
    def add_link(session: Session, link: CompatibilityModel) -> CompatibilityModel:
        logger.debug(f"[REPO] Linking item {link.item_id} to submodel {link.submodel_id}")
        session.add(link)
        commit_or_conflict(session, "compatibility insert")
        session.refresh(link)
        return link

    @staticmethod
    def remove_link(session: Session, item_id: int, submodel_id: int) -> int:
        """
        Delete the link for an (item, submodel) pair.

        Returns:
            int: number of rows removed (0 or 1, the pair is unique)
        """
        link = FitmentRepository.get_link(session, item_id, submodel_id)
        if link is None:
            return 0
        session.delete(link)
        commit_or_conflict(session, "compatibility delete")
        logger.debug(f"[REPO] Unlinked item {item_id} from submodel {submodel_id}")
        return 1

    @staticmethod
    def get_items_for_submodel(session: Session, submodel_id: int) -> List[ItemModel]:
        """Active items that fit a submodel, ordered by part number."""
        return list(
            session.exec(
                select(ItemModel)
                .join(CompatibilityModel, CompatibilityModel.item_id == ItemModel.id)
                .where(CompatibilityModel.submodel_id == submodel_id)
                .where(ItemModel.is_active == True)  # noqa: E712
                .order_by(ItemModel.part_number)
            ).all()
        )
