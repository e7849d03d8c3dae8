import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, List

from sqlmodel import Session, select

from AutoParts.models.models import (
    VehicleMakeModel,
    VehicleModelModel,
    SubmodelModel,
    VehicleModelDetail,
    SubmodelDetail,
)
from AutoParts.repositories.base_repository import BaseRepository, commit_or_conflict

logger = logging.getLogger(__name__)


class VehicleRepository:
    makes = BaseRepository(VehicleMakeModel)
    models = BaseRepository(VehicleModelModel)
    submodels = BaseRepository(SubmodelModel)

    # --- Makes ---

    @staticmethod
    def get_all_makes(session: Session) -> List[VehicleMakeModel]:
        return list(session.exec(select(VehicleMakeModel).order_by(VehicleMakeModel.name)).all())

    @staticmethod
    def get_make(session: Session, make_id: int) -> Optional[VehicleMakeModel]:
        return session.get(VehicleMakeModel, make_id)

    # --- Models ---

    @staticmethod
    def get_models_by_make(session: Session, make_id: int) -> List[VehicleModelModel]:
        return list(
            session.exec(
                select(VehicleModelModel)
                .where(VehicleModelModel.make_id == make_id)
                .order_by(VehicleModelModel.name)
            ).all()
        )

    @staticmethod
    def get_all_models(session: Session) -> List[VehicleModelDetail]:
        """Every model with its make name, ordered by make name then model name."""
        rows = session.exec(
            select(VehicleModelModel, VehicleMakeModel)
            .join(VehicleMakeModel, VehicleModelModel.make_id == VehicleMakeModel.id)
            .order_by(VehicleMakeModel.name, VehicleModelModel.name)
        ).all()
        return [VehicleModelDetail(**model.model_dump(), make_name=make.name) for model, make in rows]

    @staticmethod
    def get_model(session: Session, model_id: int) -> Optional[VehicleModelModel]:
        return session.get(VehicleModelModel, model_id)

    # --- Submodels ---

    @staticmethod
    def get_submodels_by_model(session: Session, model_id: int) -> List[SubmodelModel]:
        return list(
            session.exec(
                select(SubmodelModel)
                .where(SubmodelModel.model_id == model_id)
                .order_by(SubmodelModel.name, SubmodelModel.year_from)
            ).all()
        )

    @staticmethod
    def get_all_submodels(session: Session) -> List[SubmodelDetail]:
        """Every submodel with model and make names, ordered make > model > submodel."""
        rows = session.exec(
            select(SubmodelModel, VehicleModelModel, VehicleMakeModel)
            .join(VehicleModelModel, SubmodelModel.model_id == VehicleModelModel.id)
            .join(VehicleMakeModel, VehicleModelModel.make_id == VehicleMakeModel.id)
            .order_by(VehicleMakeModel.name, VehicleModelModel.name, SubmodelModel.name)
        ).all()
        return [
            SubmodelDetail(**submodel.model_dump(), model_name=model.name, make_name=make.name)
            for submodel, model, make in rows
        ]

    @staticmethod
    def get_submodel(session: Session, submodel_id: int) -> Optional[SubmodelModel]:
        return session.get(SubmodelModel, submodel_id)

    @staticmethod
    def submodel_exists(session: Session, submodel_id: int) -> bool:
        return VehicleRepository.submodels.exists(session, submodel_id)

    # --- Shared write path ---

    @staticmethod
    def apply_update(session: Session, record, data: Dict[str, Any]):
        for key, value in data.items():
            setattr(record, key, value)
        record.updated_at = datetime.now(timezone.utc)
        logger.debug(f"[REPO] Updating {record.__tablename__} {record.id}: {', '.join(data.keys())}")
        session.add(record)
        commit_or_conflict(session, f"update of {record.__tablename__}")
        session.refresh(record)
        return record
