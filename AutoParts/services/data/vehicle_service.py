import logging
from typing import Any, Dict, List

from AutoParts.exceptions import (
    VehicleMakeNotFoundError,
    VehicleModelNotFoundError,
    SubmodelNotFoundError,
    DependentRecordsError,
    ValidationError,
)
from AutoParts.models.models import (
    VehicleMakeModel,
    VehicleModelModel,
    SubmodelModel,
    VehicleModelDetail,
    SubmodelDetail,
)
from AutoParts.repositories.vehicle_repositories import VehicleRepository
from AutoParts.services.base_service import BaseService

logger = logging.getLogger(__name__)

SUBMODEL_REQUIRED_FIELDS = ["name", "engine_type", "fuel_type", "transmission_type", "body_type"]


class VehicleService(BaseService):
    """
    Make > Model > Submodel maintenance.

    A child always needs an existing parent, and a parent with children
    cannot be deleted.
    """

    # --- Makes ---

    def get_all_makes(self) -> List[VehicleMakeModel]:
        with self.get_session() as session:
            return VehicleRepository.get_all_makes(session)

    def get_make(self, make_id: int) -> VehicleMakeModel:
        self.require_positive_id(make_id, "make")
        with self.get_session() as session:
            make = VehicleRepository.get_make(session, make_id)
            if make is None:
                raise VehicleMakeNotFoundError(make_id)
            return make

    def create_make(self, make: VehicleMakeModel) -> int:
        self.validate_required_fields({"name": make.name}, ["name"])
        self.log_operation("create", "VehicleMake", make.name)
        with self.get_session() as session:
            return VehicleRepository.makes.create(session, make).id

    def update_make(self, make_id: int, data: Dict[str, Any]) -> VehicleMakeModel:
        self.require_positive_id(make_id, "make")
        if "name" in data:
            self.validate_required_fields(data, ["name"])
        self.log_operation("update", "VehicleMake", make_id)
        with self.get_session() as session:
            make = VehicleRepository.get_make(session, make_id)
            if make is None:
                raise VehicleMakeNotFoundError(make_id)
            return VehicleRepository.apply_update(session, make, data)

    def delete_make(self, make_id: int) -> None:
        self.require_positive_id(make_id, "make")
        self.log_operation("delete", "VehicleMake", make_id)
        with self.get_session() as session:
            if VehicleRepository.get_make(session, make_id) is None:
                raise VehicleMakeNotFoundError(make_id)
            models = VehicleRepository.get_models_by_make(session, make_id)
            if models:
                raise DependentRecordsError("make", make_id, "models", len(models))
            VehicleRepository.makes.delete(session, make_id)

    # --- Models ---

    def get_all_models(self) -> List[VehicleModelDetail]:
        """Every model with its make name, ordered by make name then model name."""
        with self.get_session() as session:
            return VehicleRepository.get_all_models(session)

    def get_models_by_make(self, make_id: int) -> List[VehicleModelModel]:
        self.require_positive_id(make_id, "make")
        with self.get_session() as session:
            if VehicleRepository.get_make(session, make_id) is None:
                raise VehicleMakeNotFoundError(make_id)
            return VehicleRepository.get_models_by_make(session, make_id)

    def get_model(self, model_id: int) -> VehicleModelModel:
        self.require_positive_id(model_id, "model")
        with self.get_session() as session:
            model = VehicleRepository.get_model(session, model_id)
            if model is None:
                raise VehicleModelNotFoundError(model_id)
            return model

    def create_model(self, model: VehicleModelModel) -> int:
        self.validate_required_fields({"name": model.name}, ["name"])
        self.log_operation("create", "VehicleModel", model.name)
        with self.get_session() as session:
            if VehicleRepository.get_make(session, model.make_id) is None:
                raise VehicleMakeNotFoundError(model.make_id)
            return VehicleRepository.models.create(session, model).id

    def update_model(self, model_id: int, data: Dict[str, Any]) -> VehicleModelModel:
        self.require_positive_id(model_id, "model")
        if "name" in data:
            self.validate_required_fields(data, ["name"])
        self.log_operation("update", "VehicleModel", model_id)
        with self.get_session() as session:
            model = VehicleRepository.get_model(session, model_id)
            if model is None:
                raise VehicleModelNotFoundError(model_id)
            if "make_id" in data and data["make_id"] != model.make_id:
                if VehicleRepository.get_make(session, data["make_id"]) is None:
                    raise VehicleMakeNotFoundError(data["make_id"])
            return VehicleRepository.apply_update(session, model, data)

    def delete_model(self, model_id: int) -> None:
        self.require_positive_id(model_id, "model")
        self.log_operation("delete", "VehicleModel", model_id)
        with self.get_session() as session:
            if VehicleRepository.get_model(session, model_id) is None:
                raise VehicleModelNotFoundError(model_id)
            submodels = VehicleRepository.get_submodels_by_model(session, model_id)
            if submodels:
                raise DependentRecordsError("model", model_id, "submodels", len(submodels))
            VehicleRepository.models.delete(session, model_id)

    # --- Submodels ---

    def get_all_submodels(self) -> List[SubmodelDetail]:
        """Every submodel with model and make names, ordered make > model > submodel."""
        with self.get_session() as session:
            return VehicleRepository.get_all_submodels(session)

    def get_submodels_by_model(self, model_id: int) -> List[SubmodelModel]:
        self.require_positive_id(model_id, "model")
        with self.get_session() as session:
            if VehicleRepository.get_model(session, model_id) is None:
                raise VehicleModelNotFoundError(model_id)
            return VehicleRepository.get_submodels_by_model(session, model_id)

    def get_submodel(self, submodel_id: int) -> SubmodelModel:
        self.require_positive_id(submodel_id, "submodel")
        with self.get_session() as session:
            submodel = VehicleRepository.get_submodel(session, submodel_id)
            if submodel is None:
                raise SubmodelNotFoundError(submodel_id)
            return submodel

    def create_submodel(self, submodel: SubmodelModel) -> int:
        self._validate_submodel(submodel.model_dump())
        self.log_operation("create", "Submodel", submodel.name)
        with self.get_session() as session:
            if VehicleRepository.get_model(session, submodel.model_id) is None:
                raise VehicleModelNotFoundError(submodel.model_id)
            return VehicleRepository.submodels.create(session, submodel).id

    def update_submodel(self, submodel_id: int, data: Dict[str, Any]) -> SubmodelModel:
        self.require_positive_id(submodel_id, "submodel")
        self.log_operation("update", "Submodel", submodel_id)
        with self.get_session() as session:
            submodel = VehicleRepository.get_submodel(session, submodel_id)
            if submodel is None:
                raise SubmodelNotFoundError(submodel_id)

            merged = submodel.model_dump()
            merged.update(data)
            self._validate_submodel(merged)

            if "model_id" in data and data["model_id"] != submodel.model_id:
                if VehicleRepository.get_model(session, data["model_id"]) is None:
                    raise VehicleModelNotFoundError(data["model_id"])
            return VehicleRepository.apply_update(session, submodel, data)

    def delete_submodel(self, submodel_id: int) -> None:
        """
        Delete a submodel.

        Fitment links to it are not checked here. Where the database enforces
        foreign keys, deleting a linked submodel is rejected by storage.

        Raises:
            InvalidReferenceError: If the ID is not positive
            SubmodelNotFoundError: If the submodel does not exist
            StorageConflictError: If fitment links still reference the submodel
        """
        self.require_positive_id(submodel_id, "submodel")
        self.log_operation("delete", "Submodel", submodel_id)
        with self.get_session() as session:
            if VehicleRepository.get_submodel(session, submodel_id) is None:
                raise SubmodelNotFoundError(submodel_id)
            VehicleRepository.submodels.delete(session, submodel_id)

    def _validate_submodel(self, data: Dict[str, Any]) -> None:
        self.validate_required_fields(data, SUBMODEL_REQUIRED_FIELDS)

        field_errors = {}
        if not data.get("year_from") or data["year_from"] <= 0:
            field_errors["year_from"] = "valid start year is required"
        if not data.get("engine_displacement") or data["engine_displacement"] <= 0:
            field_errors["engine_displacement"] = "valid engine displacement is required"
        if data.get("year_to") is not None and data.get("year_from") and data["year_to"] < data["year_from"]:
            field_errors["year_to"] = "end year cannot be earlier than start year"

        if field_errors:
            raise ValidationError(
                f"Invalid submodel: {', '.join(sorted(field_errors))}",
                field_errors=field_errors,
            )
