"""
Tests for make > model > submodel maintenance.
"""

import pytest

from AutoParts.exceptions import (
    VehicleMakeNotFoundError,
    VehicleModelNotFoundError,
    SubmodelNotFoundError,
    DependentRecordsError,
    InvalidReferenceError,
    ValidationError,
    ErrorKind,
)
from AutoParts.models.models import VehicleMakeModel, VehicleModelModel, SubmodelModel
from AutoParts.services.data.vehicle_service import VehicleService
from AutoParts.tests.unit_tests.test_database import add_vehicle, create_test_engine


def new_submodel(model_id: int, **fields) -> SubmodelModel:
    defaults = {
        "name": "1.4 TFSI",
        "year_from": 2012,
        "year_to": 2020,
        "engine_type": "I4",
        "engine_displacement": 1.4,
        "fuel_type": "petrol",
        "transmission_type": "manual",
        "body_type": "hatchback",
    }
    defaults.update(fields)
    return SubmodelModel(model_id=model_id, **defaults)


class TestMakesAndModels:

    @pytest.fixture(autouse=True)
    def setup(self, engine):
        self.service = VehicleService(engine_override=engine)

    def test_makes_listed_by_name(self):
        self.service.create_make(VehicleMakeModel(name="Volkswagen"))
        self.service.create_make(VehicleMakeModel(name="Audi"))

        assert [m.name for m in self.service.get_all_makes()] == ["Audi", "Volkswagen"]

    def test_make_name_required(self):
        with pytest.raises(ValidationError) as exc_info:
            self.service.create_make(VehicleMakeModel(name=""))

        assert exc_info.value.missing_fields == ["name"]

    def test_rename_make(self):
        make_id = self.service.create_make(VehicleMakeModel(name="VW"))

        updated = self.service.update_make(make_id, {"name": "Volkswagen"})

        assert updated.name == "Volkswagen"
        assert self.service.get_make(make_id).name == "Volkswagen"

    def test_model_requires_existing_make(self):
        with pytest.raises(VehicleMakeNotFoundError) as exc_info:
            self.service.create_model(VehicleModelModel(make_id=99, name="A3"))

        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_models_by_make(self):
        make_id = self.service.create_make(VehicleMakeModel(name="Audi"))
        self.service.create_model(VehicleModelModel(make_id=make_id, name="A4"))
        self.service.create_model(VehicleModelModel(make_id=make_id, name="A3"))

        assert [m.name for m in self.service.get_models_by_make(make_id)] == ["A3", "A4"]

    def test_move_model_to_missing_make_rejected(self):
        make_id = self.service.create_make(VehicleMakeModel(name="Audi"))
        model_id = self.service.create_model(VehicleModelModel(make_id=make_id, name="A3"))

        with pytest.raises(VehicleMakeNotFoundError):
            self.service.update_model(model_id, {"make_id": 500})

    def test_make_with_models_cannot_be_deleted(self):
        make_id = self.service.create_make(VehicleMakeModel(name="Audi"))
        self.service.create_model(VehicleModelModel(make_id=make_id, name="A3"))

        with pytest.raises(DependentRecordsError) as exc_info:
            self.service.delete_make(make_id)

        assert exc_info.value.kind is ErrorKind.INTEGRITY_VIOLATION
        assert exc_info.value.details["dependent_count"] == 1

    def test_delete_empty_make(self):
        make_id = self.service.create_make(VehicleMakeModel(name="Saab"))

        self.service.delete_make(make_id)

        with pytest.raises(VehicleMakeNotFoundError):
            self.service.get_make(make_id)


class TestSubmodels:

    @pytest.fixture(autouse=True)
    def setup(self, engine):
        self.service = VehicleService(engine_override=engine)
        self.make_id = self.service.create_make(VehicleMakeModel(name="Audi"))
        self.model_id = self.service.create_model(VehicleModelModel(make_id=self.make_id, name="A3"))

    def test_create_and_get(self):
        submodel_id = self.service.create_submodel(new_submodel(self.model_id))

        submodel = self.service.get_submodel(submodel_id)
        assert submodel.name == "1.4 TFSI"
        assert submodel.year_to == 2020

    def test_open_ended_year_range(self):
        submodel_id = self.service.create_submodel(new_submodel(self.model_id, year_to=None))

        assert self.service.get_submodel(submodel_id).year_to is None

    def test_requires_existing_model(self):
        with pytest.raises(VehicleModelNotFoundError):
            self.service.create_submodel(new_submodel(404))

    def test_end_year_before_start_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.service.create_submodel(new_submodel(self.model_id, year_from=2018, year_to=2010))

        assert "year_to" in exc_info.value.field_errors

    @pytest.mark.parametrize("field,value", [
        ("year_from", 0),
        ("engine_displacement", 0.0),
    ])
    def test_non_positive_values_rejected(self, field, value):
        with pytest.raises(ValidationError) as exc_info:
            self.service.create_submodel(new_submodel(self.model_id, **{field: value}))

        assert field in exc_info.value.field_errors

    def test_missing_text_field_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            self.service.create_submodel(new_submodel(self.model_id, fuel_type=""))

        assert exc_info.value.missing_fields == ["fuel_type"]

    def test_update_checks_merged_year_range(self):
        submodel_id = self.service.create_submodel(new_submodel(self.model_id))

        with pytest.raises(ValidationError):
            self.service.update_submodel(submodel_id, {"year_to": 2000})

        assert self.service.update_submodel(submodel_id, {"year_to": 2024}).year_to == 2024

    def test_model_with_submodels_cannot_be_deleted(self):
        self.service.create_submodel(new_submodel(self.model_id))

        with pytest.raises(DependentRecordsError):
            self.service.delete_model(self.model_id)

    def test_delete_submodel(self):
        submodel_id = self.service.create_submodel(new_submodel(self.model_id))

        self.service.delete_submodel(submodel_id)

        with pytest.raises(SubmodelNotFoundError):
            self.service.get_submodel(submodel_id)
        assert self.service.get_submodels_by_model(self.model_id) == []


class TestCatalogListings:

    @pytest.fixture(autouse=True)
    def setup(self, engine):
        self.service = VehicleService(engine_override=engine)
        add_vehicle(engine, "Volkswagen", "Golf", "GTI")
        add_vehicle(engine, "Audi", "A4", "2.0 TDI")
        add_vehicle(engine, "Audi", "A3", "Sportback")
        add_vehicle(engine, "Audi", "A3", "1.4 TFSI")

    def test_all_models_carry_make_name(self):
        models = self.service.get_all_models()

        assert [(m.make_name, m.name) for m in models] == [
            ("Audi", "A3"),
            ("Audi", "A3"),
            ("Audi", "A4"),
            ("Volkswagen", "Golf"),
        ]

    def test_all_submodels_ordered_make_model_submodel(self):
        submodels = self.service.get_all_submodels()

        assert [(s.make_name, s.model_name, s.name) for s in submodels] == [
            ("Audi", "A3", "1.4 TFSI"),
            ("Audi", "A3", "Sportback"),
            ("Audi", "A4", "2.0 TDI"),
            ("Volkswagen", "Golf", "GTI"),
        ]

    def test_submodel_listing_keeps_submodel_fields(self):
        first = self.service.get_all_submodels()[0]

        assert first.year_from == 2015
        assert first.body_type == "sedan"
        assert self.service.get_submodel(first.id).model_id == first.model_id

    def test_empty_catalog_lists_nothing(self):
        empty = VehicleService(engine_override=create_test_engine())

        assert empty.get_all_models() == []
        assert empty.get_all_submodels() == []


class TestIdentifierGuards:

    @pytest.fixture(autouse=True)
    def setup(self, engine):
        self.service = VehicleService(engine_override=engine)

    @pytest.mark.parametrize("method", [
        "get_make",
        "delete_make",
        "get_models_by_make",
        "get_model",
        "delete_model",
        "get_submodels_by_model",
        "get_submodel",
        "delete_submodel",
    ])
    @pytest.mark.parametrize("bad_id", [0, -1])
    def test_non_positive_ids_rejected(self, method, bad_id):
        with pytest.raises(InvalidReferenceError) as exc_info:
            getattr(self.service, method)(bad_id)

        assert exc_info.value.kind is ErrorKind.INVALID_REFERENCE

    @pytest.mark.parametrize("method", ["update_make", "update_model", "update_submodel"])
    def test_updates_reject_non_positive_ids(self, method):
        with pytest.raises(InvalidReferenceError):
            getattr(self.service, method)(0, {"name": "Renamed"})
