"""
Shared test database infrastructure for unit tests.
Uses in-memory SQLite for fast, isolated testing.

Foreign keys are unenforced by default so tests can write the inconsistent
rows (orphans, out-of-band cycles) the engine must tolerate. Pass
enforce_foreign_keys=True to get the application engine's SQLite behaviour.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, select

# Importing the models registers every table with SQLModel metadata
from AutoParts.models.models import (
    CategoryModel,
    SupplierModel,
    ItemModel,
    VehicleMakeModel,
    VehicleModelModel,
    SubmodelModel,
)


def create_test_engine(enforce_foreign_keys: bool = False):
    """Create an in-memory SQLite engine with all tables."""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if enforce_foreign_keys:
        @event.listens_for(engine, "connect")
        def enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
    SQLModel.metadata.create_all(engine)
    return engine


def add_category(engine, name: str, parent_id=None, category_id=None) -> int:
    """Insert a category row directly, bypassing the service checks."""
    with Session(engine) as session:
        category = CategoryModel(id=category_id, name=name, parent_id=parent_id)
        session.add(category)
        session.commit()
        return category.id


def add_item(engine, part_number: str, item_id=None, barcode=None, is_active=True, **fields) -> int:
    with Session(engine) as session:
        item = ItemModel(
            id=item_id,
            part_number=part_number,
            barcode=barcode,
            description=fields.pop("description", f"Part {part_number}"),
            buy_price=fields.pop("buy_price", 10.0),
            sell_price=fields.pop("sell_price", 15.0),
            is_active=is_active,
            **fields,
        )
        session.add(item)
        session.commit()
        return item.id


def add_vehicle(engine, make: str, model: str, submodel: str, submodel_id=None, year_from=2015) -> int:
    """Insert a make/model/submodel chain and return the submodel ID."""
    with Session(engine) as session:
        make_row = session.exec(select(VehicleMakeModel).where(VehicleMakeModel.name == make)).first()
        if make_row is None:
            make_obj = VehicleMakeModel(name=make)
            session.add(make_obj)
            session.flush()
            make_id = make_obj.id
        else:
            make_id = make_row.id

        model_obj = VehicleModelModel(make_id=make_id, name=model)
        session.add(model_obj)
        session.flush()

        submodel_obj = SubmodelModel(
            id=submodel_id,
            model_id=model_obj.id,
            name=submodel,
            year_from=year_from,
            engine_type="I4",
            engine_displacement=2.0,
            fuel_type="petrol",
            transmission_type="manual",
            body_type="sedan",
        )
        session.add(submodel_obj)
        session.commit()
        return submodel_obj.id


def add_supplier(engine, name: str, supplier_id=None) -> int:
    with Session(engine) as session:
        supplier = SupplierModel(id=supplier_id, name=name)
        session.add(supplier)
        session.commit()
        return supplier.id
