"""
Vehicle Models Module

Make > Model > Submodel hierarchy. The submodel is the most granular vehicle
identifier and is the target of fitment links.
"""

from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field


class VehicleMakeModel(SQLModel, table=True):
    """A vehicle manufacturer"""
    __tablename__ = "vehicle_makes"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    country: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VehicleModelModel(SQLModel, table=True):
    """A vehicle model (A3, 418, ...) belonging to a make"""
    __tablename__ = "vehicle_models"

    id: Optional[int] = Field(default=None, primary_key=True)
    make_id: int = Field(foreign_key="vehicle_makes.id", index=True)
    name: str = Field(index=True)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SubmodelModel(SQLModel, table=True):
    """A specific variant of a model, with year range and drivetrain attributes"""
    __tablename__ = "vehicle_submodels"

    id: Optional[int] = Field(default=None, primary_key=True)
    model_id: int = Field(foreign_key="vehicle_models.id", index=True)
    name: str = Field(index=True)
    year_from: int
    year_to: Optional[int] = None
    engine_type: str
    engine_displacement: float
    fuel_type: str
    transmission_type: str
    body_type: str

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class VehicleModelDetail(SQLModel):
    """A vehicle model with its make name attached for catalog-wide listings"""
    id: int
    make_id: int
    name: str
    make_name: str
    created_at: datetime
    updated_at: datetime


class SubmodelDetail(SQLModel):
    """A submodel with its model and make names attached for catalog-wide listings"""
    id: int
    model_id: int
    name: str
    year_from: int
    year_to: Optional[int] = None
    engine_type: str
    engine_displacement: float
    fuel_type: str
    transmission_type: str
    body_type: str
    created_at: datetime
    updated_at: datetime
    model_name: str
    make_name: str
