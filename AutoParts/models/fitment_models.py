"""
Fitment Models Module

CompatibilityModel is the link table between catalog items and vehicle
submodels. The (item_id, submodel_id) pair is unique.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class CompatibilityModel(SQLModel, table=True):
    """States that an item fits a specific vehicle submodel"""
    __tablename__ = "compatibility"
    __table_args__ = (
        UniqueConstraint("item_id", "submodel_id", name="uq_compatibility_item_submodel"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    item_id: int = Field(foreign_key="items.id", index=True)
    submodel_id: int = Field(foreign_key="vehicle_submodels.id", index=True)
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CompatibilityDetail(SQLModel):
    """A fitment link with make/model/submodel names denormalized for display"""
    id: int
    item_id: int
    submodel_id: int
    notes: Optional[str] = None
    created_at: datetime
    make_name: str
    model_name: str
    submodel_name: str
    year_from: int
    year_to: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        base_dict = self.model_dump()
        base_dict["created_at"] = self.created_at.isoformat() if self.created_at else None
        return base_dict
