"""
Supplier Models Module

Contains SupplierModel, the vendor an item is bought from.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from sqlmodel import SQLModel, Field


class SupplierUpdate(SQLModel):
    """Update model for supplier modifications"""
    name: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class SupplierModel(SQLModel, table=True):
    """A parts vendor. Names are unique."""
    __tablename__ = "suppliers"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        base_dict = self.model_dump()
        base_dict["created_at"] = self.created_at.isoformat() if self.created_at else None
        base_dict["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return base_dict
