"""
Item Models Module

Contains ItemModel, the inventory record for a single catalog part.
Each item carries two independent identifiers: the catalog part number
(optionally a generated, checksummed code) and an optional scanned barcode.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from sqlmodel import SQLModel, Field


class ItemUpdate(SQLModel):
    """Update model for item modifications"""
    part_number: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[int] = None
    buy_price: Optional[float] = None
    sell_price: Optional[float] = None
    current_stock: Optional[int] = None
    minimum_stock: Optional[int] = None
    barcode: Optional[str] = None
    supplier_id: Optional[int] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class ItemFilter(SQLModel):
    """Criteria for listing items. Unset criteria do not filter; results are ordered by part number."""
    category_id: Optional[int] = None
    supplier_id: Optional[int] = None
    part_number: Optional[str] = None  # case-insensitive substring
    search_term: Optional[str] = None  # matches part number or description
    low_stock: Optional[bool] = None
    is_active: Optional[bool] = None


class ItemModel(SQLModel, table=True):
    """
    Main model for catalog items.

    The database enforces uniqueness of part_number and barcode as a hard
    constraint; the services check both up front to report a precise error.
    """
    __tablename__ = "items"

    # === CORE IDENTIFICATION ===
    id: Optional[int] = Field(default=None, primary_key=True)
    part_number: str = Field(default="", index=True, unique=True)
    barcode: Optional[str] = Field(default=None, index=True, unique=True)
    description: str = ""
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    supplier_id: Optional[int] = Field(default=None, foreign_key="suppliers.id", index=True)

    # === PRICING AND STOCK ===
    buy_price: float = 0.0
    sell_price: float = 0.0
    current_stock: int = 0
    minimum_stock: int = 0

    # === STORAGE LOCATION ===
    location_aisle: Optional[str] = None
    location_shelf: Optional[str] = None
    location_bin: Optional[str] = None

    is_active: bool = Field(default=True, index=True)
    notes: Optional[str] = None

    # === TIMESTAMPS ===
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.minimum_stock

    def to_dict(self) -> Dict[str, Any]:
        base_dict = self.model_dump()
        base_dict["created_at"] = self.created_at.isoformat() if self.created_at else None
        base_dict["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return base_dict
