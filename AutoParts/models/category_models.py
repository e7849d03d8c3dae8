"""
Category Models Module

Contains CategoryModel and the derived tree node used for hierarchical views.
Categories form a forest through the nullable parent_id self-reference.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from sqlmodel import SQLModel, Field


class CategoryUpdate(SQLModel):
    """Update model for category modifications.

    Only fields that were explicitly set are applied, so passing
    ``parent_id=None`` moves a category to the root level.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[int] = None


class CategoryModel(SQLModel, table=True):
    """
    Model for organizing catalog items into categories.

    Provides hierarchical categorization (e.g., Brakes > Pads > Ceramic Pads).
    """
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: Optional[str] = None
    parent_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Custom serialization method for CategoryModel"""
        base_dict = self.model_dump()
        base_dict["created_at"] = self.created_at.isoformat() if self.created_at else None
        base_dict["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return base_dict


@dataclass
class CategoryTreeNode:
    """A category and its ordered children. Built per query, never persisted."""
    category: CategoryModel
    children: List["CategoryTreeNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Nested dict of this subtree. Iterative, so depth is not bounded by the recursion limit."""
        root = {"category": self.category.to_dict(), "children": []}
        pending = [(self, root)]
        while pending:
            node, node_dict = pending.pop()
            for child in node.children:
                child_dict = {"category": child.category.to_dict(), "children": []}
                node_dict["children"].append(child_dict)
                pending.append((child, child_dict))
        return root
