import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, List

from sqlmodel import Session, select

from AutoParts.models.models import CategoryModel
from AutoParts.repositories.base_repository import commit_or_conflict

# Configure logging
logger = logging.getLogger(__name__)


class CategoryRepository:
    """
    Storage access for categories. No hierarchy rules live here; the
    CategoryService validates parents and cycles before calling in.
    """

    @staticmethod
    def get_category(session: Session, category_id: int) -> Optional[CategoryModel]:
        """
        Get a category by ID.

        Args:
            session: The database session
            category_id: ID of the category to retrieve

        Returns:
            CategoryModel or None if no such category exists
        """
        return session.get(CategoryModel, category_id)

    @staticmethod
    def get_all_categories(session: Session) -> List[CategoryModel]:
        """Get every category as a flat list, ordered by ID."""
        return list(session.exec(select(CategoryModel).order_by(CategoryModel.id)).all())

    @staticmethod
    def get_subcategories(session: Session, parent_id: int) -> List[CategoryModel]:
        """Get the direct children of a category, ordered by name."""
        return list(
            session.exec(
                select(CategoryModel)
                .where(CategoryModel.parent_id == parent_id)
                .order_by(CategoryModel.name, CategoryModel.id)
            ).all()
        )

    @staticmethod
    def create_category(session: Session, new_category: Dict[str, Any]) -> CategoryModel:
        """
        Insert a category.

        Args:
            session: The database session
            new_category: The category fields

        Returns:
            CategoryModel: The created category with its assigned ID
        """
        logger.debug(f"[REPO] Creating category in database: {new_category.get('name')}")
        cmodel = CategoryModel(**new_category)
        session.add(cmodel)
        commit_or_conflict(session, "category insert")
        session.refresh(cmodel)
        logger.debug(f"[REPO] Successfully created category: {cmodel.name} (ID: {cmodel.id})")
        return cmodel

    @staticmethod
    def update_category(session: Session, category: CategoryModel, category_data: Dict[str, Any]) -> CategoryModel:
        """
        Apply field changes to a loaded category.

        Args:
            session: The database session
            category: The category to update
            category_data: The fields to set (None values are applied as given)

        Returns:
            CategoryModel: The updated category
        """
        updated_fields = []
        for key, value in category_data.items():
            old_value = getattr(category, key, None)
            setattr(category, key, value)
            updated_fields.append(f"{key}: {old_value} -> {value}")
        category.updated_at = datetime.now(timezone.utc)

        logger.debug(f"[REPO] Updating fields for category {category.id}: {', '.join(updated_fields)}")

        session.add(category)
        commit_or_conflict(session, "category update")
        session.refresh(category)
        return category

    @staticmethod
    def delete_category(session: Session, category: CategoryModel) -> CategoryModel:
        """Delete a category row."""
        logger.debug(f"[REPO] Removing category from database: {category.name} (ID: {category.id})")
        session.delete(category)
        commit_or_conflict(session, "category delete")
        return category
