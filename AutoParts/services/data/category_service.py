import logging
from collections import defaultdict
from typing import Dict, List, Optional

from sqlmodel import Session

from AutoParts.exceptions import (
    CategoryNotFoundError,
    ParentCategoryNotFoundError,
    CircularReferenceError,
    CategoryHasSubcategoriesError,
    ValidationError,
)
from AutoParts.models.models import CategoryModel, CategoryUpdate, CategoryTreeNode
from AutoParts.repositories.category_repositories import CategoryRepository
from AutoParts.services.base_service import BaseService

logger = logging.getLogger(__name__)


class CategoryService(BaseService):
    """
    Owns the category hierarchy invariants.

    - a parent must exist when it is assigned
    - the parent relation stays acyclic (a forest)
    - a category with children cannot be deleted
    - the nested tree view is assembled from one flat read
    """

    def __init__(self, engine_override=None):
        super().__init__(engine_override)
        self.entity_name = "Category"

    def create_category(self, category_data: CategoryModel, parent_id: Optional[int] = None) -> int:
        """
        Add a new category.

        Args:
            category_data: The category to create. Its parent_id is used unless
                parent_id is passed explicitly.
            parent_id: Optional parent category ID

        Returns:
            int: ID of the created category

        Raises:
            ValidationError: If the name is missing
            ParentCategoryNotFoundError: If the parent does not exist
        """
        data = category_data.model_dump(include={"name", "description", "parent_id"})
        if parent_id is not None:
            data["parent_id"] = parent_id
        self.validate_required_fields(data, ["name"])

        self.log_operation("create", self.entity_name, data["name"])

        with self.get_session() as session:
            # A new node cannot be its own ancestor yet, so only existence is checked
            if data.get("parent_id") is not None:
                self._require_parent(session, data["parent_id"])

            new_category = CategoryRepository.create_category(session, data)
            self.logger.info(f"Created category '{new_category.name}' (ID: {new_category.id})")
            return new_category.id

    def get_category(self, category_id: int) -> CategoryModel:
        with self.get_session() as session:
            category = CategoryRepository.get_category(session, category_id)
            if category is None:
                raise CategoryNotFoundError(category_id)
            return category

    def get_all_categories(self) -> List[CategoryModel]:
        with self.get_session() as session:
            return CategoryRepository.get_all_categories(session)

    def get_subcategories(self, parent_id: int) -> List[CategoryModel]:
        """Direct children of a category, ordered by name."""
        with self.get_session() as session:
            if CategoryRepository.get_category(session, parent_id) is None:
                raise CategoryNotFoundError(parent_id)
            return CategoryRepository.get_subcategories(session, parent_id)

    def update_category(self, category_id: int, category_update: CategoryUpdate) -> CategoryModel:
        """
        Update a category's fields.

        Only fields explicitly set on ``category_update`` are applied. A parent
        change is re-validated: the new parent must exist and must be neither
        the category itself nor one of its descendants.

        Raises:
            CategoryNotFoundError: If the category does not exist
            ParentCategoryNotFoundError: If the new parent does not exist
            CircularReferenceError: If the new parent is the category or a descendant of it
        """
        self.log_operation("update", self.entity_name, category_id)
        update_dict = category_update.model_dump(exclude_unset=True)

        if "name" in update_dict and not update_dict["name"]:
            raise ValidationError("Category name cannot be empty", missing_fields=["name"])

        with self.get_session() as session:
            current = CategoryRepository.get_category(session, category_id)
            if current is None:
                raise CategoryNotFoundError(category_id)

            if "parent_id" in update_dict:
                new_parent_id = update_dict["parent_id"]
                if new_parent_id == category_id:
                    raise CircularReferenceError(category_id, new_parent_id)
                if new_parent_id is not None and new_parent_id != current.parent_id:
                    self._require_parent(session, new_parent_id)
                    self._ensure_not_descendant(session, category_id, new_parent_id)

            return CategoryRepository.update_category(session, current, update_dict)

    def delete_category(self, category_id: int) -> CategoryModel:
        """
        Delete a category that has no subcategories.

        Items in the category are not checked here. Where the database enforces
        foreign keys, deleting a category that items reference is rejected by
        storage.

        Raises:
            CategoryNotFoundError: If the category does not exist
            CategoryHasSubcategoriesError: If any category names it as parent
            StorageConflictError: If items still reference the category
        """
        self.log_operation("delete", self.entity_name, category_id)

        with self.get_session() as session:
            category = CategoryRepository.get_category(session, category_id)
            if category is None:
                raise CategoryNotFoundError(category_id)

            children = CategoryRepository.get_subcategories(session, category_id)
            if children:
                raise CategoryHasSubcategoriesError(category_id, [child.id for child in children])

            return CategoryRepository.delete_category(session, category)

    def get_category_tree(self) -> List[CategoryTreeNode]:
        """
        Build the category forest from the flat category set.

        Siblings are ordered by name (stable). Nodes that cannot be reached from
        a root, such as orphans whose parent is missing or members of a cycle
        written out-of-band, are left out of the result.
        """
        with self.get_session() as session:
            categories = CategoryRepository.get_all_categories(session)

        children_by_parent: Dict[Optional[int], List[CategoryModel]] = defaultdict(list)
        for category in categories:
            children_by_parent[category.parent_id].append(category)
        for siblings in children_by_parent.values():
            siblings.sort(key=lambda c: c.name)

        roots = [CategoryTreeNode(category) for category in children_by_parent.get(None, [])]
        visited = {node.category.id for node in roots}
        pending = list(roots)
        while pending:
            node = pending.pop()
            for child in children_by_parent.get(node.category.id, []):
                if child.id in visited:
                    continue
                visited.add(child.id)
                child_node = CategoryTreeNode(child)
                node.children.append(child_node)
                pending.append(child_node)

        dropped = len(categories) - len(visited)
        if dropped:
            self.logger.debug(f"Category tree omitted {dropped} unreachable categories")
        return roots

    # --- helpers ---

    @staticmethod
    def _require_parent(session: Session, parent_id: int) -> CategoryModel:
        parent = CategoryRepository.get_category(session, parent_id)
        if parent is None:
            raise ParentCategoryNotFoundError(parent_id)
        return parent

    def _ensure_not_descendant(self, session: Session, category_id: int, new_parent_id: int) -> None:
        """
        Walk upward from the proposed parent; meeting category_id means a cycle.

        The walk is capped at the number of categories so a cycle already present
        in storage cannot keep it running.
        """
        parent_of = {c.id: c.parent_id for c in CategoryRepository.get_all_categories(session)}

        current = new_parent_id
        steps = 0
        while current is not None and steps <= len(parent_of):
            if current == category_id:
                self.logger.warning(
                    f"Rejected parent change of category {category_id} to {new_parent_id}: circular reference"
                )
                raise CircularReferenceError(category_id, new_parent_id)
            current = parent_of.get(current)
            steps += 1

        if current is not None:
            self.logger.warning(
                f"Ancestor walk from category {new_parent_id} hit the step limit; stored hierarchy contains a cycle"
            )
