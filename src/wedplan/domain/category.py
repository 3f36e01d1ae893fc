"""Category domain service."""

import logging
from typing import Optional

from wedplan.database.base import Database
from wedplan.domain.entities import Category
from wedplan.domain.errors import (
    CategoryInUseError,
    ConflictError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_not_found,
)

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def _clean_name(self, name: str, exclude_id: Optional[int] = None) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Category name is required")
        name = name.strip()
        existing = self.db.get_category_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"Category with name '{name}' already exists")
        return name

    def create_category(self, name: str) -> int:
        """Create a category.

        Args:
            name: Category name

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a category with that name exists
        """
        return self.db.create_category(name=self._clean_name(name))

    def get_category(self, category_id: int) -> Category:
        """Get category by ID.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_name(self, name: str) -> Optional[Category]:
        """Get category by name, or None."""
        return self.db.get_category_by_name(name.strip())

    def list_categories(self) -> list[Category]:
        """List all categories ordered by name."""
        return self.db.list_categories()

    def rename_category(self, category_id: int, name: str) -> Category:
        """Rename a category.

        Raises:
            NotFoundError: If the category doesn't exist
            ConflictError: If another category already has that name
        """
        self.get_category(category_id)
        self.db.rename_category(category_id, self._clean_name(name, exclude_id=category_id))
        return self.get_category(category_id)

    def delete_category(self, category_id: int) -> None:
        """Delete a category that no cost references.

        Raises:
            NotFoundError: If the category doesn't exist
            CategoryInUseError: If costs still reference the category
        """
        self.get_category(category_id)
        with self.db.atomic():
            cost_count = self.db.count_costs_for_category(category_id)
            if cost_count > 0:
                raise CategoryInUseError(
                    category_delete_blocked(category_id, cost_count), cost_count
                )
            self.db.delete_category(category_id)
        logger.info("Deleted category %s", category_id)

    def resolve_category(self, category: str) -> int:
        """Resolve a category name or ID string to an ID.

        Raises:
            NotFoundError: If no category matches
        """
        if category.strip().isdigit():
            return self.get_category(int(category.strip())).id
        found = self.get_category_by_name(category)
        if found is None:
            raise NotFoundError(f"Category '{category}' not found")
        return found.id
