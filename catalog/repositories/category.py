"""
Category Repository
"""

from sqlalchemy import delete, select

from catalog.models import Category, book_categories
from catalog.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for managing Category entities."""

    model = Category

    def find_by_name(self, name: str, exclude_id: int | None = None) -> list[Category]:
        """
        Get categories with exactly this name.

        Args:
            name: The category name to look for
            exclude_id: id to leave out, so a category never conflicts with itself

        Returns:
            List of matching Category objects
        """
        stmt = select(Category).where(Category.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        return list(self.session.execute(stmt).scalars().all())

    def delete_by_id(self, entity_id: int) -> None:
        """Delete the category and its rows in book_categories."""
        self.session.execute(
            delete(book_categories).where(book_categories.c.category_id == entity_id)
        )
        super().delete_by_id(entity_id)
