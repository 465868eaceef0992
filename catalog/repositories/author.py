"""
Author Repository
"""

from sqlalchemy import delete, select

from catalog.models import Author, book_authors
from catalog.repositories.base import BaseRepository


class AuthorRepository(BaseRepository[Author]):
    """Repository for managing Author entities."""

    model = Author

    def find_by_full_name(self, full_name: str, exclude_id: int | None = None) -> list[Author]:
        """
        Get authors whose computed full name matches exactly.

        Args:
            full_name: "<first name> <last name>"
            exclude_id: id to leave out, so an author never conflicts with itself

        Returns:
            List of matching Author objects
        """
        stmt = select(Author).where(Author.full_name == full_name)
        if exclude_id is not None:
            stmt = stmt.where(Author.id != exclude_id)
        return list(self.session.execute(stmt).scalars().all())

    def delete_by_id(self, entity_id: int) -> None:
        """Delete the author and its rows in book_authors."""
        self.session.execute(
            delete(book_authors).where(book_authors.c.author_id == entity_id)
        )
        super().delete_by_id(entity_id)
