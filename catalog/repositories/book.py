"""
Book Repository

Besides the Book lookups, this repository answers the reverse side of the
Book associations: which books an author wrote, which books are in a
category, and which books would be orphaned by deleting one of them.
"""

from sqlalchemy import Table, func, select

from catalog.models import Book, book_authors, book_categories
from catalog.repositories.base import BaseRepository


class BookRepository(BaseRepository[Book]):
    """Repository for managing Book entities."""

    model = Book

    def find_by_title(self, title: str, exclude_id: int | None = None) -> list[Book]:
        """
        Get books with exactly this title.

        Args:
            title: The title to look for
            exclude_id: id to leave out, so a book never conflicts with itself
        """
        stmt = select(Book).where(Book.title == title)
        if exclude_id is not None:
            stmt = stmt.where(Book.id != exclude_id)
        return list(self.session.execute(stmt).scalars().all())

    def find_by_author(self, author_id: int) -> list[Book]:
        """Get all books written by an author, ordered by title."""
        stmt = (
            select(Book)
            .join(book_authors, book_authors.c.book_id == Book.id)
            .where(book_authors.c.author_id == author_id)
            .order_by(Book.title)
        )
        return list(self.session.execute(stmt).scalars().all())

    def find_by_category(self, category_id: int) -> list[Book]:
        """Get all books filed under a category, ordered by title."""
        stmt = (
            select(Book)
            .join(book_categories, book_categories.c.book_id == Book.id)
            .where(book_categories.c.category_id == category_id)
            .order_by(Book.title)
        )
        return list(self.session.execute(stmt).scalars().all())

    def find_sole_author_books(self, author_id: int) -> list[Book]:
        """Get the books for which this author is the only author."""
        return self._find_sole_association_books(book_authors, book_authors.c.author_id, author_id)

    def find_sole_category_books(self, category_id: int) -> list[Book]:
        """Get the books for which this category is the only category."""
        return self._find_sole_association_books(
            book_categories, book_categories.c.category_id, category_id
        )

    def _find_sole_association_books(self, table: Table, column, value: int) -> list[Book]:
        single_link_books = (
            select(table.c.book_id)
            .group_by(table.c.book_id)
            .having(func.count() == 1)
        )
        stmt = (
            select(Book)
            .join(table, table.c.book_id == Book.id)
            .where(column == value, Book.id.in_(single_link_books))
            .order_by(Book.title)
        )
        return list(self.session.execute(stmt).scalars().all())
