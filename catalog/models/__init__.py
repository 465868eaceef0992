"""
SQLAlchemy Models Package

Model Relationships:
- Book -> Author: Many-to-Many through book_authors
- Book -> Category: Many-to-Many through book_categories

Only Book carries relationship attributes. The reverse direction
("books by an author", "books in a category") is answered by repository
queries, so there is a single owner for each association.

Import all models here so Alembic discovers them for migrations.
"""

from catalog.models.author import Author
from catalog.models.category import Category
from catalog.models.book import Book, book_authors, book_categories

__all__ = [
    "Author",
    "Category",
    "Book",
    "book_authors",
    "book_categories",
]
