"""
Repositories Package

The persistence port of the catalog: every SQL query lives here, services
only call these methods.

Each repository offers the shared operations of BaseRepository (save,
find_by_id, delete_by_id, find_all, list_all, find_top_by_order_by_id_desc)
plus its entity's lookups.
"""

from catalog.repositories.author import AuthorRepository
from catalog.repositories.base import BaseRepository
from catalog.repositories.book import BookRepository
from catalog.repositories.category import CategoryRepository

__all__ = [
    "BaseRepository",
    "AuthorRepository",
    "BookRepository",
    "CategoryRepository",
]
