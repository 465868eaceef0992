"""
Services Package

Business rules of the catalog, kept apart from HTTP handling so they can
be used by the routers, the seed script and the tests alike.

Current services:
- base.py: CrudService, the shared create/read/update/delete flow
- author.py: full-name uniqueness, delete guard for sole authors
- book.py: title uniqueness, association resolution, remove-from-category
- category.py: name uniqueness, delete guard for sole categories
"""

from catalog.services.author import AuthorService
from catalog.services.base import CrudService
from catalog.services.book import BookService
from catalog.services.category import CategoryService

__all__ = [
    "CrudService",
    "AuthorService",
    "BookService",
    "CategoryService",
]
