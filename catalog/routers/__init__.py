"""
Routers Package

Each router module contains the pages for one entity:
- authors.py: /authors, /author/...
- books.py: /, /books, /book/... (including remove-from-category)
- categories.py: /categories, /category/...

Inside each module, /x/new is declared before /x/{id} so "new" is never
parsed as an id.
"""

from catalog.routers.authors import router as authors_router
from catalog.routers.books import router as books_router
from catalog.routers.categories import router as categories_router

__all__ = [
    "authors_router",
    "books_router",
    "categories_router",
]
