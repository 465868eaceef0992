"""
Pydantic Form Schemas

HTML forms post flat key/value data. These models validate that data
before it reaches a service and turn failures into a field → message map
the form template can show next to each input.

Schema Naming Convention:
- XxxForm: fields accepted from the create and edit forms of an entity
"""

from catalog.schemas.author import AuthorForm
from catalog.schemas.base import FIELD_VALIDATION_ERROR, FormModel
from catalog.schemas.book import BookForm
from catalog.schemas.category import CategoryForm

__all__ = [
    "FIELD_VALIDATION_ERROR",
    "FormModel",
    "AuthorForm",
    "BookForm",
    "CategoryForm",
]
