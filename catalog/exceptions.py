"""
Domain Exceptions

Errors raised by services and translated into pages by the routers and the
application-level exception handlers in main.py.

- NotFoundError: lookup by id failed → 404 page
- ValidationFailedError: required field or uniqueness violation → form
  re-rendered with field errors
- DomainConstraintError: an operation would break an association rule →
  flashed error, or a 400 page when nothing recovers it
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog errors."""

    pass


class NotFoundError(CatalogError):
    """Raised when an entity with the requested id does not exist."""

    def __init__(self, entity: str, entity_id: int) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} with id {entity_id} not found")


class ValidationFailedError(CatalogError):
    """
    Raised when submitted data fails validation.

    Carries everything a form needs to be shown again:
    - message: human-readable summary for the page banner
    - errors: field name → error text
    - draft: the values the user submitted
    """

    def __init__(
        self,
        message: str,
        errors: dict[str, str] | None = None,
        draft: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.errors = errors or {}
        self.draft = draft or {}
        super().__init__(message)


class DomainConstraintError(CatalogError):
    """Raised when an operation would violate an association rule."""

    pass


class LastCategoryError(DomainConstraintError):
    """Raised when removing a category would leave a book without any."""

    pass
