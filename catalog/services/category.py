"""
Category Service

Category names are unique. The rule is enforced here, not by a database
constraint, and it ignores the category being edited.

Deleting a category removes its book_categories rows, unless some book is
filed under that category alone; then the delete is refused.
"""

import logging

from catalog.exceptions import DomainConstraintError, ValidationFailedError
from catalog.models import Book, Category
from catalog.repositories import BookRepository, CategoryRepository
from catalog.schemas import CategoryForm
from catalog.services.base import CrudService

logger = logging.getLogger(__name__)

CATEGORY_ALREADY_EXISTS = "This category already exists."
CATEGORY_IS_SOLE_CATEGORY = "Couldn't delete Category. It is the only Category of: {titles}."


class CategoryService(CrudService[Category, CategoryForm]):
    """Business rules for categories."""

    entity_name = "Category"
    repository_class = CategoryRepository

    def name_is_valid(self, draft: CategoryForm | Category, exclude_id: int | None = None) -> bool:
        """True if no other category has the draft's name."""
        return not self.repository.find_by_name(draft.name, exclude_id=exclude_id)

    def validate(self, draft: CategoryForm, exclude_id: int | None = None) -> None:
        if not self.name_is_valid(draft, exclude_id=exclude_id):
            raise ValidationFailedError(
                CATEGORY_ALREADY_EXISTS,
                errors={"name": CATEGORY_ALREADY_EXISTS},
                draft=draft.model_dump(),
            )

    def build(self, draft: CategoryForm) -> Category:
        return Category(name=draft.name)

    def apply(self, category: Category, draft: CategoryForm) -> None:
        category.name = draft.name

    def check_delete(self, entity_id: int) -> None:
        orphans = BookRepository(self.session).find_sole_category_books(entity_id)
        if orphans:
            titles = ", ".join(book.title for book in orphans)
            logger.warning(f"Refused to delete Category {entity_id}: sole category of {titles}")
            raise DomainConstraintError(CATEGORY_IS_SOLE_CATEGORY.format(titles=titles))

    def get_books(self, category: Category) -> list[Book]:
        """Books filed under this category."""
        return BookRepository(self.session).find_by_category(category.id)
