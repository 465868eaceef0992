"""
Author Service

Authors are unique by full name. The check leaves out the author being
edited, so saving an author without renaming it is always allowed.

Deleting an author removes its book_authors rows, unless that would leave
a book without any author; then the delete is refused.
"""

import logging

from catalog.exceptions import DomainConstraintError, ValidationFailedError
from catalog.models import Author, Book
from catalog.repositories import AuthorRepository, BookRepository
from catalog.schemas import AuthorForm
from catalog.services.base import CrudService

logger = logging.getLogger(__name__)

AUTHOR_ALREADY_EXISTS = "An Author with the same Name already exists in the database."
AUTHOR_IS_SOLE_AUTHOR = "Couldn't delete Author. It is the only Author of: {titles}."


class AuthorService(CrudService[Author, AuthorForm]):
    """Business rules for authors."""

    entity_name = "Author"
    repository_class = AuthorRepository

    def name_is_valid(self, draft: AuthorForm | Author, exclude_id: int | None = None) -> bool:
        """
        Check that no other author has the draft's full name.

        Args:
            draft: form data or entity providing full_name
            exclude_id: id of the author being edited, if any

        Returns:
            True if no conflicting author exists
        """
        return not self.repository.find_by_full_name(draft.full_name, exclude_id=exclude_id)

    def validate(self, draft: AuthorForm, exclude_id: int | None = None) -> None:
        if not self.name_is_valid(draft, exclude_id=exclude_id):
            raise ValidationFailedError(
                AUTHOR_ALREADY_EXISTS,
                errors={"last_name": AUTHOR_ALREADY_EXISTS},
                draft=draft.model_dump(),
            )

    def build(self, draft: AuthorForm) -> Author:
        return Author(
            first_name=draft.first_name,
            last_name=draft.last_name,
            bio=draft.bio,
        )

    def apply(self, author: Author, draft: AuthorForm) -> None:
        author.first_name = draft.first_name
        author.last_name = draft.last_name
        author.bio = draft.bio

    def check_delete(self, entity_id: int) -> None:
        orphans = BookRepository(self.session).find_sole_author_books(entity_id)
        if orphans:
            titles = ", ".join(book.title for book in orphans)
            logger.warning(f"Refused to delete Author {entity_id}: sole author of {titles}")
            raise DomainConstraintError(AUTHOR_IS_SOLE_AUTHOR.format(titles=titles))

    def get_books(self, author: Author) -> list[Book]:
        """Books written by this author."""
        return BookRepository(self.session).find_by_author(author.id)
