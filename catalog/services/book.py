"""
Book Service

Business rules for books:
- titles are unique (a book never conflicts with itself on update)
- every selected author and category id must exist
- removing a book from a category never leaves it without one

The association tables are owned by Book. "Books by this author" and
"books in this category" are answered by BookRepository queries.
"""

import logging

from sqlalchemy.orm import Session

from catalog.exceptions import DomainConstraintError, LastCategoryError, ValidationFailedError
from catalog.models import Author, Book, Category
from catalog.repositories import AuthorRepository, BookRepository, CategoryRepository
from catalog.schemas import FIELD_VALIDATION_ERROR, BookForm
from catalog.services.base import CrudService

logger = logging.getLogger(__name__)

BOOK_ALREADY_EXISTS = "A Book of this title already exists. Please choose another title."
BOOK_NEEDS_A_CATEGORY = "Couldn't remove Book. A Book must have at least one Category."
BOOK_NOT_IN_CATEGORY = "{title} is not in {category}."
UNKNOWN_AUTHORS = "Unknown author selected."
UNKNOWN_CATEGORIES = "Unknown category selected."


class BookService(CrudService[Book, BookForm]):
    """Business rules for books and their associations."""

    entity_name = "Book"
    repository_class = BookRepository

    def __init__(self, session: Session) -> None:
        super().__init__(session)
        self.authors = AuthorRepository(session)
        self.categories = CategoryRepository(session)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------
    def title_is_valid(self, draft: BookForm | Book, exclude_id: int | None = None) -> bool:
        """True if no other book has the draft's title."""
        return not self.repository.find_by_title(draft.title, exclude_id=exclude_id)

    def validate(self, draft: BookForm, exclude_id: int | None = None) -> None:
        if not self.title_is_valid(draft, exclude_id=exclude_id):
            raise ValidationFailedError(
                BOOK_ALREADY_EXISTS,
                errors={"title": BOOK_ALREADY_EXISTS},
                draft=draft.model_dump(),
            )

    def resolve_associations(self, draft: BookForm) -> tuple[list[Author], list[Category]]:
        """
        Load the authors and categories selected in the form.

        Raises:
            ValidationFailedError: if any selected id does not exist
        """
        authors = self.authors.find_by_ids(draft.author_ids)
        categories = self.categories.find_by_ids(draft.category_ids)

        errors = {}
        if len(authors) != len(draft.author_ids):
            errors["author_ids"] = UNKNOWN_AUTHORS
        if len(categories) != len(draft.category_ids):
            errors["category_ids"] = UNKNOWN_CATEGORIES
        if errors:
            raise ValidationFailedError(FIELD_VALIDATION_ERROR, errors=errors, draft=draft.model_dump())

        return authors, categories

    # -------------------------------------------------------------------------
    # Entity hooks
    # -------------------------------------------------------------------------
    def build(self, draft: BookForm) -> Book:
        authors, categories = self.resolve_associations(draft)
        return Book(
            title=draft.title,
            year=draft.year,
            description=draft.description,
            authors=authors,
            categories=categories,
        )

    def apply(self, book: Book, draft: BookForm) -> None:
        authors, categories = self.resolve_associations(draft)
        book.title = draft.title
        book.year = draft.year
        book.description = draft.description
        book.authors = authors
        book.categories = categories

    # -------------------------------------------------------------------------
    # Associations
    # -------------------------------------------------------------------------
    def get_books_by_author(self, author: Author) -> list[Book]:
        return self.repository.find_by_author(author.id)

    def get_books_in_category(self, category: Category) -> list[Book]:
        return self.repository.find_by_category(category.id)

    def remove_from_category(self, book: Book, category: Category) -> None:
        """
        Take a book out of one of its categories.

        Both rows get a fresh updated_at and are committed together.

        Raises:
            DomainConstraintError: if the book is not in the category
            LastCategoryError: if it is the book's only category
        """
        if category not in book.categories:
            raise DomainConstraintError(
                BOOK_NOT_IN_CATEGORY.format(title=book.title, category=category.name)
            )
        if len(book.categories) < 2:
            logger.warning(
                f"Refused to remove Book {book.id} from Category {category.id}: last category"
            )
            raise LastCategoryError(BOOK_NEEDS_A_CATEGORY)

        book.categories.remove(category)
        self.touch(book, category)
        with self.transaction():
            self.repository.save(book)
            self.categories.save(category)
        logger.info(f"Removed Book {book.id} from Category {category.id}")
