"""
Tests for books: BookService and the /books, /book/... pages, including
removing a book from a category.
"""

import pytest
from fastapi import status
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from catalog.database import Base
from catalog.exceptions import DomainConstraintError, LastCategoryError, ValidationFailedError
from catalog.models import Author, Book, Category
from catalog.schemas import BookForm
from catalog.services import BookService
from catalog.services.book import BOOK_ALREADY_EXISTS, UNKNOWN_AUTHORS


def book_form(**overrides) -> BookForm:
    data = {
        "title": "Homage to Catalonia",
        "year": "1938",
        "description": "A personal account of the Spanish Civil War.",
        "author_ids": [1],
        "category_ids": [1],
    }
    data.update(overrides)
    return BookForm(**data)


class TestBookForm:
    def test_single_selection_becomes_list(self):
        form = BookForm.from_form(
            {"title": "T", "year": "2000", "description": "D", "author_ids": "3", "category_ids": "4"}
        )

        assert form.author_ids == [3]
        assert form.category_ids == [4]

    def test_duplicate_ids_dropped(self):
        form = BookForm.from_form(
            {
                "title": "T",
                "year": "2000",
                "description": "D",
                "author_ids": ["3", "1", "3"],
                "category_ids": ["4"],
            }
        )

        assert form.author_ids == [3, 1]

    def test_missing_associations(self):
        with pytest.raises(ValidationFailedError) as exc_info:
            BookForm.from_form({"title": "T", "year": "2000", "description": "D"})

        assert set(exc_info.value.errors) == {"author_ids", "category_ids"}


class TestBookService:
    def test_create_book(self, db_session, sample_author, sample_category):
        service = BookService(db_session)

        book = service.create(
            book_form(author_ids=[sample_author.id], category_ids=[sample_category.id])
        )

        assert book.title == "Homage to Catalonia"
        assert book.authors == [sample_author]
        assert book.categories == [sample_category]

    def test_create_duplicate_title_fails(self, db_session, sample_book, sample_author, sample_category):
        service = BookService(db_session)

        with pytest.raises(ValidationFailedError) as exc_info:
            service.create(
                book_form(title="1984", author_ids=[sample_author.id], category_ids=[sample_category.id])
            )

        assert exc_info.value.errors == {"title": BOOK_ALREADY_EXISTS}

    def test_title_is_valid_ignores_own_record(self, db_session, sample_book):
        service = BookService(db_session)

        assert not service.title_is_valid(book_form(title="1984"))
        assert service.title_is_valid(book_form(title="1984"), exclude_id=sample_book.id)

    def test_create_with_unknown_author_fails(self, db_session, sample_category):
        service = BookService(db_session)

        with pytest.raises(ValidationFailedError) as exc_info:
            service.create(book_form(author_ids=[99999], category_ids=[sample_category.id]))

        assert exc_info.value.errors == {"author_ids": UNKNOWN_AUTHORS}
        assert service.get_all() == set()

    def test_update_replaces_fields_and_associations(
        self, db_session, sample_book, second_author, second_category
    ):
        service = BookService(db_session)

        service.update(
            sample_book.id,
            book_form(
                title="1984",
                year="1950",
                description="Revised.",
                author_ids=[second_author.id],
                category_ids=[second_category.id],
            ),
        )

        book = service.find_by_id(sample_book.id)
        assert book.year == "1950"
        assert book.description == "Revised."
        assert book.authors == [second_author]
        assert book.categories == [second_category]

    def test_delete_book(self, db_session, sample_book):
        service = BookService(db_session)

        service.delete(sample_book.id)

        assert db_session.get(Book, sample_book.id) is None

    def test_books_by_author_and_category(self, db_session, sample_book, sample_author, sample_category):
        service = BookService(db_session)

        assert service.get_books_by_author(sample_author) == [sample_book]
        assert service.get_books_in_category(sample_category) == [sample_book]


class TestRemoveFromCategory:
    def test_remove_from_one_of_two_categories(
        self, db_session, book_in_two_categories, sample_category, second_category
    ):
        service = BookService(db_session)
        book = book_in_two_categories
        before = (book.updated_at, sample_category.updated_at)

        service.remove_from_category(book, sample_category)

        db_session.expire_all()
        book = service.find_by_id(book.id)
        assert book.categories == [second_category]
        assert service.get_books_in_category(sample_category) == []
        assert service.get_books_in_category(second_category) == [book]
        assert book.updated_at != before[0]
        assert sample_category.updated_at != before[1]

    def test_authors_untouched(self, db_session, book_in_two_categories, sample_category, sample_author):
        service = BookService(db_session)

        service.remove_from_category(book_in_two_categories, sample_category)

        assert service.find_by_id(book_in_two_categories.id).authors == [sample_author]

    def test_last_category_is_refused(self, db_session, sample_book, sample_category):
        service = BookService(db_session)

        with pytest.raises(LastCategoryError):
            service.remove_from_category(sample_book, sample_category)

        db_session.expire_all()
        assert service.find_by_id(sample_book.id).categories == [sample_category]

    def test_unrelated_category_is_refused(self, db_session, sample_book, second_category):
        service = BookService(db_session)

        with pytest.raises(DomainConstraintError):
            service.remove_from_category(sample_book, second_category)

    def test_last_category_error_is_a_domain_error(self):
        assert issubclass(LastCategoryError, DomainConstraintError)


class TestBookPages:
    def test_list_books_empty(self, client):
        response = client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert "There are no Books in the Database." in response.text

    def test_list_books(self, client, sample_book):
        response = client.get("/books")

        assert response.status_code == status.HTTP_200_OK
        assert "1984" in response.text
        assert "George Orwell" in response.text

    def test_show_book(self, client, sample_book):
        response = client.get(f"/book/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        assert "1984" in response.text
        assert "Dystopian" in response.text

    def test_show_book_not_found(self, client):
        response = client.get("/book/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_new_book_form_needs_author_and_category(self, client):
        response = client.get("/book/new")

        assert response.status_code == status.HTTP_200_OK
        assert "First, create at least one Category and one Author to add a new Book." in response.text

    def test_new_book_form(self, client, sample_author, sample_category):
        response = client.get("/book/new")

        assert "George Orwell" in response.text
        assert "Dystopian" in response.text
        assert "First, create at least one Category" not in response.text

    def test_create_book(self, client, sample_author, sample_category, second_category):
        response = client.post(
            "/book/create",
            data={
                "title": "Animal Farm",
                "year": "1945",
                "description": "A farmyard fable.",
                "author_ids": [str(sample_author.id)],
                "category_ids": [str(sample_category.id), str(second_category.id)],
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert "New Book has been added." in response.text
        assert "Animal Farm" in response.text
        assert "Classic" in response.text

    def test_create_book_missing_fields(self, client, sample_author, sample_category):
        response = client.post(
            "/book/create",
            data={"title": "Animal Farm", "author_ids": str(sample_author.id)},
        )

        assert response.status_code == 422
        assert "Please correct the field errors." in response.text
        assert 'value="Animal Farm"' in response.text

    def test_create_book_duplicate_title(self, client, sample_book, sample_author, sample_category):
        response = client.post(
            "/book/create",
            data={
                "title": "1984",
                "year": "1949",
                "description": "Again.",
                "author_ids": str(sample_author.id),
                "category_ids": str(sample_category.id),
            },
        )

        assert response.status_code == 422
        assert BOOK_ALREADY_EXISTS in response.text

    def test_update_book(self, client, sample_book, sample_author, sample_category):
        response = client.post(
            f"/book/{sample_book.id}/update",
            data={
                "title": "1984",
                "year": "1949",
                "description": "Big Brother is watching.",
                "author_ids": str(sample_author.id),
                "category_ids": str(sample_category.id),
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert "Book has been updated." in response.text
        assert "Big Brother is watching." in response.text

    def test_update_book_not_found(self, client):
        response = client.post("/book/99999/update", data={"title": "X"})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_book(self, client, sample_book):
        response = client.post(f"/book/{sample_book.id}/delete")

        assert response.url.path == "/books"
        assert "Book has been deleted." in response.text

    def test_delete_missing_book_flashes_nothing(self, client):
        response = client.post("/book/99999/delete")

        assert response.url.path == "/books"
        assert "Book has been deleted." not in response.text

    def test_remove_from_category(self, client, book_in_two_categories, sample_category):
        response = client.post(
            f"/book/{book_in_two_categories.id}/remove-from-category/{sample_category.id}"
        )

        assert response.url.path == f"/category/{sample_category.id}"
        assert "Brave New World has been removed from Dystopian." in response.text
        assert "There are no books in this category." in response.text

    def test_remove_from_last_category(self, client, sample_book, sample_category):
        response = client.post(
            f"/book/{sample_book.id}/remove-from-category/{sample_category.id}"
        )

        assert response.url.path == f"/category/{sample_category.id}"
        assert "A Book must have at least one Category." in response.text
        assert "1984" in response.text

    def test_remove_from_unknown_category(self, client, sample_book):
        response = client.post(f"/book/{sample_book.id}/remove-from-category/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestRemoveFromCategoryRollback:
    """
    A failed write inside remove_from_category must leave nothing behind.

    The shared db_session is joined to an outer transaction that a
    Session.rollback() would discard, so these tests use their own
    file-backed database and check the result from a fresh session.
    """

    @pytest.fixture
    def session_factory(self, tmp_path):
        engine = create_engine(
            f"sqlite:///{tmp_path / 'catalog.db'}",
            connect_args={"check_same_thread": False},
        )
        Base.metadata.create_all(bind=engine)

        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)

        engine.dispose()

    @pytest.fixture
    def stored_book_id(self, session_factory) -> int:
        with session_factory() as session:
            book = Book(
                title="Brave New World",
                year="1932",
                description="A novel about a genetically engineered future society.",
                authors=[Author(first_name="Aldous", last_name="Huxley")],
                categories=[Category(name="Dystopian"), Category(name="Classic")],
            )
            session.add(book)
            session.commit()
            return book.id

    def test_failed_category_save_rolls_back_book(
        self, session_factory, stored_book_id, monkeypatch
    ):
        with session_factory() as session:
            service = BookService(session)
            book = service.find_by_id(stored_book_id)
            dystopian = next(c for c in book.categories if c.name == "Dystopian")

            def failing_save(entity):
                raise RuntimeError("disk full")

            monkeypatch.setattr(service.categories, "save", failing_save)

            with pytest.raises(RuntimeError):
                service.remove_from_category(book, dystopian)

        with session_factory() as fresh:
            book = fresh.get(Book, stored_book_id)
            assert sorted(category.name for category in book.categories) == [
                "Classic",
                "Dystopian",
            ]
