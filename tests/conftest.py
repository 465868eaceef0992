"""
pytest Fixtures for Library Catalog Tests

This file contains shared fixtures used across all test files.

FIXTURE SCOPES:
- session scope for the engine (expensive to create)
- function scope for sessions and clients (isolation between tests)

Every test runs inside a connection-level transaction that is rolled back
afterwards. Services still call session.commit(); with the session joined
to an outer transaction, those commits never reach the database.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "development"

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.database import Base, get_db
from catalog.main import app
from catalog.models import Author, Book, Category

# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="session")
def engine():
    """
    SQLite in-memory engine shared by the whole test run.

    StaticPool keeps the single connection alive; without it the in-memory
    database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """A session whose work is rolled back after each test."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Test client wired to the test session.

    get_db is overridden so every route, and every service the route
    builds, uses db_session. The client keeps cookies between requests,
    which is what carries flash messages across redirects.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(
        first_name="George",
        last_name="Orwell",
        bio="English novelist and essayist, journalist and critic.",
    )
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def second_author(db_session: Session) -> Author:
    author = Author(first_name="Aldous", last_name="Huxley")
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_category(db_session: Session) -> Category:
    """Create a sample category for testing."""
    category = Category(name="Dystopian")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def second_category(db_session: Session) -> Category:
    category = Category(name="Classic")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def sample_book(
    db_session: Session,
    sample_author: Author,
    sample_category: Category,
) -> Book:
    """A book with one author and one category."""
    book = Book(
        title="1984",
        year="1949",
        description="A dystopian novel set in a totalitarian society.",
        authors=[sample_author],
        categories=[sample_category],
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def book_in_two_categories(
    db_session: Session,
    sample_author: Author,
    sample_category: Category,
    second_category: Category,
) -> Book:
    """A book filed under both sample categories."""
    book = Book(
        title="Brave New World",
        year="1932",
        description="A novel about a genetically engineered future society.",
        authors=[sample_author],
        categories=[sample_category, second_category],
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_authors(db_session: Session) -> list[Author]:
    """Twelve authors, more than two default-sized pages."""
    authors = [Author(first_name=f"First{i:02d}", last_name=f"Last{i:02d}") for i in range(12)]
    db_session.add_all(authors)
    db_session.commit()
    for author in authors:
        db_session.refresh(author)
    return authors
