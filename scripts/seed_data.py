#!/usr/bin/env python3
"""
Database Seed Script

Fills the catalog with sample authors, categories and books for local
development.

USAGE:
    # From the project root with the virtualenv active
    python scripts/seed_data.py            # clear, then seed
    python scripts/seed_data.py --keep     # seed on top of existing rows

Everything is created through the services, so the uniqueness and
association rules apply to seed data exactly as they do to the forms.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from catalog.database import SessionLocal, create_tables
from catalog.models import Author, Book, Category, book_authors, book_categories
from catalog.schemas import AuthorForm, BookForm, CategoryForm
from catalog.services import AuthorService, BookService, CategoryService

AUTHORS = [
    ("George", "Orwell", "English novelist and essayist, journalist and critic."),
    ("Jane", "Austen", "English novelist known for her six major novels."),
    ("Isaac", "Asimov", "American writer and professor of biochemistry."),
    ("Agatha", "Christie", "English writer known for her detective novels."),
    ("Arthur C.", "Clarke", "English science fiction writer and futurist."),
]

CATEGORIES = ["Classic", "Dystopian", "Mystery", "Romance", "Science Fiction"]

# title, year, authors (last names), categories, description
BOOKS = [
    ("1984", "1949", ["Orwell"], ["Dystopian", "Classic"],
     "A dystopian novel about a totalitarian regime and perpetual surveillance."),
    ("Animal Farm", "1945", ["Orwell"], ["Classic"],
     "An allegorical novella about farm animals who rebel against their farmer."),
    ("Pride and Prejudice", "1813", ["Austen"], ["Romance", "Classic"],
     "A novel of manners following Elizabeth Bennet and Mr. Darcy."),
    ("Emma", "1815", ["Austen"], ["Romance"],
     "A comic novel about youthful hubris and romantic misunderstandings."),
    ("Foundation", "1951", ["Asimov"], ["Science Fiction"],
     "A mathematician predicts the fall of the Galactic Empire."),
    ("I, Robot", "1950", ["Asimov"], ["Science Fiction", "Classic"],
     "Linked short stories built around the Three Laws of Robotics."),
    ("Murder on the Orient Express", "1934", ["Christie"], ["Mystery", "Classic"],
     "Hercule Poirot investigates a murder aboard a snowbound train."),
    ("And Then There Were None", "1939", ["Christie"], ["Mystery"],
     "Ten strangers on an island are killed one by one."),
    ("Rendezvous with Rama", "1973", ["Clarke"], ["Science Fiction"],
     "Explorers investigate a vast alien spacecraft passing through the solar system."),
    ("The Sentinel and Other Stories", "1983", ["Clarke", "Asimov"], ["Science Fiction"],
     "A sample anthology credited to two authors."),
]


def clear_data(db: Session) -> None:
    """Remove every catalog row, association tables first."""
    print("Clearing existing data...")
    db.execute(delete(book_authors))
    db.execute(delete(book_categories))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.execute(delete(Category))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> dict[str, Author]:
    print("Creating authors...")
    service = AuthorService(db)
    authors = {}
    for first_name, last_name, bio in AUTHORS:
        form = AuthorForm(first_name=first_name, last_name=last_name, bio=bio)
        authors[last_name] = service.create(form)
    print(f"Created {len(authors)} authors.")
    return authors


def create_categories(db: Session) -> dict[str, Category]:
    print("Creating categories...")
    service = CategoryService(db)
    categories = {name: service.create(CategoryForm(name=name)) for name in CATEGORIES}
    print(f"Created {len(categories)} categories.")
    return categories


def create_books(
    db: Session,
    authors: dict[str, Author],
    categories: dict[str, Category],
) -> list[Book]:
    print("Creating books...")
    service = BookService(db)
    books = []
    for title, year, author_names, category_names, description in BOOKS:
        form = BookForm(
            title=title,
            year=year,
            description=description,
            author_ids=[authors[name].id for name in author_names],
            category_ids=[categories[name].id for name in category_names],
        )
        books.append(service.create(form))
    print(f"Created {len(books)} books.")
    return books


def seed_database(clear_existing: bool = True) -> None:
    """
    Seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    create_tables()

    db = SessionLocal()
    try:
        if clear_existing:
            clear_data(db)

        authors = create_authors(db)
        categories = create_categories(db)
        books = create_books(db, authors, categories)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Categories: {len(categories)}")
        print(f"  - Books: {len(books)}")
        print("\nBrowse the catalog at http://localhost:8001")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database(clear_existing="--keep" not in sys.argv[1:])
