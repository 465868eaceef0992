"""
Book Model

The central model of the catalog.

This file also contains the association tables for the many-to-many
relationships:
- book_authors: Links books to authors
- book_categories: Links books to categories

Both relationships are declared on Book only. Removing an entry from
book.categories deletes the matching book_categories row on flush.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.author import Author
    from catalog.models.category import Category


# =============================================================================
# Association Tables
# =============================================================================
book_authors = Table(
    "book_authors",
    Base.metadata,
    Column(
        "book_id",
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "author_id",
        Integer,
        ForeignKey("authors.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Association table linking books to their authors",
)

book_categories = Table(
    "book_categories",
    Base.metadata,
    Column(
        "book_id",
        Integer,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "category_id",
        Integer,
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Association table linking books to their categories",
)


class Book(Base):
    """
    Book model representing books in the catalog.

    Table: books

    Fields:
    - title: Book title (required)
    - year: Publication year as entered (required)
    - description: Long-form summary (required)

    Relationships:
    - authors: one or many authors
    - categories: one or many categories; never emptied by a removal

    Example:
        book = Book(
            title="1984",
            year="1949",
            description="A dystopian novel...",
            authors=[orwell],
            categories=[dystopian],
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    year: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Year of publication"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Book description or summary"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    # selectin loading keeps list pages at one extra query per relationship
    authors: Mapped[list["Author"]] = relationship(
        "Author",
        secondary=book_authors,
        order_by="Author.last_name",
        lazy="selectin",
    )

    categories: Mapped[list["Category"]] = relationship(
        "Category",
        secondary=book_categories,
        order_by="Category.name",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}')"
