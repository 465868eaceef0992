"""
Author Model

Represents an author in the catalog.

full_name is a hybrid property: on instances it is computed from the two
name columns, and in queries it renders as first_name || ' ' || last_name.
It is never stored, so it cannot drift from the names it is built from.
"""

from datetime import datetime

from sqlalchemy import ColumnElement, DateTime, String, Text, func
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Author(Base):
    """
    Author model representing writers in the catalog.

    Table: authors

    Books written by an author are looked up through
    BookRepository.find_by_author() instead of a back-reference.

    Example:
        author = Author(first_name="George", last_name="Orwell")
        author.full_name  # "George Orwell"
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Author's given name"
    )

    last_name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Author's family name"
    )

    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Author biography"
    )

    # -------------------------------------------------------------------------
    # Timestamps
    # -------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the author record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="When the author record was last updated"
    )

    # -------------------------------------------------------------------------
    # Derived Fields
    # -------------------------------------------------------------------------
    @hybrid_property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @full_name.inplace.expression
    @classmethod
    def _full_name_expression(cls) -> ColumnElement[str]:
        return cls.first_name + " " + cls.last_name

    def __repr__(self) -> str:
        return f"Author(id={self.id}, full_name='{self.full_name}')"
