"""
Category Model

Represents a category books are filed under.

Category names are unique, but the rule is checked by CategoryService before
insert and update rather than by a database constraint.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog.database import Base


class Category(Base):
    """
    Category model.

    Table: categories

    Example:
        category = Category(name="Science Fiction")
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Category name (e.g., 'Science Fiction', 'Mystery')"
    )

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

    def __repr__(self) -> str:
        return f"Category(id={self.id}, name='{self.name}')"
