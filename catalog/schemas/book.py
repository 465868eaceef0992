"""
Book Form Schema

Validates the book create/edit form, including the selected author and
category ids coming from multi-select inputs.
"""

from pydantic import Field, field_validator

from catalog.schemas.base import FormModel


class BookForm(FormModel):
    """
    Fields accepted from the book form.

    A book needs at least one author and one category. Whether the ids
    exist is checked by BookService, which has the database at hand.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["1984", "Pride and Prejudice"],
    )

    year: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Year of publication",
        examples=["1949"],
    )

    description: str = Field(
        ...,
        min_length=1,
        max_length=20000,
        description="Book description or summary",
    )

    author_ids: list[int] = Field(
        ...,
        min_length=1,
        description="Ids of the book's authors",
    )

    category_ids: list[int] = Field(
        ...,
        min_length=1,
        description="Ids of the book's categories",
    )

    @field_validator("author_ids", "category_ids", mode="before")
    @classmethod
    def single_selection_as_list(cls, v):
        """A multi-select with one chosen option is submitted as a plain value."""
        if isinstance(v, (str, int)):
            return [v]
        return v

    @field_validator("author_ids", "category_ids")
    @classmethod
    def drop_duplicate_ids(cls, v: list[int]) -> list[int]:
        """Keep the first occurrence of each id, in submitted order."""
        return list(dict.fromkeys(v))
