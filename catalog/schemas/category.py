"""
Category Form Schema

Validates the category create/edit form.
"""

from pydantic import Field

from catalog.schemas.base import FormModel


class CategoryForm(FormModel):
    """Fields accepted from the category form."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Category name",
        examples=["Science Fiction", "Mystery"],
    )
