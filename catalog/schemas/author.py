"""
Author Form Schema

Validates the author create/edit form.
"""

from pydantic import Field, field_validator

from catalog.schemas.base import FormModel


class AuthorForm(FormModel):
    """
    Fields accepted from the author form.

    full_name is derived here the same way Author.full_name is, so the
    uniqueness check can run on a draft before anything is stored.
    """

    first_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Author's given name",
        examples=["George", "Jane"],
    )

    last_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Author's family name",
        examples=["Orwell", "Austen"],
    )

    bio: str | None = Field(
        default=None,
        max_length=5000,
        description="Author biography",
    )

    @field_validator("bio")
    @classmethod
    def blank_bio_is_none(cls, v: str | None) -> str | None:
        """An empty textarea means no biography."""
        return v or None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
