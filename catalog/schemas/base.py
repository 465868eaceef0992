"""
Form Model Base

FormModel.from_form() is the single place where a pydantic ValidationError
becomes a ValidationFailedError the routers know how to render.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from catalog.exceptions import ValidationFailedError

FIELD_VALIDATION_ERROR = "Please correct the field errors."


def field_errors(exc: ValidationError) -> dict[str, str]:
    """
    Flatten pydantic errors to one message per top-level field.

    Pydantic prefixes custom validator messages with "Value error, ",
    which reads badly next to a form input, so it is dropped.
    """
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__all__"
        message = error["msg"].removeprefix("Value error, ")
        errors.setdefault(field, message)
    return errors


class FormModel(BaseModel):
    """Base class for schemas built from submitted HTML forms."""

    model_config = ConfigDict(str_strip_whitespace=True)

    @classmethod
    def from_form(cls, data: Mapping[str, Any]):
        """
        Validate submitted form data.

        Raises:
            ValidationFailedError: carrying the field errors and the
            submitted values so the form can be shown again
        """
        draft = dict(data)
        try:
            return cls.model_validate(draft)
        except ValidationError as exc:
            raise ValidationFailedError(
                FIELD_VALIDATION_ERROR,
                errors=field_errors(exc),
                draft=draft,
            ) from exc
