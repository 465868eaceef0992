"""
Template Rendering

One Jinja2Templates instance for the whole app, pointed at
catalog/templates. Every page gets `message` and `settings` in its
context; routers only pass what is specific to the page.
"""

from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.templating import Jinja2Templates

from catalog.config import get_settings
from catalog.exceptions import ValidationFailedError
from catalog.utils.messages import Message, consume_flash

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["settings"] = get_settings()


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    message: Message | None = None,
    status_code: int = status.HTTP_200_OK,
):
    """
    Render a template as an HTML response.

    Args:
        request: current request, required by Jinja2Templates
        name: template path relative to catalog/templates
        context: page-specific variables
        message: banner built by the page itself; fields of a message
            flashed by the previous request take precedence over it
        status_code: HTTP status of the response
    """
    flashed = consume_flash(request)
    if message is None:
        message = flashed
    else:
        message = message.model_copy(update=flashed.model_dump(exclude_none=True))
    return templates.TemplateResponse(
        request,
        name,
        {**(context or {}), "message": message},
        status_code=status_code,
    )


def render_invalid(request: Request, name: str, context: dict[str, Any], exc: ValidationFailedError):
    """Render a form again after `exc`, with its field errors and 422 status."""
    return render(
        request,
        name,
        {**context, "errors": exc.errors},
        message=Message(error=exc.message),
        status_code=422,
    )
