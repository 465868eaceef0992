"""
Flash Messages

A Message is the success / error / info banner shown above a page.

Messages are values, never shared handler state. A handler that renders
directly builds its own Message. A handler that redirects stores the Message
in the signed session cookie with flash(); the next page that renders calls
consume_flash(), which removes it, so the banner is shown exactly once.

Usage:
    # in a POST handler
    return redirect_with_message(
        request, f"/author/{author.id}", Message(success="New Author has been added.")
    )

    # in the GET handler that follows
    message = consume_flash(request)
"""

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

FLASH_SESSION_KEY = "_flash"


class Message(BaseModel):
    """Banner text for one render. Usually only one field is set."""

    success: str | None = None
    error: str | None = None
    info: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.success or self.error or self.info)


def flash(request: Request, message: Message) -> None:
    """Store a message for the next request, replacing any unread one."""
    request.session[FLASH_SESSION_KEY] = message.model_dump(exclude_none=True)


def consume_flash(request: Request) -> Message:
    """
    Take the pending flashed message out of the session.

    Returns a fresh, empty Message when nothing was flashed.
    """
    data = request.session.pop(FLASH_SESSION_KEY, None)
    if not data:
        return Message()
    return Message.model_validate(data)


def redirect_with_message(request: Request, url: str, message: Message) -> RedirectResponse:
    """Flash `message` and redirect to `url` with 303 See Other."""
    flash(request, message)
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
