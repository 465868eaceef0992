"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.
FastAPI's Depends() function manages their lifecycle.

What gets injected here:
- the per-request database session
- one service per entity, bound to that session
- list paging parameters (?page=&page_size=)

Usage:
    @router.get("/authors")
    def list_authors(request: Request, service: AuthorServiceDep, paging: Paging):
        view = paging.view(service)
"""

from typing import Annotated, Any

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from catalog.config import get_settings
from catalog.database import get_db
from catalog.services import AuthorService, BookService, CategoryService
from catalog.utils.pagination import PageableView

settings = get_settings()

# =============================================================================
# Database Session
# =============================================================================
# Instead of writing:
#   def show_author(db: Session = Depends(get_db)):
#
# You can write:
#   def show_author(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Services
# =============================================================================
def get_author_service(db: DbSession) -> AuthorService:
    return AuthorService(db)


def get_book_service(db: DbSession) -> BookService:
    return BookService(db)


def get_category_service(db: DbSession) -> CategoryService:
    return CategoryService(db)


# All three share the request's session, so a route that uses two services
# sees one transaction.
AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]


# =============================================================================
# Paging Parameters
# =============================================================================
class PagingParams:
    """
    Query parameters for list pages.

    Both parameters are optional and unconstrained. A missing, zero or
    negative value falls back to a default instead of a 422.

        GET /authors                    → first page, default size
        GET /authors?page=3&page_size=10
        GET /authors?page=99            → last page
    """

    def __init__(
        self,
        page: int | None = Query(
            default=None,
            description="Page number (1-indexed)",
            examples=[1, 2],
        ),
        page_size: int | None = Query(
            default=None,
            description=f"Items per page (max {settings.max_page_size})",
            examples=settings.page_sizes_list,
        ),
    ) -> None:
        self.page = page
        self.page_size = page_size

    def view(self, source) -> PageableView:
        """Page `source` (a service or any iterable) with the configured limits."""
        return PageableView(
            source,
            page_size=self.page_size,
            page=self.page,
            default_page_size=settings.default_page_size,
            max_page_size=settings.max_page_size,
            page_sizes=settings.page_sizes_list,
            buttons_to_show=settings.pager_buttons,
        )


Paging = Annotated[PagingParams, Depends()]


# =============================================================================
# Submitted Forms
# =============================================================================
async def read_form(request: Request) -> dict[str, Any]:
    """
    Parse a url-encoded or multipart form body into a plain dict.

    A key submitted once maps to its value, a key submitted several times
    (a multi-select) maps to the list of values.
    """
    form = await request.form()
    data: dict[str, Any] = {}
    for key in form.keys():
        values = form.getlist(key)
        data[key] = values if len(values) > 1 else values[0]
    return data


FormData = Annotated[dict[str, Any], Depends(read_form)]
