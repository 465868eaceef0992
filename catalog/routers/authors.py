"""
Authors Router

HTML pages and form endpoints for authors.

Mutations follow post/redirect/get: a successful POST flashes a message
and redirects with 303, a POST that fails validation renders the form
again with status 422 and the submitted values.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from catalog.dependencies import AuthorServiceDep, FormData, Paging
from catalog.exceptions import DomainConstraintError, ValidationFailedError
from catalog.schemas import AuthorForm
from catalog.templating import render, render_invalid
from catalog.utils.messages import Message, redirect_with_message

router = APIRouter(tags=["Authors"])

FORM_TEMPLATE = "authors/form.html"

NEW_AUTHOR_SUCCESS = "New Author has been added."
AUTHOR_UPDATED_SUCCESS = "Author has been updated."
AUTHOR_DELETED_SUCCESS = "Author has been deleted."
NO_AUTHORS_IN_DB_INFO = "There are no Authors in the Database."
NO_BOOKS_BY_THIS_AUTHOR_INFO = "There are no books written by this Author."


@router.get("/authors", summary="List authors")
def list_authors(request: Request, service: AuthorServiceDep, paging: Paging):
    view = paging.view(service)
    message = Message(info=NO_AUTHORS_IN_DB_INFO) if view.page.total == 0 else None
    return render(request, "authors/list.html", {"view": view}, message=message)


@router.get("/author/new", summary="New author form")
def new_author_form(request: Request):
    return render(request, FORM_TEMPLATE, {"action": "/author/create", "author": {}, "errors": {}})


@router.post("/author/create", summary="Create an author")
def create_author(request: Request, service: AuthorServiceDep, data: FormData):
    try:
        author = service.create(AuthorForm.from_form(data))
    except ValidationFailedError as exc:
        return render_invalid(
            request, FORM_TEMPLATE, {"action": "/author/create", "author": data}, exc
        )

    return redirect_with_message(
        request, f"/author/{author.id}", Message(success=NEW_AUTHOR_SUCCESS)
    )


@router.get("/author/{author_id}", summary="Show an author and their books")
def show_author(request: Request, author_id: int, service: AuthorServiceDep, paging: Paging):
    author = service.find_by_id(author_id)
    books = paging.view(service.get_books(author))
    message = Message(info=NO_BOOKS_BY_THIS_AUTHOR_INFO) if books.page.total == 0 else None
    return render(
        request, "authors/show.html", {"author": author, "books": books}, message=message
    )


@router.get("/author/{author_id}/edit", summary="Edit author form")
def edit_author_form(request: Request, author_id: int, service: AuthorServiceDep):
    author = service.find_by_id(author_id)
    return render(
        request,
        FORM_TEMPLATE,
        {"action": f"/author/{author_id}/update", "author": author, "errors": {}},
    )


@router.post("/author/{author_id}/update", summary="Update an author")
def update_author(request: Request, author_id: int, service: AuthorServiceDep, data: FormData):
    service.find_by_id(author_id)
    try:
        service.update(author_id, AuthorForm.from_form(data))
    except ValidationFailedError as exc:
        return render_invalid(
            request, FORM_TEMPLATE, {"action": f"/author/{author_id}/update", "author": data}, exc
        )

    return redirect_with_message(
        request, f"/author/{author_id}", Message(success=AUTHOR_UPDATED_SUCCESS)
    )


@router.post("/author/{author_id}/delete", summary="Delete an author")
def delete_author(request: Request, author_id: int, service: AuthorServiceDep):
    if not service.exists(author_id):
        return RedirectResponse("/authors", status_code=status.HTTP_303_SEE_OTHER)

    try:
        service.delete(author_id)
    except DomainConstraintError as exc:
        return redirect_with_message(request, f"/author/{author_id}", Message(error=str(exc)))

    return redirect_with_message(request, "/authors", Message(success=AUTHOR_DELETED_SUCCESS))
