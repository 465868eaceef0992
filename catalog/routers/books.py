"""
Books Router

HTML pages and form endpoints for books, plus the endpoint that takes a
book out of one of its categories.

The book form needs every author and category to fill its multi-selects,
so the form routes also pull in the author and category services.
"""

from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from catalog.dependencies import (
    AuthorServiceDep,
    BookServiceDep,
    CategoryServiceDep,
    FormData,
    Paging,
)
from catalog.exceptions import DomainConstraintError, ValidationFailedError
from catalog.models import Book
from catalog.schemas import BookForm
from catalog.services import AuthorService, CategoryService
from catalog.templating import render, render_invalid
from catalog.utils.messages import Message, redirect_with_message

router = APIRouter(tags=["Books"])

FORM_TEMPLATE = "books/form.html"

NEW_BOOK_SUCCESS = "New Book has been added."
BOOK_UPDATED_SUCCESS = "Book has been updated."
BOOK_DELETED_SUCCESS = "Book has been deleted."
BOOK_REMOVED_FROM_CATEGORY_SUCCESS = "{title} has been removed from {category}."
NO_BOOKS_IN_DB_INFO = "There are no Books in the Database."
MUST_BE_AT_LEAST_ONE_AUTHOR_AND_CATEGORY = (
    "First, create at least one Category and one Author to add a new Book."
)


def selected_ids(value: Any) -> set[int]:
    """Ids chosen in a multi-select, from a list, a single value or nothing."""
    if value is None or value == "":
        return set()
    values = value if isinstance(value, list) else [value]
    return {int(v) for v in values if str(v).isdigit()}


def form_context(
    action: str,
    book: Book | dict,
    authors: AuthorService,
    categories: CategoryService,
) -> dict[str, Any]:
    """Everything the book form template needs besides errors and message."""
    if isinstance(book, Book):
        chosen_authors = {author.id for author in book.authors}
        chosen_categories = {category.id for category in book.categories}
    else:
        chosen_authors = selected_ids(book.get("author_ids"))
        chosen_categories = selected_ids(book.get("category_ids"))

    return {
        "action": action,
        "book": book,
        "authors": sorted(authors.get_all(), key=lambda a: (a.last_name, a.first_name)),
        "categories": sorted(categories.get_all(), key=lambda c: c.name),
        "selected_authors": chosen_authors,
        "selected_categories": chosen_categories,
    }


@router.get("/", summary="List books")
@router.get("/books", summary="List books")
def list_books(request: Request, service: BookServiceDep, paging: Paging):
    view = paging.view(service)
    message = Message(info=NO_BOOKS_IN_DB_INFO) if view.page.total == 0 else None
    return render(request, "books/list.html", {"view": view}, message=message)


@router.get("/book/new", summary="New book form")
def new_book_form(request: Request, authors: AuthorServiceDep, categories: CategoryServiceDep):
    context = form_context("/book/create", {}, authors, categories)
    message = None
    if not context["authors"] or not context["categories"]:
        message = Message(info=MUST_BE_AT_LEAST_ONE_AUTHOR_AND_CATEGORY)
    return render(request, FORM_TEMPLATE, {**context, "errors": {}}, message=message)


@router.post("/book/create", summary="Create a book")
def create_book(
    request: Request,
    service: BookServiceDep,
    authors: AuthorServiceDep,
    categories: CategoryServiceDep,
    data: FormData,
):
    try:
        book = service.create(BookForm.from_form(data))
    except ValidationFailedError as exc:
        context = form_context("/book/create", data, authors, categories)
        return render_invalid(request, FORM_TEMPLATE, context, exc)

    return redirect_with_message(request, f"/book/{book.id}", Message(success=NEW_BOOK_SUCCESS))


@router.get("/book/{book_id}", summary="Show a book")
def show_book(request: Request, book_id: int, service: BookServiceDep):
    book = service.find_by_id(book_id)
    return render(request, "books/show.html", {"book": book})


@router.get("/book/{book_id}/edit", summary="Edit book form")
def edit_book_form(
    request: Request,
    book_id: int,
    service: BookServiceDep,
    authors: AuthorServiceDep,
    categories: CategoryServiceDep,
):
    book = service.find_by_id(book_id)
    context = form_context(f"/book/{book_id}/update", book, authors, categories)
    return render(request, FORM_TEMPLATE, {**context, "errors": {}})


@router.post("/book/{book_id}/update", summary="Update a book")
def update_book(
    request: Request,
    book_id: int,
    service: BookServiceDep,
    authors: AuthorServiceDep,
    categories: CategoryServiceDep,
    data: FormData,
):
    service.find_by_id(book_id)
    try:
        service.update(book_id, BookForm.from_form(data))
    except ValidationFailedError as exc:
        context = form_context(f"/book/{book_id}/update", data, authors, categories)
        return render_invalid(request, FORM_TEMPLATE, context, exc)

    return redirect_with_message(request, f"/book/{book_id}", Message(success=BOOK_UPDATED_SUCCESS))


@router.post("/book/{book_id}/delete", summary="Delete a book")
def delete_book(request: Request, book_id: int, service: BookServiceDep):
    if not service.exists(book_id):
        return RedirectResponse("/books", status_code=status.HTTP_303_SEE_OTHER)

    service.delete(book_id)
    return redirect_with_message(request, "/books", Message(success=BOOK_DELETED_SUCCESS))


@router.post(
    "/book/{book_id}/remove-from-category/{category_id}",
    summary="Remove a book from a category",
)
def remove_book_from_category(
    request: Request,
    book_id: int,
    category_id: int,
    service: BookServiceDep,
    categories: CategoryServiceDep,
):
    book = service.find_by_id(book_id)
    category = categories.find_by_id(category_id)
    target = f"/category/{category_id}"

    try:
        service.remove_from_category(book, category)
    except DomainConstraintError as exc:
        return redirect_with_message(request, target, Message(error=str(exc)))

    success = BOOK_REMOVED_FROM_CATEGORY_SUCCESS.format(title=book.title, category=category.name)
    return redirect_with_message(request, target, Message(success=success))
