"""
Categories Router

HTML pages and form endpoints for categories. Same shape as the authors
router; a category page also lists its books, each with a button that
takes the book out of the category.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from catalog.dependencies import CategoryServiceDep, FormData, Paging
from catalog.exceptions import DomainConstraintError, ValidationFailedError
from catalog.schemas import CategoryForm
from catalog.templating import render, render_invalid
from catalog.utils.messages import Message, redirect_with_message

router = APIRouter(tags=["Categories"])

FORM_TEMPLATE = "categories/form.html"

NEW_CATEGORY_SUCCESS = "New Category added."
CATEGORY_UPDATED_SUCCESS = "Category has been updated."
CATEGORY_DELETED_SUCCESS = "Category has been deleted."
NO_CATEGORIES_IN_DB_INFO = "There are no categories in the database."
NO_BOOKS_IN_CATEGORY_INFO = "There are no books in this category."


@router.get("/categories", summary="List categories")
def list_categories(request: Request, service: CategoryServiceDep, paging: Paging):
    view = paging.view(service)
    message = Message(info=NO_CATEGORIES_IN_DB_INFO) if view.page.total == 0 else None
    return render(request, "categories/list.html", {"view": view}, message=message)


@router.get("/category/new", summary="New category form")
def new_category_form(request: Request):
    return render(
        request, FORM_TEMPLATE, {"action": "/category/create", "category": {}, "errors": {}}
    )


@router.post("/category/create", summary="Create a category")
def create_category(request: Request, service: CategoryServiceDep, data: FormData):
    try:
        category = service.create(CategoryForm.from_form(data))
    except ValidationFailedError as exc:
        return render_invalid(
            request, FORM_TEMPLATE, {"action": "/category/create", "category": data}, exc
        )

    return redirect_with_message(
        request, f"/category/{category.id}", Message(success=NEW_CATEGORY_SUCCESS)
    )


@router.get("/category/{category_id}", summary="Show a category and its books")
def show_category(request: Request, category_id: int, service: CategoryServiceDep, paging: Paging):
    category = service.find_by_id(category_id)
    books = paging.view(service.get_books(category))
    message = Message(info=NO_BOOKS_IN_CATEGORY_INFO) if books.page.total == 0 else None
    return render(
        request, "categories/show.html", {"category": category, "books": books}, message=message
    )


@router.get("/category/{category_id}/edit", summary="Edit category form")
def edit_category_form(request: Request, category_id: int, service: CategoryServiceDep):
    category = service.find_by_id(category_id)
    return render(
        request,
        FORM_TEMPLATE,
        {"action": f"/category/{category_id}/update", "category": category, "errors": {}},
    )


@router.post("/category/{category_id}/update", summary="Update a category")
def update_category(
    request: Request, category_id: int, service: CategoryServiceDep, data: FormData
):
    service.find_by_id(category_id)
    try:
        service.update(category_id, CategoryForm.from_form(data))
    except ValidationFailedError as exc:
        return render_invalid(
            request,
            FORM_TEMPLATE,
            {"action": f"/category/{category_id}/update", "category": data},
            exc,
        )

    return redirect_with_message(
        request, f"/category/{category_id}", Message(success=CATEGORY_UPDATED_SUCCESS)
    )


@router.post("/category/{category_id}/delete", summary="Delete a category")
def delete_category(request: Request, category_id: int, service: CategoryServiceDep):
    if not service.exists(category_id):
        return RedirectResponse("/categories", status_code=status.HTTP_303_SEE_OTHER)

    try:
        service.delete(category_id)
    except DomainConstraintError as exc:
        return redirect_with_message(request, f"/category/{category_id}", Message(error=str(exc)))

    return redirect_with_message(
        request, "/categories", Message(success=CATEGORY_DELETED_SUCCESS)
    )
