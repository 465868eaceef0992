"""
Test Suite for the Library Catalog

Test Organization:
- conftest.py: Shared fixtures (in-memory database, client, sample data)
- test_pagination.py: PageRequest, Page, Pager and PageableView
- test_messages.py: Flash messages across redirects
- test_authors.py: AuthorService and the /authors, /author/... pages
- test_categories.py: CategoryService and the /categories, /category/... pages
- test_books.py: BookService and the /books, /book/... pages

Running Tests:
    pip install -e ".[test]"
    pytest
    pytest tests/test_books.py -v
"""
