"""
Pagination Helpers

Turns a service's paged query, or an already loaded collection, into one
page of items plus what a list template needs to draw its navigation.

Building blocks:
- PageRequest: which page (zero-based) and how many items per page
- Page: the items of one page plus the total count
- Pager: the window of page-number buttons around the current page
- PageableView: resolves raw query parameters and wires the three together

Page numbers in URLs are 1-based, everything in here is zero-based.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

INITIAL_PAGE = 0
INITIAL_PAGE_SIZE = 5
MAX_PAGE_SIZE = 100
PAGE_SIZES = (5, 10)
BUTTONS_TO_SHOW = 3


def total_pages_for(total: int, size: int) -> int:
    """Number of pages needed to show `total` items, `size` at a time."""
    return math.ceil(total / size) if total > 0 else 0


@dataclass(frozen=True)
class PageRequest:
    """A zero-based page index and a page size."""

    page: int = INITIAL_PAGE
    size: int = INITIAL_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("page must be >= 0")
        if self.size < 1:
            raise ValueError("size must be >= 1")

    @property
    def offset(self) -> int:
        return self.page * self.size

    def clamp(self, total: int) -> "PageRequest":
        """
        Pull the page index back onto the last existing page.

        A stale ?page= parameter (items were deleted since the link was
        rendered) then shows the last page instead of an empty slice.
        """
        last_page = max(total_pages_for(total, self.size) - 1, 0)
        if self.page <= last_page:
            return self
        return PageRequest(page=last_page, size=self.size)


@dataclass
class Page(Generic[T]):
    """One page of items out of a larger collection."""

    items: list[T]
    total: int
    number: int
    size: int

    @classmethod
    def from_sequence(cls, items: Sequence[T], request: PageRequest) -> "Page[T]":
        """Slice an in-memory sequence; the final page receives the remainder."""
        request = request.clamp(len(items))
        start = request.offset
        return cls(
            items=list(items[start:start + request.size]),
            total=len(items),
            number=request.page,
            size=request.size,
        )

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total, self.size)

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class Pager:
    """
    Window of page-number buttons for a list page.

    The window holds min(buttons_to_show, total_pages) consecutive page
    indices, contains current_page, is centered on it where possible and
    never leaves [0, total_pages - 1].

        Pager(total_pages=5, current_page=2, buttons_to_show=3).pages
        → range(1, 4)
        Pager(total_pages=5, current_page=0, buttons_to_show=3).pages
        → range(0, 3)
    """

    total_pages: int
    current_page: int
    buttons_to_show: int = BUTTONS_TO_SHOW
    start_page: int = field(init=False)
    end_page: int = field(init=False)

    def __post_init__(self) -> None:
        if self.total_pages <= 0:
            object.__setattr__(self, "start_page", 0)
            object.__setattr__(self, "end_page", -1)
            return

        current = min(max(self.current_page, 0), self.total_pages - 1)
        window = min(self.buttons_to_show, self.total_pages)
        start = current - self.buttons_to_show // 2
        start = min(max(start, 0), self.total_pages - window)

        object.__setattr__(self, "current_page", current)
        object.__setattr__(self, "start_page", start)
        object.__setattr__(self, "end_page", start + window - 1)

    @property
    def pages(self) -> range:
        """Page indices to draw as buttons, empty when there are no pages."""
        return range(self.start_page, self.end_page + 1)

    @property
    def has_previous(self) -> bool:
        return self.total_pages > 0 and self.current_page > 0

    @property
    def has_next(self) -> bool:
        return self.current_page + 1 < self.total_pages


@runtime_checkable
class PagedSource(Protocol[T]):
    """Anything that can fetch one page from storage, e.g. a CrudService."""

    def find_all(self, page_request: PageRequest) -> Page[T]: ...


class PageableView(Generic[T]):
    """
    One page of a collection plus the pager metadata a list template needs.

    The source is either a PagedSource, which lets storage do the slicing,
    or any iterable, which is listed in iteration order and sliced here.

    Usage in a router:
        view = PageableView(author_service, page_size=10, page=2)
        view.page.items        # authors 11-20
        view.pager.pages       # page indices for the buttons
        view.page_size         # size actually used
        view.page_sizes        # sizes offered in the selector
    """

    def __init__(
        self,
        source: "PagedSource[T] | Iterable[T]",
        page_size: int | None = None,
        page: int | None = None,
        *,
        default_page_size: int = INITIAL_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
        page_sizes: Sequence[int] = PAGE_SIZES,
        buttons_to_show: int = BUTTONS_TO_SHOW,
    ) -> None:
        self.page_sizes = list(page_sizes)
        self.page_size = self.resolve_page_size(page_size, default_page_size, max_page_size)
        self.page_index = self.resolve_page_index(page)

        request = PageRequest(page=self.page_index, size=self.page_size)
        if isinstance(source, PagedSource):
            self.page: Page[T] = source.find_all(request)
        else:
            self.page = Page.from_sequence(list(source), request)

        self.pager = Pager(
            total_pages=self.page.total_pages,
            current_page=self.page.number,
            buttons_to_show=buttons_to_show,
        )

    @staticmethod
    def resolve_page_size(requested: int | None, default: int, maximum: int) -> int:
        """Absent or non-positive sizes fall back to the default."""
        if requested is None or requested < 1:
            return default
        return min(requested, maximum)

    @staticmethod
    def resolve_page_index(requested: int | None) -> int:
        """Convert a 1-based page number to an index; absent or < 1 means the first page."""
        if requested is None or requested < 1:
            return INITIAL_PAGE
        return requested - 1

    @property
    def items(self) -> list[T]:
        return self.page.items
