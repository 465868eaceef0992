"""
Tests for the pagination helpers.

Pure unit tests: no database, no client.
"""

import pytest

from catalog.utils.pagination import (
    Page,
    PageableView,
    PageRequest,
    Pager,
    total_pages_for,
)


class FakeSource:
    """Anything with find_all(page_request) is paged by storage."""

    def __init__(self, items):
        self.items = items
        self.requests = []

    def find_all(self, page_request: PageRequest) -> Page:
        self.requests.append(page_request)
        return Page.from_sequence(self.items, page_request)


class TestPageRequest:
    def test_offset(self):
        assert PageRequest(page=2, size=5).offset == 10

    def test_rejects_negative_page(self):
        with pytest.raises(ValueError):
            PageRequest(page=-1, size=5)

    def test_rejects_zero_size(self):
        with pytest.raises(ValueError):
            PageRequest(page=0, size=0)

    def test_clamp_past_last_page(self):
        assert PageRequest(page=7, size=5).clamp(12) == PageRequest(page=2, size=5)

    def test_clamp_with_no_items(self):
        assert PageRequest(page=3, size=5).clamp(0) == PageRequest(page=0, size=5)


class TestPage:
    def test_total_pages(self):
        assert total_pages_for(0, 5) == 0
        assert total_pages_for(5, 5) == 1
        assert total_pages_for(11, 5) == 3

    def test_last_page_gets_remainder(self):
        page = Page.from_sequence(list(range(12)), PageRequest(page=2, size=5))

        assert page.items == [10, 11]
        assert page.total_pages == 3
        assert page.has_previous
        assert not page.has_next

    def test_page_past_end_is_clamped(self):
        page = Page.from_sequence(list(range(12)), PageRequest(page=40, size=5))

        assert page.number == 2
        assert page.items == [10, 11]

    def test_empty_collection(self):
        page = Page.from_sequence([], PageRequest(page=3, size=5))

        assert page.number == 0
        assert page.is_empty
        assert page.total_pages == 0
        assert len(page) == 0


class TestPager:
    def test_window_is_centered(self):
        pager = Pager(total_pages=5, current_page=2, buttons_to_show=3)
        assert list(pager.pages) == [1, 2, 3]

    def test_window_clipped_at_start(self):
        pager = Pager(total_pages=5, current_page=0, buttons_to_show=3)
        assert list(pager.pages) == [0, 1, 2]

    def test_window_clipped_at_end(self):
        pager = Pager(total_pages=5, current_page=4, buttons_to_show=3)
        assert list(pager.pages) == [2, 3, 4]

    def test_fewer_pages_than_buttons(self):
        pager = Pager(total_pages=2, current_page=1, buttons_to_show=3)
        assert list(pager.pages) == [0, 1]

    def test_no_pages_no_buttons(self):
        pager = Pager(total_pages=0, current_page=0, buttons_to_show=3)
        assert list(pager.pages) == []
        assert not pager.has_previous
        assert not pager.has_next

    def test_current_page_clamped(self):
        pager = Pager(total_pages=3, current_page=10, buttons_to_show=3)
        assert pager.current_page == 2

    @pytest.mark.parametrize("total_pages", range(1, 9))
    @pytest.mark.parametrize("buttons", [1, 2, 3, 5])
    def test_window_always_contains_current_page(self, total_pages, buttons):
        for current in range(total_pages):
            pager = Pager(total_pages=total_pages, current_page=current, buttons_to_show=buttons)
            pages = list(pager.pages)

            assert current in pages
            assert len(pages) == min(buttons, total_pages)
            assert pages[0] >= 0
            assert pages[-1] <= total_pages - 1


class TestPageableView:
    def test_defaults(self):
        view = PageableView(list(range(12)))

        assert view.page_size == 5
        assert view.page_index == 0
        assert view.items == [0, 1, 2, 3, 4]
        assert view.page_sizes == [5, 10]

    @pytest.mark.parametrize("requested", [None, 0, -3])
    def test_missing_or_invalid_size_uses_default(self, requested):
        view = PageableView(list(range(12)), page_size=requested)
        assert view.page_size == 5

    def test_size_is_capped(self):
        view = PageableView(list(range(12)), page_size=1000, max_page_size=10)
        assert view.page_size == 10

    def test_page_number_is_one_based(self):
        view = PageableView(list(range(12)), page=2)

        assert view.page_index == 1
        assert view.items == [5, 6, 7, 8, 9]

    @pytest.mark.parametrize("requested", [None, 0, -1])
    def test_missing_or_invalid_page_is_first(self, requested):
        view = PageableView(list(range(12)), page=requested)
        assert view.page_index == 0

    def test_page_past_end_shows_last_page(self):
        view = PageableView(list(range(12)), page=50)

        assert view.page.number == 2
        assert view.items == [10, 11]
        assert view.pager.current_page == 2

    def test_paged_source_does_the_slicing(self):
        source = FakeSource(list(range(30)))

        view = PageableView(source, page_size=10, page=3)

        assert source.requests == [PageRequest(page=2, size=10)]
        assert view.items == list(range(20, 30))

    def test_set_source_is_paged_in_memory(self):
        view = PageableView({"a"}, page_size=5)
        assert view.items == ["a"]

    def test_pager_window_from_settings(self):
        view = PageableView(list(range(50)), page_size=5, page=5, buttons_to_show=5)
        assert list(view.pager.pages) == [2, 3, 4, 5, 6]
