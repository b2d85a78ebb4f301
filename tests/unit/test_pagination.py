import pytest

from networknote.services.pagination import (
    PageCursor,
    clamp_page,
    filter_by_term,
    paginate,
    total_pages,
)


@pytest.mark.parametrize("length", [0, 1, 9, 10, 11, 25, 101])
@pytest.mark.parametrize("page_size", [1, 10, 25])
def test_pages_partition_the_list(length, page_size):
    items = list(range(length))
    pages = total_pages(length, page_size)

    collected = []
    for number in range(1, pages + 1):
        page = paginate(items, page_size, number)
        assert len(page.items) <= page_size
        collected.extend(page.items)

    assert collected == items


@pytest.mark.parametrize("page_size", [0, -5])
def test_non_positive_page_size_rejected(page_size):
    with pytest.raises(ValueError):
        total_pages(10, page_size)
    with pytest.raises(ValueError):
        PageCursor(page_size)


def test_clamp_page():
    assert clamp_page(0, 5) == 1
    assert clamp_page(9, 5) == 5
    assert clamp_page(3, 0) == 1


def test_out_of_range_request_is_clamped():
    page = paginate(list(range(30)), 10, 7)
    assert page.page_number == 3
    assert page.items == list(range(20, 30))
    assert not page.has_next


def test_empty_list_yields_single_empty_page():
    page = paginate([], 10, 1)
    assert page.items == []
    assert page.total_pages == 0
    assert page.page_number == 1


def test_cursor_follows_shrinking_list():
    cursor = PageCursor(page_size=10)
    cursor.go_to(4, total_items=40)
    assert cursor.page_number == 4

    assert cursor.resize(25) == 3
    assert cursor.set_page_size(25, 25) == 1


def test_cursor_reset():
    cursor = PageCursor(page_size=5, page_number=3)
    cursor.reset()
    assert cursor.page(list(range(12))).items == [0, 1, 2, 3, 4]


def test_filter_by_term_matches_any_field():
    rows = [("Ann", "ann@x.com"), ("Bob", "bob@acme.com"), ("Cara", None)]
    fields = [lambda row: row[0], lambda row: row[1]]

    assert filter_by_term(rows, "ACME", fields) == [rows[1]]
    assert filter_by_term(rows, "", fields) == rows
    assert filter_by_term(rows, "zzz", fields) == []
