from models import Cell, Sheet
from search_index import SearchIndex, scan_sheet


def _sheet():
    rows = [
        [Cell("Name", row=0, col=0), Cell("Total", row=0, col=1)],
        [Cell("alpha", row=1, col=0), Cell("10", row=1, col=1)],
        [Cell("Beta", row=2, col=0), Cell("30", formula="SUM(B2:B2)*3", row=2, col=1)],
        [Cell("ALPHABET", row=3, col=0)],
    ]
    return Sheet.from_rows("data", rows)


def test_empty_query_matches_nothing():
    assert scan_sheet(_sheet(), "") == []


def test_case_insensitive_row_major():
    assert scan_sheet(_sheet(), "ALPHA") == [(1, 0), (3, 0)]


def test_formula_text_is_searched():
    assert scan_sheet(_sheet(), "sum(") == [(2, 1)]


def test_navigation_wraps_both_ways():
    index = SearchIndex()
    index.run(_sheet(), "a")
    last = len(index.matches) - 1
    assert index.prev() == index.matches[last]
    assert index.next() == index.matches[0]
    index.index = last
    assert index.next() == index.matches[0]
    assert index.position_label() == f"1/{last + 1}"


def test_navigate_empty_is_noop():
    index = SearchIndex()
    index.run(_sheet(), "zzz")
    assert index.next() is None
    assert index.current() is None
    assert index.index == 0


def test_clear_and_contains():
    index = SearchIndex()
    index.run(_sheet(), "  beta ")
    assert index.query == "beta"
    assert index.contains(2, 0)
    index.clear()
    assert not index.contains(2, 0)
    assert index.matches == []
