import pytest

from grid_model import GridModel
from models import Cell, FileError, Sheet


def _model():
    first = Sheet.from_rows(
        "first",
        [
            [Cell("1", row=0, col=0), Cell("2", formula="A1+1", row=0, col=1)],
            [Cell("x", row=1, col=0)],
        ],
    )
    second = Sheet.from_values("second", [["only"]])
    return GridModel([first, second])


def test_requires_a_sheet():
    with pytest.raises(FileError):
        GridModel([])


def test_bounds_cover_ragged_rows():
    grid = _model()
    assert grid.bounds() == (2, 2)
    assert grid.cell(1, 1) is None
    assert grid.display_text(1, 1) == ""


def test_display_text_shows_formula_when_asked():
    grid = _model()
    assert grid.display_text(0, 1) == "2"
    assert grid.display_text(0, 1, show_formulas=True) == "=A1+1"
    assert grid.display_text(0, 0, show_formulas=True) == "1"


def test_row_values():
    grid = _model()
    assert grid.row_values(0) == ["1", "2"]
    assert grid.row_values(5) == []


def test_sheet_switching_stops_at_edges():
    grid = _model()
    assert grid.get_sheet_names() == ["first", "second"]
    assert grid.prev_sheet() is False
    assert grid.next_sheet() is True
    assert grid.active_sheet.name == "second"
    assert grid.next_sheet() is False
    assert grid.active_index == 1
    assert grid.prev_sheet() is True
    assert grid.active_sheet.name == "first"


def test_out_of_range_active_index_falls_back():
    grid = GridModel([Sheet(name="a")], active_index=4)
    assert grid.active_index == 0
    assert grid.sheet_count == 1
