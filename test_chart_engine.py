import unittest

import numpy as np
import pytest

from chart_engine import (
    BAR_WIDTH,
    NO_DATA,
    POINT,
    ChartSeries,
    draw_line,
    extract_series,
    line_points,
    pie_slices,
    rasterize_line,
    render_bar,
    render_chart,
    render_line,
    render_pie,
    render_sparkline,
    round_half_up,
    sparkline_text,
)
from models import ChartType, Sheet
from selection import SelectionRect


def _sheet():
    return Sheet.from_values(
        "data",
        [
            ["Jan", "10"],
            ["", "n/a"],
            ["Mar", "30.5"],
            ["Apr"],
        ],
    )


class ExtractSeriesTests(unittest.TestCase):
    def test_labels_and_lenient_values(self):
        series = extract_series(_sheet(), SelectionRect(0, 3, 0, 1))
        self.assertEqual(series.labels, ["Jan", "Row 2", "Mar", "Apr"])
        self.assertEqual(series.values, [10.0, 0.0, 30.5, 0.0])

    def test_single_column_selection_has_no_values(self):
        series = extract_series(_sheet(), SelectionRect(0, 2, 0, 0))
        self.assertEqual(len(series.labels), 3)
        self.assertEqual(series.values, [])

    def test_rows_past_sheet_end_are_ignored(self):
        series = extract_series(_sheet(), SelectionRect(2, 10, 0, 1))
        self.assertEqual(series.labels, ["Mar", "Apr"])

    def test_value_column_outside_sheet(self):
        sheet = Sheet.from_values("one", [["a"], ["b"]])
        series = extract_series(sheet, SelectionRect(0, 1, 0, 1))
        self.assertEqual(series.values, [])


@pytest.mark.parametrize("renderer", [render_bar, render_line, render_sparkline, render_pie])
def test_empty_series_renders_placeholder(renderer):
    canvas = renderer(ChartSeries(labels=["a", "b"], values=[]))
    assert canvas.lines == [NO_DATA]


def test_bar_all_zero_has_empty_bars():
    canvas = render_bar(ChartSeries(["a", "b"], [0.0, 0.0]))
    assert "█" not in canvas.text
    assert canvas.lines[0].startswith("a" + " " * 14 + " │ ")
    assert canvas.lines[-1].endswith("1.0")


def test_bar_lengths_scale_to_max():
    canvas = render_bar(ChartSeries(["lo", "hi"], [10.0, 40.0]))
    assert canvas.lines[0].count("█") == 10
    assert canvas.lines[1].count("█") == BAR_WIDTH
    assert canvas.lines[1].endswith(" 40.0")


def test_bar_negative_values_clamp_to_zero():
    canvas = render_bar(ChartSeries(["a", "b"], [-5.0, 5.0]))
    assert canvas.lines[0].count("█") == 0


def test_bar_all_negative_values_draw_nothing():
    canvas = render_bar(ChartSeries(["a", "b"], [-5.0, -10.0]))
    assert canvas.lines[0].count("█") == 0
    assert canvas.lines[1].count("█") == 0
    assert canvas.lines[0].endswith(" -5.0")
    assert canvas.lines[-1].endswith("1.0")


def test_bar_half_lengths_round_up():
    # 40 * 1 / 16 = 2.5
    canvas = render_bar(ChartSeries(["a", "b"], [1.0, 16.0]))
    assert canvas.lines[0].count("█") == 3


@pytest.mark.parametrize("x, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (-0.5, 0)])
def test_round_half_up(x, expected):
    assert round_half_up(x) == expected


def test_line_midpoint_rounds_up():
    assert line_points([0.0, 0.5, 1.0]) == [(0, 11), (25, 5), (49, 0)]


def test_bar_long_labels_truncate():
    canvas = render_bar(ChartSeries(["a very long label indeed"], [1.0]))
    assert canvas.lines[0].startswith("a very long la…")


def test_line_single_point_at_column_zero():
    assert line_points([5.0]) == [(0, 11)]
    grid = rasterize_line([5.0])
    assert grid[11, 0] == POINT
    assert (grid == POINT).sum() == 1


def test_line_points_span_the_grid():
    points = line_points([0.0, 10.0])
    assert points == [(0, 11), (49, 0)]


def test_line_segments_do_not_overwrite_points():
    grid = rasterize_line([0.0, 10.0, 0.0])
    xs = [x for x, _ in line_points([0.0, 10.0, 0.0])]
    assert grid[11, xs[0]] == POINT
    assert grid[0, xs[1]] == POINT
    assert grid[11, xs[2]] == POINT


@pytest.mark.parametrize(
    "start, end, glyph",
    [
        ((0, 0), (4, 0), "─"),
        ((0, 0), (0, 4), "|"),
        ((0, 0), (4, 4), "\\"),
        ((4, 4), (0, 0), "\\"),
        ((0, 4), (4, 0), "/"),
    ],
)
def test_draw_line_glyphs(start, end, glyph):
    grid = np.full((5, 5), " ", dtype="<U1")
    draw_line(grid, *start, *end)
    assert set(grid[grid != " "].tolist()) == {glyph}


def test_draw_line_first_write_wins():
    grid = np.full((3, 5), " ", dtype="<U1")
    draw_line(grid, 0, 1, 4, 1)
    draw_line(grid, 2, 0, 2, 2)
    assert grid[1, 2] == "─"
    assert grid[0, 2] == "|"


def test_render_line_axis_labels_every_third_row():
    canvas = render_line(ChartSeries(["a", "b"], [0.0, 11.0]))
    assert len(canvas.lines) == 13
    assert canvas.lines[0].startswith("  11.0│")
    assert canvas.lines[1].startswith("      │")
    assert canvas.lines[3].startswith("   8.0│")
    assert canvas.lines[-1].startswith("      └")


def test_sparkline_levels():
    assert sparkline_text([0.0, 7.0]) == "▁█"
    assert sparkline_text([3.0, 3.0]) == "▁▁"
    assert len(render_sparkline(ChartSeries(["a"] * 4, [1, 2, 3, 4])).lines) == 1


def test_pie_slices_and_legend():
    slices = pie_slices([1.0, 1.0])
    assert slices[8, 8] in (0, 1)
    assert slices[0, 0] == -1
    assert set(np.unique(slices)) == {-1, 0, 1}

    canvas = render_pie(ChartSeries(["x", "y"], [1.0, 3.0]))
    assert "■ x: 25.0%" in canvas.lines
    assert "■ y: 75.0%" in canvas.lines


def test_pie_all_zero_does_not_divide_by_zero():
    canvas = render_pie(ChartSeries(["x"], [0.0]))
    assert "■ x: 0.0%" in canvas.lines
    assert POINT not in canvas.text


def test_render_chart_covers_every_type():
    series = ChartSeries(["a", "b", "c"], [1.0, 2.0, 3.0])
    for chart_type in ChartType:
        canvas = render_chart(chart_type, series)
        assert canvas.lines
        assert len(canvas.lines) == len(canvas.spans)


def test_sparkline_panel_includes_bars():
    canvas = render_chart(ChartType.SPARKLINE, ChartSeries(["a", "b"], [1.0, 2.0]))
    assert canvas.lines[0].startswith("Sparkline: ")
    assert "█" in canvas.lines[1]


if __name__ == "__main__":
    unittest.main()
