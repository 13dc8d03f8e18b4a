"""
ASCII chart rendering for a selected range.

A range is reduced to a label/value series (labels from the first selected
column, values from the second) and rasterized into one of four chart forms.
Renderers return a ChartCanvas: plain text lines plus colour spans that name
theme roles, so the caller decides how (and whether) to colour them.
"""
import math
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np
import pandas as pd

from models import ChartType, Sheet
from selection import SelectionRect

NO_DATA = "No data to visualize"

BAR_LABEL_WIDTH = 15
BAR_WIDTH = 40
LINE_HEIGHT = 12
LINE_WIDTH = 50
PIE_RADIUS = 8
PIE_PALETTE = ["accent", "primary", "secondary", "success", "warning"]
SPARK_CHARS = "▁▂▃▄▅▆▇█"

POINT = "●"
H_LINE = "─"
V_LINE = "|"
DOWN_SLOPE = "\\"
UP_SLOPE = "/"


@dataclass
class ChartSeries:
    labels: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)


Span = Tuple[int, int, str]


@dataclass
class ChartCanvas:
    lines: List[str] = field(default_factory=list)
    spans: List[List[Span]] = field(default_factory=list)

    def add(self, text: str, spans=None):
        self.lines.append(text)
        self.spans.append(list(spans or []))

    def extend(self, other: "ChartCanvas"):
        self.lines.extend(other.lines)
        self.spans.extend(other.spans)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def _placeholder() -> ChartCanvas:
    canvas = ChartCanvas()
    canvas.add(NO_DATA, [(0, len(NO_DATA), "dim_text")])
    return canvas


def round_half_up(x: float) -> int:
    """Round to the nearest int, halves going up (built-in round() goes to even)."""
    return math.floor(x + 0.5)


# ---------- extraction ----------

def _coerce_values(raw: List[str]) -> List[float]:
    numeric = pd.to_numeric(pd.Series(raw, dtype=object), errors="coerce").astype(float)
    numeric = numeric.where(np.isfinite(numeric), 0.0)
    return numeric.tolist()


def extract_series(sheet: Sheet, rect: SelectionRect) -> ChartSeries:
    label_col = rect.min_col
    value_col = rect.min_col + 1
    has_values = value_col <= rect.max_col and value_col < sheet.max_cols

    labels: List[str] = []
    raw_values: List[str] = []
    last_row = min(rect.max_row, sheet.max_rows - 1)
    for row in range(rect.min_row, last_row + 1):
        label_cell = sheet.cell(row, label_col)
        label = label_cell.value if label_cell is not None else ""
        if label == "":
            label = f"Row {row + 1}"
        labels.append(label)

        if has_values:
            value_cell = sheet.cell(row, value_col)
            raw_values.append(value_cell.value.strip() if value_cell is not None else "")

    values = _coerce_values(raw_values) if raw_values else []
    return ChartSeries(labels=labels, values=values)


# ---------- bar ----------

def truncate_label(label: str, width: int) -> str:
    if len(label) <= width:
        return label
    return label[: width - 1] + "…"


def render_bar(series: ChartSeries) -> ChartCanvas:
    if not series.values:
        return _placeholder()

    canvas = ChartCanvas()
    # bars grow from zero; an all-negative series has nothing to draw
    max_val = max(max(series.values), 0.0)
    if max_val == 0:
        max_val = 1.0

    for i, val in enumerate(series.values):
        if i >= len(series.labels):
            break
        label = truncate_label(series.labels[i], BAR_LABEL_WIDTH).ljust(BAR_LABEL_WIDTH)
        bar_len = round_half_up(BAR_WIDTH * val / max_val)
        bar_len = max(0, min(BAR_WIDTH, bar_len))
        bar = "█" * bar_len
        value_text = f" {val:.1f}"

        prefix = f"{label} │ "
        bar_start = len(prefix)
        bar_end = bar_start + bar_len
        canvas.add(
            prefix + bar + value_text,
            [
                (0, BAR_LABEL_WIDTH, "text"),
                (bar_start, bar_end, "accent"),
                (bar_end, bar_end + len(value_text), "text"),
            ],
        )

    pad = " " * BAR_LABEL_WIDTH
    canvas.add(pad + " └" + "─" * (BAR_WIDTH + 2), [(0, BAR_LABEL_WIDTH + BAR_WIDTH + 4, "dim_text")])
    scale = pad + "  0" + " " * (BAR_WIDTH - 10) + f"{max_val:.1f}"
    canvas.add(scale, [(0, len(scale), "dim_text")])
    return canvas


# ---------- line ----------

def _segment_glyph(dx: int, dy: int, sx: int, sy: int) -> str:
    if dx > dy:
        return H_LINE
    if dy > dx:
        return V_LINE
    if sx == sy:
        return DOWN_SLOPE
    return UP_SLOPE


def draw_line(grid: np.ndarray, x0: int, y0: int, x1: int, y1: int):
    """Bresenham walk from (x0, y0) to (x1, y1); only blank cells are written."""
    height, width = grid.shape
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    glyph = _segment_glyph(dx, dy, sx, sy)
    err = dx - dy

    while True:
        if 0 <= x0 < width and 0 <= y0 < height and grid[y0, x0] == " ":
            grid[y0, x0] = glyph
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x0 += sx
        if e2 < dx:
            err += dx
            y0 += sy


def line_points(values: List[float], height: int = LINE_HEIGHT, width: int = LINE_WIDTH) -> List[Tuple[int, int]]:
    n = len(values)
    lo = min(values)
    hi = max(values)
    if hi == lo:
        hi = lo + 1

    points = []
    for i, val in enumerate(values):
        x = 0 if n == 1 else round_half_up(i * (width - 1) / (n - 1))
        x = max(0, min(width - 1, x))
        normalized = (val - lo) / (hi - lo)
        y = height - 1 - round_half_up(normalized * (height - 1))
        y = max(0, min(height - 1, y))
        points.append((x, y))
    return points


def rasterize_line(values: List[float], height: int = LINE_HEIGHT, width: int = LINE_WIDTH) -> np.ndarray:
    grid = np.full((height, width), " ", dtype="<U1")
    points = line_points(values, height, width)
    for x, y in points:
        grid[y, x] = POINT
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        draw_line(grid, x0, y0, x1, y1)
    return grid


def _ink_spans(row: str, offset: int, role: str) -> List[Span]:
    spans = []
    start = None
    for i, ch in enumerate(row):
        if ch != " " and start is None:
            start = i
        elif ch == " " and start is not None:
            spans.append((offset + start, offset + i, role))
            start = None
    if start is not None:
        spans.append((offset + start, offset + len(row), role))
    return spans


def render_line(series: ChartSeries) -> ChartCanvas:
    if not series.values:
        return _placeholder()

    values = series.values
    lo = min(values)
    hi = max(values)
    if hi == lo:
        hi = lo + 1

    grid = rasterize_line(values)
    height = grid.shape[0]
    canvas = ChartCanvas()
    for i in range(height):
        row = "".join(grid[i])
        if i % 3 == 0:
            val = hi - (i / (height - 1)) * (hi - lo)
            axis = f"{val:6.1f}│"
        else:
            axis = "      │"
        spans = [(0, len(axis), "text")] + _ink_spans(row, len(axis), "accent")
        canvas.add(axis + row, spans)
    footer = "      └" + "─" * grid.shape[1]
    canvas.add(footer, [(0, len(footer), "dim_text")])
    return canvas


# ---------- sparkline ----------

def sparkline_text(values: List[float]) -> str:
    if not values:
        return ""
    lo = min(values)
    hi = max(values)
    if hi == lo:
        hi = lo + 1
    levels = len(SPARK_CHARS)
    out = []
    for val in values:
        idx = int((val - lo) / (hi - lo) * (levels - 1))
        out.append(SPARK_CHARS[max(0, min(levels - 1, idx))])
    return "".join(out)


def render_sparkline(series: ChartSeries) -> ChartCanvas:
    if not series.values:
        return _placeholder()
    text = sparkline_text(series.values)
    canvas = ChartCanvas()
    canvas.add(text, [(0, len(text), "accent")])
    return canvas


# ---------- pie ----------

def pie_slices(values: List[float], radius: int = PIE_RADIUS) -> np.ndarray:
    """Grid of slice indices (-1 outside the disc or any slice)."""
    total = sum(values)
    if total == 0:
        total = 1.0

    size = radius * 2 + 1
    ys, xs = np.mgrid[0:size, 0:size]
    dx = xs - radius
    dy = ys - radius
    dist = np.hypot(dx, dy)
    angle = np.degrees(np.arctan2(dy, dx))
    angle = np.where(angle < 0, angle + 360.0, angle)
    inside = dist <= radius

    slices = np.full((size, size), -1, dtype=int)
    current = 0.0
    for i, val in enumerate(values):
        sweep = val / total * 360.0
        mask = inside & (angle >= current) & (angle < current + sweep)
        slices[mask] = i
        current += sweep
    return slices


def render_pie(series: ChartSeries) -> ChartCanvas:
    if not series.values:
        return _placeholder()

    values = series.values
    total = sum(values)
    if total == 0:
        total = 1.0

    canvas = ChartCanvas()
    slices = pie_slices(values)
    for row in slices:
        chars = []
        spans = []
        for x, idx in enumerate(row):
            if 0 <= idx < len(PIE_PALETTE):
                chars.append(POINT)
                spans.append((x, x + 1, PIE_PALETTE[idx % len(PIE_PALETTE)]))
            else:
                chars.append(" ")
        canvas.add("".join(chars), spans)

    canvas.add("")
    for i, label in enumerate(series.labels):
        if i >= len(values) or i >= len(PIE_PALETTE):
            break
        pct = values[i] / total * 100
        line = f"■ {label}: {pct:.1f}%"
        canvas.add(line, [(0, 1, PIE_PALETTE[i]), (1, len(line), "text")])
    return canvas


# ---------- dispatch ----------

def _render_sparkline_panel(series: ChartSeries) -> ChartCanvas:
    if not series.values:
        return _placeholder()
    canvas = ChartCanvas()
    spark = sparkline_text(series.values)
    prefix = "Sparkline: "
    canvas.add(prefix + spark, [(0, len(prefix), "text"), (len(prefix), len(prefix) + len(spark), "accent")])
    canvas.extend(render_bar(series))
    return canvas


_RENDERERS = {
    ChartType.BAR: render_bar,
    ChartType.LINE: render_line,
    ChartType.SPARKLINE: _render_sparkline_panel,
    ChartType.PIE: render_pie,
}


def render_chart(chart_type: ChartType, series: ChartSeries) -> ChartCanvas:
    return _RENDERERS[chart_type](series)

