import curses
from dataclasses import dataclass
from typing import Optional, Tuple

from cell_ref import cell_name
from chart_engine import ChartCanvas
from grid_pane import draw_segments
from models import ChartType, Mode
from text_utils import cell_type, wrap_text
from theme import THEME_ORDER, THEMES

HELP_ENTRIES = [
    ("↑/k ↓/j ←/h →/l", "move"),
    ("pgup/^u pgdn/^d", "page up / down"),
    ("home/0 g", "first column"),
    ("end/$ G", "last column"),
    ("tab ⇧tab", "next / previous sheet"),
    ("/", "search"),
    ("n N", "next / previous match"),
    ("esc", "clear search"),
    ("enter", "cell detail"),
    ("^g", "jump to cell"),
    ("f", "toggle formulas"),
    ("c C", "copy cell / row"),
    ("e", "export sheet"),
    ("t", "theme"),
    ("V", "select range"),
    ("v", "visualize selection"),
    ("?", "toggle help"),
    ("q ^c", "quit"),
]


@dataclass
class Modal:
    canvas: ChartCanvas
    width: int
    cursor: Optional[Tuple[int, int]] = None


def _title(canvas: ChartCanvas, text: str):
    canvas.add(text, [(0, len(text), "primary")])
    canvas.add("")


def _dim(canvas: ChartCanvas, text: str):
    canvas.add(text, [(0, len(text), "dim_text")])


def _key_value(canvas: ChartCanvas, key: str, value: str):
    canvas.add(key + value, [(0, len(key), "secondary"), (len(key), len(key) + len(value), "text")])


def _prompt_line(canvas: ChartCanvas, prompt, width: int) -> Tuple[int, int]:
    text, cursor = prompt.visible(width - 2)
    line = "> " + text
    canvas.add(line, [(0, 2, "accent"), (2, len(line), "text")])
    return len(canvas.lines) - 1, 2 + cursor


def detail_modal(machine) -> Modal:
    ctx = machine.ctx
    canvas = ChartCanvas()
    _title(canvas, "Cell Details")
    cell = ctx.grid.cell(ctx.cursor_row, ctx.cursor_col)
    if cell is None:
        canvas.add("No data")
        return Modal(canvas, 64)

    _key_value(canvas, "Cell: ", cell_name(ctx.cursor_row, ctx.cursor_col))
    canvas.add("")
    _key_value(canvas, "Value:", "")
    for line in wrap_text(cell.value, 56):
        canvas.add(line, [(0, len(line), "text")])
    canvas.add("")
    if cell.formula:
        _key_value(canvas, "Formula:", "")
        for i, line in enumerate(wrap_text(cell.formula, 55)):
            line = ("=" if i == 0 else " ") + line
            canvas.add(line, [(0, len(line), "text")])
        canvas.add("")
    _key_value(canvas, "Type: ", cell_type(cell.value, cell.formula))
    canvas.add("")
    _dim(canvas, "Press Enter or Esc to close")
    return Modal(canvas, 64)


def jump_modal(machine) -> Modal:
    canvas = ChartCanvas()
    _title(canvas, "Jump to Cell")
    _key_value(canvas, "Enter cell reference:", "")
    cursor = _prompt_line(canvas, machine.ctx.prompt, 46)
    canvas.add("")
    _dim(canvas, "Formats:")
    canvas.add("  • A100   (column + row)")
    canvas.add("  • 500    (row only)")
    canvas.add("  • 10,5   (row,col)")
    return Modal(canvas, 50, cursor)


def export_modal(machine) -> Modal:
    canvas = ChartCanvas()
    _title(canvas, "Export Sheet")
    _key_value(canvas, "Filename:", "")
    cursor = _prompt_line(canvas, machine.ctx.prompt, 46)
    canvas.add("")
    _dim(canvas, "Supported formats: .csv, .json")
    return Modal(canvas, 50, cursor)


def theme_modal(machine) -> Modal:
    current = machine.ctx.theme.key
    canvas = ChartCanvas()
    _title(canvas, "Select Theme")
    for i, key in enumerate(THEME_ORDER, start=1):
        theme = THEMES[key]
        line = f"{i}  {theme.name}"
        spans = [(0, 1, "primary"), (3, len(line), "text")]
        if key == current:
            spans.append((len(line), len(line) + 2, "accent"))
            line += " ✓"
        canvas.add(line, spans)
        _dim(canvas, "   " + theme.description)
        canvas.add("")
    _dim(canvas, "Press 1-6 to select, Esc to cancel")
    return Modal(canvas, 60)


def chart_modal(machine) -> Modal:
    ctx = machine.ctx
    canvas = ChartCanvas()
    _title(canvas, "Data Visualization")
    for chart_type in ChartType:
        label = f"{chart_type.value}. {chart_type.title}"
        if chart_type is ctx.chart_type:
            line = "→ " + label
            canvas.add(line, [(0, len(line), "accent")])
        else:
            line = "  " + label
            canvas.add(line, [(0, len(line), "text")])
    canvas.add("")
    canvas.add("─" * 60, [(0, 60, "border")])
    canvas.add("")
    chart = machine.current_chart()
    if chart is not None:
        canvas.extend(chart)
    canvas.add("")
    _dim(canvas, "Press 1-4 to switch chart type, Esc to close")
    return Modal(canvas, 72)


def help_modal(machine=None) -> Modal:
    canvas = ChartCanvas()
    _title(canvas, "Keys")
    width = max(len(keys) for keys, _ in HELP_ENTRIES) + 2
    for keys, desc in HELP_ENTRIES:
        line = keys.ljust(width) + desc
        canvas.add(line, [(0, len(keys), "accent"), (width, len(line), "text")])
    canvas.add("")
    _dim(canvas, "Press ? or Esc to close")
    return Modal(canvas, 48)


MODAL_BUILDERS = {
    Mode.DETAIL: detail_modal,
    Mode.JUMP: jump_modal,
    Mode.EXPORT: export_modal,
    Mode.THEME: theme_modal,
    Mode.CHART: chart_modal,
}


def build_modal(machine) -> Optional[Modal]:
    builder = MODAL_BUILDERS.get(machine.ctx.mode)
    if builder is not None:
        return builder(machine)
    if machine.ctx.show_help and machine.ctx.mode is Mode.NORMAL:
        return help_modal(machine)
    return None


class OverlayView:
    """Boxed modal window centred over the grid."""

    def __init__(self, layout):
        self.layout = layout

    def draw(self, modal: Modal, palette) -> bool:
        """Draws the modal; returns True when the terminal cursor was placed in it."""
        lines = modal.canvas.lines
        win = self.layout.modal_window(len(lines) + 4, modal.width + 4)
        h, w = win.getmaxyx()
        win.erase()
        try:
            win.attron(palette.attr("border"))
            win.box()
            win.attroff(palette.attr("border"))
        except curses.error:
            pass

        max_visible = max(0, h - 4)
        for i, line in enumerate(lines[:max_visible]):
            spans = modal.canvas.spans[i]
            draw_segments(win, 2 + i, 2, _segments(line, spans), palette, w - 1)

        placed = False
        if modal.cursor is not None:
            line_idx, col = modal.cursor
            if line_idx < max_visible:
                try:
                    win.leaveok(False)
                    win.move(2 + line_idx, min(w - 2, 2 + col))
                    placed = True
                except curses.error:
                    pass
        win.refresh()
        return placed


def _segments(line: str, spans):
    """Cut a line into (text, role) pieces; uncovered text uses the plain text role."""
    out = []
    pos = 0
    for start, end, role in sorted(spans):
        start = max(start, pos)
        end = min(end, len(line))
        if start >= end:
            continue
        if start > pos:
            out.append((line[pos:start], "text"))
        out.append((line[start:end], role))
        pos = end
    if pos < len(line):
        out.append((line[pos:], "text"))
    return out
