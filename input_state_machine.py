import curses
import time
from typing import Callable, Dict, Optional

from cell_ref import cell_name, parse_jump
from chart_engine import ChartCanvas, extract_series, render_chart
from clipboard import Clipboard
from file_type_handler import export_sheet, is_exportable
from grid_model import GridModel
from models import (
    ChartType,
    ClipboardError,
    ExportError,
    InputValidationError,
    Mode,
    StatusLevel,
    StatusMessage,
)
from text_prompt import CANCEL, SUBMIT
from text_utils import truncate
from theme import Theme, resolve_theme, theme_by_position
from viewer_context import ViewerContext
from viewport import ViewportController

KEY_CTRL_C = 3
KEY_CTRL_D = 4
KEY_CTRL_G = 7
KEY_TAB = 9
KEY_CTRL_U = 21
KEY_ESC = 27
ENTER_KEYS = (10, 13, curses.KEY_ENTER)

UP_KEYS = (curses.KEY_UP, ord("k"))
DOWN_KEYS = (curses.KEY_DOWN, ord("j"))
LEFT_KEYS = (curses.KEY_LEFT, ord("h"))
RIGHT_KEYS = (curses.KEY_RIGHT, ord("l"))
PAGE_UP_KEYS = (curses.KEY_PPAGE, KEY_CTRL_U)
PAGE_DOWN_KEYS = (curses.KEY_NPAGE, KEY_CTRL_D)
FIRST_COL_KEYS = (curses.KEY_HOME, ord("0"), ord("g"))
LAST_COL_KEYS = (curses.KEY_END, ord("$"), ord("G"))

STATUS_SECONDS = {
    StatusLevel.INFO: 3,
    StatusLevel.SUCCESS: 3,
    StatusLevel.WARNING: 4,
    StatusLevel.ERROR: 4,
}


def _clamp(value: int, size: int) -> int:
    return max(0, min(value, size - 1))


class InputStateMachine:
    """
    Owns cursor, mode, selection and search state and routes each key to the
    handler registered for the current mode.

    handle_key() processes one event to completion and returns False only
    when the user asked to quit.
    """

    def __init__(
        self,
        grid: GridModel,
        theme: Optional[Theme] = None,
        clipboard=None,
        exporter: Callable = export_sheet,
        width: int = 80,
        height: int = 24,
        clock: Callable[[], float] = time.time,
    ):
        self.ctx = ViewerContext(
            grid=grid,
            viewport=ViewportController(width, height),
            theme=theme or resolve_theme(None),
        )
        self.clipboard = clipboard if clipboard is not None else Clipboard()
        self.exporter = exporter
        self.clock = clock

        self.handlers: Dict[Mode, Callable[[int], bool]] = {
            Mode.NORMAL: self._handle_normal,
            Mode.SEARCH: self._handle_search,
            Mode.DETAIL: self._handle_detail,
            Mode.JUMP: self._handle_jump,
            Mode.EXPORT: self._handle_export,
            Mode.THEME: self._handle_theme,
            Mode.CHART: self._handle_chart,
            Mode.SELECT_RANGE: self._handle_select_range,
        }
        missing = [mode.name for mode in Mode if mode not in self.handlers]
        if missing:
            raise RuntimeError(f"No key handler for modes: {', '.join(missing)}")

        self._set_status(f"Ready • {self.ctx.theme.name}")

    # ---------- status ----------
    def _set_status(self, msg, level=StatusLevel.INFO, seconds=None):
        if seconds is None:
            seconds = STATUS_SECONDS[level]
        self.ctx.status = StatusMessage(msg, level)
        self.ctx.status_until = self.clock() + seconds

    def current_status(self) -> Optional[StatusMessage]:
        if self.ctx.status and self.clock() < self.ctx.status_until:
            return self.ctx.status
        return None

    # ---------- events ----------
    @property
    def mode(self) -> Mode:
        return self.ctx.mode

    def resize(self, width: int, height: int):
        self.ctx.viewport.resize(width, height)

    def handle_key(self, ch) -> bool:
        if ch == -1:
            return True
        if ch == KEY_CTRL_C:
            return False
        return self.handlers[self.ctx.mode](ch)

    # ---------- cursor ----------
    def _move(self, ch) -> bool:
        ctx = self.ctx
        max_rows, max_cols = ctx.grid.bounds()
        page, _ = ctx.viewport.extent()
        row, col = ctx.cursor_row, ctx.cursor_col

        if ch in UP_KEYS:
            row -= 1
        elif ch in DOWN_KEYS:
            row += 1
        elif ch in LEFT_KEYS:
            col -= 1
        elif ch in RIGHT_KEYS:
            col += 1
        elif ch in PAGE_UP_KEYS:
            row -= page
        elif ch in PAGE_DOWN_KEYS:
            row += page
        elif ch in FIRST_COL_KEYS:
            col = 0
        elif ch in LAST_COL_KEYS:
            col = max_cols - 1
        else:
            return False

        ctx.cursor_row = _clamp(row, max_rows)
        ctx.cursor_col = _clamp(col, max_cols)
        ctx.viewport.adjust_viewport(ctx.cursor_row, ctx.cursor_col)
        return True

    def _go_to(self, row: int, col: int):
        self.ctx.cursor_row = row
        self.ctx.cursor_col = col
        self.ctx.viewport.center_viewport(row, col)

    def _reset_view(self):
        ctx = self.ctx
        ctx.cursor_row = 0
        ctx.cursor_col = 0
        ctx.viewport.reset()
        ctx.selection.cancel()
        ctx.search.clear()

    # ---------- normal ----------
    def _handle_normal(self, ch) -> bool:
        ctx = self.ctx

        if ch == ord("q"):
            return False
        if self._move(ch):
            return True

        if ch == KEY_TAB:
            self._switch_sheet(1)
        elif ch == curses.KEY_BTAB:
            self._switch_sheet(-1)
        elif ch == ord("/"):
            ctx.prompt.start(ctx.search.query)
            ctx.mode = Mode.SEARCH
        elif ch == ord("n"):
            self._step_match(1)
        elif ch == ord("N"):
            self._step_match(-1)
        elif ch == KEY_ESC:
            if ctx.show_help:
                ctx.show_help = False
            elif ctx.search.query:
                ctx.search.clear()
                self._set_status("Search cleared")
        elif ch in ENTER_KEYS:
            ctx.mode = Mode.DETAIL
        elif ch == KEY_CTRL_G:
            ctx.prompt.reset()
            ctx.mode = Mode.JUMP
        elif ch == ord("f"):
            ctx.show_formulas = not ctx.show_formulas
            self._set_status("Showing formulas" if ctx.show_formulas else "Showing values")
        elif ch == ord("c"):
            self.copy_cell()
        elif ch == ord("C"):
            self.copy_row()
        elif ch == ord("e"):
            ctx.prompt.reset()
            ctx.mode = Mode.EXPORT
        elif ch == ord("t"):
            ctx.mode = Mode.THEME
        elif ch == ord("?"):
            ctx.show_help = not ctx.show_help
        elif ch == ord("v"):
            self._visualize()
        elif ch == ord("V"):
            self._begin_selection()
        return True

    def _switch_sheet(self, direction: int):
        grid = self.ctx.grid
        moved = grid.next_sheet() if direction > 0 else grid.prev_sheet()
        if not moved:
            return
        self._reset_view()
        arrow = "→" if direction > 0 else "←"
        self._set_status(f"{arrow} {grid.active_sheet.name}")

    def _step_match(self, direction: int):
        search = self.ctx.search
        target = search.navigate(direction)
        if target is None:
            return
        self._go_to(*target)
        self._set_status(f"Match {search.position_label()}")

    def _visualize(self):
        ctx = self.ctx
        if not ctx.selection.selecting:
            self._set_status("Select range first (V)", StatusLevel.WARNING)
            return
        ctx.chart_type = ChartType.BAR
        ctx.mode = Mode.CHART

    def _begin_selection(self):
        ctx = self.ctx
        if ctx.selection.selecting:
            ctx.selection.update(ctx.cursor)
        else:
            ctx.selection.start(ctx.cursor)
            self._set_status("Selection started - Move cursor, press V to finish")
        ctx.mode = Mode.SELECT_RANGE

    # ---------- copy ----------
    def copy_cell(self):
        ctx = self.ctx
        cell = ctx.grid.cell(ctx.cursor_row, ctx.cursor_col)
        if cell is None:
            return
        value = ctx.grid.display_text(ctx.cursor_row, ctx.cursor_col, ctx.show_formulas)
        try:
            self.clipboard.write_text(value)
        except ClipboardError:
            self._set_status("Failed to copy", StatusLevel.ERROR)
            return
        self._set_status(f"Copied: {truncate(value, 30)}", StatusLevel.SUCCESS)

    def copy_row(self):
        ctx = self.ctx
        if ctx.cursor_row >= ctx.sheet.max_rows:
            return
        values = ctx.grid.row_values(ctx.cursor_row)
        try:
            self.clipboard.write_text("\t".join(values))
        except ClipboardError:
            self._set_status("Failed to copy row", StatusLevel.ERROR)
            return
        self._set_status(
            f"Copied row {ctx.cursor_row + 1} ({len(values)} cells)", StatusLevel.SUCCESS
        )

    # ---------- search ----------
    def _handle_search(self, ch) -> bool:
        ctx = self.ctx
        outcome = ctx.prompt.handle_key(ch)
        if outcome == CANCEL:
            ctx.mode = Mode.NORMAL
        elif outcome == SUBMIT:
            query = ctx.prompt.value.strip()
            if query:
                self.run_search(query)
            ctx.mode = Mode.NORMAL
        return True

    def run_search(self, query: str):
        search = self.ctx.search
        matches = search.run(self.ctx.sheet, query)
        if not matches:
            self._set_status("No results found", StatusLevel.WARNING)
            return
        self._go_to(*search.current())
        self._set_status(f"Found {len(matches)} results", StatusLevel.SUCCESS)

    # ---------- detail ----------
    def _handle_detail(self, ch) -> bool:
        if ch == KEY_ESC or ch in ENTER_KEYS or ch == ord("q"):
            self.ctx.mode = Mode.NORMAL
        return True

    # ---------- jump ----------
    def _handle_jump(self, ch) -> bool:
        ctx = self.ctx
        outcome = ctx.prompt.handle_key(ch)
        if outcome == CANCEL:
            ctx.mode = Mode.NORMAL
        elif outcome == SUBMIT:
            # blank input matches no reference form and is reported like any other
            self.jump_to(ctx.prompt.value.strip())
            ctx.mode = Mode.NORMAL
        return True

    def jump_to(self, text: str):
        ctx = self.ctx
        max_rows, max_cols = ctx.grid.bounds()
        try:
            row, col = parse_jump(text, max_rows, max_cols, ctx.cursor_col)
        except InputValidationError as exc:
            self._set_status(str(exc), StatusLevel.ERROR)
            return
        self._go_to(row, col)
        self._set_status(f"→ {cell_name(row, col)}", StatusLevel.SUCCESS)

    # ---------- export ----------
    def _handle_export(self, ch) -> bool:
        ctx = self.ctx
        outcome = ctx.prompt.handle_key(ch)
        if outcome == CANCEL:
            ctx.mode = Mode.NORMAL
        elif outcome == SUBMIT:
            path = ctx.prompt.value.strip()
            if path:
                self.export_to(path)
            ctx.mode = Mode.NORMAL
        return True

    def export_to(self, path: str):
        if not is_exportable(path):
            self._set_status("Use .csv or .json extension", StatusLevel.ERROR)
            return
        try:
            written = self.exporter(self.ctx.sheet, path)
        except ExportError as exc:
            self._set_status(f"Export failed: {exc}", StatusLevel.ERROR)
            return
        self._set_status(f"Exported to {written or path}", StatusLevel.SUCCESS)

    # ---------- theme ----------
    def _handle_theme(self, ch) -> bool:
        ctx = self.ctx
        if ch in (KEY_ESC, ord("q")):
            ctx.mode = Mode.NORMAL
        elif ord("1") <= ch <= ord("9"):
            theme = theme_by_position(ch - ord("0"))
            if theme is not None:
                ctx.theme = theme
                ctx.mode = Mode.NORMAL
                self._set_status(f"Theme: {theme.name}", StatusLevel.SUCCESS)
        return True

    # ---------- chart ----------
    def _handle_chart(self, ch) -> bool:
        ctx = self.ctx
        if ch in (KEY_ESC, ord("q")):
            ctx.mode = Mode.NORMAL
        elif ord("1") <= ch <= ord("9"):
            chart_type = ChartType.from_digit(ch - ord("0"))
            if chart_type is not None:
                ctx.chart_type = chart_type
        return True

    def current_chart(self) -> Optional[ChartCanvas]:
        ctx = self.ctx
        rect = ctx.selection.normalize()
        if rect is None:
            return None
        return render_chart(ctx.chart_type, extract_series(ctx.sheet, rect))

    # ---------- select range ----------
    def _handle_select_range(self, ch) -> bool:
        ctx = self.ctx
        if ch == ord("V"):
            rect = ctx.selection.finish()
            ctx.mode = Mode.NORMAL
            self._set_status(
                f"Selected {rect.height}x{rect.width} range - Press v to visualize",
                StatusLevel.SUCCESS,
            )
        elif ch == KEY_ESC:
            ctx.selection.cancel()
            ctx.mode = Mode.NORMAL
            self._set_status("Selection cancelled")
        elif self._move(ch):
            ctx.selection.update(ctx.cursor)
        return True
