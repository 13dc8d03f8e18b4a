import curses

from grid_pane import GridPane, draw_segments
from input_state_machine import InputStateMachine
from models import Mode
from overlay import OverlayView, build_modal
from palette import Palette
from screen_layout import ScreenLayout
from status_bar import (
    SHORT_HELP,
    formula_line,
    search_line,
    selection_line,
    status_parts,
    title_line,
)


class Orchestrator:
    def __init__(self, stdscr, machine: InputStateMachine, filename: str):
        self.stdscr = stdscr
        self.machine = machine
        self.filename = filename
        curses.raw()
        self.stdscr.keypad(True)
        self.stdscr.nodelay(False)
        # wake periodically so expired status messages disappear
        self.stdscr.timeout(100)
        try:
            curses.curs_set(0)
        except curses.error:
            pass

        self.layout = ScreenLayout(stdscr)
        self.palette = Palette(machine.ctx.theme)
        self.grid = GridPane()
        self.overlay = OverlayView(self.layout)
        self.machine.resize(self.layout.W, self.layout.H)

    # ---------------- UI ----------------

    def _line(self, y, text, role="text"):
        try:
            self.stdscr.addnstr(y, 0, text, max(0, self.layout.W - 1), self.palette.attr(role))
        except curses.error:
            pass

    def redraw(self):
        ctx = self.machine.ctx
        if self.palette.theme is not ctx.theme:
            self.palette.apply(ctx.theme)

        layout = self.layout
        scr = self.stdscr
        scr.erase()
        w = layout.W

        self._line(layout.TITLE_Y, title_line(ctx, self.filename), "primary")

        ref, text = formula_line(ctx)
        role = "text" if text.startswith(" = ") else "dim_text"
        draw_segments(scr, layout.FORMULA_Y, 0, [(ref, "secondary"), (text, role)], self.palette, w)

        self.grid.draw(scr, ctx, self.palette, layout.HEADER_Y)

        parts = status_parts(ctx, self.machine.current_status())
        segments = [(" ", "text")]
        for i, (part, part_role) in enumerate(parts):
            if i:
                segments.append((" │ ", "border"))
            segments.append((part, part_role))
        draw_segments(scr, layout.status_y, 0, segments, self.palette, w)

        cursor_visible = False
        if ctx.mode is Mode.SEARCH:
            text, col = ctx.prompt.visible(max(1, w - 2))
            search = "/" + text
        else:
            search = search_line(ctx)
        if search:
            draw_segments(
                scr, layout.search_y, 0, [("/", "accent"), (search[1:], "text")], self.palette, w
            )
        self._line(layout.help_y, SHORT_HELP, "dim_text")
        info = selection_line(ctx)
        if info:
            self._line(layout.info_y, info, "accent")

        if ctx.mode is Mode.SEARCH:
            try:
                scr.move(layout.search_y, min(w - 1, 1 + col))
                cursor_visible = True
            except curses.error:
                pass

        scr.refresh()

        modal = build_modal(self.machine)
        if modal is not None:
            cursor_visible = self.overlay.draw(modal, self.palette)

        try:
            curses.curs_set(1 if cursor_visible else 0)
        except curses.error:
            pass

    # ---------------- main loop ----------------

    def run(self):
        self.stdscr.clear()
        self.stdscr.refresh()
        self.redraw()

        while True:
            ch = self.stdscr.getch()

            if ch == curses.KEY_RESIZE:
                self.layout.resize()
                self.machine.resize(self.layout.W, self.layout.H)
                self.stdscr.clear()
            elif not self.machine.handle_key(ch):
                break

            self.redraw()
