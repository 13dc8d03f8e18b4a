import curses
from typing import List, Tuple

from cell_ref import col_index_to_letter
from text_utils import pad_center, truncate_to_width
from viewport import GUTTER_COLS, MIN_CELL_WIDTH

SEP = "│"
ROW_NUM_W = GUTTER_COLS - 1

Segment = Tuple[str, str]


class GridPane:
    """Renders the visible window of the active sheet."""

    def __init__(self, cell_width: int = MIN_CELL_WIDTH):
        self.cell_width = cell_width

    @staticmethod
    def cell_style(ctx, row: int, col: int) -> str:
        if row == ctx.cursor_row and col == ctx.cursor_col:
            return "cursor"
        if ctx.selection.contains(row, col):
            return "selection"
        if ctx.search.contains(row, col):
            return "search"
        if row == ctx.cursor_row:
            return "row"
        if col == ctx.cursor_col:
            return "col"
        return "text"

    def header_segments(self, ctx) -> List[Segment]:
        segments: List[Segment] = [(" " * ROW_NUM_W, "text"), (SEP, "border")]
        for col in ctx.viewport.visible_cols(ctx.sheet.max_cols):
            style = "header_active" if col == ctx.cursor_col else "primary"
            segments.append((pad_center(col_index_to_letter(col), self.cell_width), style))
            segments.append((SEP, "border"))
        return segments

    def row_segments(self, ctx, row: int) -> List[Segment]:
        num_style = "accent" if row == ctx.cursor_row else "dim_text"
        segments: List[Segment] = [(str(row + 1).rjust(ROW_NUM_W)[-ROW_NUM_W:], num_style), (SEP, "border")]
        for col in ctx.viewport.visible_cols(ctx.sheet.max_cols):
            text = ctx.grid.display_text(row, col, ctx.show_formulas)
            segments.append((truncate_to_width(text, self.cell_width), self.cell_style(ctx, row, col)))
            segments.append((SEP, "border"))
        return segments

    def lines(self, ctx) -> List[List[Segment]]:
        out = [self.header_segments(ctx)]
        for row in ctx.viewport.visible_rows(ctx.sheet.max_rows):
            out.append(self.row_segments(ctx, row))
        return out

    def draw(self, win, ctx, palette, top: int):
        h, w = win.getmaxyx()
        for i, segments in enumerate(self.lines(ctx)):
            y = top + i
            if y >= h:
                break
            draw_segments(win, y, 0, segments, palette, w)


def draw_segments(win, y: int, x: int, segments, palette, width: int):
    for text, role in segments:
        if x >= width - 1:
            break
        try:
            win.addnstr(y, x, text, width - 1 - x, palette.attr(role))
        except curses.error:
            pass
        x += len(text)
    return x
