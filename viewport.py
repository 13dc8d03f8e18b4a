MIN_CELL_WIDTH = 12
MAX_CELL_WIDTH = 40

# rows consumed by title, formula bar, header, status, search and help lines
CHROME_ROWS = 9
# columns consumed by the row-number gutter and its separator
GUTTER_COLS = 8


class ViewportController:
    """Keeps the cursor inside the visible window of the grid."""

    def __init__(self, width: int = 80, height: int = 24, cell_width: int = MIN_CELL_WIDTH):
        self.offset_row = 0
        self.offset_col = 0
        self.width = width
        self.height = height
        self.cell_width = cell_width

    @staticmethod
    def visible_extent(width: int, height: int, cell_width: int = MIN_CELL_WIDTH) -> tuple[int, int]:
        rows = max(1, height - CHROME_ROWS)
        cols = max(1, (width - GUTTER_COLS) // max(1, cell_width + 2))
        return rows, cols

    def extent(self) -> tuple[int, int]:
        return self.visible_extent(self.width, self.height, self.cell_width)

    def resize(self, width: int, height: int):
        self.width = width
        self.height = height

    def reset(self):
        self.offset_row = 0
        self.offset_col = 0

    @staticmethod
    def adjust_axis(cursor: int, offset: int, extent: int) -> int:
        if cursor < offset:
            offset = cursor
        elif cursor >= offset + extent:
            offset = cursor - extent + 1
        return max(0, offset)

    @staticmethod
    def center_axis(cursor: int, extent: int) -> int:
        # no clamp against the far edge: the window may run past the last row/col
        return max(0, cursor - extent // 2)

    def adjust_viewport(self, cursor_row: int, cursor_col: int):
        rows, cols = self.extent()
        self.offset_row = self.adjust_axis(cursor_row, self.offset_row, rows)
        self.offset_col = self.adjust_axis(cursor_col, self.offset_col, cols)

    def center_viewport(self, cursor_row: int, cursor_col: int):
        rows, cols = self.extent()
        self.offset_row = self.center_axis(cursor_row, rows)
        self.offset_col = self.center_axis(cursor_col, cols)

    def visible_rows(self, max_rows: int) -> range:
        rows, _ = self.extent()
        return range(self.offset_row, min(self.offset_row + rows, max_rows))

    def visible_cols(self, max_cols: int) -> range:
        _, cols = self.extent()
        return range(self.offset_col, min(self.offset_col + cols, max_cols))
