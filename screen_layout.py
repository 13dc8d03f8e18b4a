import curses

from viewport import CHROME_ROWS


class ScreenLayout:
    """Row positions of the fixed screen regions for the current terminal size."""

    TITLE_Y = 0
    FORMULA_Y = 1
    HEADER_Y = 3

    def __init__(self, stdscr):
        self.stdscr = stdscr
        self.resize()

    def resize(self):
        self.H, self.W = self.stdscr.getmaxyx()
        self.table_top = self.HEADER_Y + 1
        self.table_h = max(1, self.H - CHROME_ROWS)
        self.status_y = min(self.H - 1, self.table_top + self.table_h)
        self.search_y = min(self.H - 1, self.status_y + 1)
        self.help_y = min(self.H - 1, self.search_y + 1)
        self.info_y = min(self.H - 1, self.help_y + 1)

    def modal_window(self, height: int, width: int):
        h = max(3, min(height, self.H))
        w = max(10, min(width, self.W))
        y = max(0, (self.H - h) // 2)
        x = max(0, (self.W - w) // 2)
        win = curses.newwin(h, w, y, x)
        win.leaveok(True)
        return win
