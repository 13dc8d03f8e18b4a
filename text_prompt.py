import curses

SUBMIT = "submit"
CANCEL = "cancel"

ENTER_KEYS = (10, 13, curses.KEY_ENTER)
ESC = 27
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 127, 8)


class TextPrompt:
    """Single-line input buffer shared by search, jump and export."""

    def __init__(self, label: str = ""):
        self.label = label
        self.buffer = ""
        self.cursor = 0
        self.hscroll = 0

    def start(self, initial: str = ""):
        self.buffer = initial or ""
        self.cursor = len(self.buffer)
        self.hscroll = 0

    def reset(self):
        self.start("")

    @property
    def value(self) -> str:
        return self.buffer

    def handle_key(self, ch):
        """Returns SUBMIT, CANCEL, or None while editing."""
        if ch in ENTER_KEYS:
            return SUBMIT

        if ch == ESC:
            return CANCEL

        if ch in BACKSPACE_KEYS:
            if self.cursor > 0:
                self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
                self.cursor -= 1
            return None

        if ch == curses.KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
            return None

        if ch == curses.KEY_RIGHT:
            self.cursor = min(len(self.buffer), self.cursor + 1)
            return None

        if ch == curses.KEY_HOME:
            self.cursor = 0
            return None

        if ch == curses.KEY_END:
            self.cursor = len(self.buffer)
            return None

        if isinstance(ch, int) and 32 <= ch <= 126:
            self.buffer = self.buffer[: self.cursor] + chr(ch) + self.buffer[self.cursor :]
            self.cursor += 1
        return None

    def visible(self, width: int):
        """Slice of the buffer that fits in width, and the cursor column within it."""
        text_w = max(1, width)
        if self.cursor < self.hscroll:
            self.hscroll = self.cursor
        elif self.cursor > self.hscroll + text_w - 1:
            self.hscroll = self.cursor - text_w + 1
        start = self.hscroll
        return self.buffer[start : start + text_w], self.cursor - start
