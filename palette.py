import curses
from typing import Dict

from theme import Theme, hex_to_basic, hex_to_xterm256

# foreground-only roles, drawn on the terminal's default background
FG_ROLES = (
    "primary",
    "secondary",
    "accent",
    "text",
    "dim_text",
    "border",
    "success",
    "error",
    "warning",
    "search_match",
)

# (foreground role, background role)
FILLED_STYLES = {
    "cursor": ("background", "cell_highlight"),
    "selection": ("text", "secondary"),
    "search": ("background", "search_match"),
    "row": ("text", "row_highlight"),
    "col": ("text", "col_highlight"),
    "header_active": ("background", "primary"),
    "status": ("text", "border"),
}


class Palette:
    """Maps theme roles to curses attributes for the theme it was applied with."""

    def __init__(self, theme: Theme):
        self.theme = theme
        self._attrs: Dict[str, int] = {}
        self.apply(theme)

    def _color(self, hex_value: str) -> int:
        if getattr(curses, "COLORS", 8) >= 256:
            return hex_to_xterm256(hex_value)
        return hex_to_basic(hex_value)

    def apply(self, theme: Theme):
        self.theme = theme
        self._attrs = {}
        try:
            curses.start_color()
            curses.use_default_colors()
        except curses.error:
            return

        pair = 1
        try:
            for role in FG_ROLES:
                curses.init_pair(pair, self._color(theme.color(role)), -1)
                self._attrs[role] = curses.color_pair(pair)
                pair += 1
            for style, (fg, bg) in FILLED_STYLES.items():
                curses.init_pair(pair, self._color(theme.color(fg)), self._color(theme.color(bg)))
                self._attrs[style] = curses.color_pair(pair)
                pair += 1
        except curses.error:
            # fewer pairs than needed; whatever was set stays usable
            pass

    def attr(self, role: str) -> int:
        base = self._attrs.get(role, 0)
        if role in ("cursor", "header_active", "primary"):
            return base | curses.A_BOLD
        if role == "dim_text":
            return base | curses.A_DIM
        return base
