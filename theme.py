from dataclasses import dataclass
from typing import Dict, List, Optional

DEFAULT_THEME = "catppuccin"


@dataclass(frozen=True)
class Theme:
    key: str
    name: str
    description: str
    primary: str
    secondary: str
    accent: str
    text: str
    dim_text: str
    background: str
    border: str
    row_highlight: str
    col_highlight: str
    cell_highlight: str
    search_match: str
    success: str
    error: str
    warning: str

    def color(self, role: str) -> str:
        return getattr(self, role)


THEMES: Dict[str, Theme] = {
    "catppuccin": Theme(
        key="catppuccin",
        name="Catppuccin Mocha",
        description="Soft pastels, gentle on the eyes",
        primary="#CBA6F7",
        secondary="#89DCEB",
        accent="#A6E3A1",
        text="#CDD6F4",
        dim_text="#6C7086",
        background="#1E1E2E",
        border="#313244",
        row_highlight="#181825",
        col_highlight="#313244",
        cell_highlight="#B4BEFE",
        search_match="#F9E2AF",
        success="#A6E3A1",
        error="#F38BA8",
        warning="#FAB387",
    ),
    "nord": Theme(
        key="nord",
        name="Nord",
        description="Cool Arctic blues, minimal",
        primary="#88C0D0",
        secondary="#81A1C1",
        accent="#A3BE8C",
        text="#ECEFF4",
        dim_text="#4C566A",
        background="#2E3440",
        border="#3B4252",
        row_highlight="#242933",
        col_highlight="#3B4252",
        cell_highlight="#8FBCBB",
        search_match="#EBCB8B",
        success="#A3BE8C",
        error="#BF616A",
        warning="#D08770",
    ),
    "rose-pine": Theme(
        key="rose-pine",
        name="Rosé Pine",
        description="Elegant rose tones",
        primary="#EBBCBA",
        secondary="#9CCFD8",
        accent="#F6C177",
        text="#E0DEF4",
        dim_text="#6E6A86",
        background="#191724",
        border="#26233A",
        row_highlight="#1F1D2E",
        col_highlight="#26233A",
        cell_highlight="#C4A7E7",
        search_match="#F6C177",
        success="#9CCFD8",
        error="#EB6F92",
        warning="#F6C177",
    ),
    "tokyo-night": Theme(
        key="tokyo-night",
        name="Tokyo Night",
        description="Vibrant cyberpunk vibes",
        primary="#BB9AF7",
        secondary="#7DCFFF",
        accent="#9ECE6A",
        text="#C0CAF5",
        dim_text="#565F89",
        background="#1A1B26",
        border="#24283B",
        row_highlight="#16161E",
        col_highlight="#24283B",
        cell_highlight="#7AA2F7",
        search_match="#E0AF68",
        success="#9ECE6A",
        error="#F7768E",
        warning="#FF9E64",
    ),
    "gruvbox": Theme(
        key="gruvbox",
        name="Gruvbox Dark",
        description="Warm retro colors",
        primary="#D3869B",
        secondary="#83A598",
        accent="#B8BB26",
        text="#EBDBB2",
        dim_text="#928374",
        background="#282828",
        border="#3C3836",
        row_highlight="#1D2021",
        col_highlight="#3C3836",
        cell_highlight="#FABD2F",
        search_match="#FE8019",
        success="#B8BB26",
        error="#FB4934",
        warning="#FABD2F",
    ),
    "dracula": Theme(
        key="dracula",
        name="Dracula",
        description="Classic high contrast",
        primary="#BD93F9",
        secondary="#8BE9FD",
        accent="#50FA7B",
        text="#F8F8F2",
        dim_text="#6272A4",
        background="#282A36",
        border="#44475A",
        row_highlight="#21222C",
        col_highlight="#44475A",
        cell_highlight="#FFB86C",
        search_match="#F1FA8C",
        success="#50FA7B",
        error="#FF5555",
        warning="#FFB86C",
    ),
}

THEME_ORDER = ["catppuccin", "nord", "rose-pine", "tokyo-night", "gruvbox", "dracula"]


def get_theme_names() -> List[str]:
    return list(THEME_ORDER)


def get_theme(name: Optional[str]) -> Optional[Theme]:
    if not name:
        return None
    return THEMES.get(name.strip().lower())


def resolve_theme(name: Optional[str]) -> Theme:
    return get_theme(name) or THEMES[DEFAULT_THEME]


def theme_by_position(position: int) -> Optional[Theme]:
    """1-based position in the theme picker."""
    if 1 <= position <= len(THEME_ORDER):
        return THEMES[THEME_ORDER[position - 1]]
    return None


# ---------- terminal colour mapping ----------

_CUBE_LEVELS = (0, 95, 135, 175, 215, 255)


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected #RRGGBB, got {value!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def hex_to_xterm256(value: str) -> int:
    r, g, b = hex_to_rgb(value)

    def nearest_level(c):
        return min(range(6), key=lambda i: abs(_CUBE_LEVELS[i] - c))

    ri, gi, bi = nearest_level(r), nearest_level(g), nearest_level(b)
    cube_rgb = (_CUBE_LEVELS[ri], _CUBE_LEVELS[gi], _CUBE_LEVELS[bi])
    cube_idx = 16 + 36 * ri + 6 * gi + bi

    avg = (r + g + b) // 3
    gray_i = max(0, min(23, round((avg - 8) / 10)))
    gray_v = 8 + 10 * gray_i
    gray_idx = 232 + gray_i

    def dist(rgb):
        return (rgb[0] - r) ** 2 + (rgb[1] - g) ** 2 + (rgb[2] - b) ** 2

    if dist((gray_v, gray_v, gray_v)) < dist(cube_rgb):
        return gray_idx
    return cube_idx


def hex_to_basic(value: str) -> int:
    """Nearest of the 8 ANSI colours, for terminals without 256-colour support."""
    r, g, b = hex_to_rgb(value)
    bits = (1 if r >= 128 else 0) | (2 if g >= 128 else 0) | (4 if b >= 128 else 0)
    return bits
