import pytest

from theme import (
    DEFAULT_THEME,
    THEME_ORDER,
    THEMES,
    get_theme,
    hex_to_basic,
    hex_to_rgb,
    hex_to_xterm256,
    resolve_theme,
    theme_by_position,
)


def test_every_theme_is_ordered_and_complete():
    assert sorted(THEME_ORDER) == sorted(THEMES)
    for key, theme in THEMES.items():
        assert theme.key == key
        for role in ("primary", "text", "border", "cell_highlight", "error"):
            assert theme.color(role).startswith("#")


def test_lookup_is_case_insensitive():
    assert get_theme(" Nord ") is THEMES["nord"]
    assert get_theme("unknown") is None
    assert get_theme(None) is None


def test_resolve_falls_back_to_default():
    assert resolve_theme("neon") is THEMES[DEFAULT_THEME]
    assert resolve_theme("gruvbox") is THEMES["gruvbox"]


@pytest.mark.parametrize("position, key", [(1, "catppuccin"), (6, "dracula")])
def test_theme_by_position(position, key):
    assert theme_by_position(position) is THEMES[key]


@pytest.mark.parametrize("position", [0, 7, -1])
def test_theme_by_position_out_of_range(position):
    assert theme_by_position(position) is None


def test_hex_conversions():
    assert hex_to_rgb("#FF8000") == (255, 128, 0)
    assert hex_to_xterm256("#000000") == 16
    assert hex_to_xterm256("#FFFFFF") == 231
    assert hex_to_xterm256("#808080") == 244
    assert hex_to_basic("#FF0000") == 1
    assert hex_to_basic("#FFFFFF") == 7
    with pytest.raises(ValueError):
        hex_to_rgb("#FFF")
