from unittest.mock import patch

import pytest

import main
from _version import __version__
from main import UsageError, parse_args


@pytest.mark.parametrize(
    "args, expected",
    [
        (["data.csv"], ("data.csv", None)),
        (["data.csv", "--theme", "nord"], ("data.csv", "nord")),
        (["-t", "gruvbox", "book.xlsx"], ("book.xlsx", "gruvbox")),
        (["book.xlsx", "--theme=dracula"], ("book.xlsx", "dracula")),
    ],
)
def test_parse_args(args, expected):
    assert parse_args(args) == expected


@pytest.mark.parametrize(
    "args",
    [[], ["--theme"], ["a.csv", "b.csv"], ["a.csv", "--bogus"]],
)
def test_parse_args_rejects(args):
    with pytest.raises(UsageError):
        parse_args(args)


def test_version_flag(capsys):
    assert main.main(["-v"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_help_lists_themes(capsys):
    assert main.main(["--help"]) == 0
    out = capsys.readouterr().out
    assert "Usage:" in out
    assert "rose-pine" in out


def test_usage_error_exits_1(capsys):
    assert main.main(["a.csv", "--bogus"]) == 1
    err = capsys.readouterr().err
    assert "Error: unknown option --bogus" in err
    assert "Usage:" in err


def test_missing_file_exits_1(tmp_path, capsys):
    with patch.object(main, "load_config", return_value={"THEME": None}):
        assert main.main([str(tmp_path / "nope.csv")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_unknown_theme_warns_and_runs(tmp_path, capsys):
    path = tmp_path / "d.csv"
    path.write_text("a,b\n1,2\n")
    cfg = {"THEME": None, "CLIPBOARD_INTERFACE_COMMAND": ["fake-clip"]}
    with patch.object(main, "load_config", return_value=cfg), patch(
        "curses.wrapper"
    ) as wrapper:
        assert main.main([str(path), "--theme", "neon"]) == 0
    assert "unknown theme 'neon'" in capsys.readouterr().err
    wrapper.assert_called_once()
