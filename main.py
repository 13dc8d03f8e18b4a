import curses
import os
import sys

from _version import __version__
from clipboard import Clipboard
from config_paths import load_config
from file_type_handler import load_file
from grid_model import GridModel
from input_state_machine import InputStateMachine
from models import FileError
from theme import DEFAULT_THEME, get_theme, get_theme_names, resolve_theme

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")


def usage() -> str:
    themes = "\n".join(f"  • {name}" for name in get_theme_names())
    return (
        f"vex {__version__} - terminal spreadsheet viewer\n\n"
        "Usage:\n"
        "  vex <file> [--theme|-t <name>]\n"
        "  vex -v\n"
        "  vex -h\n\n"
        "Supported files: .csv, .xlsx, .xlsm, .parquet\n\n"
        f"Available themes:\n{themes}\n\n"
        "Example:\n"
        "  vex data.xlsx\n"
        "  vex report.csv --theme nord\n"
    )


class UsageError(Exception):
    pass


def parse_args(args):
    """Returns (path, theme_name); theme_name is None when not given."""
    path = None
    theme_name = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg in ("--theme", "-t"):
            if i + 1 >= len(args):
                raise UsageError(f"{arg} requires a theme name")
            theme_name = args[i + 1]
            i += 2
            continue
        if arg.startswith("--theme="):
            theme_name = arg.split("=", 1)[1]
        elif arg.startswith("-"):
            raise UsageError(f"unknown option {arg}")
        elif path is None:
            path = arg
        else:
            raise UsageError(f"unexpected argument {arg}")
        i += 1
    if path is None:
        raise UsageError("a file path is required")
    return path, theme_name


def validate_path(path: str):
    if not os.path.exists(path):
        raise FileError(f"file '{path}' does not exist")
    if os.path.isdir(path):
        raise FileError(f"'{path}' is a directory, not a file")


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    if "-v" in args or "-V" in args or "--version" in args:
        print(__version__)
        return 0

    if "-h" in args or "--help" in args:
        print(usage())
        return 0

    try:
        path, theme_name = parse_args(args)
    except UsageError as e:
        print(f"Error: {e}\n", file=sys.stderr)
        print(usage(), file=sys.stderr)
        return 1

    cfg = load_config()
    theme_name = theme_name or cfg.get("THEME")
    theme = get_theme(theme_name)
    if theme is None:
        if theme_name:
            print(
                f"Warning: unknown theme '{theme_name}', using {DEFAULT_THEME}",
                file=sys.stderr,
            )
        theme = resolve_theme(None)

    try:
        validate_path(path)
        grid = GridModel(load_file(path))
    except FileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    machine = InputStateMachine(
        grid,
        theme=theme,
        clipboard=Clipboard(cfg.get("CLIPBOARD_INTERFACE_COMMAND")),
    )

    from orchestrator import Orchestrator

    def curses_main(stdscr):
        Orchestrator(stdscr, machine, os.path.basename(path)).run()

    curses.wrapper(curses_main)
    return 0


if __name__ == "__main__":
    sys.exit(main())
