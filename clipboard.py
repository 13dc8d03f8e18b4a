import shutil
import subprocess
from typing import List, Optional, Sequence

from models import ClipboardError

CANDIDATES = [
    ["wl-copy"],
    ["pbcopy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
]


def detect_command() -> Optional[List[str]]:
    for argv in CANDIDATES:
        if shutil.which(argv[0]):
            return list(argv)
    return None


def write_text(text: str, command: Optional[Sequence[str]] = None) -> None:
    argv = list(command) if command else detect_command()
    if not argv:
        raise ClipboardError("No clipboard command available")
    try:
        subprocess.run(argv, input=text, text=True, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ClipboardError(str(exc)) from exc


class Clipboard:
    """Clipboard bound to the configured command."""

    def __init__(self, command: Optional[Sequence[str]] = None):
        self.command = list(command) if command else None

    def write_text(self, text: str) -> None:
        write_text(text, self.command)
