import re
from typing import Optional, Tuple

from models import InputValidationError

_DECIMAL = re.compile(r"[+-]?\d+")


def col_index_to_letter(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA."""
    result = ""
    while index >= 0:
        result = chr(ord("A") + index % 26) + result
        index = index // 26 - 1
    return result


def letters_to_col_index(letters: str) -> int:
    """Bijective base-26 (A=1 ... Z=26, AA=27) converted to a 0-based index."""
    if not letters or not all("A" <= ch <= "Z" for ch in letters):
        raise ValueError(f"Not a column reference: {letters!r}")
    col = 0
    for ch in letters:
        col = col * 26 + (ord(ch) - ord("A") + 1)
    return col - 1


def cell_name(row: int, col: int) -> str:
    return f"{col_index_to_letter(col)}{row + 1}"


def _parse_decimal(text: str) -> Optional[int]:
    text = text.strip()
    if not _DECIMAL.fullmatch(text):
        return None
    return int(text)


def _parse_letters_row(text: str) -> Optional[Tuple[int, int]]:
    i = 0
    while i < len(text) and "A" <= text[i] <= "Z":
        i += 1
    if i == 0:
        return None
    row = _parse_decimal(text[i:]) if text[i:] else None
    if row is None:
        return None
    return row - 1, letters_to_col_index(text[:i])


def parse_jump(text: str, max_rows: int, max_cols: int, current_col: int) -> Tuple[int, int]:
    """
    Resolve a jump reference to a 0-based (row, col).

    Forms, first success wins:
      "A100"  column letters + row
      "500"   row only, column unchanged
      "10,5"  row,col
    """
    text = (text or "").strip().upper()

    def in_bounds(row, col):
        return 0 <= row < max_rows and 0 <= col < max_cols

    target = _parse_letters_row(text)
    if target is not None and in_bounds(*target):
        return target

    row = _parse_decimal(text)
    if row is not None and 0 <= row - 1 < max_rows:
        return row - 1, current_col

    parts = text.split(",")
    if len(parts) == 2:
        row = _parse_decimal(parts[0])
        col = _parse_decimal(parts[1])
        if row is not None and col is not None and in_bounds(row - 1, col - 1):
            return row - 1, col - 1

    raise InputValidationError("Invalid cell reference")
