from typing import List, Optional, Tuple

from models import Sheet


def scan_sheet(sheet: Sheet, query: str) -> List[Tuple[int, int]]:
    """Row-major, case-insensitive substring scan over values and formulas."""
    if not query:
        return []
    needle = query.lower()
    matches: List[Tuple[int, int]] = []
    for r, row in enumerate(sheet.rows):
        for c, cell in enumerate(row):
            if needle in cell.value.lower() or needle in cell.formula.lower():
                matches.append((r, c))
    return matches


class SearchIndex:
    def __init__(self):
        self.query = ""
        self.matches: List[Tuple[int, int]] = []
        self.index = 0
        self._match_set: set = set()

    def search(self, sheet: Sheet, query: str) -> List[Tuple[int, int]]:
        return scan_sheet(sheet, query)

    def run(self, sheet: Sheet, query: str) -> List[Tuple[int, int]]:
        query = (query or "").strip()
        self.query = query
        self.matches = self.search(sheet, query)
        self._match_set = set(self.matches)
        self.index = 0
        return self.matches

    def clear(self):
        self.query = ""
        self.matches = []
        self._match_set = set()
        self.index = 0

    def navigate(self, direction: int) -> Optional[Tuple[int, int]]:
        if not self.matches:
            return None
        step = 1 if direction >= 0 else -1
        self.index = (self.index + step) % len(self.matches)
        return self.matches[self.index]

    def next(self) -> Optional[Tuple[int, int]]:
        return self.navigate(1)

    def prev(self) -> Optional[Tuple[int, int]]:
        return self.navigate(-1)

    def current(self) -> Optional[Tuple[int, int]]:
        if not self.matches:
            return None
        return self.matches[self.index]

    def contains(self, row: int, col: int) -> bool:
        return (row, col) in self._match_set

    def position_label(self) -> str:
        if not self.matches:
            return "0/0"
        return f"{self.index + 1}/{len(self.matches)}"
