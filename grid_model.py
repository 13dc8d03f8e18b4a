from typing import List, Optional

from models import Cell, FileError, Sheet


class GridModel:
    """
    Read-only view over a loaded workbook.
    Owns the active-sheet index; never mutates cells.
    """

    def __init__(self, sheets: List[Sheet], active_index: int = 0):
        if not sheets:
            raise FileError("No sheets found in file")
        self.sheets: List[Sheet] = list(sheets)
        self.active_index = 0
        if 0 <= active_index < len(self.sheets):
            self.active_index = active_index

    @property
    def active_sheet(self) -> Sheet:
        return self.sheets[self.active_index]

    @property
    def sheet_count(self) -> int:
        return len(self.sheets)

    def get_sheet_names(self) -> List[str]:
        return [sheet.name for sheet in self.sheets]

    def bounds(self) -> tuple[int, int]:
        sheet = self.active_sheet
        return sheet.max_rows, sheet.max_cols

    def cell(self, row: int, col: int) -> Optional[Cell]:
        return self.active_sheet.cell(row, col)

    def display_text(self, row: int, col: int, show_formulas: bool = False) -> str:
        cell = self.cell(row, col)
        if cell is None:
            return ""
        if show_formulas and cell.formula:
            return "=" + cell.formula
        return cell.value

    def row_values(self, row: int) -> List[str]:
        sheet = self.active_sheet
        if row < 0 or row >= len(sheet.rows):
            return []
        return [cell.value for cell in sheet.rows[row]]

    # ---------- sheet switching ----------
    def next_sheet(self) -> bool:
        if self.active_index >= len(self.sheets) - 1:
            return False
        self.active_index += 1
        return True

    def prev_sheet(self) -> bool:
        if self.active_index <= 0:
            return False
        self.active_index -= 1
        return True
