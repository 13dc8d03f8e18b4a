from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

import pandas as pd


class VexError(Exception):
    """Base class for recoverable viewer errors."""


class FileError(VexError):
    pass


class ExportError(VexError):
    pass


class ClipboardError(VexError):
    pass


class InputValidationError(VexError):
    pass


@dataclass(frozen=True)
class Cell:
    value: str
    formula: str = ""
    row: int = 0
    col: int = 0


@dataclass
class Sheet:
    name: str
    rows: List[List[Cell]] = field(default_factory=list)
    max_rows: int = 0
    max_cols: int = 0

    @classmethod
    def from_rows(cls, name: str, rows: List[List[Cell]]) -> "Sheet":
        max_cols = max((len(r) for r in rows), default=0)
        return cls(name=name, rows=rows, max_rows=len(rows), max_cols=max_cols)

    @classmethod
    def from_values(cls, name: str, values) -> "Sheet":
        rows = [
            [Cell(value=str(v), row=r, col=c) for c, v in enumerate(row)]
            for r, row in enumerate(values)
        ]
        return cls.from_rows(name, rows)

    def cell(self, row: int, col: int) -> Optional[Cell]:
        if row < 0 or row >= len(self.rows):
            return None
        cells = self.rows[row]
        if col < 0 or col >= len(cells):
            return None
        return cells[col]

    def display_frame(self) -> pd.DataFrame:
        data = [[cell.value for cell in row] for row in self.rows]
        df = pd.DataFrame(data, columns=range(self.max_cols), dtype=object)
        return df.fillna("")


class Mode(Enum):
    NORMAL = "normal"
    SEARCH = "search"
    DETAIL = "detail"
    JUMP = "jump"
    EXPORT = "export"
    THEME = "theme"
    CHART = "chart"
    SELECT_RANGE = "select_range"


class StatusLevel(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class StatusMessage:
    text: str
    level: StatusLevel = StatusLevel.INFO


class ChartType(Enum):
    BAR = 1
    LINE = 2
    SPARKLINE = 3
    PIE = 4

    @classmethod
    def from_digit(cls, digit: int) -> Optional["ChartType"]:
        for member in cls:
            if member.value == digit:
                return member
        return None

    @property
    def title(self) -> str:
        return {
            ChartType.BAR: "Bar Chart",
            ChartType.LINE: "Line Chart",
            ChartType.SPARKLINE: "Sparkline",
            ChartType.PIE: "Pie Chart",
        }[self]
