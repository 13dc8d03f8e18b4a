from dataclasses import dataclass, field
from typing import Optional

from grid_model import GridModel
from models import ChartType, Mode, StatusMessage
from search_index import SearchIndex
from selection import SelectionTracker
from text_prompt import TextPrompt
from theme import Theme, resolve_theme
from viewport import ViewportController


@dataclass
class ViewerContext:
    """Everything a key handler may read or mutate while processing one event."""

    grid: GridModel
    viewport: ViewportController = field(default_factory=ViewportController)
    selection: SelectionTracker = field(default_factory=SelectionTracker)
    search: SearchIndex = field(default_factory=SearchIndex)
    prompt: TextPrompt = field(default_factory=TextPrompt)
    theme: Theme = field(default_factory=lambda: resolve_theme(None))

    mode: Mode = Mode.NORMAL
    cursor_row: int = 0
    cursor_col: int = 0
    show_formulas: bool = False
    show_help: bool = False
    chart_type: ChartType = ChartType.BAR

    status: Optional[StatusMessage] = None
    status_until: float = 0.0

    @property
    def sheet(self):
        return self.grid.active_sheet

    @property
    def cursor(self):
        return self.cursor_row, self.cursor_col
