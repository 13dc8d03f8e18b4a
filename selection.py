from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class SelectionRect:
    min_row: int
    max_row: int
    min_col: int
    max_col: int

    @property
    def height(self) -> int:
        return self.max_row - self.min_row + 1

    @property
    def width(self) -> int:
        return self.max_col - self.min_col + 1


class SelectionTracker:
    """Anchor/active-corner range selection."""

    def __init__(self):
        self.anchor: Optional[Tuple[int, int]] = None
        self.active: Optional[Tuple[int, int]] = None
        self.selecting = False

    def start(self, pos):
        self.anchor = tuple(pos)
        self.active = tuple(pos)
        self.selecting = True

    def update(self, pos):
        if not self.selecting:
            return
        self.active = tuple(pos)

    def finish(self):
        # the rectangle stays live so a later chart can reuse it
        return self.normalize()

    def cancel(self):
        self.selecting = False
        self.anchor = None
        self.active = None

    def normalize(self) -> Optional[SelectionRect]:
        if self.anchor is None or self.active is None:
            return None
        ar, ac = self.anchor
        cr, cc = self.active
        r0, r1 = sorted((ar, cr))
        c0, c1 = sorted((ac, cc))
        return SelectionRect(r0, r1, c0, c1)

    def contains(self, row: int, col: int) -> bool:
        if not self.selecting:
            return False
        rect = self.normalize()
        if rect is None:
            return False
        return rect.min_row <= row <= rect.max_row and rect.min_col <= col <= rect.max_col

    def size_label(self) -> str:
        rect = self.normalize()
        if rect is None:
            return "0x0"
        return f"{rect.height}x{rect.width}"
