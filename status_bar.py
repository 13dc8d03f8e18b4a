from typing import List, Optional, Tuple

from cell_ref import cell_name
from models import Mode, StatusLevel, StatusMessage
from text_utils import truncate

SEPARATOR = " │ "
SHORT_HELP = "/ search • ^g jump • enter detail • t theme • ? help • q quit"

LEVEL_ROLES = {
    StatusLevel.INFO: "text",
    StatusLevel.SUCCESS: "success",
    StatusLevel.WARNING: "warning",
    StatusLevel.ERROR: "error",
}


def status_parts(ctx, status: Optional[StatusMessage]) -> List[Tuple[str, str]]:
    """(text, role) pieces of the status bar, left to right."""
    sheet = ctx.sheet
    parts = [
        (f"Rows: {sheet.max_rows}", "secondary"),
        (f"Cols: {sheet.max_cols}", "secondary"),
        (f"Pos: {cell_name(ctx.cursor_row, ctx.cursor_col)}", "secondary"),
    ]
    if ctx.show_formulas:
        parts.append(("Formulas", "accent"))
    if ctx.search.matches:
        parts.append((f"Match {ctx.search.position_label()}", "search_match"))
    if status is not None:
        parts.append((status.text, LEVEL_ROLES[status.level]))
    return parts


def render_status(ctx, status: Optional[StatusMessage], width: int) -> str:
    text = " " + SEPARATOR.join(text for text, _ in status_parts(ctx, status))
    return text.ljust(width)[:width]


def title_line(ctx, filename: str) -> str:
    grid = ctx.grid
    title = f"{filename} • {ctx.sheet.name}"
    if grid.sheet_count > 1:
        title += f" ({grid.active_index + 1}/{grid.sheet_count})"
    return title


def formula_line(ctx) -> Tuple[str, str]:
    """Reference of the cursor cell and the text shown beside it."""
    ref = cell_name(ctx.cursor_row, ctx.cursor_col)
    cell = ctx.grid.cell(ctx.cursor_row, ctx.cursor_col)
    if cell is None:
        return ref, ""
    if cell.formula:
        return ref, " = " + truncate(cell.formula, 100)
    return ref, " " + truncate(cell.value, 100)


def search_line(ctx) -> str:
    if ctx.mode is Mode.SEARCH:
        return "/" + ctx.prompt.value
    if ctx.search.query:
        text = "/" + ctx.search.query
        if ctx.search.matches:
            text += f" ({len(ctx.search.matches)} results)"
        return text
    return ""


def selection_line(ctx) -> str:
    if ctx.mode is not Mode.SELECT_RANGE:
        return ""
    return (
        f"SELECTION MODE: {ctx.selection.size_label()} | Move with arrows | "
        "V to finish | Esc to cancel"
    )
