import csv
import datetime
import json
import os
import zipfile
from itertools import zip_longest
from typing import List, Tuple

import openpyxl
import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from models import Cell, ExportError, FileError, Sheet
from search_index import scan_sheet

SUPPORTED = (".csv", ".xlsx", ".xlsm", ".parquet")
EXPORTABLE = (".csv", ".json")


def format_value(value) -> str:
    """Render a raw cell value the way the grid shows it."""
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if value != value:
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime.datetime):
        if value.time() == datetime.time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def _formula_text(raw) -> str:
    if isinstance(raw, str) and raw.startswith("="):
        return raw[1:]
    # array formulas carry their text on an object
    text = getattr(raw, "text", None)
    if isinstance(text, str) and text.startswith("="):
        return text[1:]
    return ""


class FileTypeHandler:
    def __init__(self, path: str):
        self.path = path
        _, ext = os.path.splitext(path)
        self.ext = ext.lower()

    def load(self) -> List[Sheet]:
        if self.ext not in SUPPORTED:
            raise FileError(
                f"Unsupported file format: {self.ext or '(none)'} (use .csv, .xlsx, .xlsm, or .parquet)"
            )
        if not os.path.exists(self.path):
            raise FileError(f"File not found: {self.path}")
        if os.path.isdir(self.path):
            raise FileError(f"Path is a directory: {self.path}")

        if self.ext == ".csv":
            sheets = self._load_csv()
        elif self.ext == ".parquet":
            sheets = self._load_parquet()
        else:
            sheets = self._load_excel()

        if not sheets:
            raise FileError("No sheets found in file")
        return sheets

    def _csv_width(self) -> int:
        with open(self.path, newline="", encoding="utf-8") as f:
            return max((len(record) for record in csv.reader(f)), default=0)

    def _load_csv(self) -> List[Sheet]:
        name = os.path.basename(self.path)
        try:
            # pandas sizes columns from the first line; give it the widest record
            width = self._csv_width()
            if width == 0:
                return [Sheet(name=name)]
            df = pd.read_csv(
                self.path,
                header=None,
                names=range(width),
                dtype=str,
                keep_default_na=False,
                na_filter=False,
            )
        except pd.errors.EmptyDataError:
            return [Sheet(name=name)]
        except (pd.errors.ParserError, csv.Error, UnicodeDecodeError, OSError) as exc:
            raise FileError(f"Failed to read CSV: {exc}") from exc

        rows = []
        for values in df.fillna("").itertuples(index=False, name=None):
            values = list(values)
            # short records were padded to the frame width
            while values and values[-1] == "":
                values.pop()
            rows.append(values)
        return [Sheet.from_values(name, rows)]

    def _load_parquet(self) -> List[Sheet]:
        self._ensure_parquet_engine()
        try:
            df = pd.read_parquet(self.path)
        except Exception as exc:
            raise FileError(f"Failed to read Parquet file: {exc}") from exc

        header = [format_value(col) for col in df.columns]
        body = [[format_value(v) for v in row] for row in df.itertuples(index=False, name=None)]
        name = os.path.splitext(os.path.basename(self.path))[0] or "Sheet1"
        return [Sheet.from_values(name, [header] + body)]

    def _load_excel(self) -> List[Sheet]:
        try:
            values_wb = openpyxl.load_workbook(self.path, read_only=True, data_only=True)
            formulas_wb = openpyxl.load_workbook(self.path, read_only=True, data_only=False)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as exc:
            raise FileError(f"Failed to open Excel file: {exc}") from exc

        try:
            sheets = []
            for values_ws, formulas_ws in zip(values_wb.worksheets, formulas_wb.worksheets):
                rows = self._read_worksheet(values_ws, formulas_ws)
                sheets.append(Sheet.from_rows(values_ws.title, rows))
            return sheets
        finally:
            values_wb.close()
            formulas_wb.close()

    @staticmethod
    def _read_worksheet(values_ws, formulas_ws) -> List[List[Cell]]:
        rows: List[List[Cell]] = []
        pairs = zip_longest(
            values_ws.iter_rows(values_only=True),
            formulas_ws.iter_rows(values_only=True),
            fillvalue=(),
        )
        for r, (values, formulas) in enumerate(pairs):
            cells: List[Cell] = []
            for c, (value, raw) in enumerate(zip_longest(values, formulas)):
                cells.append(Cell(value=format_value(value), formula=_formula_text(raw), row=r, col=c))
            while cells and cells[-1].value == "" and cells[-1].formula == "":
                cells.pop()
            rows.append(cells)
        while rows and not rows[-1]:
            rows.pop()
        return rows

    def _ensure_parquet_engine(self):
        try:
            import pyarrow  # noqa: F401

            return
        except ImportError:
            pass
        raise FileError("Parquet support requires pyarrow. Install via: pip install pyarrow")


def load_file(path: str) -> List[Sheet]:
    return FileTypeHandler(path).load()


# ---------- export ----------

def export_csv(sheet: Sheet, path: str) -> None:
    df = sheet.display_frame()
    try:
        df.to_csv(path, header=False, index=False)
    except OSError as exc:
        raise ExportError(str(exc)) from exc


def json_records(sheet: Sheet) -> List[dict]:
    if not sheet.rows:
        raise ExportError("sheet is empty")
    headers = sheet.rows[0]
    records = []
    for row in sheet.rows[1:]:
        record = {}
        for j, cell in enumerate(row):
            key = f"col_{j}"
            if j < len(headers) and headers[j].value != "":
                key = headers[j].value
            record[key] = cell.value
        records.append(record)
    return records


def export_json(sheet: Sheet, path: str) -> None:
    records = json_records(sheet)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
            f.write("\n")
    except OSError as exc:
        raise ExportError(str(exc)) from exc


def is_exportable(path: str) -> bool:
    _, ext = os.path.splitext(path.strip())
    return ext.lower() in EXPORTABLE


def export_sheet(sheet: Sheet, path: str) -> str:
    path = os.path.expanduser(path.strip())
    if not is_exportable(path):
        raise ExportError("Use .csv or .json extension")
    if path.lower().endswith(".csv"):
        export_csv(sheet, path)
    else:
        export_json(sheet, path)
    return path


def search_sheet(sheet: Sheet, query: str) -> List[Tuple[int, int]]:
    return scan_sheet(sheet, query)
