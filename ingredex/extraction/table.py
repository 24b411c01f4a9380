"""Delimited-table parsing shared by CSV uploads, spreadsheets and DOCX tables.

Rows are parsed with the csv module so quoted fields may contain the
delimiter. Tables whose header names a product column and an ingredients
column are rendered as ``Name | Ingredients`` lines, one per data row.
"""

import csv
import io
from dataclasses import dataclass

_CANDIDATE_DELIMITERS = ",;\t|"
_NAME_HEADER_KEYWORDS = ("product", "name", "title", "item")
_INGREDIENT_HEADER_KEYWORDS = ("ingredient", "composition", "formula", "contains")


@dataclass(frozen=True)
class RenderedTable:
    text: str
    header_recognized: bool
    row_count: int


def sniff_delimiter(text: str) -> str:
    first_line = next((line for line in text.splitlines() if line.strip()), "")
    try:
        delimiter = csv.Sniffer().sniff(text[:4096], delimiters=_CANDIDATE_DELIMITERS).delimiter
    except csv.Error:
        delimiter = ","
    if delimiter not in first_line:
        for candidate in _CANDIDATE_DELIMITERS:
            if candidate in first_line:
                return candidate
        return ","
    return delimiter


def split_rows(text: str, delimiter: str | None = None) -> list[list[str]]:
    """Parse delimited text into stripped cells, dropping empty rows."""
    if delimiter is None:
        delimiter = sniff_delimiter(text)
    reader = csv.reader(io.StringIO(text), delimiter=delimiter, skipinitialspace=True)
    rows: list[list[str]] = []
    for row in reader:
        cells = [cell.strip() for cell in row]
        if any(cells):
            rows.append(cells)
    return rows


def find_columns(header: list[str]) -> tuple[int, int] | None:
    """Locate (name column, ingredients column) in a header row."""
    lowered = [cell.lower() for cell in header]
    ingredients_col = next(
        (i for i, cell in enumerate(lowered) if any(k in cell for k in _INGREDIENT_HEADER_KEYWORDS)),
        None,
    )
    if ingredients_col is None:
        return None
    name_col = next(
        (
            i
            for i, cell in enumerate(lowered)
            if i != ingredients_col and any(k in cell for k in _NAME_HEADER_KEYWORDS)
        ),
        None,
    )
    if name_col is None:
        return None
    return name_col, ingredients_col


def render_rows(rows: list[list[str]]) -> RenderedTable:
    if not rows:
        return RenderedTable(text="", header_recognized=False, row_count=0)

    columns = find_columns(rows[0])
    lines: list[str] = []
    if columns is not None:
        name_col, ingredients_col = columns
        for row in rows[1:]:
            name = row[name_col] if name_col < len(row) else ""
            ingredients = row[ingredients_col] if ingredients_col < len(row) else ""
            if name and ingredients:
                lines.append(f"{name} | {ingredients}")
        return RenderedTable(text="\n".join(lines), header_recognized=True, row_count=len(lines))

    for row in rows:
        cells = [cell for cell in row if cell]
        if len(cells) == 2:
            lines.append(f"{cells[0]} | {cells[1]}")
        elif cells:
            lines.append(", ".join(cells))
    return RenderedTable(text="\n".join(lines), header_recognized=False, row_count=len(lines))


def render_table(text: str, delimiter: str | None = None) -> RenderedTable:
    return render_rows(split_rows(text, delimiter))
