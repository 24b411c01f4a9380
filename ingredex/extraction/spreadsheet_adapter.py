import csv
import io
from collections.abc import Iterable

import xlrd
from openpyxl import load_workbook

from ingredex.extraction.base import BaseExtractor
from ingredex.extraction.delimited_adapter import DelimitedTableExtractor
from ingredex.extraction.exceptions import ExtractionError
from ingredex.extraction.models import ExtractedText


def _cell_to_str(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def rows_to_csv(rows: Iterable[Iterable[object]]) -> str:
    """Serialize sheet rows to CSV so they share the delimited-table path."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    for row in rows:
        writer.writerow([_cell_to_str(value) for value in row])
    return buffer.getvalue()


class XlsxExtractor(BaseExtractor):
    """Reads the first sheet of an .xlsx workbook with openpyxl."""

    method = "spreadsheet_xlsx"

    def __init__(self, table_extractor: DelimitedTableExtractor | None = None) -> None:
        self._table_extractor = table_extractor or DelimitedTableExtractor(delimiter=",")

    def extract(self, content: bytes) -> ExtractedText:
        try:
            workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
        except Exception as exc:
            raise ExtractionError(self.method, f"workbook could not be opened: {exc}") from exc
        try:
            if not workbook.worksheets:
                raise ExtractionError(self.method, "workbook has no sheets")
            sheet = workbook.worksheets[0]
            csv_text = rows_to_csv(sheet.iter_rows(values_only=True))
        finally:
            workbook.close()
        return self._table_extractor.extract_text(csv_text, method=self.method)


class XlsExtractor(BaseExtractor):
    """Reads the first sheet of a legacy .xls workbook with xlrd."""

    method = "spreadsheet_xls"

    def __init__(self, table_extractor: DelimitedTableExtractor | None = None) -> None:
        self._table_extractor = table_extractor or DelimitedTableExtractor(delimiter=",")

    def extract(self, content: bytes) -> ExtractedText:
        try:
            workbook = xlrd.open_workbook(file_contents=content)
        except Exception as exc:
            raise ExtractionError(self.method, f"workbook could not be opened: {exc}") from exc
        if workbook.nsheets == 0:
            raise ExtractionError(self.method, "workbook has no sheets")
        sheet = workbook.sheet_by_index(0)
        csv_text = rows_to_csv(sheet.row_values(index) for index in range(sheet.nrows))
        return self._table_extractor.extract_text(csv_text, method=self.method)
