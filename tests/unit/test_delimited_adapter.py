import pytest

from ingredex.extraction.delimited_adapter import DelimitedTableExtractor
from ingredex.extraction.exceptions import ExtractionError
from ingredex.extraction.models import Confidence


class TestDelimitedTableExtractor:
    def test_product_table_has_high_confidence(self) -> None:
        content = b'Product Name,Ingredients\nCookies,"wheat flour, sugar, salt"\n'
        result = DelimitedTableExtractor().extract(content)
        assert result.text == "Cookies | wheat flour, sugar, salt"
        assert result.confidence is Confidence.HIGH
        assert result.method == "delimited_table"

    def test_unrecognised_table_has_medium_confidence(self) -> None:
        result = DelimitedTableExtractor().extract(b"Cookies;flour\nCake;sugar\n")
        assert result.text == "Cookies | flour\nCake | sugar"
        assert result.confidence is Confidence.MEDIUM

    def test_header_only_table_fails(self) -> None:
        with pytest.raises(ExtractionError, match="no data rows"):
            DelimitedTableExtractor().extract(b"Product,Ingredients\n")

    def test_extract_text_reports_custom_method(self) -> None:
        result = DelimitedTableExtractor(delimiter=",").extract_text("a,b\n", method="spreadsheet_xlsx")
        assert result.method == "spreadsheet_xlsx"
