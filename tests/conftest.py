import io

import pytest
from docx import Document
from openpyxl import Workbook
from PIL import Image, ImageDraw
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

SAMPLE_LINES = [
    "Product 1: Chocolate Cookies | wheat flour, cocoa powder, sugar, butter, eggs, vanilla",
    "ITEM#2 - Vanilla Cake",
    "Ingredients: flour, sugar, eggs, milk, vanilla extract, baking powder",
]


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a single-page PDF whose text layer lists two products."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    y = 720
    for line in SAMPLE_LINES:
        c.drawString(40, y, line)
        y -= 20
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def short_pdf_bytes() -> bytes:
    """Generate a PDF whose text layer is one short product line."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Cookies: flour, sugar, salt")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page), like a scan."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def docx_bytes() -> bytes:
    """Generate a .docx with a header/ingredients pair and a product table."""
    document = Document()
    document.add_paragraph("ITEM#2 - Vanilla Cake")
    document.add_paragraph("Ingredients: flour, sugar, eggs, milk, vanilla extract, baking powder")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Product Name"
    table.cell(0, 1).text = "Ingredients"
    table.cell(1, 0).text = "Granola"
    table.cell(1, 1).text = "oats, honey, almonds"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def xlsx_bytes() -> bytes:
    """Generate an .xlsx whose first sheet is a product table."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Product Name", "Ingredients"])
    sheet.append(["Cookies", "wheat flour, sugar, salt"])
    sheet.append(["Crackers", "rice flour, sunflower oil, sea salt"])
    extra = workbook.create_sheet("Notes")
    extra.append(["ignored", "second sheet"])
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()


@pytest.fixture()
def label_image_bytes() -> bytes:
    """Generate a small PNG with dark strokes on a light background."""
    image = Image.new("RGB", (400, 120), "white")
    draw = ImageDraw.Draw(image)
    draw.text((10, 40), "Ingredients: water, sugar, salt", fill="black")
    draw.rectangle((5, 5, 395, 115), outline="black")
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()
