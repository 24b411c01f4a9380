import io
import shutil
import subprocess
from pathlib import Path

import pytest
from PIL import Image, ImageDraw, ImageFont

from ingredex.config.settings import Settings


@pytest.fixture(scope="session")
def ocr_settings() -> Settings:
    if shutil.which("tesseract") is None:
        pytest.skip("tesseract binary not available; install tesseract-ocr to run OCR tests")
    return Settings(ocr_languages="eng", structuring_enabled=False)


@pytest.fixture(scope="session")
def soffice_path() -> str:
    path = shutil.which("soffice") or shutil.which("libreoffice")
    if path is None:
        pytest.skip("LibreOffice not available; install it to run legacy .doc tests")
    return path


@pytest.fixture()
def printed_label_png() -> bytes:
    """A clean, large-type label that tesseract reads reliably."""
    image = Image.new("RGB", (1400, 260), "white")
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default(size=56)
    draw.text((40, 40), "Lemonade: water, sugar, lemon juice", fill="black", font=font)
    draw.text((40, 140), "Best before 2026", fill="black", font=font)
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def legacy_doc_bytes(soffice_path: str, docx_bytes: bytes, tmp_path: Path) -> bytes:
    """Convert the sample .docx into a binary .doc with LibreOffice."""
    source = tmp_path / "sample.docx"
    source.write_bytes(docx_bytes)
    subprocess.run(
        [soffice_path, "--headless", "--convert-to", "doc", str(source), "--outdir", str(tmp_path)],
        capture_output=True,
        timeout=120,
        check=True,
    )
    return (tmp_path / "sample.doc").read_bytes()
