import shutil
import subprocess
import tempfile
from pathlib import Path

from ingredex.extraction.base import BaseExtractor
from ingredex.extraction.exceptions import ExtractionError, ExtractionTimeoutError
from ingredex.extraction.models import Confidence, ExtractedText
from ingredex.extraction.text_adapter import decode_text


class LegacyDocExtractor(BaseExtractor):
    """Converts legacy .doc files to text with a headless LibreOffice."""

    method = "soffice_doc"

    def __init__(self, timeout_seconds: int = 60) -> None:
        self._timeout_seconds = timeout_seconds

    def extract(self, content: bytes) -> ExtractedText:
        soffice = shutil.which("soffice") or shutil.which("libreoffice")
        if soffice is None:
            raise ExtractionError(self.method, "LibreOffice is not installed")

        with tempfile.TemporaryDirectory(prefix="ingredex-doc-") as tmp_dir:
            source = Path(tmp_dir) / "upload.doc"
            source.write_bytes(content)
            try:
                completed = subprocess.run(
                    [soffice, "--headless", "--convert-to", "txt:Text", str(source), "--outdir", tmp_dir],
                    capture_output=True,
                    timeout=self._timeout_seconds,
                    check=False,
                )
            except subprocess.TimeoutExpired as exc:
                raise ExtractionTimeoutError(
                    self.method, f"conversion exceeded {self._timeout_seconds}s"
                ) from exc

            output = source.with_suffix(".txt")
            if completed.returncode != 0 or not output.exists():
                stderr = completed.stderr.decode("utf-8", errors="replace").strip()
                raise ExtractionError(self.method, f"conversion failed: {stderr or 'no output'}")
            text = decode_text(output.read_bytes()).strip()

        if not text:
            raise ExtractionError(self.method, "document contains no text")
        return ExtractedText(text=text, method=self.method, confidence=Confidence.MEDIUM)
