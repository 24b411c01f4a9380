"""Format detection from declared media type and file name."""

from typing import ClassVar

from ingredex.ingestion.exceptions import (
    EmptyUploadError,
    UnsupportedFormatError,
    UploadTooLargeError,
)
from ingredex.ingestion.models import FormatKind, UploadedDocument
from ingredex.logging.logger import Log

SUPPORTED_FORMATS_HINT = (
    "plain text (.txt, .json), delimited tables (.csv, .tsv), PDF, "
    "Word (.docx, .doc), Excel (.xlsx, .xls) and images (.jpg, .png, .webp, .tiff, .bmp)"
)


class FormatDetector:
    """Maps an upload to a FormatKind. Pure: never reads the payload."""

    MEDIA_TYPES: ClassVar[dict[str, FormatKind]] = {
        "text/plain": FormatKind.PLAIN_TEXT,
        "application/json": FormatKind.PLAIN_TEXT,
        "text/csv": FormatKind.DELIMITED_TABLE,
        "application/csv": FormatKind.DELIMITED_TABLE,
        "text/tab-separated-values": FormatKind.DELIMITED_TABLE,
        "application/pdf": FormatKind.PORTABLE_DOCUMENT,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document": (
            FormatKind.WORD_PROCESSOR
        ),
        "application/msword": FormatKind.WORD_PROCESSOR,
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": (
            FormatKind.SPREADSHEET
        ),
        "application/vnd.ms-excel": FormatKind.SPREADSHEET,
        "image/jpeg": FormatKind.RASTER_IMAGE,
        "image/jpg": FormatKind.RASTER_IMAGE,
        "image/png": FormatKind.RASTER_IMAGE,
        "image/webp": FormatKind.RASTER_IMAGE,
        "image/tiff": FormatKind.RASTER_IMAGE,
        "image/bmp": FormatKind.RASTER_IMAGE,
    }

    EXTENSIONS: ClassVar[dict[str, FormatKind]] = {
        ".txt": FormatKind.PLAIN_TEXT,
        ".text": FormatKind.PLAIN_TEXT,
        ".json": FormatKind.PLAIN_TEXT,
        ".csv": FormatKind.DELIMITED_TABLE,
        ".tsv": FormatKind.DELIMITED_TABLE,
        ".pdf": FormatKind.PORTABLE_DOCUMENT,
        ".docx": FormatKind.WORD_PROCESSOR,
        ".doc": FormatKind.WORD_PROCESSOR,
        ".xlsx": FormatKind.SPREADSHEET,
        ".xls": FormatKind.SPREADSHEET,
        ".jpg": FormatKind.RASTER_IMAGE,
        ".jpeg": FormatKind.RASTER_IMAGE,
        ".png": FormatKind.RASTER_IMAGE,
        ".webp": FormatKind.RASTER_IMAGE,
        ".tiff": FormatKind.RASTER_IMAGE,
        ".tif": FormatKind.RASTER_IMAGE,
        ".bmp": FormatKind.RASTER_IMAGE,
    }

    # Never sniffed as text, whatever the payload looks like
    REJECTED_EXTENSIONS: ClassVar[frozenset[str]] = frozenset(
        {".exe", ".dll", ".so", ".bin", ".msi", ".dmg", ".apk", ".jar", ".zip", ".gz", ".7z", ".rar", ".tar"}
    )

    def detect(self, file_name: str, media_type: str) -> FormatKind:
        """Prefer a recognised media type, then the extension, else UNKNOWN."""
        normalized = media_type.split(";", 1)[0].strip().lower()
        kind = self.MEDIA_TYPES.get(normalized)
        if kind is not None:
            return kind

        _, dot, suffix = file_name.rpartition(".")
        if dot and suffix:
            kind = self.EXTENSIONS.get(f".{suffix.lower()}")
            if kind is not None:
                return kind

        # Generic families only after the exact tables had their say
        if normalized.startswith("text/"):
            return FormatKind.PLAIN_TEXT
        if normalized.startswith("image/"):
            return FormatKind.RASTER_IMAGE
        return FormatKind.UNKNOWN


class UploadValidator:
    """Enforces the upload boundary before any extraction is attempted."""

    _SNIFF_BYTES = 8192

    def __init__(self, max_size_bytes: int, detector: FormatDetector | None = None) -> None:
        self._max_size_bytes = max_size_bytes
        self._detector = detector or FormatDetector()

    def validate(self, document: UploadedDocument) -> FormatKind:
        """Return the detected kind or raise an UploadRejectedError subclass."""
        if document.size_bytes == 0:
            raise EmptyUploadError(f"File '{document.file_name}' is empty")
        if document.size_bytes > self._max_size_bytes:
            raise UploadTooLargeError(
                f"File '{document.file_name}' is {document.size_bytes} bytes; "
                f"the limit is {self._max_size_bytes} bytes"
            )

        kind = self._detector.detect(document.file_name, document.media_type)
        if kind is FormatKind.UNKNOWN and (
            document.extension in FormatDetector.REJECTED_EXTENSIONS
            or not looks_like_text(document.content[: self._SNIFF_BYTES])
        ):
            Log.warning(
                f"Rejected '{document.file_name}' ({document.media_type or 'no media type'})"
            )
            raise UnsupportedFormatError(
                f"File type not supported: {document.media_type or 'unknown'} "
                f"({document.extension or 'no extension'}). "
                f"Supported formats: {SUPPORTED_FORMATS_HINT}."
            )
        Log.info(f"Detected '{document.file_name}' as {kind.value}")
        return kind


def looks_like_text(head: bytes) -> bool:
    """Heuristic sniff for unknown uploads: no NUL bytes and valid UTF-8."""
    if not head or b"\x00" in head:
        return False
    try:
        head.decode("utf-8")
    except UnicodeDecodeError as exc:
        # A multi-byte sequence cut at the sniff boundary is still text
        return exc.start >= len(head) - 3
    return True
