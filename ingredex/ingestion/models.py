from dataclasses import dataclass, field
from enum import Enum


class FormatKind(str, Enum):
    """Discrete document formats the pipeline knows how to read."""

    PLAIN_TEXT = "plain_text"
    DELIMITED_TABLE = "delimited_table"
    PORTABLE_DOCUMENT = "portable_document"
    WORD_PROCESSOR = "word_processor"
    SPREADSHEET = "spreadsheet"
    RASTER_IMAGE = "raster_image"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class UploadedDocument:
    """One user-submitted file, held in memory until the pipeline spools it."""

    file_name: str
    media_type: str
    content: bytes = field(repr=False)

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        _, dot, suffix = self.file_name.rpartition(".")
        return f".{suffix.lower()}" if dot and suffix else ""
