import os
import tempfile
from pathlib import Path
from types import TracebackType

from ingredex.ingestion.models import UploadedDocument
from ingredex.logging.logger import Log


class TemporaryUpload:
    """Spools an upload to a private temp file owned by one pipeline invocation.

    The file is removed on every exit path of the ``with`` block.
    """

    def __init__(self, document: UploadedDocument, temp_dir: str | None = None) -> None:
        self._document = document
        self._temp_dir = temp_dir
        self._path: Path | None = None

    @property
    def path(self) -> Path:
        if self._path is None:
            raise RuntimeError("TemporaryUpload is not open")
        return self._path

    def __enter__(self) -> "TemporaryUpload":
        return self.open()

    def open(self) -> "TemporaryUpload":
        """Write the bytes to a fresh temp file. Pair with ``release``."""
        fd, name = tempfile.mkstemp(
            prefix="ingredex-",
            suffix=self._document.extension,
            dir=self._temp_dir,
        )
        self._path = Path(name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(self._document.content)
        except BaseException:
            self._path.unlink(missing_ok=True)
            self._path = None
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def release(self) -> None:
        """Delete the spooled file. Safe to call more than once."""
        if self._path is None:
            return
        try:
            self._path.unlink(missing_ok=True)
        except OSError as exc:
            Log.error(f"Failed to delete temporary upload {self._path}: {exc}")
        self._path = None
