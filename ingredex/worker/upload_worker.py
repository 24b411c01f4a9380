from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from ingredex.config.settings import Settings
from ingredex.ingestion.models import UploadedDocument
from ingredex.logging.logger import Log
from ingredex.processor.cancellation import CancellationToken
from ingredex.processor.models import OutcomeStatus, PipelineOutcome
from ingredex.processor.processor import Processor, build_processor


class UploadWorker:
    """Processes independent uploads concurrently, one invocation per upload.

    A failure is always scoped to its own upload: unexpected exceptions are
    turned into an ``internal_error`` outcome instead of escaping.
    """

    def __init__(self, processor: Processor, max_workers: int = 4) -> None:
        self._processor = processor
        self._max_workers = max(1, max_workers)

    def process(
        self,
        document: UploadedDocument,
        cancellation: CancellationToken | None = None,
    ) -> PipelineOutcome:
        try:
            return self._processor.process(document, cancellation)
        except Exception as exc:
            Log.error(f"Unexpected error while processing '{document.file_name}': {exc}")
            return PipelineOutcome(
                status=OutcomeStatus.INTERNAL_ERROR,
                file_name=document.file_name,
                message="The file could not be processed due to an internal error",
            )

    def process_many(
        self,
        documents: Sequence[UploadedDocument],
        cancellation: CancellationToken | None = None,
    ) -> list[PipelineOutcome]:
        """Return one outcome per document, in submission order."""
        if not documents:
            return []
        Log.info(f"Processing {len(documents)} uploads with {self._max_workers} workers")
        with ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(documents)),
            thread_name_prefix="ingredex-upload",
        ) as executor:
            futures = [executor.submit(self.process, document, cancellation) for document in documents]
            return [future.result() for future in futures]


def build_upload_worker(settings: Settings) -> UploadWorker:
    """Build an UploadWorker around a fully wired Processor."""
    return UploadWorker(build_processor(settings), max_workers=settings.worker_max_concurrency)
