from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from ingredex.extraction.models import ExtractedText
from ingredex.ingestion.models import FormatKind, UploadedDocument
from ingredex.ingestion.temporary_upload import TemporaryUpload
from ingredex.processor.cancellation import CancellationToken
from ingredex.processor.models import ProductRecord
from ingredex.segmentation.models import ProductBlock


class PipelineState(str, Enum):
    DETECTED = "detected"
    EXTRACTING = "extracting"
    SEGMENTING = "segmenting"
    TOKENIZING = "tokenizing"
    DONE = "done"
    FAILED = "failed"


_TRANSITIONS: dict[PipelineState | None, frozenset[PipelineState]] = {
    None: frozenset({PipelineState.DETECTED, PipelineState.FAILED}),
    PipelineState.DETECTED: frozenset({PipelineState.EXTRACTING, PipelineState.FAILED}),
    PipelineState.EXTRACTING: frozenset({PipelineState.SEGMENTING, PipelineState.FAILED}),
    PipelineState.SEGMENTING: frozenset({PipelineState.TOKENIZING, PipelineState.FAILED}),
    PipelineState.TOKENIZING: frozenset({PipelineState.DONE, PipelineState.FAILED}),
    PipelineState.DONE: frozenset(),
    PipelineState.FAILED: frozenset(),
}


@dataclass(slots=True)
class PipelineContext:
    document: UploadedDocument
    cancellation: CancellationToken = field(default_factory=CancellationToken)
    state: PipelineState | None = None
    format_kind: FormatKind = FormatKind.UNKNOWN
    upload: TemporaryUpload | None = None
    extracted: ExtractedText | None = None
    normalized_text: str = ""
    blocks: list[ProductBlock] = field(default_factory=list)
    segmentation_method: str = ""
    products: list[ProductRecord] = field(default_factory=list)
    attempted_methods: list[str] = field(default_factory=list)
    error_message: str = ""

    def advance(self, state: PipelineState) -> None:
        if state not in _TRANSITIONS[self.state]:
            current = self.state.value if self.state else "new"
            raise ValueError(f"Illegal pipeline transition {current} -> {state.value}")
        self.state = state


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
