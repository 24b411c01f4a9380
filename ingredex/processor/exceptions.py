class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class PipelineCancelledError(ProcessorError):
    """Raised when the caller cancelled the upload being processed."""


class ExtractionFailedError(ProcessorError):
    """Raised when every extraction tier for the detected format failed."""

    def __init__(self, message: str, failures: list[tuple[str, str]]) -> None:
        super().__init__(message)
        self.failures = failures


class NoProductsFoundError(ProcessorError):
    """Raised when text was extracted but no product with ingredients was found."""

    def __init__(self, message: str, failures: list[tuple[str, str]] | None = None) -> None:
        super().__init__(message)
        self.failures = failures or []
