class ExtractionError(Exception):
    """Raised when one extraction tier cannot produce text."""

    def __init__(self, method: str, message: str) -> None:
        super().__init__(f"{method}: {message}")
        self.method = method
        self.reason = message


class ScannedDocumentError(ExtractionError):
    """Raised when a PDF text layer is empty or too short to be real text."""


class ExtractionTimeoutError(ExtractionError):
    """Raised when a tier exceeds its wall-clock budget."""


class TiersExhaustedError(Exception):
    """Raised when every tier in a chain failed.

    Carries one (method, reason) pair per attempted tier, in attempt order.
    """

    def __init__(self, failures: list[tuple[str, str]]) -> None:
        summary = "; ".join(f"{method}: {reason}" for method, reason in failures)
        super().__init__(f"All tiers failed ({summary})" if failures else "No tiers to attempt")
        self.failures = failures

    @property
    def attempted_methods(self) -> list[str]:
        return [method for method, _ in self.failures]
