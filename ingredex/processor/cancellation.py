import threading

from ingredex.processor.exceptions import PipelineCancelledError


class CancellationToken:
    """Cooperative cancellation flag shared between a caller and one invocation."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise PipelineCancelledError("Processing was cancelled")
