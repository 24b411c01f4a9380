import pytest

from ingredex.processor.cancellation import CancellationToken
from ingredex.processor.exceptions import PipelineCancelledError


class TestCancellationToken:
    def test_starts_uncancelled(self) -> None:
        token = CancellationToken()
        assert token.cancelled is False
        token.raise_if_cancelled()

    def test_cancel_is_sticky(self) -> None:
        token = CancellationToken()
        token.cancel()
        token.cancel()
        assert token.cancelled is True
        with pytest.raises(PipelineCancelledError, match="cancelled"):
            token.raise_if_cancelled()
