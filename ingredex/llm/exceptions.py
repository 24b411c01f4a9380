class LLMError(Exception):
    """Raised when the AI provider returns an unusable response."""


class LLMNetworkError(LLMError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
