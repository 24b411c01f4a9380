class ClassificationError(Exception):
    """Raised when classification fails."""


class ClassificationValidationError(ClassificationError):
    """Raised when the classifier reply fails validation."""


class ClassificationUnavailableError(ClassificationError):
    """Raised when the classifier is unreachable or returned unusable output."""
