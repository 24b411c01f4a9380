class UploadRejectedError(Exception):
    """Base exception for uploads refused at the boundary."""


class UnsupportedFormatError(UploadRejectedError):
    """Raised when neither the media type nor the extension is readable."""


class UploadTooLargeError(UploadRejectedError):
    """Raised when the upload exceeds the configured size bound."""


class EmptyUploadError(UploadRejectedError):
    """Raised when the upload carries no bytes."""
