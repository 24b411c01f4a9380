class StructuringError(Exception):
    """Raised when AI-assisted structured extraction fails."""
