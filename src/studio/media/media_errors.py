"""Domain-specific exceptions for media staging."""


class MediaError(Exception):
    """Base class for media staging errors."""


class ValidationError(MediaError):
    """Raised when required input is missing or malformed."""


class UploadError(MediaError):
    """Raised when the object store rejects a write."""


class DownloadError(MediaError):
    """Raised when a stored object cannot be read back."""


class SweepError(MediaError):
    """Raised when the temp namespace cannot be listed."""
