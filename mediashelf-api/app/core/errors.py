# app/core/errors.py
# Failures raised by the scanning core. Routes map them to HTTP status codes.


class MediashelfError(Exception):
    """Base class for every error the folder scanner raises."""


class PathEscapesRoot(MediashelfError):
    """Requested path resolves outside the configured media root."""

    def __init__(self, requested: str):
        super().__init__("Path escapes media root")
        self.requested = requested


class NotADirectory(MediashelfError):
    """Requested path exists but is not a directory."""

    def __init__(self, path: str):
        super().__init__("Requested path is not a directory")
        self.path = path


class MediaIOError(MediashelfError):
    """stat/list failure underneath the scanner (missing path, permissions, ...)."""

    def __init__(self, path: str, cause: OSError, missing: bool = False):
        reason = cause.strerror or cause.__class__.__name__
        super().__init__(f"Unable to read folder: {reason}")
        self.path = path
        self.cause = cause
        self.missing = missing

    @property
    def not_found(self) -> bool:
        """True only when the requested folder itself does not exist."""
        return self.missing
