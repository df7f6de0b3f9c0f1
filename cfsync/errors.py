# CFSync Errors
# Exception types raised to callers

from typing import Optional


class CfsyncError(Exception):
    """Base exception for CFSync errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ResolutionFailed(CfsyncError):
    """Raised when the root entry of a resolution cannot be fetched."""

    def __init__(self, entry_id: str, reason: Optional[str] = None):
        self.entry_id = entry_id
        self.reason = reason
        message = f"Failed to resolve entry: {entry_id}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ConfigError(CfsyncError):
    """Raised for configuration problems that validation cannot express."""
