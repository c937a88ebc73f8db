"""
Exceptions raised by the disposal runtime.

Double disposal is deliberately absent: ``dispose()`` may be called any
number of times without raising.
"""

from typing import Optional


class DisposalError(Exception):
    """Base for all errors raised by dispose_python."""


class ObjectDisposedError(DisposalError):
    """Raised when an operation other than dispose() runs on a disposed object."""

    def __init__(self, object_name: str, message: Optional[str] = None):
        self.object_name = object_name
        if message is None:
            message = f"Cannot access a disposed object: {object_name}"
        super().__init__(message)


class ResourceReleaseError(DisposalError):
    """Raised when a tier fails to release a resource it owns."""


class InvalidHandleError(ResourceReleaseError):
    """Raised when a native handle is unknown or was already freed."""

    def __init__(self, handle: int):
        self.handle = handle
        super().__init__(f"Invalid native handle: {handle}")


class SettingsError(DisposalError):
    """Base for configuration errors."""


class SettingsLoadError(SettingsError):
    """Raised when a settings file cannot be read or parsed as YAML."""


class SettingsValidationError(SettingsError):
    """Raised when a settings file parses but fails schema validation."""
