"""Error taxonomy for specifier resolution."""

from __future__ import annotations

from .models import ErrorKind


class ResolutionError(Exception):
    """Base class for failures that end a resolution."""

    kind: ErrorKind = ErrorKind.PARSE


class UsageError(ResolutionError):
    """Raised when no usable input token was supplied."""

    kind = ErrorKind.USAGE


class InvalidSpecifierError(ResolutionError):
    """Raised when a specifier does not yield a usable base package."""

    kind = ErrorKind.PARSE


class TransportError(ResolutionError):
    """Raised on connection failures, timeouts and non-2xx responses."""

    kind = ErrorKind.TRANSPORT

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(ResolutionError):
    """Raised when a registry response is not JSON or lacks the expected field."""

    kind = ErrorKind.DECODE
