"""Exceptions raised while downloading and assembling an HLS playlist."""

from __future__ import annotations

from typing import Optional


class HLSError(Exception):
    """Base class for every failure that aborts a download run."""


class ConfigurationError(HLSError):
    """Raised when required input (such as the playlist URL) is missing."""


class UnsupportedFeature(HLSError):
    """Raised when a playlist needs a capability this tool does not offer."""

    def __init__(self, feature: str) -> None:
        super().__init__(f"Unsupported playlist feature: {feature}")
        self.feature = feature


class EmptyPlaylist(HLSError):
    """Raised when a parsed playlist references no media segments."""

    def __init__(self, message: str = "No media segment URLs in playlist") -> None:
        super().__init__(message)


class FetchError(HLSError):
    """Raised when a remote responds with a non-success status."""

    def __init__(self, status: int, message: str, url: Optional[str] = None) -> None:
        super().__init__(f"Invalid status code: {status} - {message}" + (f" ({url})" if url else ""))
        self.status = status
        self.message = message
        self.url = url


class TransportError(HLSError):
    """Raised on connection-level failures (DNS, refused, reset, ...)."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Request to {url} failed: {reason}")
        self.url = url
        self.reason = reason


class FetchTimeout(HLSError):
    """Raised when a single fetch exceeds its timeout."""

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"Request to {url} timed out after {timeout:g}s")
        self.url = url
        self.timeout = timeout


class PersistenceError(HLSError):
    """Raised when the assembled media cannot be written to disk."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Unable to write {path}: {reason}")
        self.path = path
        self.reason = reason
