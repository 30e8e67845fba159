"""Errors raised by journal remotes."""

from typing import Optional


class RemoteError(Exception):
    """Base class for failed calls to the journal service."""


class TransportError(RemoteError):
    """The request never got a response (network failure, timeout)."""


class ResponseError(RemoteError):
    """The service answered with a non-2xx status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message or ""
        detail = f"HTTP error! status: {status_code}"
        if self.message:
            detail = f"{detail}, message: {self.message}"
        super().__init__(detail)


class EntryNotFoundError(ResponseError):
    """A single-entry lookup returned 404."""

    def __init__(self, entry_id: str, message: Optional[str] = None):
        self.entry_id = entry_id
        super().__init__(404, message or "Entry not found")
