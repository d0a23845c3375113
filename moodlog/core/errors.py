"""Domain exceptions mapped to HTTP responses by the app error handler."""

from __future__ import annotations


class MoodlogError(Exception):
    """Base class for errors reported to API callers."""

    status_code = 500
    code = "error"
    public_message = "Request failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)
        if message:
            self.public_message = message


class EntryNotFound(MoodlogError):
    status_code = 404
    code = "not_found"
    public_message = "Entry not found"


class EntryForbidden(MoodlogError):
    """Caller is authenticated but does not own the entry."""

    status_code = 403
    code = "forbidden"
    public_message = "Not authorized to modify this entry"


class StoreError(MoodlogError):
    """Persistence failure. The message never carries driver details."""

    status_code = 500
    code = "store_error"
    public_message = "Could not save changes, please retry"

    def __init__(self):
        super().__init__()
