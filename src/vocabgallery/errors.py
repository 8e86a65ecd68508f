"""Error kinds raised by the gallery client.

Every error carries a human-readable ``message`` suitable for showing next
to the form or list that triggered it. None of them are retried.
"""

from __future__ import annotations

import json


class GalleryError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidMediaType(GalleryError):
    """A file or URL response is not an image."""

    def __init__(self, mime_type: str | None, source: str | None = None):
        self.mime_type = mime_type or "application/octet-stream"
        self.source = source
        if source:
            message = f"{source} does not point to an image ({self.mime_type})"
        else:
            message = f"Only image files are allowed (got {self.mime_type})"
        super().__init__(message)


class MediaFetchFailed(GalleryError):
    """Resolving an image URL failed (network, CORS-style block, or status)."""

    def __init__(self, url: str, status: int | None = None, reason: str | None = None):
        self.url = url
        self.status = status
        if reason is None:
            if status is None:
                reason = "Failed to fetch the image URL (network)"
            else:
                reason = f"Image URL responded {status}"
        super().__init__(reason)


class ValidationError(GalleryError):
    """A required form field is missing; nothing was sent."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class UploadFailed(GalleryError):
    """Create/update request failed (status is None when no response arrived).

    ``body`` is the response text verbatim. ``message`` prefers the backend's
    ``{"error": ...}`` text when the body is such a JSON object.
    """

    def __init__(self, status: int | None, body: str = ""):
        self.status = status
        self.body = body
        fallback = f"Upload failed: {status if status is not None else 'network error'}"
        super().__init__(_error_text(body) or fallback)


class FetchFailed(GalleryError):
    """A read request failed or returned an unusable body."""

    def __init__(self, url: str, status: int | None = None, reason: str | None = None):
        self.url = url
        self.status = status
        if reason is None:
            reason = f"Failed to fetch {url}: {status if status is not None else 'network error'}"
        super().__init__(reason)


def _error_text(body: str) -> str:
    """Extract a display message from an error response body."""
    text = body.strip()
    if not text:
        return ""
    try:
        parsed = json.loads(text)
    except ValueError:
        return text
    if isinstance(parsed, dict) and isinstance(parsed.get("error"), str):
        return parsed["error"]
    return text
