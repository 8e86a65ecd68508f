"""Transient media types.

AcquiredMedia exists for the duration of one submission and is never
cached. Selection is the single source of truth for what image a form
will upload:

    NoSelection | PendingUrl | LocalFile | ResolvedMedia
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

OCTET_STREAM = "application/octet-stream"


def is_image_type(mime_type: str | None) -> bool:
    """Return True if a declared MIME type names an image."""
    return bool(mime_type) and mime_type.startswith("image/")


@dataclass(frozen=True)
class LocalFileHandle:
    """A file handed over by drag-and-drop or the file picker.

    Attributes:
        filename: Original filename.
        content_type: Declared MIME type (may be empty).
        content: File bytes.
    """

    filename: str
    content_type: str
    content: bytes

    @classmethod
    def from_path(cls, path: Path, content_type: str | None = None) -> LocalFileHandle:
        """Load a file from disk, guessing its type from the extension.

        Args:
            path: File to read.
            content_type: Explicit declared type; guessed when omitted.

        Returns:
            LocalFileHandle with the file's bytes.

        Raises:
            FileNotFoundError: If the file doesn't exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        if content_type is None:
            content_type = mimetypes.guess_type(path.name)[0] or OCTET_STREAM
        return cls(filename=path.name, content_type=content_type, content=path.read_bytes())


@dataclass(frozen=True)
class AcquiredMedia:
    """Validated image payload ready for upload."""

    content: bytes
    filename: str
    mime_type: str

    def as_upload(self) -> tuple[str, bytes, str]:
        """Return the (filename, bytes, type) tuple httpx expects for a file part."""
        return (self.filename, self.content, self.mime_type)


@dataclass(frozen=True)
class NoSelection:
    """No file chosen and no URL typed."""


@dataclass(frozen=True)
class PendingUrl:
    """A typed URL that has not been fetched yet."""

    url: str


@dataclass(frozen=True)
class LocalFile:
    """A dropped or picked image file.

    ``typed_url`` keeps URL text entered after the file was chosen; the
    file still wins until the URL is attached.
    """

    file: LocalFileHandle
    typed_url: str = ""


@dataclass(frozen=True)
class ResolvedMedia:
    """An image URL already fetched into a payload."""

    media: AcquiredMedia
    source_url: str
    typed_url: str = ""


Selection = NoSelection | PendingUrl | LocalFile | ResolvedMedia
