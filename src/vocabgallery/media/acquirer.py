"""MediaAcquirer: turns a local file or an image URL into AcquiredMedia.

Local files are validated by declared type only; no network access.
URLs get a single GET (no retries):
1. transport failure -> MediaFetchFailed
2. non-2xx status -> MediaFetchFailed carrying the status
3. content-type not image/* (missing counts as octet-stream) -> InvalidMediaType
4. body read fully into memory (bounded by max_image_bytes)
5. filename derived from the last path segment and the content-type
"""

from __future__ import annotations

import logging
import re

import httpx

from vocabgallery.config import Settings
from vocabgallery.errors import InvalidMediaType, MediaFetchFailed
from vocabgallery.models.media import (
    OCTET_STREAM,
    AcquiredMedia,
    LocalFileHandle,
    is_image_type,
)

logger = logging.getLogger(__name__)

DEFAULT_BASENAME = "image"
DEFAULT_EXTENSION = ".jpg"

# Checked in order; first substring hit wins
CONTENT_TYPE_EXTENSIONS: tuple[tuple[str, str], ...] = (
    ("png", ".png"),
    ("webp", ".webp"),
    ("gif", ".gif"),
    ("jpeg", ".jpg"),
    ("jpg", ".jpg"),
)

_EXTENSION_RE = re.compile(r"\.[A-Za-z0-9]{2,4}$")


def extension_for_content_type(content_type: str) -> str:
    """Map an image content-type to a filename extension.

    Args:
        content_type: Raw content-type header value.

    Returns:
        Extension including the dot; ``.jpg`` when nothing matches.
    """
    lowered = content_type.lower()
    for needle, extension in CONTENT_TYPE_EXTENSIONS:
        if needle in lowered:
            return extension
    return DEFAULT_EXTENSION


def derive_filename(url: str, content_type: str) -> str:
    """Derive an upload filename for an image fetched from a URL.

    An existing 2-4 character extension on the last path segment is kept
    as-is, even if it disagrees with the content-type.

    Args:
        url: Absolute image URL.
        content_type: Content-type the server declared.

    Returns:
        Filename such as ``photo.png``.
    """
    # Percent-encoding is kept so an encoded "/" can't split the segment
    raw_path = httpx.URL(url).raw_path.split(b"?", 1)[0].decode("ascii")
    base = raw_path.rsplit("/", 1)[-1] or DEFAULT_BASENAME
    if _EXTENSION_RE.search(base):
        return base
    return f"{base}{extension_for_content_type(content_type)}"


class MediaAcquirer:
    """Produces exactly one AcquiredMedia per call.

    The acquirer owns its HTTP client unless one is injected; use it as an
    async context manager or call ``aclose()`` when done.
    """

    def __init__(self, http: httpx.AsyncClient | None = None, settings: Settings | None = None):
        """Initialize acquirer.

        Args:
            http: Client used for URL fetches. Created on demand when omitted.
            settings: Client settings (timeout and image size cap).
        """
        self.settings = settings or Settings.from_env()
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=self.settings.http_timeout)

    async def __aenter__(self) -> MediaAcquirer:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    def acquire_file(self, handle: LocalFileHandle) -> AcquiredMedia:
        """Accept a dropped or picked file if it declares an image type.

        Args:
            handle: File from drag-and-drop or the picker.

        Returns:
            AcquiredMedia with the original filename and type.

        Raises:
            InvalidMediaType: If the declared type is not image/*.
        """
        if not is_image_type(handle.content_type):
            raise InvalidMediaType(handle.content_type)
        return AcquiredMedia(
            content=handle.content,
            filename=handle.filename,
            mime_type=handle.content_type,
        )

    async def acquire_url(self, url: str) -> AcquiredMedia:
        """Fetch an image URL into an upload payload.

        Args:
            url: Absolute http(s) URL.

        Returns:
            AcquiredMedia with the response body, derived filename and
            declared content-type.

        Raises:
            MediaFetchFailed: On invalid URL, transport error, non-2xx
                status, or an oversized body.
            InvalidMediaType: If the response is not declared as image/*.
        """
        url = url.strip()
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise MediaFetchFailed(url, reason=f"Invalid image URL: {url}") from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise MediaFetchFailed(url, reason=f"Invalid image URL: {url}")

        logger.debug("Fetching image from %s", url)
        try:
            async with self.http.stream("GET", url, follow_redirects=True) as response:
                if not response.is_success:
                    raise MediaFetchFailed(url, status=response.status_code)

                content_type = response.headers.get("content-type") or OCTET_STREAM
                if not is_image_type(content_type):
                    raise InvalidMediaType(content_type, source="URL")

                content = await self._read_body(response, url)
        except httpx.RequestError as e:
            raise MediaFetchFailed(url) from e

        filename = derive_filename(url, content_type)
        logger.debug("Fetched %d bytes from %s as %s", len(content), url, filename)
        return AcquiredMedia(content=content, filename=filename, mime_type=content_type)

    async def _read_body(self, response: httpx.Response, url: str) -> bytes:
        """Read the whole body, refusing anything above the size cap."""
        limit = self.settings.max_image_bytes
        too_large = f"Image at URL is larger than {limit} bytes"

        declared = response.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > limit:
            raise MediaFetchFailed(url, status=response.status_code, reason=too_large)

        chunks = bytearray()
        async for chunk in response.aiter_bytes():
            chunks.extend(chunk)
            if len(chunks) > limit:
                raise MediaFetchFailed(url, status=response.status_code, reason=too_large)
        return bytes(chunks)
