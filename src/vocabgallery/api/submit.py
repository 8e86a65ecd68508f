"""Form submitters for creating and updating packs and vocabs.

Each submitter instance backs one form. A busy guard keeps a form from
issuing a second request while one is in flight:

    Idle -> Submitting -> Idle (on success, validation failure or error)

The guard is taken before the first await and released in ``finally``.
Different instances share nothing. No retries; the caller may resubmit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal

from vocabgallery.api.client import ApiClient
from vocabgallery.errors import (
    GalleryError,
    InvalidMediaType,
    MediaFetchFailed,
    ValidationError,
)
from vocabgallery.media.picker import ImagePicker
from vocabgallery.models.types import Pack, Vocab

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "u1"
MISSING_IMAGE = "Please choose an image or provide a valid image URL"

SubmitStatus = Literal["ok", "failed", "ignored"]


@dataclass
class SubmitResult:
    """Outcome of one submit call.

    Attributes:
        status: 'ok', 'failed', or 'ignored' (form was busy, nothing sent).
        value: Created/updated model on success, if the backend returned one.
        error: The error that stopped the attempt.
    """

    status: SubmitStatus
    value: Any = None
    error: GalleryError | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def message(self) -> str | None:
        return self.error.message if self.error else None


class _GuardedSubmitter:
    """Busy guard and error state shared by the form submitters."""

    def __init__(self) -> None:
        self.busy = False
        self.error: str | None = None

    async def _run(self, action: Callable[..., Awaitable[Any]], *args: Any) -> SubmitResult:
        if self.busy:
            logger.debug("%s is busy; submission ignored", type(self).__name__)
            return SubmitResult(status="ignored")

        self.busy = True
        self.error = None
        try:
            value = await action(*args)
        except GalleryError as e:
            self.error = e.message
            logger.warning("%s failed: %s", type(self).__name__, e.message)
            return SubmitResult(status="failed", error=e)
        finally:
            self.busy = False
        return SubmitResult(status="ok", value=value)


class UploadSubmitter(_GuardedSubmitter):
    """Submits the add-vocab form or the edit-vocab form.

    The picker supplies the image. After a successful submit the picker is
    reset; refreshing any listing is left to the caller.
    """

    def __init__(self, client: ApiClient, picker: ImagePicker | None = None):
        """Initialize submitter.

        Args:
            client: API client used for the request.
            picker: Image selection of this form. Without one, no image is
                ever sent (create then always fails validation).
        """
        super().__init__()
        self.client = client
        self.picker = picker

    async def create(self, pack_id: str, name: str, translation: str) -> SubmitResult:
        """Create a vocab in a pack. Translation and image are required."""
        return await self._run(self._create, pack_id, name, translation)

    async def update(self, vocab_id: str, name: str, translation: str | None = None) -> SubmitResult:
        """Update a vocab. Name is required; no image selected keeps the old one."""
        return await self._run(self._update, vocab_id, name, translation)

    async def _create(self, pack_id: str, name: str, translation: str) -> Vocab | None:
        translation = translation.strip()
        if not translation:
            raise ValidationError("translation", "Please enter a translation")

        try:
            media = await self.picker.resolve() if self.picker else None
        except (InvalidMediaType, MediaFetchFailed) as e:
            raise ValidationError("image", f"{MISSING_IMAGE}: {e.message}") from e
        if media is None:
            raise ValidationError("image", MISSING_IMAGE)

        fields = {"name": name.strip(), "translation": translation, "pack_id": pack_id}
        vocab = await self.client.send_vocab("POST", "/api/vocabs", fields, media)
        logger.info("Created vocab %r in pack %s", fields["name"], pack_id)
        self.picker.reset()
        return vocab

    async def _update(self, vocab_id: str, name: str, translation: str | None) -> Vocab | None:
        name = name.strip()
        if not name:
            raise ValidationError("name", "Name is required")

        # Image is optional here, so a bad URL is reported as itself
        media = await self.picker.resolve() if self.picker else None

        fields = {"name": name}
        translation = (translation or "").strip()
        if translation:
            fields["translation"] = translation

        vocab = await self.client.send_vocab("PATCH", f"/api/vocabs/{vocab_id}", fields, media)
        logger.info("Updated vocab %s (new image: %s)", vocab_id, media is not None)
        if self.picker:
            self.picker.reset()
        return vocab


class PackSubmitter(_GuardedSubmitter):
    """Submits the create-pack form."""

    def __init__(self, client: ApiClient):
        super().__init__()
        self.client = client

    async def create(self, name: str, lang_id: str, user_id: str = DEFAULT_USER_ID) -> SubmitResult:
        """Create a pack. Name and language are required."""
        return await self._run(self._create, name, lang_id, user_id)

    async def _create(self, name: str, lang_id: str, user_id: str) -> Pack | None:
        name = name.strip()
        if not name or not lang_id:
            raise ValidationError("name" if not name else "lang_id", "Name and language are required")
        pack = await self.client.create_pack(name, lang_id, user_id.strip() or DEFAULT_USER_ID)
        logger.info("Created pack %r (%s)", name, lang_id)
        return pack
