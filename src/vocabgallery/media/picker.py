"""ImagePicker: one pending image selection per form.

Collapses drag-and-drop, the file picker and the "attach URL" action into a
single Selection:
- choosing a local file clears the typed URL (local file wins)
- typing a URL keeps an already chosen file until the URL is attached
- a non-image file is rejected and leaves the selection untouched
- drag enter/leave only toggle ``dragging``
"""

from __future__ import annotations

import logging
from typing import Sequence

from vocabgallery.media.acquirer import MediaAcquirer
from vocabgallery.models.media import (
    AcquiredMedia,
    LocalFile,
    LocalFileHandle,
    NoSelection,
    PendingUrl,
    ResolvedMedia,
    Selection,
)

logger = logging.getLogger(__name__)


def _with_url(selection: Selection, url: str) -> Selection:
    """Return the selection with its typed URL text replaced."""
    if isinstance(selection, LocalFile):
        return LocalFile(file=selection.file, typed_url=url)
    if isinstance(selection, ResolvedMedia):
        return ResolvedMedia(media=selection.media, source_url=selection.source_url, typed_url=url)
    if url.strip():
        return PendingUrl(url=url)
    return NoSelection()


def _typed_url(selection: Selection) -> str:
    if isinstance(selection, PendingUrl):
        return selection.url
    if isinstance(selection, (LocalFile, ResolvedMedia)):
        return selection.typed_url
    return ""


class ImagePicker:
    """Pending image selection for a single add/edit form."""

    def __init__(self, acquirer: MediaAcquirer):
        self.acquirer = acquirer
        self.selection: Selection = NoSelection()
        self.dragging = False

    @property
    def typed_url(self) -> str:
        """URL text currently in the form, attached or not."""
        return _typed_url(self.selection)

    def drag_enter(self) -> None:
        self.dragging = True

    def drag_leave(self) -> None:
        self.dragging = False

    def drop(self, files: Sequence[LocalFileHandle]) -> None:
        """Handle a drop; the first file is used, an empty drop is ignored.

        Raises:
            InvalidMediaType: If the dropped file is not an image.
        """
        self.dragging = False
        if not files:
            return
        self._choose(files[0])

    def pick(self, files: Sequence[LocalFileHandle]) -> None:
        """Handle a file-picker change.

        An empty pick (dialog cancelled) drops a previously picked file.

        Raises:
            InvalidMediaType: If the picked file is not an image.
        """
        if not files:
            if isinstance(self.selection, LocalFile):
                self.selection = _with_url(NoSelection(), self.selection.typed_url)
            return
        self._choose(files[0])

    def type_url(self, url: str) -> None:
        """Update the URL text without touching a chosen file."""
        self.selection = _with_url(self.selection, url)

    async def attach(self) -> AcquiredMedia | None:
        """Resolve the typed URL now, replacing any chosen file.

        Returns:
            The fetched media, or None if no URL is typed.

        Raises:
            MediaFetchFailed: If the URL can't be fetched.
            InvalidMediaType: If the URL isn't an image.
        """
        url = self.typed_url.strip()
        if not url:
            return None
        media = await self.acquirer.acquire_url(url)
        self.selection = ResolvedMedia(media=media, source_url=url, typed_url=self.typed_url)
        logger.debug("Attached %s from %s", media.filename, url)
        return media

    async def resolve(self) -> AcquiredMedia | None:
        """Resolve the selection into a payload at submit time.

        A chosen file wins over a typed URL. A pending URL is fetched for
        this submission only; the selection stays PendingUrl.

        Returns:
            Media to upload, or None when nothing is selected.
        """
        selection = self.selection
        if isinstance(selection, LocalFile):
            return self.acquirer.acquire_file(selection.file)
        if isinstance(selection, ResolvedMedia):
            return selection.media
        if isinstance(selection, PendingUrl):
            return await self.acquirer.acquire_url(selection.url.strip())
        return None

    def reset(self) -> None:
        self.selection = NoSelection()
        self.dragging = False

    def _choose(self, handle: LocalFileHandle) -> None:
        # Validate before touching state so a rejected file changes nothing
        self.acquirer.acquire_file(handle)
        self.selection = LocalFile(file=handle)
