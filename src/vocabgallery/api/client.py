"""REST client for the vocab backend.

Endpoints:
- GET  /api/packs            - collection of Pack
- GET  /api/packs/{id}       - PackDetail
- GET  /api/languages        - collection of Language
- GET  /api/flashcards       - collection of Flashcard
- POST /api/packs            - JSON {name, lang_id, user_id}
- POST /api/vocabs           - multipart {name, translation, pack_id, image}
- PATCH /api/vocabs/{id}     - multipart, image optional

Reads raise FetchFailed, writes raise UploadFailed. Nothing is retried and
nothing is cached.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, TypeVar

import httpx
import pydantic

from vocabgallery.api.envelope import read_collection, read_resource
from vocabgallery.config import Settings
from vocabgallery.errors import FetchFailed, UploadFailed
from vocabgallery.models.media import AcquiredMedia
from vocabgallery.models.types import Flashcard, Language, Pack, PackDetail, Vocab

logger = logging.getLogger(__name__)

IMAGE_FIELD = "image"

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def to_image_url(image_path: str, base: str) -> str:
    """Resolve an image path from the backend into a displayable URL.

    Args:
        image_path: Server-relative path (``/files/x.jpg``) or absolute URL.
        base: API base URL.

    Returns:
        Absolute URL; absolute inputs are returned unchanged.
    """
    if image_path.startswith(("http://", "https://")):
        return image_path
    base = base.rstrip("/")
    if not image_path.startswith("/"):
        return f"{base}/{image_path}"
    return f"{base}{image_path}"


class ApiClient:
    """Async client for pack/vocab endpoints.

    Owns its httpx client unless one is injected. Paths are always joined
    onto ``settings.api_base``, so an injected client needs no base_url.
    """

    def __init__(self, settings: Settings | None = None, http: httpx.AsyncClient | None = None):
        """Initialize client.

        Args:
            settings: Client settings. Read from the environment when omitted.
            http: Shared httpx client (tests inject one with a mock transport).
        """
        self.settings = settings or Settings.from_env()
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=self.settings.http_timeout)

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    def url(self, path: str) -> str:
        """Join an API path onto the configured base."""
        return f"{self.settings.api_base}/{path.lstrip('/')}"

    def to_image_url(self, image_path: str) -> str:
        return to_image_url(image_path, self.settings.api_base)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_collection(self, path: str, params: dict[str, Any] | None = None) -> list:
        """GET a collection endpoint and unwrap it.

        Raises:
            FetchFailed: On transport error, non-2xx status or invalid JSON.
        """
        url = self.url(path)
        return read_collection(await self._get_json(url, params), source=url)

    async def fetch_resource(self, path: str) -> Any:
        """GET a single-resource endpoint and unwrap it.

        Raises:
            FetchFailed: On transport error, non-2xx status or invalid JSON.
        """
        return read_resource(await self._get_json(self.url(path)))

    async def get_packs(self) -> list[Pack]:
        items = await self.fetch_collection("/api/packs")
        return [self._parse(Pack, item, "/api/packs") for item in items]

    async def get_pack_detail(self, pack_id: str) -> PackDetail:
        path = f"/api/packs/{pack_id}"
        return self._parse(PackDetail, await self.fetch_resource(path), path)

    async def get_languages(self) -> list[Language]:
        items = await self.fetch_collection("/api/languages")
        return [self._parse(Language, item, "/api/languages") for item in items]

    async def get_flashcards(
        self,
        user_id: str,
        lang_id: str,
        pack_ids: Sequence[str] | None = None,
        limit: int | None = None,
    ) -> list[Flashcard]:
        """Fetch a shuffled flashcard deck.

        Args:
            user_id: Owner whose packs are drawn from.
            lang_id: Language to draw from.
            pack_ids: Optional subset of packs.
            limit: Optional deck size (the backend caps it).

        Returns:
            Flashcards in server order.
        """
        params: dict[str, Any] = {"user_id": user_id, "lang_id": lang_id}
        if pack_ids:
            params["pack_ids"] = ",".join(pack_ids)
        if limit is not None:
            params["limit"] = limit
        items = await self.fetch_collection("/api/flashcards", params=params)
        return [self._parse(Flashcard, item, "/api/flashcards") for item in items]

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_pack(self, name: str, lang_id: str, user_id: str) -> Pack | None:
        """POST a new pack.

        Returns:
            The created Pack, or None if the body isn't one.

        Raises:
            UploadFailed: On transport error or non-2xx status.
        """
        payload = {"name": name, "lang_id": lang_id, "user_id": user_id}
        response = await self._send("POST", self.url("/api/packs"), json=payload)
        return self._created(Pack, response)

    async def send_vocab(
        self,
        method: str,
        path: str,
        fields: dict[str, str],
        media: AcquiredMedia | None = None,
    ) -> Vocab | None:
        """Send a multipart vocab create/update.

        Text fields are sent as plain form parts; the image, when present,
        goes under the ``image`` field with its filename and type.

        Args:
            method: ``POST`` to create, ``PATCH`` to update.
            path: Endpoint path.
            fields: Already-trimmed text fields.
            media: Image payload, or None to keep the existing image.

        Returns:
            The created/updated Vocab, or None if the body isn't one.

        Raises:
            UploadFailed: On transport error or non-2xx status.
        """
        files: dict[str, tuple] = {name: (None, value) for name, value in fields.items()}
        if media is not None:
            files[IMAGE_FIELD] = media.as_upload()
        response = await self._send(method, self.url(path), files=files)
        return self._created(Vocab, response)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        logger.debug("GET %s params=%s", url, params)
        try:
            response = await self.http.get(url, params=params)
        except httpx.RequestError as e:
            raise FetchFailed(url) from e

        # Status is checked before any decoding
        if not response.is_success:
            raise FetchFailed(url, status=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise FetchFailed(
                url, status=response.status_code, reason=f"Invalid JSON from {url}"
            ) from e

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug("%s %s", method, url)
        try:
            response = await self.http.request(method, url, **kwargs)
        except httpx.RequestError as e:
            raise UploadFailed(None) from e

        if not response.is_success:
            raise UploadFailed(response.status_code, response.text)

        logger.info("%s %s -> %d", method, url, response.status_code)
        return response

    @staticmethod
    def _parse(model: type[ModelT], payload: Any, path: str) -> ModelT:
        try:
            return model.model_validate(payload)
        except pydantic.ValidationError as e:
            raise FetchFailed(path, reason=f"Unexpected payload from {path}") from e

    @staticmethod
    def _created(model: type[ModelT], response: httpx.Response) -> ModelT | None:
        try:
            return model.model_validate(read_resource(response.json()))
        except (ValueError, pydantic.ValidationError):
            logger.debug("Write succeeded without a %s body", model.__name__)
            return None
