"""Shared pytest fixtures for vocabgallery tests."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Callable

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from vocabgallery.config import Settings
from vocabgallery.media.acquirer import MediaAcquirer
from vocabgallery.media.picker import ImagePicker

API_BASE = "http://backend.test"

# Smallest valid PNG header plus filler; content is never decoded
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the fake backend host."""
    return Settings(api_base=API_BASE, http_timeout=5.0, max_image_bytes=1024)


@pytest.fixture
def mock_http() -> Callable[[Callable], httpx.AsyncClient]:
    """Factory for httpx clients backed by a request handler."""

    def factory(handler: Callable) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


def image_handler(
    status: int = 200,
    content_type: str | None = "image/png",
    content: bytes = PNG_BYTES,
) -> Callable[[httpx.Request], httpx.Response]:
    """Handler that answers every request with a fixed image response."""

    def handler(request: httpx.Request) -> httpx.Response:
        headers = {"content-type": content_type} if content_type else {}
        return httpx.Response(status, headers=headers, content=content)

    return handler


@pytest.fixture
def acquirer(settings: Settings, mock_http) -> MediaAcquirer:
    """Acquirer whose URL fetches always return a PNG."""
    return MediaAcquirer(http=mock_http(image_handler()), settings=settings)


@pytest.fixture
def picker(acquirer: MediaAcquirer) -> ImagePicker:
    return ImagePicker(acquirer)


# ============================================================================
# Fake backend
# ============================================================================


@dataclass
class FakeBackend:
    """In-process stand-in for the REST backend.

    ``enveloped`` switches between ``{"data": ...}`` and bare bodies.
    """

    enveloped: bool = True
    packs: dict[str, dict] = field(default_factory=dict)
    vocabs: dict[str, dict] = field(default_factory=dict)
    files: dict[str, tuple[bytes, str]] = field(default_factory=dict)
    requests: list[str] = field(default_factory=list)

    def wrap(self, data, meta=None):
        if not self.enveloped:
            return data
        body = {"data": data}
        if meta is not None:
            body["meta"] = meta
        return body


def _error(status: int, code: str, message: str) -> JSONResponse:
    return JSONResponse({"error": message, "code": code}, status_code=status)


def create_fake_backend_app(backend: FakeBackend) -> FastAPI:
    """Build a FastAPI app serving the pack/vocab endpoints from memory."""
    app = FastAPI()

    @app.middleware("http")
    async def record_requests(request: Request, call_next):
        backend.requests.append(f"{request.method} {request.url.path}")
        return await call_next(request)

    @app.get("/api/languages")
    def list_languages():
        return backend.wrap([{"id": "hi", "name": "Hindi", "code": "hi"}])

    @app.get("/api/packs")
    def list_packs():
        packs = list(backend.packs.values())
        return backend.wrap(packs, meta={"count": len(packs)})

    @app.get("/api/packs/{pack_id}")
    def get_pack(pack_id: str):
        pack = backend.packs.get(pack_id)
        if pack is None:
            return _error(404, "not_found", "pack not found")
        vocabs = [v for v in backend.vocabs.values() if v["pack_id"] == pack_id]
        return backend.wrap({"pack": pack, "vocabs": vocabs})

    @app.post("/api/packs", status_code=201)
    async def create_pack(request: Request):
        body = await request.json()
        pack = {
            "id": str(uuid.uuid4()),
            "name": body["name"],
            "lang_id": body["lang_id"],
            "user_id": body["user_id"],
        }
        backend.packs[pack["id"]] = pack
        return backend.wrap(pack)

    @app.post("/api/vocabs", status_code=201)
    async def create_vocab(request: Request):
        form = await request.form()
        image = form.get("image")
        if image is None or isinstance(image, str):
            return _error(400, "missing_fields", "missing required field(s): image")
        pack_id = form.get("pack_id", "")
        if pack_id not in backend.packs:
            return _error(400, "invalid_pack", f"unknown pack id: {pack_id!r}")
        name = form.get("name", "")
        if any(v["pack_id"] == pack_id and v["name"] == name for v in backend.vocabs.values()):
            return _error(409, "duplicate_vocab", f'vocab "{name}" already exists in this pack')

        path = await _store_image(backend, image)
        vocab = {
            "id": str(uuid.uuid4()),
            "image": path,
            "name": name,
            "translation": form.get("translation", ""),
            "pack_id": pack_id,
        }
        backend.vocabs[vocab["id"]] = vocab
        return backend.wrap(vocab)

    @app.patch("/api/vocabs/{vocab_id}")
    async def update_vocab(vocab_id: str, request: Request):
        vocab = backend.vocabs.get(vocab_id)
        if vocab is None:
            return _error(404, "not_found", "vocab not found")
        form = await request.form()
        vocab["name"] = form.get("name", vocab["name"])
        if "translation" in form:
            vocab["translation"] = form["translation"]
        image = form.get("image")
        if image is not None and not isinstance(image, str):
            vocab["image"] = await _store_image(backend, image)
        return backend.wrap(vocab)

    @app.get("/files/{path:path}")
    def get_file(path: str):
        stored = backend.files.get(f"/files/{path}")
        if stored is None:
            return Response(status_code=404)
        content, content_type = stored
        return Response(content=content, media_type=content_type)

    return app


async def _store_image(backend: FakeBackend, image) -> str:
    path = f"/files/images/{uuid.uuid4().hex[:8]}-{image.filename}"
    backend.files[path] = (await image.read(), image.content_type)
    return path


@pytest.fixture
def backend() -> FakeBackend:
    """Backend seeded with one pack and one vocab."""
    backend = FakeBackend()
    backend.packs["p1"] = {"id": "p1", "name": "Kitchen", "lang_id": "hi", "user_id": "u1"}
    backend.vocabs["v1"] = {
        "id": "v1",
        "image": "/files/images/knife.png",
        "name": "knife",
        "translation": "chaku",
        "pack_id": "p1",
    }
    backend.files["/files/images/knife.png"] = (PNG_BYTES, "image/png")
    backend.files["/files/remote/photo"] = (PNG_BYTES, "image/png")
    backend.files["/files/remote/page.html"] = (b"<html></html>", "text/html")
    return backend


@pytest.fixture
def backend_http(backend: FakeBackend) -> httpx.AsyncClient:
    """httpx client routed into the fake backend app."""
    transport = httpx.ASGITransport(app=create_fake_backend_app(backend))
    return httpx.AsyncClient(transport=transport)
