"""Tests for wire models and transient media types.

Tests validate:
1. Backend JSON names are accepted as aliases
2. Optional fields default correctly
3. Unknown keys are ignored
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from vocabgallery.models.media import (
    OCTET_STREAM,
    AcquiredMedia,
    LocalFileHandle,
    is_image_type,
)
from vocabgallery.models.types import Flashcard, Pack, PackDetail, Vocab


class TestPack:
    """Test Pack model."""

    def test_accepts_backend_names(self):
        """lang_id/user_id/public map onto Python attribute names."""
        pack = Pack.model_validate(
            {"id": "p1", "name": "Kitchen", "lang_id": "hi", "user_id": "u1", "public": True}
        )
        assert pack.language_id == "hi"
        assert pack.owner_id == "u1"
        assert pack.is_public is True

    def test_accepts_lang_code(self):
        """Older backends send lang_code instead of lang_id."""
        pack = Pack.model_validate({"id": "p1", "name": "Kitchen", "lang_code": "hi"})
        assert pack.language_id == "hi"
        assert pack.owner_id == ""
        assert pack.is_public is None

    def test_missing_language_rejected(self):
        with pytest.raises(ValidationError):
            Pack.model_validate({"id": "p1", "name": "Kitchen"})


class TestVocab:
    """Test Vocab model."""

    def test_image_alias_and_optional_translation(self):
        vocab = Vocab.model_validate(
            {"id": "v1", "pack_id": "p1", "name": "knife", "image": "/files/x.jpg", "extra": 1}
        )
        assert vocab.image_path == "/files/x.jpg"
        assert vocab.translation is None

    def test_populate_by_name(self):
        vocab = Vocab(id="v1", pack_id="p1", name="knife", image_path="/files/x.jpg")
        assert vocab.image_path == "/files/x.jpg"


class TestPackDetail:
    """Test PackDetail model."""

    def test_nested_parse(self):
        detail = PackDetail.model_validate(
            {
                "pack": {"id": "p1", "name": "Kitchen", "lang_id": "hi"},
                "vocabs": [{"id": "v1", "pack_id": "p1", "name": "knife", "image": "/f.png"}],
            }
        )
        assert detail.pack.id == "p1"
        assert detail.vocabs[0].name == "knife"

    def test_vocabs_default_empty(self):
        detail = PackDetail.model_validate({"pack": {"id": "p1", "name": "K", "lang_id": "hi"}})
        assert detail.vocabs == []


class TestFlashcard:
    def test_parse(self):
        card = Flashcard.model_validate(
            {"id": "v1", "image": "/files/x.jpg", "name": "knife", "pack_name": "Kitchen"}
        )
        assert card.image_path == "/files/x.jpg"
        assert card.pack_name == "Kitchen"


class TestMediaTypes:
    """Test transient media helpers."""

    @pytest.mark.parametrize(
        "mime_type,expected",
        [
            ("image/png", True),
            ("image/svg+xml", True),
            ("text/html", False),
            ("application/octet-stream", False),
            ("", False),
            (None, False),
        ],
    )
    def test_is_image_type(self, mime_type, expected):
        assert is_image_type(mime_type) is expected

    def test_from_path_guesses_type(self, tmp_path: Path):
        """Declared type comes from the extension, like a browser File."""
        path = tmp_path / "cat.png"
        path.write_bytes(b"png")
        handle = LocalFileHandle.from_path(path)
        assert handle.filename == "cat.png"
        assert handle.content_type == "image/png"
        assert handle.content == b"png"

    def test_from_path_unknown_extension(self, tmp_path: Path):
        path = tmp_path / "blob.zzzq"
        path.write_bytes(b"?")
        assert LocalFileHandle.from_path(path).content_type == OCTET_STREAM

    def test_from_path_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            LocalFileHandle.from_path(tmp_path / "nope.png")

    def test_as_upload(self):
        media = AcquiredMedia(content=b"x", filename="a.png", mime_type="image/png")
        assert media.as_upload() == ("a.png", b"x", "image/png")
