"""Pydantic models for backend payloads.

Field names follow Python conventions; the backend's JSON names are
accepted as validation aliases. Unknown keys are ignored.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Pack(_WireModel):
    """A named collection of vocabs for one language and owner."""

    id: str
    name: str
    language_id: str = Field(validation_alias=AliasChoices("language_id", "lang_id", "lang_code"))
    owner_id: str = Field(default="", validation_alias=AliasChoices("owner_id", "user_id"))
    is_public: bool | None = Field(default=None, validation_alias=AliasChoices("is_public", "public"))


class Vocab(_WireModel):
    """One image-labeled term.

    ``image_path`` is server-relative (``/files/...``) unless the backend
    stored an absolute URL; resolve it with ``to_image_url`` before display.
    """

    id: str
    pack_id: str
    name: str
    translation: str | None = None
    image_path: str = Field(validation_alias=AliasChoices("image_path", "image"))


class PackDetail(_WireModel):
    """Single pack with its vocabs."""

    pack: Pack
    vocabs: list[Vocab] = Field(default_factory=list)


class Language(_WireModel):
    """Language a pack can be scoped to."""

    id: str
    name: str
    code: str = ""


class Flashcard(_WireModel):
    """Game view of a vocab; translation is withheld."""

    id: str
    image_path: str = Field(validation_alias=AliasChoices("image_path", "image"))
    name: str
    pack_name: str = ""
