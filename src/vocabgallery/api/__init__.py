"""Backend access: envelope normalization, REST client, form submitters."""

from vocabgallery.api.client import ApiClient, to_image_url
from vocabgallery.api.envelope import (
    EnvelopeShape,
    classify,
    read_collection,
    read_meta,
    read_resource,
)
from vocabgallery.api.submit import PackSubmitter, SubmitResult, UploadSubmitter

__all__ = [
    "ApiClient",
    "EnvelopeShape",
    "PackSubmitter",
    "SubmitResult",
    "UploadSubmitter",
    "classify",
    "read_collection",
    "read_meta",
    "read_resource",
    "to_image_url",
]
