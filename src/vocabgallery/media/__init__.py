"""Media acquisition: local files and image URLs into upload payloads.

- acquirer: MediaAcquirer, filename/extension derivation
- picker: ImagePicker, the per-form selection state
"""

from vocabgallery.media.acquirer import (
    MediaAcquirer,
    derive_filename,
    extension_for_content_type,
)
from vocabgallery.media.picker import ImagePicker

__all__ = [
    "ImagePicker",
    "MediaAcquirer",
    "derive_filename",
    "extension_for_content_type",
]
