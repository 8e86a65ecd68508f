"""Response-shape normalization.

The backend answers either with a bare JSON value or with an envelope
``{"data": ..., "meta": ...}``. Every decoded body is classified into one
of a closed set of shapes and unwrapped from there, so callers never probe
properties themselves.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

ENVELOPE_DATA_KEY = "data"
ENVELOPE_META_KEY = "meta"


class EnvelopeShape(str, Enum):
    """Shapes a decoded response body can take."""

    BARE_LIST = "bare_list"
    ENVELOPED = "enveloped"
    BARE_OBJECT = "bare_object"
    OTHER = "other"


def classify(raw: Any) -> EnvelopeShape:
    """Classify a decoded JSON value.

    Args:
        raw: Result of decoding a response body.

    Returns:
        The shape; every input maps to exactly one member.
    """
    if isinstance(raw, list):
        return EnvelopeShape.BARE_LIST
    if isinstance(raw, dict):
        if ENVELOPE_DATA_KEY in raw:
            return EnvelopeShape.ENVELOPED
        return EnvelopeShape.BARE_OBJECT
    return EnvelopeShape.OTHER


def read_collection(raw: Any, source: str = "response") -> list:
    """Extract a collection from a bare or enveloped body.

    Unrecognized shapes yield an empty list. That branch is logged as a
    warning since it cannot be told apart from a verified-empty collection.

    Args:
        raw: Decoded JSON body.
        source: Label (usually the URL) used in the warning.

    Returns:
        The list of items.
    """
    shape = classify(raw)
    if shape is EnvelopeShape.BARE_LIST:
        return raw
    if shape is EnvelopeShape.ENVELOPED and isinstance(raw[ENVELOPE_DATA_KEY], list):
        return raw[ENVELOPE_DATA_KEY]

    logger.warning(
        "Unrecognized collection shape from %s (%s); treating as empty", source, shape.value
    )
    return []


def read_resource(raw: Any) -> Any:
    """Extract a single resource from a bare or enveloped body.

    Args:
        raw: Decoded JSON body.

    Returns:
        ``raw["data"]`` for envelopes, otherwise ``raw`` unchanged.
    """
    if classify(raw) is EnvelopeShape.ENVELOPED:
        return raw[ENVELOPE_DATA_KEY]
    return raw


def read_meta(raw: Any) -> Any:
    """Return the envelope's ``meta`` value, or None for bare bodies."""
    if classify(raw) is EnvelopeShape.ENVELOPED:
        return raw.get(ENVELOPE_META_KEY)
    return None
