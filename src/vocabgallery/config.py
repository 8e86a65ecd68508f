"""Runtime configuration read from the environment.

Variables:
- VOCAB_API_BASE: backend base URL (default http://localhost:8080)
- VOCAB_HTTP_TIMEOUT: per-request timeout in seconds (default 10)
- VOCAB_MAX_IMAGE_BYTES: largest image accepted from a URL (default 10 MiB)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_BASE = "http://localhost:8080"
DEFAULT_HTTP_TIMEOUT = 10.0
# Matches the backend's multipart upload limit
DEFAULT_MAX_IMAGE_BYTES = 10 << 20


def _read_number(name: str, default: float, cast: type) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    """Client settings.

    Attributes:
        api_base: Backend base URL without trailing slash.
        http_timeout: Timeout in seconds applied to every request.
        max_image_bytes: Upper bound on image bodies fetched from URLs.
    """

    api_base: str = DEFAULT_API_BASE
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_base", self.api_base.rstrip("/"))

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from environment variables.

        Returns:
            Settings with defaults for unset variables.

        Raises:
            ValueError: If a numeric variable is malformed or not positive.
        """
        api_base = os.environ.get("VOCAB_API_BASE", "").strip() or DEFAULT_API_BASE
        return cls(
            api_base=api_base,
            http_timeout=_read_number("VOCAB_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, float),
            max_image_bytes=int(
                _read_number("VOCAB_MAX_IMAGE_BYTES", DEFAULT_MAX_IMAGE_BYTES, int)
            ),
        )
