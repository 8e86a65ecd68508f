"""Wire models (pydantic) and transient media types (dataclasses)."""
