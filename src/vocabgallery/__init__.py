"""Vocab gallery client.

Async client for the vocab/pack REST backend:
- media/  - turning dropped files and image URLs into upload payloads
- api/    - envelope normalization, list fetching, form submission
- models/ - wire models and transient media types
"""

__version__ = "0.1.0"
