#!/usr/bin/env python3
"""Smoke test against a running vocab backend.

Checks that the read endpoints answer and that their payloads parse,
whichever envelope convention the backend uses.

Usage:
    VOCAB_API_BASE=http://localhost:8080 python scripts/smoke_api.py

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from vocabgallery.api.client import ApiClient  # noqa: E402
from vocabgallery.errors import GalleryError  # noqa: E402
from vocabgallery.models.types import Pack  # noqa: E402


async def check_languages(client: ApiClient) -> bool:
    """Check that languages can be listed."""
    try:
        languages = await client.get_languages()
    except GalleryError as e:
        print(f"FAIL: Languages: {e.message}")
        return False
    print(f"OK: {len(languages)} languages")
    return True


async def check_packs(client: ApiClient) -> list[Pack] | None:
    """Check that packs can be listed."""
    try:
        packs = await client.get_packs()
    except GalleryError as e:
        print(f"FAIL: Packs: {e.message}")
        return None
    print(f"OK: {len(packs)} packs")
    return packs


async def check_pack_details(client: ApiClient, packs: list[Pack]) -> bool:
    """Check that each pack's detail parses and image URLs resolve."""
    all_ok = True
    for pack in packs:
        try:
            detail = await client.get_pack_detail(pack.id)
        except GalleryError as e:
            print(f"    FAIL: {pack.name} - {e.message}")
            all_ok = False
            continue
        print(f"    OK: {pack.name} - {len(detail.vocabs)} vocabs")
        for vocab in detail.vocabs[:3]:
            print(f"         {vocab.name}: {client.to_image_url(vocab.image_path)}")
    return all_ok


async def main() -> int:
    print("=" * 60)
    print("Vocab Backend Smoke Test")
    print("=" * 60)

    async with ApiClient() as client:
        print(f"Base: {client.settings.api_base}")
        print()

        results = [await check_languages(client)]
        packs = await check_packs(client)
        results.append(packs is not None)
        if packs:
            results.append(await check_pack_details(client, packs))

    print()
    if all(results):
        print("All checks passed")
        return 0
    print("Some checks failed")
    return 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
