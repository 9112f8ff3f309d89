#!/usr/bin/env python3
"""
Script to clear cached Overpass responses.
Run this after changing the Overpass query, radius or amenity tag.
"""
import asyncio
from app.services.cache import clear_prefix
from app.services.overpass import CACHE_PREFIX

async def clear_cache():
    deleted = await clear_prefix(CACHE_PREFIX)
    if deleted:
        print(f"✓ Cleared {deleted} cache keys")
    else:
        print("✓ No cache keys found")
    print("✓ Cache cleared successfully!")

if __name__ == "__main__":
    asyncio.run(clear_cache())
