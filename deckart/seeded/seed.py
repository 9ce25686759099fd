#!/usr/bin/env python3
"""
Seed derivation for seeded decorations.

A seed string is built from the page location and the container identity,
then hashed to a 32-bit unsigned integer with FNV-1a. Identical inputs under
the same seed mode always give the identical integer.
"""

from typing import Optional, Union

from .sdk import Location, SeedMode

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
MASK32 = 0xFFFFFFFF


def fnv1a32(text: str) -> int:
    """
    Hash a string to an unsigned 32-bit integer (FNV-1a).

    Characters are fed as UTF-16 code units, the way browsers index strings,
    so characters outside the BMP contribute both surrogate halves.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    h = FNV_OFFSET_BASIS
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = (h * FNV_PRIME) & MASK32
    return h


def build_seed_string(
    mode: Union[SeedMode, str, None],
    location: Location,
    container_id: Optional[str] = None,
) -> str:
    """
    Build the seed string for a container.

    Unrecognized modes behave like ``hash+slide``.
    """
    mode = mode.value if isinstance(mode, SeedMode) else mode
    path_query = location.pathname + location.search
    fragment = location.hash or "#"

    if mode == SeedMode.HASH.value:
        return fragment
    if mode == SeedMode.PATH.value:
        return path_query
    if mode == SeedMode.FULL.value:
        return location.href
    if mode == SeedMode.HASH_PATH.value:
        return path_query + fragment
    return f"{fragment}|{container_id or ''}|{location.pathname}"


def derive_seed(
    mode: Union[SeedMode, str, None],
    location: Location,
    container_id: Optional[str] = None,
) -> int:
    return fnv1a32(build_seed_string(mode, location, container_id))
