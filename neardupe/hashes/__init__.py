"""Near-dupe hash key composition and public entry points."""

from neardupe.hashes.hashapi import (
    near_dupe_hashes,
    near_dupe_name_hashes,
    normalize_name,
    place_languages,
    detect_languages,
)
from neardupe.hashes.hashcompose import (
    KEY_SEPARATOR,
    KeyShape,
    build_key_shapes,
    compose,
)
from neardupe.hashes.hashoptions import (
    NearDupeHashOptions,
    default_near_dupe_hash_options,
)

__all__ = [
    "near_dupe_hashes",
    "near_dupe_name_hashes",
    "normalize_name",
    "place_languages",
    "detect_languages",
    "KEY_SEPARATOR",
    "KeyShape",
    "build_key_shapes",
    "compose",
    "NearDupeHashOptions",
    "default_near_dupe_hash_options",
]
