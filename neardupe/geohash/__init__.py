"""Geohash cells and neighbors."""

from neardupe.geohash.geohashencode import (
    DEFAULT_GEOHASH_PRECISION,
    MAX_GEOHASH_PRECISION,
    valid_coordinates,
    geohash_neighbors,
)

__all__ = [
    "DEFAULT_GEOHASH_PRECISION",
    "MAX_GEOHASH_PRECISION",
    "valid_coordinates",
    "geohash_neighbors",
]
