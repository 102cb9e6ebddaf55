"""Geohash cell and neighbor enumeration.

Two records a few meters apart can fall on either side of a cell boundary,
so the hash keys use the record's own cell plus its eight neighbors.

Order: center, W, E, S, SW, SE, N, NW, NE (latitude offsets 0, -1, +1 with
longitude offsets 0, -1, +1 nested inside).

    >>> geohash_neighbors(40.7484, -73.9857, 6)[:3]
    ['dr5ru6', 'dr5ru4', 'dr5rud']
"""

import logging
import math
from typing import List

from neardupe.utils.normalize import unique_everseen

try:
    import pygeohash as pgh
except ImportError as e:
    raise ImportError("pygeohash not installed. pip install pygeohash") from e


logger = logging.getLogger(__name__)

DEFAULT_GEOHASH_PRECISION = 6
MAX_GEOHASH_PRECISION = 12

_OFFSETS = (0, -1, 1)


def valid_coordinates(latitude: float, longitude: float) -> bool:
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        return False
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0


def _wrap_longitude(lon: float) -> float:
    if lon > 180.0:
        return lon - 360.0
    if lon < -180.0:
        return lon + 360.0
    return lon


def geohash_neighbors(latitude: float, longitude: float, precision: int = DEFAULT_GEOHASH_PRECISION) -> List[str]:
    """Cell of (latitude, longitude) followed by its neighbors.

    Args:
        latitude: Degrees in [-90, 90]
        longitude: Degrees in [-180, 180]
        precision: Geohash length; clamped to MAX_GEOHASH_PRECISION

    Returns:
        Nine cells, fewer at the poles where neighbor rows do not exist.
        Empty for precision < 1 or invalid coordinates.
    """
    try:
        precision = int(precision)
    except (TypeError, ValueError):
        return []
    if precision < 1 or not valid_coordinates(latitude, longitude):
        logger.debug("No geohash for (%r, %r) at precision %r", latitude, longitude, precision)
        return []
    precision = min(precision, MAX_GEOHASH_PRECISION)

    center = pgh.encode(float(latitude), float(longitude), precision=precision)
    lat, lon, lat_err, lon_err = pgh.decode_exactly(center)
    cell_height = 2 * lat_err
    cell_width = 2 * lon_err

    cells = []
    for dlat in _OFFSETS:
        row_lat = lat + dlat * cell_height
        if row_lat > 90.0 or row_lat < -90.0:
            continue
        for dlon in _OFFSETS:
            if dlat == 0 and dlon == 0:
                cells.append(center)
                continue
            cells.append(pgh.encode(row_lat, _wrap_longitude(lon + dlon * cell_width), precision=precision))
    return unique_everseen(cells)


__all__ = [
    "DEFAULT_GEOHASH_PRECISION",
    "MAX_GEOHASH_PRECISION",
    "valid_coordinates",
    "geohash_neighbors",
]
