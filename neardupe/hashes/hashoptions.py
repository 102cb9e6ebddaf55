"""Near-dupe hash options: which key shapes are emitted."""

from dataclasses import dataclass

from neardupe.geohash.geohashencode import DEFAULT_GEOHASH_PRECISION


@dataclass(frozen=True)
class NearDupeHashOptions:
    """Key shape selection.

        with_name: include the venue name (`house`/`name`) axis
        with_address: include the road + house number axis
        with_unit: add the unit to address keys when a unit is present
        with_city_or_equivalent: geo axis from city, city_district, suburb
        with_small_containing_boundaries: geo axis from state_district, island
        with_postal_code: geo axis from postcode
        with_latlon: geo axis from the geohash cells around (latitude, longitude)
        latitude, longitude: coordinates used when with_latlon is set
        geohash_precision: geohash length, 1..12
        name_and_address_keys: emit name + address keys
        name_only_keys: emit name + geo keys
        address_only_keys: emit address + geo keys
    """

    with_name: bool = True
    with_address: bool = True
    with_unit: bool = False
    with_city_or_equivalent: bool = True
    with_small_containing_boundaries: bool = True
    with_postal_code: bool = True
    with_latlon: bool = False
    latitude: float = 0.0
    longitude: float = 0.0
    geohash_precision: int = DEFAULT_GEOHASH_PRECISION
    name_and_address_keys: bool = True
    name_only_keys: bool = False
    address_only_keys: bool = False


def default_near_dupe_hash_options() -> NearDupeHashOptions:
    """Return a fresh copy of the default hash options."""
    return NearDupeHashOptions()


__all__ = [
    "NearDupeHashOptions",
    "default_near_dupe_hash_options",
]
