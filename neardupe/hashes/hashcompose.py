"""
Hash Key Composition
--------------------

A key shape is a type prefix plus an ordered list of roles. The prefix is
built from fixed parts, in this order:

    n   name
    a   address (road + house number)
    u   unit
    gh  geohash | ct city or equivalent | cb small containing boundary | pc postcode

so "auct" is address + unit + city, "napc" name + address + postcode.

Keys are the Cartesian product of the role variant sets in role order,
joined with "|":

  >>> shapes = [KeyShape("act", ("road", "house_number", "city"))]
  >>> compose({"road": ["main street", "main"], "house_number": ["42"],
  ...          "city": ["portland"]}, shapes)
  ['act|main street|42|portland', 'act|main|42|portland']
"""

import logging
from dataclasses import dataclass
from itertools import product
from typing import Collection, Dict, List, Mapping, Sequence, Tuple

from neardupe.hashes.hashoptions import NearDupeHashOptions


logger = logging.getLogger(__name__)

KEY_SEPARATOR = "|"

# Geo roles, in emission order: (prefix suffix, role, option attribute)
GEO_SUFFIXES = (
    ("gh", "geohash", "with_latlon"),
    ("ct", "city_or_equivalent", "with_city_or_equivalent"),
    ("cb", "small_containing_boundary", "with_small_containing_boundaries"),
    ("pc", "postcode", "with_postal_code"),
)

# Component labels merged into each derived geo role, in order.
CITY_OR_EQUIVALENT_LABELS = ("city", "city_district", "suburb")
SMALL_CONTAINING_BOUNDARY_LABELS = ("state_district", "island")


@dataclass(frozen=True)
class KeyShape:
    prefix: str
    roles: Tuple[str, ...]


def _geo_shapes(prefix: str, roles: Tuple[str, ...], options: NearDupeHashOptions,
                available_roles: Collection[str]) -> List[KeyShape]:
    shapes = []
    for suffix, role, flag in GEO_SUFFIXES:
        if getattr(options, flag) and role in available_roles:
            shapes.append(KeyShape(prefix + suffix, roles + (role,)))
    return shapes


def build_key_shapes(options: NearDupeHashOptions, available_roles: Collection[str]) -> List[KeyShape]:
    """Shapes to emit, in order: name+address, name-only, address-only.

    Args:
        options: NearDupeHashOptions
        available_roles: Roles that have at least one variant

    Returns:
        KeyShapes; each group lists its geo suffixes in gh, ct, cb, pc order
    """
    has_name = "name" in available_roles
    has_address = "road" in available_roles and "house_number" in available_roles
    has_unit = options.with_unit and "unit" in available_roles

    address_prefix, address_roles = "a", ("road", "house_number")
    if has_unit:
        address_prefix, address_roles = "au", address_roles + ("unit",)

    shapes: List[KeyShape] = []
    if options.with_name and options.with_address and options.name_and_address_keys and has_name and has_address:
        shapes.extend(_geo_shapes("n" + address_prefix, ("name",) + address_roles, options, available_roles))
    if options.with_name and options.name_only_keys and has_name:
        shapes.extend(_geo_shapes("n", ("name",), options, available_roles))
    if options.with_address and options.address_only_keys and has_address:
        shapes.extend(_geo_shapes(address_prefix, address_roles, options, available_roles))
    return shapes


def compose(field_variants: Mapping[str, Sequence[str]], shapes: Sequence[KeyShape]) -> List[str]:
    """Expand every shape into keys, shape order then product order.

    A shape with any role missing or empty produces no keys.
    """
    keys: List[str] = []
    seen = set()
    for shape in shapes:
        variant_sets = [field_variants.get(role) or [] for role in shape.roles]
        if not variant_sets or not all(variant_sets):
            logger.debug("Skipping shape %s: empty role", shape.prefix)
            continue
        for combo in product(*variant_sets):
            key = KEY_SEPARATOR.join((shape.prefix,) + combo)
            if key not in seen:
                seen.add(key)
                keys.append(key)
    return keys


def merge_roles(field_variants: Mapping[str, Sequence[str]], labels: Sequence[str]) -> List[str]:
    """Union of several labels' variants, label order then variant order."""
    merged: List[str] = []
    seen = set()
    for label in labels:
        for v in field_variants.get(label, ()):
            if v not in seen:
                seen.add(v)
                merged.append(v)
    return merged


def role_variants(field_variants: Dict[str, List[str]], geohashes: Sequence[str]) -> Dict[str, List[str]]:
    """Map component variants onto composer roles."""
    roles: Dict[str, List[str]] = {}
    name = merge_roles(field_variants, ("house", "name"))
    if name:
        roles["name"] = name
    for label in ("road", "house_number", "unit", "postcode"):
        if field_variants.get(label):
            roles[label] = list(field_variants[label])
    city = merge_roles(field_variants, CITY_OR_EQUIVALENT_LABELS)
    if city:
        roles["city_or_equivalent"] = city
    boundary = merge_roles(field_variants, SMALL_CONTAINING_BOUNDARY_LABELS)
    if boundary:
        roles["small_containing_boundary"] = boundary
    if geohashes:
        roles["geohash"] = list(geohashes)
    return roles


__all__ = [
    "KEY_SEPARATOR",
    "KeyShape",
    "build_key_shapes",
    "compose",
    "merge_roles",
    "role_variants",
]
