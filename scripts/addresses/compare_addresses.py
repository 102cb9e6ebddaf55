#!/usr/bin/env python3
"""
CLI tool for comparing two addresses by their near-dupe keys.

Each address is given as label=value pairs. Both key lists are printed,
followed by whether the addresses share a key.

Usage:
    python compare_addresses.py --a LABEL=VALUE ... --b LABEL=VALUE ... [options]

Examples:
    python compare_addresses.py \\
        --a house_number=123 "road=Main St" "unit=#3" city=Anytown state=CA postcode=12345 \\
        --b house_number=123 "road=Main Street" "unit=Unit 3" city=Anytown state=California postcode=12345

    python compare_addresses.py --a "house=Central Park" "road=Park Ave" house_number=1 \\
        --b "house=Central Prk" "road=Park Avenue" house_number=1 --with-name --lang en
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Tuple

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from neardupe import (
    NearDupeHashOptions,
    initialize,
    near_dupe_hashes,
    shutdown,
)


def parse_components(pairs: List[str]) -> Tuple[List[str], List[str]]:
    """Split LABEL=VALUE arguments into parallel label and value lists."""
    labels, values = [], []
    for pair in pairs:
        label, sep, value = pair.partition("=")
        if not sep or not label:
            raise argparse.ArgumentTypeError(f"Expected LABEL=VALUE, got {pair!r}")
        labels.append(label.strip())
        values.append(value)
    return labels, values


def build_options(args) -> NearDupeHashOptions:
    return NearDupeHashOptions(
        with_name=args.with_name,
        with_address=True,
        with_unit=not args.no_unit,
        with_city_or_equivalent=True,
        with_small_containing_boundaries=False,
        with_postal_code=True,
        with_latlon=args.lat is not None and args.lon is not None,
        latitude=args.lat or 0.0,
        longitude=args.lon or 0.0,
        geohash_precision=args.precision,
        name_and_address_keys=args.with_name,
        name_only_keys=True,
        address_only_keys=True,
    )


def main():
    parser = argparse.ArgumentParser(description="Compare two addresses by near-dupe keys")
    parser.add_argument("--a", nargs="+", required=True, metavar="LABEL=VALUE",
                        help="Components of the first address")
    parser.add_argument("--b", nargs="+", required=True, metavar="LABEL=VALUE",
                        help="Components of the second address")
    parser.add_argument("--with-name", action="store_true",
                        help="Include the venue name (house=...) in the keys")
    parser.add_argument("--no-unit", action="store_true",
                        help="Leave the unit out of address keys")
    parser.add_argument("--lat", type=float, default=None, help="Latitude for geohash keys")
    parser.add_argument("--lon", type=float, default=None, help="Longitude for geohash keys")
    parser.add_argument("--precision", type=int, default=6, help="Geohash precision (default: 6)")
    parser.add_argument("--lang", action="append", default=None,
                        help="Working language code (repeatable); detected when omitted")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log pipeline decisions")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        labels_a, values_a = parse_components(args.a)
        labels_b, values_b = parse_components(args.b)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    options = build_options(args)
    initialize()
    try:
        keys_a = near_dupe_hashes(labels_a, values_a, options, args.lang)
        keys_b = near_dupe_hashes(labels_b, values_b, options, args.lang)
    finally:
        shutdown()

    print("Address A keys:")
    for key in keys_a:
        print(f"  {key}")
    print("Address B keys:")
    for key in keys_b:
        print(f"  {key}")

    seen = set(keys_a)
    shared = [key for key in keys_b if key in seen]
    print("-" * 50)
    if shared:
        print(f"✅ Addresses are the same ({len(shared)} shared keys)")
        return 0
    print("❌ Addresses are unique")
    return 1


if __name__ == "__main__":
    sys.exit(main())
