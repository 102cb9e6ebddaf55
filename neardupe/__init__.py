"""neardupe - Near-duplicate hashing for places and addresses

Turns labeled address components into short keys such that two records
describing the same place are very likely to share at least one key.

Usage:
    from neardupe import near_dupe_hashes, near_dupe_name_hashes, place_languages
    from neardupe import NearDupeHashOptions

    # Address keys
    keys = near_dupe_hashes(
        ["house_number", "road", "city", "postcode"],
        ["42", "Main St", "Portland", "97201"],
        NearDupeHashOptions(with_name=False, address_only_keys=True),
    )
    # ['act|main saint|42|portland', 'act|main street|42|portland', 'act|main|42|portland', ...]

    # Venue name hashes
    near_dupe_name_hashes("Atlantic")  # ['ATLN', 'TLNT', 'LNTK', 'atla', ...]

    # Languages of a record
    place_languages(["road", "city", "country"], ["Rue de la Loi", "Bruxelles", "Belgium"])  # ['fr']

Resources load lazily on first use; initialize() loads them eagerly and
shutdown() releases them.
"""

__version__ = "0.1.0"

# ============================================================================
# Hashing API
# ============================================================================
# Primary interface: neardupe.hashes.hashapi

from .hashes.hashapi import (
    near_dupe_hashes,        # Primary API - keys for a labeled record
    near_dupe_name_hashes,   # Phonetic/windowed hashes for a venue name
    normalize_name,          # Alias for near_dupe_name_hashes
    place_languages,         # Languages of a labeled record
    detect_languages,        # Same, from LabeledComponent values
    LabeledComponent,        # (label, value) pair
)

from .hashes.hashoptions import (
    NearDupeHashOptions,             # Key shape selection
    default_near_dupe_hash_options,  # Fresh default options
)

from .hashes.hashcompose import (
    KEY_SEPARATOR,
)

# ============================================================================
# Normalization
# ============================================================================

from .normalize.normalizeoptions import (
    NormalizeOptions,            # Normalizer toggles
    default_normalize_options,   # Fresh default options
    MAX_VARIANTS_PER_FIELD,
)

from .normalize.textnormalize import (
    normalize_string,   # Raw value -> ordered variants
)

from .expansion.variantexpand import (
    expand_field,       # Normalized + dictionary variants of one field
)

# ============================================================================
# Geohash
# ============================================================================

from .geohash.geohashencode import (
    geohash_neighbors,
    DEFAULT_GEOHASH_PRECISION,
    MAX_GEOHASH_PRECISION,
)

# ============================================================================
# Countries
# ============================================================================

from .countries.countryapi import (
    country_identifier,   # Resolve country value -> ISO2
    country_identifiers,  # Batch resolution
)

# ============================================================================
# Resource lifecycle
# ============================================================================

from .resources.resourceapi import (
    initialize,   # Load linguistic resources eagerly
    shutdown,     # Release them
)

from .errors import (
    NearDupeError,
    ResourceLoadError,
    ResourcesReleasedError,
)

# ============================================================================
# Batch dedupe
# ============================================================================

from .dedupe.dedupeapi import (
    load_records,      # Read a parquet/CSV record table
    hash_records,      # One row per (record, key)
    candidate_pairs,   # Record pairs sharing keys
    records_match,     # Do two records share a key?
)

__all__ = [
    # Version
    "__version__",

    # ========================================================================
    # PRIMARY APIS - Start here!
    # ========================================================================
    "near_dupe_hashes",       # Labeled record -> hash keys
    "near_dupe_name_hashes",  # Venue name -> hashes
    "place_languages",        # Labeled record -> languages

    # ========================================================================
    # Hashing
    # ========================================================================
    "normalize_name",
    "detect_languages",
    "LabeledComponent",
    "NearDupeHashOptions",
    "default_near_dupe_hash_options",
    "KEY_SEPARATOR",

    # ========================================================================
    # Normalization
    # ========================================================================
    "NormalizeOptions",
    "default_normalize_options",
    "MAX_VARIANTS_PER_FIELD",
    "normalize_string",
    "expand_field",

    # ========================================================================
    # Geohash
    # ========================================================================
    "geohash_neighbors",
    "DEFAULT_GEOHASH_PRECISION",
    "MAX_GEOHASH_PRECISION",

    # ========================================================================
    # Countries
    # ========================================================================
    "country_identifier",
    "country_identifiers",

    # ========================================================================
    # Resource lifecycle & errors
    # ========================================================================
    "initialize",
    "shutdown",
    "NearDupeError",
    "ResourceLoadError",
    "ResourcesReleasedError",

    # ========================================================================
    # Batch dedupe
    # ========================================================================
    "load_records",
    "hash_records",
    "candidate_pairs",
    "records_match",
]
