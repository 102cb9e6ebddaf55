"""Per-field variant expansion."""

from neardupe.expansion.variantexpand import (
    MAX_VARIANTS_PER_FIELD,
    expand_token,
    expand_field,
    road_core,
)

__all__ = [
    "MAX_VARIANTS_PER_FIELD",
    "expand_token",
    "expand_field",
    "road_core",
]
