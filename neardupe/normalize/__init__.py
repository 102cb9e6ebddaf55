"""String normalization and its options."""

from neardupe.normalize.normalizeoptions import (
    MAX_VARIANTS_PER_FIELD,
    NormalizeOptions,
    default_normalize_options,
    all_off_normalize_options,
    options_for_field,
    component_enabled,
)
from neardupe.normalize.textnormalize import (
    normalize_string,
    transliterate,
    roman_to_int,
)

__all__ = [
    "MAX_VARIANTS_PER_FIELD",
    "NormalizeOptions",
    "default_normalize_options",
    "all_off_normalize_options",
    "options_for_field",
    "component_enabled",
    "normalize_string",
    "transliterate",
    "roman_to_int",
]
