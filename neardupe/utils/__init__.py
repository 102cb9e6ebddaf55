"""Shared utilities for the neardupe package."""

from neardupe.utils.dataloader import (
    find_data_file,
    load_yaml_file,
    load_parquet_or_csv,
    format_not_found_error,
)
from neardupe.utils.normalize import (
    coerce_text,
    normalize_quotes,
    normalize_dashes,
    remove_separators,
    collapse_whitespace,
    strip_accents,
    latin_ascii,
    fold_for_lookup,
    has_combining_accents,
    quadgrams_or_string,
    unique_everseen,
)

__all__ = [
    # Data loading
    "find_data_file",
    "load_yaml_file",
    "load_parquet_or_csv",
    "format_not_found_error",
    # Text helpers
    "coerce_text",
    "normalize_quotes",
    "normalize_dashes",
    "remove_separators",
    "collapse_whitespace",
    "strip_accents",
    "latin_ascii",
    "fold_for_lookup",
    "has_combining_accents",
    "quadgrams_or_string",
    "unique_everseen",
]
