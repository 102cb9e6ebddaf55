"""Phonetic name hashing."""

from neardupe.phonetics.phoneticencode import (
    double_metaphone,
    encode_word,
    significant_words,
    name_hashes,
)

__all__ = [
    "double_metaphone",
    "encode_word",
    "significant_words",
    "name_hashes",
]
