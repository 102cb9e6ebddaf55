"""Phonetic codes for venue names.

Sound-alike names share Double Metaphone codes ("Atlantic" and "Atlantik"
both encode to ATLNTK). Codes and words are cut into 4-character windows so
partial names still collide:

    >>> encode_word("atlantic")
    ['ATLN', 'TLNT', 'LNTK', 'atla', 'tlan', 'lant', 'anti', 'ntic']
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from neardupe.resources.resourcestore import LinguisticResources
from neardupe.utils.normalize import fold_for_lookup, quadgrams_or_string, unique_everseen

try:
    from metaphone import doublemetaphone as _doublemetaphone
except ImportError as e:
    raise ImportError("metaphone not installed. pip install metaphone") from e


def double_metaphone(word: str) -> Tuple[str, ...]:
    """Primary code, then the secondary code when it differs.

    Only letters and digits are encoded ("mcdonald's" sounds like "mcdonalds").

    Examples:
        >>> double_metaphone("new")
        ('N', 'NF')

        >>> double_metaphone("42")
        ()
    """
    word = "".join(c for c in word if c.isalnum())
    if not word:
        return ()
    primary, secondary = _doublemetaphone(word)
    codes = [primary]
    if secondary and secondary != primary:
        codes.append(secondary)
    return tuple(c for c in codes if c)


def encode_word(word: str) -> List[str]:
    """Phonetic codes of ``word`` then its own windows, each as quadgrams-or-string.

    Words without a letter or digit give nothing.
    """
    if not any(c.isalnum() for c in word):
        return []
    out: List[str] = []
    for code in double_metaphone(word):
        out.extend(quadgrams_or_string(code))
    out.extend(quadgrams_or_string(word))
    return unique_everseen(out)


def _insignificant_words(resources: Optional[LinguisticResources], languages: Iterable[str]) -> frozenset:
    if resources is None:
        return frozenset()
    words = set()
    for code in languages:
        lang = resources.language(code)
        if lang is not None:
            words.update(lang.name_descriptors)
            words.update(lang.stopwords)
    return frozenset(words)


def significant_words(words: Sequence[str], ignored: frozenset) -> List[str]:
    """Words minus descriptors and stopwords, or all words if none would remain.

    Examples:
        >>> significant_words(["central", "park"], frozenset({"park"}))
        ['central']
    """
    kept = [w for w in words if fold_for_lookup(w) not in ignored]
    return kept or list(words)


def name_hashes(
    expansions: Sequence[str],
    resources: Optional[LinguisticResources] = None,
    languages: Sequence[str] = ("en",),
) -> List[str]:
    """Phonetic hashes for the normalized expansions of a name.

    For every expansion: each significant word through encode_word(); then,
    with two or more significant words, the codes of those words joined
    together; then, with two or more words, the codes of the acronym of all
    words.

    Examples:
        >>> name_hashes(["new york"])
        ['N', 'NF', 'new', 'ARK', 'york', 'NRK']
    """
    ignored = _insignificant_words(resources, languages)
    out: List[str] = []
    for expansion in expansions:
        words = expansion.split()
        if not words:
            continue
        significant = significant_words(words, ignored)
        for word in significant:
            out.extend(encode_word(word))
        if len(significant) >= 2:
            out.extend(double_metaphone("".join(significant)))
        if len(words) >= 2:
            out.extend(double_metaphone("".join(w[0] for w in words)))
    return unique_everseen(out)


__all__ = [
    "double_metaphone",
    "encode_word",
    "significant_words",
    "name_hashes",
    "quadgrams_or_string",
]
