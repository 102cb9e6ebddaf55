"""
Field Variant Expansion
-----------------------

Produces the alternative spellings of one field in one or more languages:

  road:  abbreviation <-> expansion ("st" -> "saint", "street"), ordinal
         stripping ("5th" -> "5") and the "core" left after removing street
         types and stopwords at either end ("rue de la paix" -> "paix")
  unit:  unit designators removed ("apt 3", "#3", "unit 3" -> "3")
  other: the normalized forms only

Substitution is whole-token and applied once per token, so a field of N
tokens with K alternatives each yields at most K**N phrases before the
MAX_VARIANTS_PER_FIELD cap.

Examples:
  >>> expand_field("Main St", "road", ["en"])
  ['main saint', 'main street', 'main']

  >>> expand_field("5th Ave", "road", ["en"])
  ['5th avenue', '5 avenue', '5th', '5']

  >>> expand_field("Apt 3", "unit", ["en"])
  ['3']
"""

import logging
import re
from itertools import islice, product
from typing import List, Optional, Sequence

from neardupe.normalize.normalizeoptions import (
    MAX_VARIANTS_PER_FIELD,
    NormalizeOptions,
    component_enabled,
    default_normalize_options,
    options_for_field,
)
from neardupe.normalize.textnormalize import normalize_string
from neardupe.resources.resourceapi import get_resources
from neardupe.resources.resourcestore import LanguageResources, LinguisticResources
from neardupe.utils.normalize import fold_for_lookup, unique_everseen


logger = logging.getLogger(__name__)

_UNIT_HASH_RE = re.compile(r"#\s*")
_ORDINAL_RE = re.compile(r"^(\d+)([^\W\d_]+)$")


def _fold_like(canonical: str, token: str) -> str:
    # Canonicals keep their natural spelling ("straße") unless the token
    # itself was already folded by the normalizer.
    return fold_for_lookup(canonical) if token == fold_for_lookup(token) else canonical


def _compound_alternatives(token: str, lang: LanguageResources) -> List[str]:
    """'hauptstr' -> 'hauptstrasse' for languages that glue street types on."""
    key = fold_for_lookup(token)
    for canonical, abbreviations in lang.compound_suffixes.items():
        for abbreviation in abbreviations:
            if len(abbreviation) >= 2 and key.endswith(abbreviation) and len(key) - len(abbreviation) >= 3:
                stem = token[: len(token) - len(abbreviation)]
                return [stem + _fold_like(canonical, token)]
    return [token]


def expand_token(
    token: str,
    field: str,
    language: str,
    resources: Optional[LinguisticResources] = None,
) -> List[str]:
    """Alternatives for a single normalized token of ``field``.

    A known abbreviation maps to all its canonical expansions in alphabetical
    order; a canonical word or an unknown token maps to itself.

    Examples:
        >>> expand_token("st", "road", "en")
        ['saint', 'street']

        >>> expand_token("main", "road", "en")
        ['main']
    """
    if resources is None:
        resources = get_resources()
    lang = resources.language(language)
    if lang is None or field != "road":
        return [token]

    canonicals = lang.expansions.get(fold_for_lookup(token))
    if canonicals:
        if len(canonicals) == 1 and fold_for_lookup(canonicals[0]) == fold_for_lookup(token):
            return [token]
        return unique_everseen(_fold_like(c, token) for c in canonicals)

    if lang.compound_suffixes:
        return _compound_alternatives(token, lang)
    return [token]


def _strip_ordinals(phrase: str, lang: LanguageResources) -> str:
    def strip(token: str) -> str:
        m = _ORDINAL_RE.match(token)
        if m and fold_for_lookup(m.group(2)) in lang.ordinal_suffixes:
            return m.group(1)
        return token
    return " ".join(strip(t) for t in phrase.split(" "))


def road_core(phrase: str, lang: LanguageResources) -> Optional[str]:
    """Phrase without leading/trailing street types and stopwords.

    Returns None unless at least one street type was dropped and something
    is left.

    Examples:
        >>> road_core("rue de la paix", get_resources().language("fr"))
        'paix'
    """
    tokens = phrase.split(" ")
    dropped_street_type = False

    while tokens and (lang.is_street_type(tokens[0]) or lang.is_stopword(tokens[0])):
        dropped_street_type = dropped_street_type or lang.is_street_type(tokens[0])
        tokens = tokens[1:]
    while tokens and (lang.is_street_type(tokens[-1]) or lang.is_stopword(tokens[-1])):
        dropped_street_type = dropped_street_type or lang.is_street_type(tokens[-1])
        tokens = tokens[:-1]

    if not dropped_street_type or not tokens:
        return None
    return " ".join(tokens)


def _expand_road(value: str, lang: LanguageResources, resources: LinguisticResources) -> List[str]:
    alternatives = [expand_token(t, "road", lang.code, resources) for t in value.split(" ")]
    phrases = [" ".join(p) for p in islice(product(*alternatives), MAX_VARIANTS_PER_FIELD)]

    full: List[str] = []
    for phrase in phrases:
        full.append(phrase)
        full.append(_strip_ordinals(phrase, lang))
    full = unique_everseen(full)

    cores = [road_core(phrase, lang) for phrase in full]
    return unique_everseen(full + [c for c in cores if c])


def _expand_unit(value: str, lang: LanguageResources) -> List[str]:
    tokens = _UNIT_HASH_RE.sub("# ", value).split()
    kept = [t for t in tokens if fold_for_lookup(t) not in lang.unit_types]
    return [" ".join(kept)] if kept else [value]


def _expand_variant(value: str, field: str, lang: Optional[LanguageResources],
                    options: NormalizeOptions, resources: LinguisticResources) -> List[str]:
    if lang is None or not component_enabled(options.address_components, field):
        return [value]
    if field == "road":
        return _expand_road(value, lang, resources)
    if field == "unit":
        return _expand_unit(value, lang)
    return [value]


def expand_field(
    value: str,
    field: str,
    languages: Sequence[str],
    options: Optional[NormalizeOptions] = None,
    resources: Optional[LinguisticResources] = None,
) -> List[str]:
    """Normalize and expand one field value in every working language.

    Args:
        value: Raw field value
        field: Component label ('road', 'unit', 'city', ...)
        languages: Working language codes, in priority order
        options: NormalizeOptions; per-field overrides are applied on top
        resources: Loaded resources (fetched when None)

    Returns:
        VariantSet: unique, non-empty, insertion-ordered, capped at
        MAX_VARIANTS_PER_FIELD. Empty for malformed input.
    """
    if options is None:
        options = default_normalize_options()
    if resources is None:
        resources = get_resources()
    field_options = options_for_field(options, field)

    variants: List[str] = []
    for code in languages or ("en",):
        lang = resources.language(code)
        for normalized in normalize_string(value, field_options, [code], resources):
            variants.extend(_expand_variant(normalized, field, lang, field_options, resources))
    result = unique_everseen(variants, limit=MAX_VARIANTS_PER_FIELD)
    if len(variants) > len(result) and len(result) == MAX_VARIANTS_PER_FIELD:
        logger.debug("Capped %s variants of %r at %d", field, value, MAX_VARIANTS_PER_FIELD)
    return result


__all__ = [
    "MAX_VARIANTS_PER_FIELD",
    "expand_token",
    "expand_field",
    "road_core",
]
