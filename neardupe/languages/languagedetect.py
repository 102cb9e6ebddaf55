"""
Language Detection for Labeled Place Components
-----------------------------------------------

Two passes:

  1) Script. Any component dominated by a non-Latin script decides alone:
       Kana -> ja, Hangul -> ko,
       Han -> the country's Han-script language, else ja when Japanese-only
              kanji appear, else zh,
       Cyrillic -> the country's Cyrillic language, else ru,
       anything else -> the script's default language.
  2) Latin script. The `country` value is resolved to ISO2; its languages
     written in Latin script are the candidates. One candidate wins
     outright; several are ranked by lexical evidence; none (e.g. Japan
     written in Latin) falls back to lexical evidence over all languages.

Lexical evidence: street types, titles, directionals, unit designators and
known place names in `road`, `city`, `suburb` and `house` score per
language; each token counts once per language at its highest weight. The
top-scoring languages are returned, ties in resource order. No evidence
means ["en"].

Examples:
  >>> detect_languages([LabeledComponent("road", "Rue de la Loi"),
  ...                   LabeledComponent("country", "Belgium")])
  ['fr']

  >>> detect_languages([LabeledComponent("city", "Tokyo"),
  ...                   LabeledComponent("country", "Japan")])
  ['en']
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from neardupe.countries.fuzzycountry import resolve_country
from neardupe.languages.scriptdetect import KANA_SCRIPTS, dominant_script, script_counts
from neardupe.resources.resourceapi import get_resources
from neardupe.resources.resourcestore import LinguisticResources
from neardupe.utils.normalize import (
    collapse_whitespace,
    fold_for_lookup,
    normalize_dashes,
    normalize_quotes,
)


logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

SCORED_FIELDS = ("road", "city", "suburb", "house")

WEIGHT_STRONG = 2  # street types, their abbreviations, known place names
WEIGHT_WEAK = 1    # titles, directionals, unit designators, stopwords


class LabeledComponent(NamedTuple):
    """One parsed address component, e.g. ("road", "Main St")."""

    label: str
    value: str


def _country_code(components: Sequence[LabeledComponent], resources: LinguisticResources) -> Optional[str]:
    for component in components:
        if component.label == "country" and component.value.strip():
            code = resolve_country(component.value, resources.country_names)
            logger.debug("Country %r resolved to %s", component.value, code)
            return code
    return None


def _country_languages_in_script(country: Optional[str], script: str,
                                 resources: LinguisticResources) -> List[str]:
    if country is None:
        return []
    return [
        code for code in resources.country_languages.get(country, ())
        if script in resources.language_scripts(code)
    ]


def _detect_by_script(components: Sequence[LabeledComponent], resources: LinguisticResources) -> Optional[str]:
    non_latin = [
        c.value for c in components
        if dominant_script(c.value) not in (None, "Latin")
    ]
    if not non_latin:
        return None

    counts: Counter = Counter()
    for value in non_latin:
        counts.update(script_counts(value))

    if any(script in counts for script in KANA_SCRIPTS):
        return "ja"
    if "Hangul" in counts:
        return "ko"

    country = _country_code(components, resources)
    counts.pop("Latin", None)
    script = counts.most_common(1)[0][0]

    candidates = _country_languages_in_script(country, script, resources)
    if candidates:
        return candidates[0]
    if script == "Han":
        ja = resources.language("ja")
        text = "".join(non_latin)
        if ja is not None and any(ch in ja.distinctive_characters for ch in text):
            return "ja"
        return resources.script_languages.get("Han", "zh")
    return resources.script_languages.get(script)


def _token_weights(lang, field_value: str) -> Dict[str, int]:
    """Token -> best weight in one language for one field value."""
    weights: Dict[str, int] = {}
    folded = fold_for_lookup(collapse_whitespace(normalize_dashes(normalize_quotes(field_value))))
    if folded in lang.place_names:
        weights[folded] = WEIGHT_STRONG
    for raw in folded.split():
        token = raw.strip(".,;:()'\"")
        if not token:
            continue
        if token in lang.generic_words:
            weight = WEIGHT_STRONG
        elif token in lang.expansions or token in lang.unit_types or token in lang.stopwords:
            weight = WEIGHT_WEAK
        else:
            continue
        weights[token] = max(weights.get(token, 0), weight)
    return weights


def lexical_scores(components: Sequence[LabeledComponent], resources: LinguisticResources,
                   candidates: Optional[Iterable[str]] = None) -> Dict[str, int]:
    """Score each candidate language by dictionary hits in the scored fields."""
    codes = list(candidates) if candidates is not None else resources.latin_languages()
    scores: Dict[str, int] = {}
    for code in codes:
        lang = resources.language(code)
        if lang is None:
            continue
        total = 0
        for component in components:
            if component.label in SCORED_FIELDS and component.value:
                total += sum(_token_weights(lang, component.value).values())
        scores[code] = total
    return scores


def _best(scores: Dict[str, int]) -> List[str]:
    if not scores:
        return []
    top = max(scores.values())
    if top <= 0:
        return []
    return [code for code, score in scores.items() if score == top]


def detect_languages(
    components: Sequence[LabeledComponent],
    resources: Optional[LinguisticResources] = None,
) -> List[str]:
    """Languages of a component set, most confident first.

    Args:
        components: Labeled components; empty values are ignored
        resources: Loaded resources (fetched when None)

    Returns:
        ISO 639-1 codes. Exactly one for a script or country decision,
        several on a lexical tie, [] for empty input.
    """
    components = [c for c in components if c.value and c.value.strip()]
    if not components:
        return []
    if resources is None:
        resources = get_resources()

    by_script = _detect_by_script(components, resources)
    if by_script:
        logger.debug("Languages by script: %s", by_script)
        return [by_script]

    country = _country_code(components, resources)
    candidates = _country_languages_in_script(country, "Latin", resources)
    if len(candidates) == 1:
        logger.debug("Languages by country %s: %s", country, candidates)
        return candidates

    scores = lexical_scores(components, resources, candidates or None)
    best = _best(scores)
    if not best and candidates:
        # Country known but no lexical evidence: its first language.
        best = candidates[:1]
    logger.debug("Lexical language scores %s -> %s", scores, best or [DEFAULT_LANGUAGE])
    return best or [DEFAULT_LANGUAGE]


__all__ = [
    "DEFAULT_LANGUAGE",
    "LabeledComponent",
    "detect_languages",
    "lexical_scores",
]
