"""Near-dupe hashing API.

Public entry points. Each one holds the process-wide resource lock for the
whole call.

Usage:
    >>> from neardupe import near_dupe_hashes, NearDupeHashOptions
    >>> near_dupe_hashes(
    ...     ["house_number", "road", "city", "postcode"],
    ...     ["42", "Main St", "Portland", "97201"],
    ...     NearDupeHashOptions(with_name=False, address_only_keys=True),
    ... )[:3]
    ['act|main saint|42|portland', 'act|main street|42|portland', 'act|main|42|portland']

Malformed input never raises: arity mismatch, empty input or undecodable
text give an empty list.
"""

import logging
import warnings
from typing import Dict, List, Optional, Sequence, Union

from neardupe.expansion.variantexpand import expand_field
from neardupe.geohash.geohashencode import geohash_neighbors
from neardupe.hashes.hashcompose import build_key_shapes, compose, role_variants
from neardupe.hashes.hashoptions import NearDupeHashOptions, default_near_dupe_hash_options
from neardupe.languages.languagedetect import LabeledComponent
from neardupe.languages.languagedetect import detect_languages as _detect_languages
from neardupe.normalize.normalizeoptions import NormalizeOptions, default_normalize_options
from neardupe.normalize.textnormalize import normalize_string
from neardupe.phonetics.phoneticencode import name_hashes
from neardupe.resources.resourceapi import locked_resources
from neardupe.resources.resourcestore import LinguisticResources
from neardupe.utils.normalize import coerce_text, unique_everseen

try:
    import pycountry
except ImportError as e:
    raise ImportError("pycountry not installed. pip install pycountry") from e


logger = logging.getLogger(__name__)

NAME_LABELS = ("house", "name")

# Labels that feed a key role; everything else is only used for detection.
HASHED_LABELS = frozenset(NAME_LABELS + (
    "road", "house_number", "unit", "postcode",
    "city", "city_district", "suburb", "state_district", "island",
))

Text = Union[str, bytes]


def _components(labels: Sequence[Text], values: Sequence[Text]) -> Optional[List[LabeledComponent]]:
    """Pair labels with values; None on arity mismatch or empty input."""
    if labels is None or values is None:
        return None
    labels, values = list(labels), list(values)
    if not labels or len(labels) != len(values):
        logger.debug("Rejected input: %d labels, %d values", len(labels), len(values))
        return None

    components = []
    for raw_label, raw_value in zip(labels, values):
        label = coerce_text(raw_label)
        value = coerce_text(raw_value)
        if label is None or value is None:
            logger.debug("Dropped component with malformed text (label %r)", raw_label)
            continue
        components.append(LabeledComponent(label.strip().lower(), value))
    return components


def _checked_languages(languages: Optional[Sequence[str]]) -> List[str]:
    """Keep valid ISO 639-1 codes; warn about the rest."""
    checked: List[str] = []
    for code in languages or ():
        code_text = str(code).strip().lower() if code is not None else ""
        if len(code_text) == 2 and pycountry.languages.get(alpha_2=code_text) is not None:
            checked.append(code_text)
        else:
            warnings.warn(f"Ignoring unknown language code {code!r}", stacklevel=3)
    return unique_everseen(checked)


def _working_languages(components: Sequence[LabeledComponent], languages: Optional[Sequence[str]],
                       resources: LinguisticResources) -> List[str]:
    checked = _checked_languages(languages)
    if checked:
        return checked
    detected = _detect_languages(components, resources)
    logger.debug("Detected languages %s", detected)
    return detected


def _name_variants(value: str, options: NormalizeOptions, languages: Sequence[str],
                   resources: LinguisticResources) -> List[str]:
    expansions = unique_everseen(
        v for code in languages for v in normalize_string(value, options, [code], resources)
    )
    return name_hashes(expansions, resources, languages)


def _field_variants(components: Sequence[LabeledComponent], languages: Sequence[str],
                    resources: LinguisticResources) -> Dict[str, List[str]]:
    options = default_normalize_options().with_languages(languages)
    fields: Dict[str, List[str]] = {}
    for component in components:
        if component.label not in HASHED_LABELS:
            continue
        if component.label in NAME_LABELS:
            variants = _name_variants(component.value, options, languages, resources)
        else:
            variants = expand_field(component.value, component.label, languages, options, resources)
        if variants:
            fields[component.label] = unique_everseen(fields.get(component.label, []) + variants)
    return fields


def near_dupe_hashes(
    labels: Sequence[Text],
    values: Sequence[Text],
    options: Optional[NearDupeHashOptions] = None,
    languages: Optional[Sequence[str]] = None,
) -> List[str]:
    """Near-duplicate hash keys for one labeled record.

    Args:
        labels: Component labels ('house', 'house_number', 'road', 'unit',
                'city', 'suburb', 'postcode', 'country', ...)
        values: Raw values, same length as ``labels``
        options: NearDupeHashOptions (defaults when None)
        languages: Working languages; detected from the components when
                   omitted or when none of the given codes is valid

    Returns:
        Keys "<type>|<field>|...", deterministic for a fixed input. Empty on
        arity mismatch or empty input.
    """
    components = _components(labels, values)
    if not components:
        return []
    if options is None:
        options = default_near_dupe_hash_options()

    with locked_resources() as resources:
        working = _working_languages(components, languages, resources)
        fields = _field_variants(components, working, resources)

    geohashes: List[str] = []
    if options.with_latlon:
        geohashes = geohash_neighbors(options.latitude, options.longitude, options.geohash_precision)

    roles = role_variants(fields, geohashes)
    shapes = build_key_shapes(options, roles.keys())
    logger.debug("Key shapes for languages %s: %s", working, [s.prefix for s in shapes])
    return compose(roles, shapes)


def near_dupe_name_hashes(name: Text, options: Optional[NormalizeOptions] = None) -> List[str]:
    """Phonetic and windowed hashes of a venue name.

    Args:
        name: Raw name (str or UTF-8 bytes)
        options: NormalizeOptions (defaults when None); options.languages
                 selects the descriptor and numeral dictionaries, English
                 when empty

    Returns:
        Hashes, e.g. "Atlantic" -> ['ATLN', 'TLNT', 'LNTK', 'atla', ...].
        Empty for malformed text.

    Examples:
        >>> near_dupe_name_hashes("IV")
        ['AF', 'iv', '4']
    """
    if options is None:
        options = default_normalize_options()
    with locked_resources() as resources:
        languages = _checked_languages(options.languages) or ["en"]
        return _name_variants(name, options, languages, resources)


# Alias
normalize_name = near_dupe_name_hashes


def detect_languages(components: Sequence[LabeledComponent]) -> List[str]:
    """Languages of labeled components, most confident first."""
    with locked_resources() as resources:
        return _detect_languages(list(components), resources)


def place_languages(labels: Sequence[Text], values: Sequence[Text]) -> List[str]:
    """Languages of a labeled record; empty on arity mismatch or empty input.

    Examples:
        >>> place_languages(["road", "city", "country"], ["Rue de la Loi", "Bruxelles", "Belgium"])
        ['fr']
    """
    components = _components(labels, values)
    if not components:
        return []
    return detect_languages(components)


__all__ = [
    "LabeledComponent",
    "near_dupe_hashes",
    "near_dupe_name_hashes",
    "normalize_name",
    "place_languages",
    "detect_languages",
]
