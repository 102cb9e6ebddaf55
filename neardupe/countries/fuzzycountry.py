"""
Country Resolution for Language Detection
-----------------------------------------

The `country` component is the strongest signal the language detector has for
Latin-script input. Values arrive in any language and spelling ("USA",
"Deutschland", "日本", "Untied States"), so resolution runs a pipeline:

  1) native-name table from the resource store (endonyms, colloquialisms)
  2) country_converter (coco) conversion (handles lots of English aliases)
  3) pycountry lookup (exact, official ISO 3166)
  4) rapidfuzz fuzzy match over the pycountry name catalog

API:
  resolve_country(name, native_names=None, to='ISO2', fuzzy=True, fuzzy_threshold=85)
  resolve_countries(names, ...)

Examples:
  >>> resolve_country("USA")            # 'US'
  >>> resolve_country("France")         # 'FR'
  >>> resolve_country("Untied States")  # 'US'
  >>> resolve_country("日本", native_names={"日本": "JP"})  # 'JP'
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping, Optional

from neardupe.utils.normalize import fold_for_lookup, normalize_quotes

# ---- Optional imports with helpful error messages ----
try:
    import country_converter as coco
except ImportError as e:
    raise ImportError("country_converter not installed. pip install country_converter") from e

try:
    import pycountry
except ImportError as e:
    raise ImportError("pycountry not installed. pip install pycountry") from e

try:
    from rapidfuzz import process, fuzz
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e


logger = logging.getLogger(__name__)


def _norm(s: str) -> str:
    return fold_for_lookup(normalize_quotes(s.strip()))


@lru_cache(maxsize=1)
def _converter() -> "coco.CountryConverter":
    return coco.CountryConverter()


@lru_cache(maxsize=1)
def _pycountry_catalog() -> Dict[str, str]:
    """Name variant (lookup form) -> ISO2, from pycountry."""
    catalog: Dict[str, str] = {}
    for c in pycountry.countries:
        alpha2 = getattr(c, "alpha_2", None)
        if not alpha2:
            continue
        for attr in ("name", "official_name", "common_name"):
            name = getattr(c, attr, None)
            if name:
                catalog[_norm(name)] = alpha2
        name = getattr(c, "name", "")
        if ", " in name:
            # "Korea, Republic of" -> "Republic of Korea"
            head, _, tail = name.partition(", ")
            catalog[_norm(f"{tail} {head}")] = alpha2
    return catalog


def _valid_alpha2(code: Optional[str]) -> Optional[str]:
    if not code or not isinstance(code, str) or len(code) != 2 or not code.isalpha():
        return None
    country = pycountry.countries.get(alpha_2=code.upper())
    return country.alpha_2 if country else None


def _convert_code_system(alpha2: str, to: str) -> Optional[str]:
    """Given ISO2 code, return in requested code system using pycountry."""
    to = to.upper()
    country = pycountry.countries.get(alpha_2=alpha2)
    if country is None:
        return alpha2 if to == "ISO2" else None
    if to == "ISO2":
        return country.alpha_2
    if to == "ISO3":
        return getattr(country, "alpha_3", None)
    if to in ("NUMERIC", "NUM"):
        num = getattr(country, "numeric", None)
        return f"{int(num):03d}" if num is not None else None
    return None


def resolve_country(
    name: str,
    native_names: Optional[Mapping[str, str]] = None,
    to: str = "ISO2",
    *,
    fuzzy: bool = True,
    fuzzy_threshold: int = 85,
) -> Optional[str]:
    """
    Resolve a country-like string to a canonical code.

    Args:
        name: Any country hint: 'USA', 'Deutschland', 'België', '日本', 'DEU'
        native_names: Optional lookup-form name -> ISO2 table checked first
                      (the resource store's countries.yaml names)
        to:   'ISO2' (default), 'ISO3', or 'numeric'
        fuzzy: use fuzzy fallback on last resort
        fuzzy_threshold: minimum RapidFuzz score to accept a fuzzy match

    Returns:
        Canonical code in requested system, or None if not recognized.
    """
    if not name or not str(name).strip():
        return None

    s = str(name).strip()
    key = _norm(s)

    # 1) Native names and colloquialisms from the resource store
    if native_names:
        a2 = native_names.get(key)
        if a2:
            return _convert_code_system(a2, to)

    # 2) country_converter; returns the input unchanged when nothing matched
    converted = _converter().convert(names=[s], to="ISO2", not_found=None)
    a2 = _valid_alpha2(converted[0] if isinstance(converted, list) else converted)
    if a2:
        return _convert_code_system(a2, to)

    # 3) pycountry exact lookup (works for 'USA', 'DEU', official names)
    try:
        a2 = _valid_alpha2(getattr(pycountry.countries.lookup(s), "alpha_2", None))
        if a2:
            return _convert_code_system(a2, to)
    except LookupError:
        pass

    catalog = _pycountry_catalog()
    a2 = catalog.get(key)
    if a2:
        return _convert_code_system(a2, to)

    # 4) Fuzzy fallback over the catalog
    if fuzzy:
        match = process.extractOne(key, list(catalog.keys()), scorer=fuzz.WRatio)
        if match:
            best_name, score, _ = match
            if score >= fuzzy_threshold:
                logger.debug("Fuzzy country match %r -> %r (score %.1f)", s, best_name, score)
                return _convert_code_system(catalog[best_name], to)

    return None


def resolve_countries(
    names: Iterable[str],
    native_names: Optional[Mapping[str, str]] = None,
    to: str = "ISO2",
    *,
    fuzzy: bool = True,
    fuzzy_threshold: int = 85,
) -> List[Optional[str]]:
    """Vectorized convenience wrapper."""
    return [
        resolve_country(n, native_names, to=to, fuzzy=fuzzy, fuzzy_threshold=fuzzy_threshold)
        for n in names
    ]


__all__ = [
    "resolve_country",
    "resolve_countries",
]
