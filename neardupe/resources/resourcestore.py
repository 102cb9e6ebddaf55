"""Linguistic Resource Store
--------------------------

Loads the per-language dictionaries, the country -> language table and the
script -> language defaults from the YAML files in ``resources/data/`` into one
immutable bundle.

Every dictionary word is stored in its lookup form (lowercase, accent-free,
Latin-ASCII) so that tokens can be matched whatever accent or case policy the
normalizer applied. Canonical expansions keep their natural spelling and are
folded on output when the token being expanded was folded.

API:
  load_resources(data_dir=None) -> LinguisticResources   (cached)
  SUPPORTED_LANGUAGES
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

import yaml

from neardupe.errors import ResourceLoadError
from neardupe.utils.dataloader import find_data_file, format_not_found_error, load_yaml_file
from neardupe.utils.normalize import fold_for_lookup


logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("en", "fr", "de", "es", "it", "nl", "pt", "ru", "zh", "ja", "ko")


def _empty_mapping() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True)
class LanguageResources:
    """Dictionaries for one language, all keyed by lookup form."""

    code: str
    name: str
    scripts: Tuple[str, ...]
    street_types: Mapping[str, Tuple[str, ...]] = field(default_factory=_empty_mapping)
    compound_suffixes: Mapping[str, Tuple[str, ...]] = field(default_factory=_empty_mapping)
    titles: Mapping[str, Tuple[str, ...]] = field(default_factory=_empty_mapping)
    directionals: Mapping[str, Tuple[str, ...]] = field(default_factory=_empty_mapping)
    unit_types: FrozenSet[str] = frozenset()
    stopwords: FrozenSet[str] = frozenset()
    name_descriptors: FrozenSet[str] = frozenset()
    ordinal_suffixes: Tuple[str, ...] = ()
    numbers: Mapping[str, str] = field(default_factory=_empty_mapping)
    ordinals: Mapping[str, str] = field(default_factory=_empty_mapping)
    place_names: FrozenSet[str] = frozenset()
    distinctive_characters: FrozenSet[str] = frozenset()
    # Derived: lookup form of an abbreviation or canonical word -> canonical words
    expansions: Mapping[str, Tuple[str, ...]] = field(default_factory=_empty_mapping)
    # Derived: lookup forms of street types and their abbreviations
    generic_words: FrozenSet[str] = frozenset()

    def writes_script(self, script: str) -> bool:
        return script in self.scripts

    def is_street_type(self, token: str) -> bool:
        return fold_for_lookup(token) in self.generic_words

    def is_stopword(self, token: str) -> bool:
        return fold_for_lookup(token) in self.stopwords


@dataclass(frozen=True)
class LinguisticResources:
    """Everything the pipeline reads, loaded once per process."""

    languages: Mapping[str, LanguageResources]
    country_languages: Mapping[str, Tuple[str, ...]]
    country_names: Mapping[str, str]
    script_languages: Mapping[str, str]
    data_dir: Optional[Path] = field(default=None, compare=False)

    def language(self, code: str) -> Optional[LanguageResources]:
        return self.languages.get(code)

    def language_scripts(self, code: str) -> Tuple[str, ...]:
        """Scripts a language is written in, falling back to the script defaults."""
        lang = self.languages.get(code)
        if lang is not None:
            return lang.scripts
        return tuple(s for s, c in self.script_languages.items() if c == code)

    def latin_languages(self) -> List[str]:
        return [code for code, lang in self.languages.items() if lang.writes_script("Latin")]


# ---- YAML -> value objects ----

def _words(data: dict, key: str, path: Path) -> FrozenSet[str]:
    values = data.get(key) or []
    if not isinstance(values, list):
        raise ResourceLoadError(f"{path}: '{key}' must be a list")
    return frozenset(fold_for_lookup(str(v)) for v in values)


def _phrase_table(data: dict, key: str, path: Path) -> Dict[str, Tuple[str, ...]]:
    """canonical -> abbreviations, canonical keeps its spelling."""
    table = data.get(key) or {}
    if not isinstance(table, dict):
        raise ResourceLoadError(f"{path}: '{key}' must be a mapping of canonical -> abbreviations")
    out: Dict[str, Tuple[str, ...]] = {}
    for canonical, abbreviations in table.items():
        if abbreviations is None:
            abbreviations = []
        if not isinstance(abbreviations, list):
            raise ResourceLoadError(f"{path}: abbreviations of '{canonical}' must be a list")
        out[str(canonical).lower()] = tuple(fold_for_lookup(str(a)) for a in abbreviations)
    return out


def _number_table(data: dict, key: str, path: Path) -> Dict[str, str]:
    table = data.get(key) or {}
    if not isinstance(table, dict):
        raise ResourceLoadError(f"{path}: '{key}' must be a mapping")
    return {fold_for_lookup(str(word)): str(value) for word, value in table.items()}


def _index_expansions(tables: Iterable[Mapping[str, Tuple[str, ...]]]) -> Dict[str, Tuple[str, ...]]:
    index: Dict[str, set] = {}
    for table in tables:
        for canonical, abbreviations in table.items():
            folded = fold_for_lookup(canonical)
            index.setdefault(folded, set()).add(canonical)
            for abbreviation in abbreviations:
                index.setdefault(abbreviation, set()).add(canonical)
    # A canonical word expands to itself only; an abbreviation to every
    # canonical it abbreviates, alphabetically for a stable order.
    return {
        key: (tuple(c for c in canonicals if fold_for_lookup(c) == key) or tuple(sorted(canonicals)))
        for key, canonicals in index.items()
    }


def _build_language(data: dict, path: Path) -> LanguageResources:
    code = data.get("language")
    if not code or not isinstance(code, str):
        raise ResourceLoadError(f"{path}: missing 'language' code")
    scripts = data.get("scripts") or []
    if not scripts:
        raise ResourceLoadError(f"{path}: missing 'scripts'")

    street_types = _phrase_table(data, "street_types", path)
    titles = _phrase_table(data, "titles", path)
    directionals = _phrase_table(data, "directionals", path)
    compound_suffixes = _phrase_table(data, "compound_suffixes", path)

    generic = set()
    for canonical, abbreviations in street_types.items():
        generic.add(fold_for_lookup(canonical))
        generic.update(abbreviations)

    return LanguageResources(
        code=code,
        name=str(data.get("name", code)),
        scripts=tuple(str(s) for s in scripts),
        street_types=MappingProxyType(street_types),
        compound_suffixes=MappingProxyType(compound_suffixes),
        titles=MappingProxyType(titles),
        directionals=MappingProxyType(directionals),
        unit_types=_words(data, "unit_types", path),
        stopwords=_words(data, "stopwords", path),
        name_descriptors=_words(data, "name_descriptors", path),
        ordinal_suffixes=tuple(fold_for_lookup(str(s)) for s in (data.get("ordinal_suffixes") or [])),
        numbers=MappingProxyType(_number_table(data, "numbers", path)),
        ordinals=MappingProxyType(_number_table(data, "ordinals", path)),
        place_names=_words(data, "place_names", path),
        distinctive_characters=frozenset(str(c) for c in (data.get("distinctive_characters") or [])),
        expansions=MappingProxyType(_index_expansions([street_types, titles, directionals])),
        generic_words=frozenset(generic),
    )


def _build_countries(data: dict, path: Path) -> Tuple[Dict[str, Tuple[str, ...]], Dict[str, str]]:
    countries = data.get("countries")
    if not isinstance(countries, dict) or not countries:
        raise ResourceLoadError(f"{path}: 'countries' must be a non-empty mapping")

    languages: Dict[str, Tuple[str, ...]] = {}
    names: Dict[str, str] = {}
    for iso2, entry in countries.items():
        if not isinstance(entry, dict) or not entry.get("languages"):
            raise ResourceLoadError(f"{path}: country '{iso2}' needs a 'languages' list")
        iso2 = str(iso2).upper()
        languages[iso2] = tuple(str(lang) for lang in entry["languages"])
        names[iso2.lower()] = iso2
        for name in entry.get("names") or []:
            names[fold_for_lookup(str(name))] = iso2
    return languages, names


def _locate(filename: str, data_dir: Optional[Path]) -> Path:
    path = find_data_file(
        module_file=__file__,
        subdirectory="resources",
        filenames=[filename],
        module_local_data=True,
        data_dir=data_dir,
    )
    if path is None:
        searched = [("Module-local data", Path(__file__).parent / "data")]
        if data_dir is not None:
            searched = [("Explicit data directory", Path(data_dir))]
        raise ResourceLoadError(
            format_not_found_error(
                subdirectory="resources",
                searched_locations=searched,
                fix_instructions=[
                    f"Restore {filename} from the neardupe distribution.",
                    "Or pass data_dir= pointing at a directory holding the resource YAML files.",
                ],
            )
        )
    return path


def _read(filename: str, data_dir: Optional[Path]) -> Tuple[dict, Path]:
    path = _locate(filename, data_dir)
    try:
        return load_yaml_file(path), path
    except (yaml.YAMLError, ValueError, OSError) as e:
        raise ResourceLoadError(f"Corrupt resource file {path}: {e}") from e


@lru_cache(maxsize=1)
def load_resources(data_dir: Optional[Path] = None) -> LinguisticResources:
    """Load every linguistic resource into an immutable bundle.

    Uses LRU cache so the YAML files are parsed once per process; call
    ``load_resources.cache_clear()`` to release them.

    Args:
        data_dir: Optional directory holding the YAML files. Defaults to the
                  package's resources/data/.

    Returns:
        LinguisticResources

    Raises:
        ResourceLoadError: A file is missing, unparsable or malformed.
    """
    languages: Dict[str, LanguageResources] = {}
    for code in SUPPORTED_LANGUAGES:
        data, path = _read(f"{code}.yaml", data_dir)
        lang = _build_language(data, path)
        if lang.code != code:
            raise ResourceLoadError(f"{path}: declares language '{lang.code}', expected '{code}'")
        languages[code] = lang

    data, path = _read("countries.yaml", data_dir)
    country_languages, country_names = _build_countries(data, path)

    data, path = _read("scripts.yaml", data_dir)
    script_languages = data.get("default_languages")
    if not isinstance(script_languages, dict) or not script_languages:
        raise ResourceLoadError(f"{path}: 'default_languages' must be a non-empty mapping")

    logger.info(
        "Loaded linguistic resources: %d languages, %d countries",
        len(languages), len(country_languages),
    )
    return LinguisticResources(
        languages=MappingProxyType(languages),
        country_languages=MappingProxyType(country_languages),
        country_names=MappingProxyType(country_names),
        script_languages=MappingProxyType({str(k): str(v) for k, v in script_languages.items()}),
        data_dir=data_dir,
    )


__all__ = [
    "SUPPORTED_LANGUAGES",
    "LanguageResources",
    "LinguisticResources",
    "load_resources",
]
