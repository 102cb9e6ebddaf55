"""
String Normalization
--------------------

normalize_string() turns one raw value into an ordered set of normalized
variants. Each stage maps every current variant to one or more variants and
is gated by its NormalizeOptions flag:

  1. validate (malformed text -> [])
  2. Unicode form (NFKC or NFC), quote and dash folding, separator removal
  3. transliteration (Latin rendering appended after the original)
  4. accents (strip, or append the accent-free form)
  5. lowercase, whitespace trimming
  6. word / numeric hyphens
  7. alpha / numeric splitting
  8. final and acronym periods
  9. apostrophes and English possessives
 10. spelled numbers and Roman numerals

The least destructive form always comes first, so re-normalizing any
variant returns it as the first element. The rest of the list can differ
("6th" gives two variants, "6 th" gives one).

Examples:
  >>> normalize_string("Main St.")
  ['main st']

  >>> normalize_string("IV")
  ['iv', '4']

  >>> normalize_string("McDonald's")
  ['mcdonalds', 'mcdonald']

  >>> normalize_string("東京")
  ['東京', 'dongjing']
"""

import logging
import re
import unicodedata
from typing import Callable, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from neardupe.languages.scriptdetect import char_script, has_non_latin_letters
from neardupe.normalize.normalizeoptions import (
    MAX_VARIANTS_PER_FIELD,
    NormalizeOptions,
    default_normalize_options,
)
from neardupe.resources.resourceapi import get_resources
from neardupe.resources.resourcestore import LinguisticResources
from neardupe.utils.normalize import (
    coerce_text,
    collapse_whitespace,
    fold_for_lookup,
    has_combining_accents,
    latin_ascii,
    normalize_dashes,
    normalize_quotes,
    remove_separators,
    strip_accents,
    unique_everseen,
)

try:
    from pypinyin import Style, lazy_pinyin
except ImportError as e:
    raise ImportError("pypinyin not installed. pip install pypinyin") from e

try:
    from unidecode import unidecode
except ImportError as e:
    raise ImportError("Unidecode not installed. pip install Unidecode") from e


logger = logging.getLogger(__name__)

_ROMAN_RE = re.compile(r"^M{0,3}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$")
_ROMAN_VALUES = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}
_TOKEN_EDGE_RE = re.compile(r"^\W+|\W+$")
_DIGITS_LETTERS_RE = re.compile(r"^(\d+)([^\W\d_]+)$")
_LETTERS_DIGITS_RE = re.compile(r"^([^\W\d_]+)(\d+)$")
_ACRONYM_RE = re.compile(r"^(?:[^\W\d_]\.){2,}[^\W\d_]?\.?$")
_POSSESSIVE_RE = re.compile(r"'s\b")

Stage = Callable[[str], List[str]]


# ---- Roman numerals ----

def roman_to_int(token: str) -> Optional[int]:
    """Value of an upper-case Roman numeral, or None.

    Examples:
        >>> roman_to_int("XIV")
        14

        >>> roman_to_int("IIII") is None
        True
    """
    if not token or not _ROMAN_RE.match(token):
        return None
    total = 0
    for i, ch in enumerate(token):
        value = _ROMAN_VALUES[ch]
        if i + 1 < len(token) and _ROMAN_VALUES[token[i + 1]] > value:
            total -= value
        else:
            total += value
    return total


def _roman_candidates(text: str) -> FrozenSet[str]:
    """Tokens written as upper-case Roman numerals in the raw input."""
    found = set()
    for raw in text.split():
        token = _TOKEN_EDGE_RE.sub("", raw)
        if token.isupper() and roman_to_int(token) is not None:
            found.add(token)
    return frozenset(found)


# ---- Transliteration ----

def _pinyin(run: str) -> str:
    syllables = lazy_pinyin(run, style=Style.NORMAL, errors=lambda chars: unidecode(chars).lower().split())
    return "".join(syllables)


def transliterate(text: str) -> str:
    """Latin rendering of non-Latin letters; Latin text passes through.

    Han runs become toneless pinyin joined without spaces, every other script
    goes through unidecode.

    Examples:
        >>> transliterate("丁目")
        'dingmu'

        >>> transliterate("Москва")
        'Moskva'
    """
    out: List[str] = []
    han_run: List[str] = []
    for c in text:
        if char_script(c) == "Han":
            han_run.append(c)
            continue
        if han_run:
            out.append(_pinyin("".join(han_run)))
            han_run = []
        script = char_script(c)
        out.append(c if script in (None, "Latin") else unidecode(c))
    if han_run:
        out.append(_pinyin("".join(han_run)))
    return "".join(out)


# ---- Stages ----

def _tokens_map(v: str, fn: Callable[[str], str]) -> str:
    return " ".join(fn(token) for token in v.split(" "))


def _unicode_stage(options: NormalizeOptions) -> Stage:
    form = "NFKC" if options.decompose else "NFC"

    def stage(v: str) -> List[str]:
        v = unicodedata.normalize(form, v)
        return [remove_separators(normalize_dashes(normalize_quotes(v)))]
    return stage


def _transliterate_stage(options: NormalizeOptions) -> Stage:
    def stage(v: str) -> List[str]:
        if has_non_latin_letters(v):
            return [v, transliterate(v)]
        return [v]
    return stage


def _accent_stage(options: NormalizeOptions) -> Stage:
    def stage(v: str) -> List[str]:
        if options.strip_accents:
            out = [strip_accents(v)]
        elif has_combining_accents(v):
            out = [v, strip_accents(v)]
        else:
            out = [v]
        if options.latin_ascii:
            out = [latin_ascii(x) for x in out]
        return out
    return stage


def _case_stage(options: NormalizeOptions) -> Stage:
    def stage(v: str) -> List[str]:
        if options.lowercase:
            v = v.lower()
        if options.trim_string:
            v = collapse_whitespace(v)
        return [v]
    return stage


def _hyphen_choices(replace: bool, delete: bool) -> List[str]:
    choices = []
    if replace:
        choices.append(" ")
    if delete:
        choices.append("")
    return choices or ["-"]


def _hyphen_stage(options: NormalizeOptions) -> Stage:
    word_choices = _hyphen_choices(options.replace_word_hyphens, options.delete_word_hyphens)
    numeric_choices = _hyphen_choices(options.replace_numeric_hyphens, options.delete_numeric_hyphens)

    def stage(v: str) -> List[str]:
        if "-" not in v:
            return [v]
        out = []
        for word in word_choices:
            for numeric in numeric_choices:
                def sub(m: re.Match, word=word, numeric=numeric) -> str:
                    i = m.start()
                    before = v[i - 1] if i > 0 else ""
                    after = v[i + 1] if i + 1 < len(v) else ""
                    return numeric if (before.isdigit() or after.isdigit()) else word
                result = re.sub("-", sub, v)
                out.append(collapse_whitespace(result) if options.trim_string else result)
        return out
    return stage


def _split_alpha_numeric_stage(options: NormalizeOptions, ordinal_suffixes: FrozenSet[str]) -> Stage:
    def split(token: str) -> str:
        m = _DIGITS_LETTERS_RE.match(token)
        if m:
            digits, letters = m.groups()
            joiner = " " if fold_for_lookup(letters) in ordinal_suffixes else "-"
            return f"{digits}{joiner}{letters}"
        m = _LETTERS_DIGITS_RE.match(token)
        if m:
            return f"{m.group(1)}-{m.group(2)}"
        return token

    def stage(v: str) -> List[str]:
        return [v, _tokens_map(v, split)]
    return stage


def _period_stage(options: NormalizeOptions) -> Stage:
    def fix(token: str) -> str:
        if options.delete_acronym_periods and _ACRONYM_RE.match(token):
            token = token.replace(".", "")
        if options.delete_final_periods:
            token = token.rstrip(".")
        return token

    def stage(v: str) -> List[str]:
        if "." not in v:
            return [v]
        result = _tokens_map(v, fix)
        return [collapse_whitespace(result) if options.trim_string else result]
    return stage


def _apostrophe_stage(options: NormalizeOptions, english: bool) -> Stage:
    def stage(v: str) -> List[str]:
        if "'" not in v:
            return [v]
        out = []
        if options.delete_apostrophes:
            out.append(v.replace("'", ""))
        if options.drop_english_possessives and english:
            out.append(_POSSESSIVE_RE.sub("", v))
        return out or [v]
    return stage


def _numex_stage(options: NormalizeOptions, numbers: dict, ordinals: dict) -> Stage:
    def stage(v: str) -> List[str]:
        tokens = v.split(" ")
        out: List[str] = []
        changed = False
        i = 0
        while i < len(tokens):
            key = fold_for_lookup(tokens[i])
            if key in ordinals:
                out.append(ordinals[key])
                changed = True
            elif key in numbers:
                value = int(numbers[key])
                # "twenty one" -> 21
                nxt = fold_for_lookup(tokens[i + 1]) if i + 1 < len(tokens) else ""
                if 20 <= value < 100 and value % 10 == 0 and nxt in numbers and 0 < int(numbers[nxt]) < 10:
                    value += int(numbers[nxt])
                    i += 1
                out.append(str(value))
                changed = True
            else:
                out.append(tokens[i])
            i += 1
        return [" ".join(out) if changed else v]
    return stage


def _roman_stage(options: NormalizeOptions, candidates: FrozenSet[str]) -> Stage:
    def stage(v: str) -> List[str]:
        tokens = v.split(" ")
        converted = [
            str(roman_to_int(t.upper())) if t.upper() in candidates else t
            for t in tokens
        ]
        if converted == tokens:
            return [v]
        return [v, " ".join(converted)]
    return stage


# ---- Pipeline ----

def _working_languages(options: NormalizeOptions, languages: Optional[Sequence[str]]) -> Tuple[str, ...]:
    langs = tuple(languages) if languages else tuple(options.languages)
    return langs or ("en",)


def _number_tables(resources: LinguisticResources, languages: Iterable[str]) -> Tuple[dict, dict, FrozenSet[str]]:
    numbers: dict = {}
    ordinals: dict = {}
    suffixes = set()
    for code in languages:
        lang = resources.language(code)
        if lang is None:
            continue
        for word, value in lang.numbers.items():
            numbers.setdefault(word, value)
        for word, value in lang.ordinals.items():
            ordinals.setdefault(word, value)
        suffixes.update(lang.ordinal_suffixes)
    return numbers, ordinals, frozenset(suffixes)


def build_stages(
    options: NormalizeOptions,
    languages: Sequence[str],
    resources: LinguisticResources,
    raw_text: str = "",
) -> List[Stage]:
    """Assemble the enabled stages in pipeline order."""
    numbers, ordinals, suffixes = _number_tables(resources, languages)

    stages: List[Stage] = [_unicode_stage(options)]
    if options.transliterate:
        stages.append(_transliterate_stage(options))
    stages.append(_accent_stage(options))
    stages.append(_case_stage(options))
    stages.append(_hyphen_stage(options))
    if options.split_alpha_from_numeric:
        stages.append(_split_alpha_numeric_stage(options, suffixes))
    if options.delete_final_periods or options.delete_acronym_periods:
        stages.append(_period_stage(options))
    stages.append(_apostrophe_stage(options, "en" in languages))
    if options.expand_numex:
        stages.append(_numex_stage(options, numbers, ordinals))
    if options.roman_numerals:
        candidates = _roman_candidates(unicodedata.normalize("NFKC", raw_text))
        if candidates:
            stages.append(_roman_stage(options, candidates))
    return stages


def normalize_string(
    text: Union[str, bytes],
    options: Optional[NormalizeOptions] = None,
    languages: Optional[Sequence[str]] = None,
    resources: Optional[LinguisticResources] = None,
) -> List[str]:
    """Normalize one value into an ordered, duplicate-free list of variants.

    Args:
        text: Raw value (str or UTF-8 bytes)
        options: NormalizeOptions (defaults when None)
        languages: Working languages; overrides options.languages. English
                   is assumed when neither gives any.
        resources: Loaded LinguisticResources; fetched from the resource
                   store when None

    Returns:
        Variants, least destructive first, at most MAX_VARIANTS_PER_FIELD.
        Empty for malformed or blank input.
    """
    s = coerce_text(text)
    if s is None or not s.strip():
        return []

    if options is None:
        options = default_normalize_options()
    if resources is None:
        resources = get_resources()

    langs = _working_languages(options, languages)
    variants = [s]
    for stage in build_stages(options, langs, resources, raw_text=s):
        variants = unique_everseen(out for v in variants for out in stage(v))
        if not variants:
            return []
    return unique_everseen(variants, limit=MAX_VARIANTS_PER_FIELD)


__all__ = [
    "normalize_string",
    "transliterate",
    "roman_to_int",
    "build_stages",
]
