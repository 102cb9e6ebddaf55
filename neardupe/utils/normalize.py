"""Shared text normalization utilities.

This module provides the low-level string helpers used by the normalizer,
the variant expander and the phonetic encoder.
"""

import re
import unicodedata
from typing import Iterable, List, Optional, Union

try:
    from unidecode import unidecode
except ImportError as e:
    raise ImportError("Unidecode not installed. pip install Unidecode") from e


_WHITESPACE_RE = re.compile(r"\s+")
_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f|]")


def coerce_text(value: Union[str, bytes, None]) -> Optional[str]:
    """Return ``value`` as a well-formed str, or None when it is not valid UTF-8.

    Args:
        value: str or UTF-8 encoded bytes

    Returns:
        Decoded text, or None for malformed input (invalid byte sequences,
        lone surrogates, non-text objects)

    Examples:
        >>> coerce_text(b"Caf\\xc3\\xa9")
        'Café'

        >>> coerce_text(b"\\xff\\xfe") is None
        True

        >>> coerce_text("\\ud800") is None
        True
    """
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if not isinstance(value, str):
        return None

    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return value


def normalize_quotes(s: str) -> str:
    """Normalize various quote types to standard ASCII quotes.

    Examples:
        >>> normalize_quotes("McDonald’s")
        "McDonald's"
    """
    for ch in ("‘", "’", "‛", "ʼ", "′", "`", "´"):
        s = s.replace(ch, "'")
    for ch in ("“", "”", "„", "″"):
        s = s.replace(ch, '"')
    return s


def normalize_dashes(s: str) -> str:
    """Map the Unicode dash family onto ASCII hyphen-minus."""
    for ch in ("‐", "‑", "‒", "–", "—", "−", "﹣", "－"):
        s = s.replace(ch, "-")
    return s


def remove_separators(s: str) -> str:
    """Replace control characters and the key separator with spaces."""
    return _CONTROL_RE.sub(" ", s)


def collapse_whitespace(s: str) -> str:
    """Collapse runs of whitespace to one space and strip the ends."""
    return _WHITESPACE_RE.sub(" ", s).strip()


def strip_accents(s: str) -> str:
    """Remove combining marks, keeping the base letters.

    Examples:
        >>> strip_accents("Café Zürich")
        'Cafe Zurich'
    """
    decomposed = unicodedata.normalize("NFD", s)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return unicodedata.normalize("NFC", stripped)


def latin_ascii(s: str) -> str:
    """Fold Latin letters without an ASCII decomposition (ß, æ, ø, ł).

    Only characters from the Latin script are touched so that other scripts
    survive for the transliteration stage. Letters with a combining accent
    are left to strip_accents.

    Examples:
        >>> latin_ascii("Straße")
        'Strasse'

        >>> latin_ascii("Café")
        'Café'
    """
    out = []
    for c in s:
        if ord(c) < 128 or not unicodedata.name(c, "").startswith("LATIN") or has_combining_accents(c):
            out.append(c)
        else:
            out.append(unidecode(c))
    return "".join(out)


def fold_for_lookup(s: str) -> str:
    """Lowercase, accent-free, Latin-ASCII form used as a dictionary key.

    Examples:
        >>> fold_for_lookup("Allée")
        'allee'

        >>> fold_for_lookup("Straße")
        'strasse'
    """
    return latin_ascii(strip_accents(s.lower()))


def has_combining_accents(s: str) -> bool:
    """True when NFD decomposition of ``s`` contains combining marks."""
    return any(unicodedata.combining(c) for c in unicodedata.normalize("NFD", s))


def quadgrams_or_string(s: str, n: int = 4) -> List[str]:
    """Sliding windows of ``n`` characters, or ``[s]`` when shorter.

    Examples:
        >>> quadgrams_or_string("atlantic")
        ['atla', 'tlan', 'lant', 'anti', 'ntic']

        >>> quadgrams_or_string("new")
        ['new']
    """
    if not s:
        return []
    if len(s) < n:
        return [s]
    return [s[i:i + n] for i in range(len(s) - n + 1)]


def unique_everseen(values: Iterable[str], limit: Optional[int] = None) -> List[str]:
    """Drop empty and repeated strings, keeping first-seen order.

    Args:
        values: Candidate strings
        limit: Optional maximum number of strings to keep

    Examples:
        >>> unique_everseen(["main street", "", "main", "main street"])
        ['main street', 'main']
    """
    seen = set()
    out = []
    for v in values:
        if not v or v in seen:
            continue
        seen.add(v)
        out.append(v)
        if limit is not None and len(out) >= limit:
            break
    return out


__all__ = [
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
