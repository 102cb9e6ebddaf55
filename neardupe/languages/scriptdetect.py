"""Unicode script detection.

Scripts are read from Unicode character names, which start with the script
("LATIN SMALL LETTER A", "CJK UNIFIED IDEOGRAPH-6771", "HANGUL SYLLABLE GA").
Only letters count; digits, punctuation and spaces have no script.
"""

import unicodedata
from collections import Counter
from typing import Iterable, Optional

# Character name prefix -> script. Longer prefixes first.
_SCRIPT_PREFIXES = (
    ("CJK UNIFIED IDEOGRAPH", "Han"),
    ("CJK COMPATIBILITY IDEOGRAPH", "Han"),
    ("IDEOGRAPHIC", "Han"),
    ("HALFWIDTH KATAKANA", "Katakana"),
    ("KATAKANA", "Katakana"),
    ("HIRAGANA", "Hiragana"),
    ("HANGUL", "Hangul"),
    ("HALFWIDTH HANGUL", "Hangul"),
    ("LATIN", "Latin"),
    ("CYRILLIC", "Cyrillic"),
    ("GREEK", "Greek"),
    ("ARABIC", "Arabic"),
    ("HEBREW", "Hebrew"),
    ("THAI", "Thai"),
    ("DEVANAGARI", "Devanagari"),
    ("GEORGIAN", "Georgian"),
    ("ARMENIAN", "Armenian"),
)

KANA_SCRIPTS = frozenset({"Hiragana", "Katakana"})


def char_script(c: str) -> Optional[str]:
    """Script of a single letter, or None for non-letters and unknown scripts.

    Examples:
        >>> char_script("a"), char_script("東"), char_script("の"), char_script("1")
        ('Latin', 'Han', 'Hiragana', None)
    """
    if not c.isalpha():
        return None
    name = unicodedata.name(c, "")
    for prefix, script in _SCRIPT_PREFIXES:
        if name.startswith(prefix):
            return script
    return None


def script_counts(text: str) -> Counter:
    """Letter count per script, in first-seen order."""
    counts: Counter = Counter()
    for c in text:
        script = char_script(c)
        if script is not None:
            counts[script] += 1
    return counts


def dominant_script(text: str) -> Optional[str]:
    """Script with the most letters in ``text``; ties go to the first seen.

    Examples:
        >>> dominant_script("渋谷区")
        'Han'

        >>> dominant_script("Main St")
        'Latin'

        >>> dominant_script("123") is None
        True
    """
    counts = script_counts(text)
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def has_non_latin_letters(text: str) -> bool:
    return any(script not in (None, "Latin") for script in map(char_script, text))


def scripts_present(texts: Iterable[str]) -> Counter:
    total: Counter = Counter()
    for text in texts:
        total.update(script_counts(text))
    return total


__all__ = [
    "KANA_SCRIPTS",
    "char_script",
    "script_counts",
    "dominant_script",
    "has_non_latin_letters",
    "scripts_present",
]
