"""Script and language detection."""

from neardupe.languages.languagedetect import (
    DEFAULT_LANGUAGE,
    LabeledComponent,
    detect_languages,
    lexical_scores,
)
from neardupe.languages.scriptdetect import (
    char_script,
    dominant_script,
    has_non_latin_letters,
)

__all__ = [
    "DEFAULT_LANGUAGE",
    "LabeledComponent",
    "detect_languages",
    "lexical_scores",
    "char_script",
    "dominant_script",
    "has_non_latin_letters",
]
