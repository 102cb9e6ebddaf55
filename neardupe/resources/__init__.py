"""Linguistic resource store: per-language dictionaries and lifecycle."""

from neardupe.resources.resourceapi import (
    initialize,
    shutdown,
    is_initialized,
    get_resources,
    locked_resources,
)
from neardupe.resources.resourcestore import (
    SUPPORTED_LANGUAGES,
    LanguageResources,
    LinguisticResources,
    load_resources,
)

__all__ = [
    "initialize",
    "shutdown",
    "is_initialized",
    "get_resources",
    "locked_resources",
    "SUPPORTED_LANGUAGES",
    "LanguageResources",
    "LinguisticResources",
    "load_resources",
]
