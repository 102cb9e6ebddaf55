"""Country resolution API.

Thin wrapper around fuzzycountry that plugs in the native country names from
the linguistic resource store, so endonyms like "日本" or "België" resolve
the same way the language detector resolves them.
"""

from typing import Iterable, List, Optional

from neardupe.countries.fuzzycountry import resolve_country
from neardupe.resources.resourceapi import locked_resources


def country_identifier(name: str) -> Optional[str]:
    """Get the ISO 3166-1 alpha-2 code for a country value.

    Args:
        name: Country name or code in any language (e.g., "USA", "Deutschland", "日本")

    Returns:
        ISO 3166-1 alpha-2 code (e.g., "US") or None if not recognized

    Examples:
        >>> country_identifier("United States")
        'US'

        >>> country_identifier("Belgique")
        'BE'

        >>> country_identifier("日本")
        'JP'

        >>> country_identifier("Untied States")  # Typo
        'US'
    """
    with locked_resources() as resources:
        return resolve_country(name, resources.country_names)


def country_identifiers(names: Iterable[str]) -> List[Optional[str]]:
    """Batch resolve country values to ISO 3166-1 alpha-2 codes.

    Examples:
        >>> country_identifiers(["USA", "Nederland", "россия"])
        ['US', 'NL', 'RU']
    """
    with locked_resources() as resources:
        return [resolve_country(n, resources.country_names) for n in names]


__all__ = [
    "country_identifier",
    "country_identifiers",
]
