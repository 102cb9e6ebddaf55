"""Country resolution used by language detection."""

from neardupe.countries.countryapi import (
    country_identifier,
    country_identifiers,
)
from neardupe.countries.fuzzycountry import (
    resolve_country,
    resolve_countries,
)

__all__ = [
    "country_identifier",
    "country_identifiers",
    "resolve_country",
    "resolve_countries",
]
