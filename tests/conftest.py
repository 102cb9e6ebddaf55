"""Shared test fixtures and utilities for neardupe tests."""

from typing import Dict, List, Optional, Sequence

import pytest

from neardupe import NearDupeHashOptions, near_dupe_hashes


def hashes_for(
    components: Dict[str, str],
    options: NearDupeHashOptions,
    languages: Optional[Sequence[str]] = None,
) -> List[str]:
    """Run near_dupe_hashes on a {label: value} dict, in dict order."""
    return near_dupe_hashes(list(components.keys()), list(components.values()), options, languages)


@pytest.fixture(autouse=True)
def loaded_resources():
    """Make sure every test starts with the bundled resources loaded.

    Lifecycle tests call shutdown(); this puts the store back for the next test.
    """
    from neardupe import initialize
    initialize()
    yield


@pytest.fixture
def resources():
    """The loaded LinguisticResources bundle."""
    from neardupe.resources.resourceapi import get_resources
    return get_resources()


@pytest.fixture
def address_only_options():
    """Address + city + postcode keys, no name, no geohash."""
    return NearDupeHashOptions(
        with_name=False,
        with_address=True,
        with_unit=False,
        with_city_or_equivalent=True,
        with_small_containing_boundaries=False,
        with_postal_code=True,
        with_latlon=False,
        name_and_address_keys=False,
        name_only_keys=False,
        address_only_keys=True,
    )


@pytest.fixture
def sample_addresses():
    """Pairs of differently written addresses that describe the same place."""
    return [
        (
            {"house_number": "123", "road": "Main St", "unit": "#3", "city": "Anytown",
             "state": "CA", "postcode": "12345"},
            {"house_number": "123", "road": "Main Street", "unit": "Unit 3", "city": "Anytown",
             "state": "California", "postcode": "12345"},
        ),
        (
            {"house_number": "350", "road": "Fifth Avenue", "city": "New York", "postcode": "10118"},
            {"house_number": "350", "road": "5th Ave.", "city": "new york", "postcode": "10118"},
        ),
    ]


@pytest.fixture
def sample_countries():
    """Country values in several languages and their ISO2 codes."""
    return {
        "USA": "US",
        "United States": "US",
        "France": "FR",
        "Deutschland": "DE",
        "Belgique": "BE",
        "日本": "JP",
        "Россия": "RU",
        "대한민국": "KR",
    }
