"""Tests for near_dupe_hashes address keys."""

import warnings

import pytest

from neardupe import NearDupeHashOptions, near_dupe_hashes
from conftest import hashes_for


GEOHASH_CELLS = ["dr5ru6", "dr5ru4", "dr5rud", "dr5ru3", "dr5ru1", "dr5ru9", "dr5ru7", "dr5ru5", "dr5rue"]


class TestAddressShapes:
    """Key lists for complete records, detected languages"""

    def test_address_with_unit(self):
        """Unit designators drop out and the unit joins the address part"""
        options = NearDupeHashOptions(
            with_name=False, with_unit=True, with_small_containing_boundaries=False,
            name_and_address_keys=False, address_only_keys=True,
        )
        keys = hashes_for({
            "house_number": "23", "road": "School St", "unit": "Apt 3",
            "city": "Brunswick", "state": "ME", "postcode": "04011",
        }, options)
        assert keys == [
            "auct|school saint|23|3|brunswick",
            "auct|school street|23|3|brunswick",
            "auct|school|23|3|brunswick",
            "aupc|school saint|23|3|04011",
            "aupc|school street|23|3|04011",
            "aupc|school|23|3|04011",
        ]

    def test_address_without_unit(self, address_only_options):
        """'St' expands to both saint and street"""
        keys = hashes_for({
            "house_number": "42", "road": "Main St", "city": "Portland",
            "state": "OR", "postcode": "97201",
        }, address_only_options)
        assert keys == [
            "act|main saint|42|portland",
            "act|main street|42|portland",
            "act|main|42|portland",
            "apc|main saint|42|97201",
            "apc|main street|42|97201",
            "apc|main|42|97201",
        ]

    def test_address_with_name(self):
        """Name hashes are the outer loop, road variants the inner one"""
        options = NearDupeHashOptions(
            with_name=True, with_address=True, with_small_containing_boundaries=False,
            name_and_address_keys=True,
        )
        keys = hashes_for({
            "house": "Central Park", "house_number": "1", "road": "Park Ave",
            "city": "New York", "state": "NY", "postcode": "10022",
        }, options)

        name_codes = ["SNTR", "NTRL", "cent", "entr", "ntra", "tral", "KP"]
        roads = ["park avenue", "park"]
        expected = [f"nact|{n}|{r}|1|new york" for n in name_codes for r in roads]
        expected += [f"napc|{n}|{r}|1|10022" for n in name_codes for r in roads]
        assert keys == expected

    def test_address_with_geohash(self):
        """Geohash shape comes first, then the city shape"""
        options = NearDupeHashOptions(
            with_name=False, with_postal_code=False, with_small_containing_boundaries=False,
            with_latlon=True, latitude=40.7484, longitude=-73.9857, geohash_precision=6,
            name_and_address_keys=False, address_only_keys=True,
        )
        keys = hashes_for({
            "house_number": "350", "road": "5th Ave", "city": "New York",
            "state": "NY", "postcode": "10118",
        }, options)

        roads = ["5th avenue", "5 avenue", "5th", "5"]
        expected = [f"agh|{r}|350|{cell}" for r in roads for cell in GEOHASH_CELLS]
        expected += [f"act|{r}|350|new york" for r in roads]
        assert keys == expected

    def test_invalid_coordinates_drop_geohash_shape_only(self):
        options = NearDupeHashOptions(
            with_name=False, with_postal_code=False, with_latlon=True,
            latitude=95.0, longitude=10.0, address_only_keys=True,
        )
        keys = hashes_for({"house_number": "350", "road": "5th Ave", "city": "New York"}, options, ["en"])
        assert keys
        assert all(k.startswith("act|") for k in keys)

    def test_small_containing_boundary(self):
        options = NearDupeHashOptions(
            with_name=False, with_city_or_equivalent=False, with_postal_code=False,
            with_small_containing_boundaries=True, address_only_keys=True,
        )
        keys = hashes_for({
            "house_number": "7", "road": "Harbour Rd", "island": "Nantucket",
        }, options, ["en"])
        assert keys == [
            "acb|harbour road|7|nantucket",
            "acb|harbour|7|nantucket",
        ]

    def test_city_or_equivalent_union(self, address_only_options):
        """city, city_district and suburb all feed the ct role, in that order"""
        keys = hashes_for({
            "suburb": "Brooklyn Heights", "house_number": "5", "road": "Main St",
            "city": "New York",
        }, address_only_options, ["en"])
        assert keys[:2] == [
            "act|main saint|5|new york",
            "act|main saint|5|brooklyn heights",
        ]


class TestExplicitLanguages:
    """Key lists when the caller gives the working languages"""

    def test_english(self, address_only_options):
        keys = hashes_for({
            "house_number": "123", "road": "Main St", "city": "New York",
            "state": "NY", "postcode": "10001",
        }, address_only_options, ["en"])
        assert keys == [
            "act|main saint|123|new york",
            "act|main street|123|new york",
            "act|main|123|new york",
            "apc|main saint|123|10001",
            "apc|main street|123|10001",
            "apc|main|123|10001",
        ]

    def test_french(self, address_only_options):
        keys = hashes_for({
            "house_number": "15", "road": "Rue de la Paix", "city": "Paris", "postcode": "75002",
        }, address_only_options, ["fr"])
        assert keys == [
            "act|rue de la paix|15|paris",
            "act|paix|15|paris",
            "apc|rue de la paix|15|75002",
            "apc|paix|15|75002",
        ]

    def test_french_brussels(self, address_only_options):
        keys = hashes_for({
            "house_number": "10", "road": "Rue de la Loi", "city": "Bruxelles", "postcode": "1000",
        }, address_only_options, ["fr"])
        assert keys == [
            "act|rue de la loi|10|bruxelles",
            "act|loi|10|bruxelles",
            "apc|rue de la loi|10|1000",
            "apc|loi|10|1000",
        ]

    def test_japanese_with_transliteration(self, address_only_options):
        """Han values are followed by their pinyin rendering"""
        keys = hashes_for({
            "house_number": "1", "road": "丁目", "suburb": "渋谷", "city": "東京",
            "postcode": "150-0042",
        }, address_only_options, ["ja"])
        assert keys == [
            "act|丁目|1|東京",
            "act|丁目|1|dongjing",
            "act|丁目|1|渋谷",
            "act|丁目|1|segu",
            "act|dingmu|1|東京",
            "act|dingmu|1|dongjing",
            "act|dingmu|1|渋谷",
            "act|dingmu|1|segu",
            "apc|丁目|1|150-0042",
            "apc|dingmu|1|150-0042",
        ]

    def test_unknown_language_warns_and_detects(self, address_only_options):
        components = {"house_number": "42", "road": "Main St", "city": "Portland"}
        with pytest.warns(UserWarning, match="xx"):
            keys = hashes_for(components, address_only_options, ["xx"])
        assert keys == hashes_for(components, address_only_options, ["en"])

    def test_valid_languages_do_not_warn(self, address_only_options):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            hashes_for({"house_number": "42", "road": "Main St"}, address_only_options, ["en"])


class TestGuards:
    """Malformed input gives an empty list"""

    def test_arity_mismatch(self, address_only_options):
        assert near_dupe_hashes(["road", "city"], ["Main St"], address_only_options) == []

    def test_empty_input(self, address_only_options):
        assert near_dupe_hashes([], [], address_only_options) == []

    def test_invalid_encoding_drops_field(self, address_only_options):
        keys = near_dupe_hashes(
            ["house_number", "road", "city"],
            [b"42", b"\xff\xfe", b"Portland"],
            address_only_options,
            ["en"],
        )
        assert keys == []

    def test_no_road_no_address_keys(self, address_only_options):
        assert hashes_for({"house_number": "42", "city": "Portland"}, address_only_options, ["en"]) == []

    def test_default_options_without_name(self):
        """Defaults only ask for name + address keys"""
        assert hashes_for({"house_number": "42", "road": "Main St", "city": "Portland"},
                          NearDupeHashOptions(), ["en"]) == []


class TestProperties:
    """Determinism and key format"""

    def test_deterministic(self, address_only_options):
        components = {"house_number": "42", "road": "Main St", "city": "Portland", "postcode": "97201"}
        first = hashes_for(components, address_only_options)
        for _ in range(3):
            assert hashes_for(components, address_only_options) == first

    def test_label_order_independent(self, address_only_options):
        a = {"house_number": "42", "road": "Main St", "city": "Portland", "postcode": "97201"}
        b = dict(reversed(list(a.items())))
        assert hashes_for(a, address_only_options) == hashes_for(b, address_only_options)

    def test_no_separator_inside_fields(self, address_only_options):
        keys = hashes_for({
            "house_number": "4|2", "road": "Main | St", "city": "Port\tland",
        }, address_only_options, ["en"])
        assert keys
        for key in keys:
            prefix, *fields = key.split("|")
            assert prefix == "act"
            assert len(fields) == 3
            assert all(f and f == f.strip() for f in fields)

    def test_bytes_and_str_agree(self, address_only_options):
        labels = ["house_number", "road", "city"]
        values = ["42", "Main St", "Portland"]
        assert near_dupe_hashes(labels, [v.encode("utf-8") for v in values], address_only_options, ["en"]) == \
            near_dupe_hashes(labels, values, address_only_options, ["en"])
