"""Tests for dictionary-driven field expansion."""

from neardupe import MAX_VARIANTS_PER_FIELD, expand_field
from neardupe.expansion.variantexpand import expand_token, road_core


class TestRoadExpansion:
    """Street types, titles, ordinals and road cores"""

    def test_ambiguous_abbreviation(self):
        """'st' is both a street type and a title"""
        assert expand_field("Main St", "road", ["en"]) == ["main saint", "main street", "main"]

    def test_ordinal_stripped(self):
        assert expand_field("5th Ave", "road", ["en"]) == ["5th avenue", "5 avenue", "5th", "5"]

    def test_canonical_form_matches_abbreviation(self):
        assert set(expand_field("Main Street", "road", ["en"])) & set(expand_field("Main St.", "road", ["en"]))

    def test_spelled_ordinal_matches_digits(self):
        assert "5th avenue" in expand_field("Fifth Avenue", "road", ["en"])

    def test_french_core(self):
        assert expand_field("Rue de la Paix", "road", ["fr"]) == ["rue de la paix", "paix"]

    def test_german_compound(self):
        assert expand_field("Hauptstr.", "road", ["de"]) == ["hauptstrasse"]
        assert expand_field("Hauptstraße", "road", ["de"]) == ["hauptstrasse"]

    def test_several_languages(self):
        variants = expand_field("Rue de la Paix", "road", ["fr", "en"])
        assert variants[:2] == ["rue de la paix", "paix"]

    def test_no_core_without_street_type(self):
        assert expand_field("Broadway", "road", ["en"]) == ["broadway"]

    def test_capped(self):
        variants = expand_field("St St St St St St", "road", ["en"])
        assert len(variants) == MAX_VARIANTS_PER_FIELD
        assert variants[0] == "saint saint saint saint saint saint"


class TestUnitExpansion:
    """Unit designators are dropped"""

    def test_apartment(self):
        assert expand_field("Apt 3", "unit", ["en"]) == ["3"]

    def test_hash_sign(self):
        assert expand_field("#3", "unit", ["en"]) == ["3"]

    def test_unit_word(self):
        assert expand_field("Unit 3", "unit", ["en"]) == ["3"]

    def test_designator_only(self):
        assert expand_field("Suite", "unit", ["en"]) == ["suite"]


class TestOtherFields:
    """Fields without dictionaries only get normalized forms"""

    def test_city(self):
        assert expand_field("New York", "city", ["en"]) == ["new york"]

    def test_city_not_abbreviation_expanded(self):
        assert expand_field("St Louis", "city", ["en"]) == ["st louis"]

    def test_postcode_hyphen_kept(self):
        assert expand_field("150-0042", "postcode", ["ja"]) == ["150-0042"]

    def test_han_city(self):
        assert expand_field("東京", "city", ["ja"]) == ["東京", "dongjing"]

    def test_malformed(self):
        assert expand_field(b"\xff", "road", ["en"]) == []


class TestTokenHelpers:
    """expand_token / road_core"""

    def test_abbreviation(self):
        assert expand_token("st", "road", "en") == ["saint", "street"]

    def test_unknown_token(self):
        assert expand_token("main", "road", "en") == ["main"]

    def test_canonical_token(self):
        assert expand_token("street", "road", "en") == ["street"]

    def test_non_road_field(self):
        assert expand_token("st", "city", "en") == ["st"]

    def test_unknown_language(self):
        assert expand_token("st", "road", "xx") == ["st"]

    def test_road_core(self, resources):
        fr = resources.language("fr")
        assert road_core("rue de la paix", fr) == "paix"
        assert road_core("paix", fr) is None

    def test_road_core_needs_something_left(self, resources):
        assert road_core("street", resources.language("en")) is None
