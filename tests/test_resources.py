"""Tests for the linguistic resource store and its lifecycle."""

import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from neardupe import (
    NearDupeHashOptions,
    ResourceLoadError,
    ResourcesReleasedError,
    initialize,
    near_dupe_hashes,
    near_dupe_name_hashes,
    place_languages,
    shutdown,
)
from neardupe.resources import (
    SUPPORTED_LANGUAGES,
    LanguageResources,
    is_initialized,
    load_resources,
    resourcestore,
)


BUNDLED_DATA = Path(resourcestore.__file__).parent / "data"


@pytest.fixture
def data_copy(tmp_path):
    """A writable copy of the bundled resource files."""
    target = tmp_path / "data"
    shutil.copytree(BUNDLED_DATA, target)
    return target


class TestResourceStore:
    """Bundled dictionaries"""

    def test_all_languages_loaded(self, resources):
        for code in SUPPORTED_LANGUAGES:
            lang = resources.language(code)
            assert lang is not None
            assert lang.code == code
            assert lang.scripts

    def test_unknown_language(self, resources):
        assert resources.language("xx") is None

    def test_expansions_sorted(self, resources):
        assert resources.language("en").expansions["st"] == ("saint", "street")

    def test_canonical_maps_to_itself(self, resources):
        assert resources.language("en").expansions["street"] == ("street",)

    def test_lookup_forms(self, resources):
        de = resources.language("de")
        assert de.is_street_type("Straße")
        assert de.is_street_type("str")
        assert not de.is_street_type("haupt")

    def test_country_tables(self, resources):
        assert resources.country_languages["BE"] == ("nl", "fr", "de")
        assert resources.country_names["deutschland"] == "DE"
        assert resources.country_names["日本"] == "JP"

    def test_script_defaults(self, resources):
        assert resources.script_languages["Cyrillic"] == "ru"
        assert resources.language_scripts("el") == ("Greek",)

    def test_latin_languages(self, resources):
        latin = resources.latin_languages()
        assert "en" in latin and "fr" in latin
        assert "ru" not in latin and "ja" not in latin

    def test_immutable(self, resources):
        with pytest.raises(TypeError):
            resources.languages["xx"] = None

    def test_language_defaults(self):
        """Dictionaries left out of a LanguageResources are empty and read-only"""
        lang = LanguageResources(code="xx", name="Test", scripts=("Latin",))
        other = LanguageResources(code="yy", name="Other", scripts=("Latin",))
        assert dict(lang.street_types) == {}
        assert dict(lang.expansions) == {}
        assert lang.numbers is not other.numbers
        with pytest.raises(TypeError):
            lang.street_types["street"] = ("st",)

    def test_cached(self):
        assert load_resources() is load_resources()


class TestLoadErrors:
    """Missing or corrupt resource files"""

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ResourceLoadError, match="en.yaml"):
            initialize(tmp_path / "nowhere")

    def test_missing_file(self, data_copy):
        (data_copy / "countries.yaml").unlink()
        with pytest.raises(ResourceLoadError, match="countries.yaml"):
            initialize(data_copy)

    def test_corrupt_yaml(self, data_copy):
        (data_copy / "fr.yaml").write_text("street_types: [unclosed\n", encoding="utf-8")
        with pytest.raises(ResourceLoadError, match="Corrupt"):
            initialize(data_copy)

    def test_wrong_language_code(self, data_copy):
        text = (data_copy / "it.yaml").read_text(encoding="utf-8")
        (data_copy / "it.yaml").write_text(text.replace("language: it", "language: es"), encoding="utf-8")
        with pytest.raises(ResourceLoadError, match="expected 'it'"):
            initialize(data_copy)

    def test_malformed_section(self, data_copy):
        (data_copy / "scripts.yaml").write_text("default_languages: []\n", encoding="utf-8")
        with pytest.raises(ResourceLoadError, match="default_languages"):
            initialize(data_copy)

    def test_replacement_directory(self, data_copy):
        assert initialize(data_copy) is True
        assert place_languages(["road", "country"], ["Rue de la Loi", "Belgium"]) == ["fr"]
        initialize()


class TestLifecycle:
    """initialize / shutdown"""

    def test_initialize_returns_true(self):
        assert initialize() is True
        assert is_initialized()

    def test_initialize_is_idempotent(self):
        assert initialize() is True
        assert initialize() is True

    def test_calls_after_shutdown_raise(self):
        shutdown()
        assert not is_initialized()
        with pytest.raises(ResourcesReleasedError):
            near_dupe_hashes(["road", "house_number"], ["Main St", "42"])
        with pytest.raises(ResourcesReleasedError):
            near_dupe_name_hashes("Atlantic")
        with pytest.raises(ResourcesReleasedError):
            place_languages(["road"], ["Main St"])

    def test_initialize_after_shutdown(self):
        shutdown()
        assert initialize() is True
        assert near_dupe_name_hashes("IV") == ["AF", "iv", "4"]

    def test_shutdown_twice(self):
        shutdown()
        shutdown()
        assert not is_initialized()


class TestConcurrency:
    """Concurrent calls serialize on the resource lock"""

    def test_parallel_hashing(self):
        options = NearDupeHashOptions(with_name=False, address_only_keys=True)
        labels = ["house_number", "road", "city", "postcode"]
        values = ["42", "Main St", "Portland", "97201"]
        expected = near_dupe_hashes(labels, values, options, ["en"])

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: near_dupe_hashes(labels, values, options, ["en"]), range(32)))
        assert all(r == expected for r in results)

    def test_parallel_mixed_calls(self):
        def work(i):
            if i % 2:
                return tuple(near_dupe_name_hashes("Atlantic"))
            return tuple(place_languages(["road", "country"], ["Rue de Rivoli", "France"]))

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(work, range(20)))
        assert set(results) == {tuple(near_dupe_name_hashes("Atlantic")), ("fr",)}
