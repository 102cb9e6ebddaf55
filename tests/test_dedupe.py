"""Tests for batch deduplication over record tables."""

import pandas as pd
import pytest

from neardupe import NearDupeHashOptions, candidate_pairs, hash_records, load_records, records_match


@pytest.fixture
def options():
    return NearDupeHashOptions(with_name=False, with_unit=True, address_only_keys=True,
                               with_small_containing_boundaries=False)


@pytest.fixture
def records():
    return pd.DataFrame({
        "house_number": ["123", "123", "7", "350"],
        "road": ["Main St", "Main Street", "Harbour Rd", "5th Ave"],
        "city": ["Anytown", "Anytown", "Nantucket", "New York"],
        "postcode": ["12345", "12345", None, "10118"],
        "notes": ["a", "b", "c", "d"],
    }, index=["r1", "r2", "r3", "r4"])


class TestHashRecords:
    """One row per (record, key)"""

    def test_columns(self, records, options):
        hashed = hash_records(records, options=options, languages=["en"])
        assert list(hashed.columns) == ["record", "hash"]
        assert set(hashed["record"]) == {"r1", "r2", "r3", "r4"}

    def test_record_order(self, records, options):
        hashed = hash_records(records, options=options, languages=["en"])
        assert hashed["record"].tolist()[0] == "r1"
        assert hashed.loc[hashed["record"] == "r1", "hash"].tolist()[0] == "act|main saint|123|anytown"

    def test_missing_values_skipped(self, records, options):
        hashed = hash_records(records, options=options, languages=["en"])
        r3 = hashed.loc[hashed["record"] == "r3", "hash"].tolist()
        assert r3 and all(h.startswith("act|") for h in r3)

    def test_explicit_label_columns(self, records, options):
        hashed = hash_records(records, label_columns=["house_number", "road", "postcode"],
                              options=options, languages=["en"])
        assert all(h.startswith("apc|") for h in hashed["hash"])

    def test_unknown_label_column(self, records, options):
        with pytest.raises(KeyError, match="missing"):
            hash_records(records, label_columns=["missing"], options=options)

    def test_coordinates(self, options):
        df = pd.DataFrame({
            "house_number": ["350", "350"],
            "road": ["5th Ave", "5th Ave"],
            "lat": [40.7484, None],
            "lon": [-73.9857, None],
        })
        hashed = hash_records(df, options=options, languages=["en"], lat_column="lat", lon_column="lon")
        assert hashed.loc[hashed["record"] == 0, "hash"].str.startswith("agh|").all()
        assert (hashed["record"] == 1).sum() == 0


class TestCandidatePairs:
    """Records sharing at least one key"""

    def test_pairs(self, records, options):
        pairs = candidate_pairs(records, options=options, languages=["en"])
        assert list(pairs.columns) == ["left", "right", "shared_keys"]
        assert pairs.to_dict("records") == [{"left": "r1", "right": "r2", "shared_keys": 4}]

    def test_no_pairs(self, options):
        df = pd.DataFrame({"house_number": ["1", "2"], "road": ["Main St", "Main St"]})
        pairs = candidate_pairs(df, options=options, languages=["en"])
        assert pairs.empty
        assert list(pairs.columns) == ["left", "right", "shared_keys"]

    def test_empty_frame(self, options):
        assert candidate_pairs(pd.DataFrame({"road": []}), options=options).empty


class TestRecordsMatch:
    """Pairwise check on labeled records"""

    def test_sample_addresses(self, sample_addresses, options):
        for a, b in sample_addresses:
            assert records_match(list(a), list(a.values()), list(b), list(b.values()), options, ["en"])

    def test_different_house_numbers(self, options):
        assert not records_match(
            ["house_number", "road", "city"], ["1", "Main St", "Anytown"],
            ["house_number", "road", "city"], ["2", "Main St", "Anytown"],
            options, ["en"],
        )

    def test_malformed_record(self, options):
        assert not records_match(["road"], [], ["road"], ["Main St"], options)


class TestLoadRecords:
    """Record table loading"""

    def test_csv(self, tmp_path, options):
        path = tmp_path / "records.csv"
        path.write_text(
            "house_number,road,city,postcode\n"
            "23,School St,Brunswick,04011\n"
            "23,School Street,Brunswick,04011\n",
            encoding="utf-8",
        )
        df = load_records(path)
        assert df.loc[0, "postcode"] == "04011"
        pairs = candidate_pairs(df, options=options, languages=["en"])
        assert pairs[["left", "right"]].values.tolist() == [[0, 1]]
