"""Batch deduplication over record tables.

Each record (DataFrame row) is hashed once; records that share at least one
key are candidate duplicates. Equality on keys replaces pairwise comparison,
so the candidate search is a self-join on the hash column.

    >>> df = pd.DataFrame({
    ...     "house_number": ["123", "123"],
    ...     "road": ["Main St", "Main Street"],
    ...     "city": ["Anytown", "Anytown"],
    ... })
    >>> candidate_pairs(df, options=NearDupeHashOptions(with_name=False, address_only_keys=True))
       left  right  shared_keys
    0     0      1            2
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pandas as pd

from neardupe.geohash.geohashencode import valid_coordinates
from neardupe.hashes.hashapi import HASHED_LABELS, near_dupe_hashes
from neardupe.hashes.hashoptions import NearDupeHashOptions, default_near_dupe_hash_options
from neardupe.utils.dataloader import load_parquet_or_csv

# Detection-only labels also passed through when present as columns.
_DETECTION_LABELS = ("state", "country")


def load_records(path: Union[str, Path]) -> pd.DataFrame:
    """Load a record table from .parquet or .csv (CSV read as strings)."""
    return load_parquet_or_csv(Path(path))


def _label_columns(df: pd.DataFrame, label_columns: Optional[Sequence[str]]) -> List[str]:
    if label_columns is not None:
        missing = [c for c in label_columns if c not in df.columns]
        if missing:
            raise KeyError(f"Label columns not in DataFrame: {missing}")
        return list(label_columns)
    return [c for c in df.columns if c in HASHED_LABELS or c in _DETECTION_LABELS]


def _row_options(row: pd.Series, options: NearDupeHashOptions,
                 lat_column: Optional[str], lon_column: Optional[str]) -> NearDupeHashOptions:
    if not (lat_column and lon_column):
        return options
    lat, lon = row.get(lat_column), row.get(lon_column)
    if pd.isna(lat) or pd.isna(lon) or not valid_coordinates(lat, lon):
        return replace(options, with_latlon=False)
    return replace(options, with_latlon=True, latitude=float(lat), longitude=float(lon))


def hash_records(
    df: pd.DataFrame,
    label_columns: Optional[Sequence[str]] = None,
    options: Optional[NearDupeHashOptions] = None,
    languages: Optional[Sequence[str]] = None,
    lat_column: Optional[str] = None,
    lon_column: Optional[str] = None,
) -> pd.DataFrame:
    """Hash every row of ``df``.

    Args:
        df: One record per row; columns named after component labels
        label_columns: Columns to use as labels (default: every column whose
                       name is a known label)
        options: NearDupeHashOptions shared by all rows
        languages: Working languages for all rows (detected per row if None)
        lat_column, lon_column: Coordinate columns; rows with valid
                                coordinates also get geohash keys

    Returns:
        DataFrame with columns ``record`` (the row's index label) and
        ``hash``, one row per (record, key), in record then key order.
    """
    if options is None:
        options = default_near_dupe_hash_options()
    columns = _label_columns(df, label_columns)

    records, hashes = [], []
    for record, row in df.iterrows():
        labels, values = [], []
        for column in columns:
            value = row[column]
            if pd.isna(value) or str(value).strip() == "":
                continue
            labels.append(column)
            values.append(str(value))
        row_options = _row_options(row, options, lat_column, lon_column)
        for key in near_dupe_hashes(labels, values, row_options, languages):
            records.append(record)
            hashes.append(key)

    return pd.DataFrame({"record": records, "hash": hashes})


def candidate_pairs(
    df: pd.DataFrame,
    label_columns: Optional[Sequence[str]] = None,
    options: Optional[NearDupeHashOptions] = None,
    languages: Optional[Sequence[str]] = None,
    lat_column: Optional[str] = None,
    lon_column: Optional[str] = None,
) -> pd.DataFrame:
    """Record pairs sharing at least one key.

    Returns:
        DataFrame with columns ``left``, ``right``, ``shared_keys``; ``left``
        precedes ``right`` in ``df``'s row order. Sorted by row order of
        (left, right).
    """
    hashed = hash_records(df, label_columns, options, languages, lat_column, lon_column)
    empty = pd.DataFrame({"left": [], "right": [], "shared_keys": []})
    if hashed.empty:
        return empty

    position = {record: i for i, record in enumerate(df.index)}
    hashed = hashed.drop_duplicates()
    hashed["pos"] = hashed["record"].map(position)

    joined = hashed.merge(hashed, on="hash", suffixes=("_left", "_right"))
    joined = joined[joined["pos_left"] < joined["pos_right"]]
    if joined.empty:
        return empty

    pairs = (
        joined.groupby(["pos_left", "pos_right"], sort=True)
        .agg(left=("record_left", "first"), right=("record_right", "first"), shared_keys=("hash", "size"))
        .reset_index(drop=True)
    )
    return pairs[["left", "right", "shared_keys"]]


def records_match(
    labels_a: Sequence[str],
    values_a: Sequence[str],
    labels_b: Sequence[str],
    values_b: Sequence[str],
    options: Optional[NearDupeHashOptions] = None,
    languages: Optional[Sequence[str]] = None,
) -> bool:
    """True when the two records share at least one near-dupe key."""
    keys_a = set(near_dupe_hashes(labels_a, values_a, options, languages))
    if not keys_a:
        return False
    return any(key in keys_a for key in near_dupe_hashes(labels_b, values_b, options, languages))


__all__ = [
    "load_records",
    "hash_records",
    "candidate_pairs",
    "records_match",
]
