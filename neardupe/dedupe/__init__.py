"""Batch deduplication over record tables."""

from neardupe.dedupe.dedupeapi import (
    load_records,
    hash_records,
    candidate_pairs,
    records_match,
)

__all__ = [
    "load_records",
    "hash_records",
    "candidate_pairs",
    "records_match",
]
