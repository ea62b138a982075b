"""Utility functions for CyberLens."""

from cyberlens.utils.hashing import (
    fingerprint_polygons,
    fingerprint_records,
    fingerprint_view,
    hash_filter_state,
)

__all__ = [
    "hash_filter_state",
    "fingerprint_polygons",
    "fingerprint_records",
    "fingerprint_view",
]
