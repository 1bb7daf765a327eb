"""Error taxonomy for bucket computation."""

from __future__ import annotations


class NameBucketsError(Exception):
    """Base class for errors reported back to the caller."""


class InvalidBucketCount(NameBucketsError, ValueError):
    def __init__(self, no_buckets: int) -> None:
        self.no_buckets = no_buckets
        super().__init__(f"invalid bucket count: {no_buckets} (must be >= 1)")


class InvalidParameter(NameBucketsError, ValueError):
    pass


class TableError(NameBucketsError, ValueError):
    """Frequency table is empty, unsorted or not cumulative."""


class BoundaryInvariantError(RuntimeError):
    """Index arithmetic left the table. Fatal, never retried."""
