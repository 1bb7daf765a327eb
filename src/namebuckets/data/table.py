# Builds the cumulative surname frequency table that bucket computation runs on.
# Reads a raw name-frequency CSV once, aggregates by key and persists a manifest

'''
Internal logic:
1. Ingest: read (name, frequency) rows from the raw CSV, skipping the header
2. Aggregate: one frequency per key, a repeated key keeps its last value
3. Sort: order keys ascending so ranges are alphabetic
4. Accumulate: numpy cumsum turns frequencies into running totals
5. Persist: table.json acts as the prepared input for every `buckets` run

- The table is read-only once built; nothing downstream mutates it
- Counts must be non-decreasing and the last one is the total mass
'''

import csv
import json
import logging
import time
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from namebuckets.data.formats import FrequencyEntry
from namebuckets.errors import TableError

logger = logging.getLogger(__name__)


class FrequencyTable:
    """Immutable sorted table of (cumulative_count, key) rows."""

    def __init__(self, entries: Iterable[Tuple[int, str]]):
        counts: List[int] = []
        keys: List[str] = []
        for count, key in entries:
            try:
                counts.append(int(count))
            except (TypeError, ValueError) as e:
                raise TableError(f"non-integer cumulative count {count!r} for key {key!r}") from e
            keys.append(str(key))
        _check_invariants(counts, keys)
        self._counts = tuple(counts)
        self._keys = tuple(keys)

    @classmethod
    def from_frequencies(cls, pairs: Iterable[Tuple[str, int]]) -> "FrequencyTable":
        """Aggregate raw (key, frequency) pairs into a cumulative table."""
        # Later duplicates overwrite earlier ones
        by_key = {}
        for key, frequency in pairs:
            if frequency < 0:
                raise TableError(f"negative frequency {frequency} for key {key!r}")
            by_key[key] = frequency

        keys = sorted(by_key)
        running = np.cumsum([by_key[k] for k in keys], dtype=np.int64)
        return cls(zip(running.tolist(), keys))

    @classmethod
    def from_csv(cls, path: str, key_column: int = 1, frequency_column: int = 2) -> "FrequencyTable":
        """
        Build a table from a raw name-frequency CSV with one header row.

        Args:
            path: CSV file; the default columns match the surname dataset layout
                (rank, name, frequency, ...).
            key_column: zero-based column holding the key.
            frequency_column: zero-based column holding the integer frequency.
        """
        start_time = time.perf_counter()
        with open(path, 'r', newline='', encoding='utf-8') as f:
            reader = csv.reader(f)
            next(reader, None)
            pairs = list(_read_pairs(reader, key_column, frequency_column))

        table = cls.from_frequencies(pairs)
        elapsed = time.perf_counter() - start_time
        logger.info("Read %d rows from %s into %d keys (total %d) in %.2fs",
                    len(pairs), path, len(table), table.total, elapsed)
        return table

    @classmethod
    def load(cls, path: str) -> "FrequencyTable":
        """Load a prepared table manifest written by `save`."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            rows = [FrequencyEntry(**d) for d in data]
        except (ValueError, TypeError) as e:
            raise TableError(f"malformed table manifest {path}: {e}") from e
        return cls((row.cumulative_count, row.key) for row in rows)

    def save(self, path: str) -> None:
        manifest_data = [{"cumulative_count": c, "key": k} for c, k in zip(self._counts, self._keys)]
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(manifest_data, f, indent=4)
        logger.info("Saved %d table rows to %s", len(manifest_data), path)

    @property
    def counts(self) -> Sequence[int]:
        return self._counts

    @property
    def keys(self) -> Sequence[str]:
        return self._keys

    @property
    def total(self) -> int:
        """Total frequency mass (the last cumulative count)."""
        return self._counts[-1]

    def __len__(self) -> int:
        return len(self._counts)

    def __getitem__(self, index: int) -> FrequencyEntry:
        return FrequencyEntry(self._counts[index], self._keys[index])

    def __iter__(self) -> Iterator[FrequencyEntry]:
        for count, key in zip(self._counts, self._keys):
            yield FrequencyEntry(count, key)


def _read_pairs(reader, key_column: int, frequency_column: int) -> Iterator[Tuple[str, int]]:
    for line_no, row in enumerate(reader, start=2):
        if not row:
            continue
        try:
            key = row[key_column].strip()
            frequency = int(row[frequency_column])
        except (IndexError, ValueError) as e:
            raise TableError(f"line {line_no}: cannot read key/frequency from {row!r}") from e
        yield key, frequency


def _check_invariants(counts: List[int], keys: List[str]) -> None:
    if not counts:
        raise TableError("frequency table is empty")
    if counts[0] < 0:
        raise TableError(f"first cumulative count is negative: {counts[0]}")
    for i in range(len(keys)):
        if not keys[i]:
            raise TableError(f"empty key at row {i}")
        if i == 0:
            continue
        if counts[i] < counts[i - 1]:
            raise TableError(f"cumulative count decreases at row {i} ({keys[i]!r})")
        if keys[i] <= keys[i - 1]:
            raise TableError(f"keys not strictly ascending at row {i}: {keys[i - 1]!r} >= {keys[i]!r}")
