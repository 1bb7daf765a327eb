import itertools
import string

import pytest

from namebuckets.data.table import FrequencyTable


def three_letter_keys():
    return ["".join(p) for p in itertools.product(string.ascii_uppercase, repeat=3)]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep NAMEBUCKETS_* settings from the caller's shell out of tests."""
    for name in ("NAMEBUCKETS_TABLE", "NAMEBUCKETS_BUCKETS", "NAMEBUCKETS_PERCENTAGE",
                 "NAMEBUCKETS_SEARCH_RADIUS", "NAMEBUCKETS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def uniform_table():
    """AAA..ZZZ, every key with frequency 1 (17576 rows, counts 1..17576)."""
    return FrequencyTable.from_frequencies((k, 1) for k in three_letter_keys())


@pytest.fixture(scope="session")
def weighted_table():
    """AAA..ZZZ with uneven frequencies between 1 and 97."""
    keys = three_letter_keys()
    return FrequencyTable.from_frequencies((k, 1 + (i * 7919) % 97) for i, k in enumerate(keys))
