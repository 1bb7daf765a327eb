
from typing import Optional

from namebuckets.data.table import FrequencyTable
from namebuckets.errors import BoundaryInvariantError

def locate(table: FrequencyTable, target_count: int, lo: int = 0, hi: Optional[int] = None) -> int:
    """
    Find the row whose count bracket contains `target_count`.

    Returns `index` with counts[index-1] <= target_count < counts[index], using 0
    as the lower bound of row 0. Instead of bisecting, each step probes the first
    quartile of the remaining range.

    Raises:
        BoundaryInvariantError: target is negative or not below the table total.
    """
    counts = table.counts
    if hi is None:
        hi = len(counts)

    while lo <= hi:
        probe = lo + (hi - lo) // 4
        if probe >= len(counts):
            break
        low = counts[probe - 1] if probe > 0 else 0
        high = counts[probe]

        if low <= target_count < high:
            return probe
        if target_count < low:
            hi = probe - 1
        else:
            lo = probe + 1

    raise BoundaryInvariantError(
        f"count {target_count} lies outside the table range [0, {table.total})"
    )
