
from dataclasses import dataclass
from typing import Iterable, List, Sequence

import numpy as np

from namebuckets.data.formats import Bucket
from namebuckets.runner.engine import Partitioner

@dataclass
class DeviationReport:
    '''How far one bucket count strays from an even split'''
    no_buckets: int
    biggest_deviation: float
    within_tolerance: bool

def biggest_deviation(buckets: Sequence[Bucket]) -> float:
    """Largest |share - 1/n| over the buckets."""
    if not buckets:
        return 0.0
    shares = np.array([b.share for b in buckets], dtype=float)
    return float(np.max(np.abs(shares - 1.0 / len(buckets))))

def share_total(buckets: Sequence[Bucket]) -> float:
    return float(sum(b.share for b in buckets))

def is_contiguous(buckets: Sequence[Bucket]) -> bool:
    """Each bucket must end strictly before the next one starts."""
    return all(a.end_key < b.start_key for a, b in zip(buckets, buckets[1:]))

def sweep(partitioner: Partitioner, bucket_counts: Iterable[int], tolerance: float) -> List[DeviationReport]:
    """Assemble every bucket count and score it against the tolerance."""
    reports = []
    for no_buckets in bucket_counts:
        deviation = biggest_deviation(partitioner.assemble(no_buckets, tolerance))
        reports.append(DeviationReport(
            no_buckets=no_buckets,
            biggest_deviation=deviation,
            within_tolerance=deviation <= tolerance,
        ))
    return reports
