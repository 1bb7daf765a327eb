
import logging
from typing import List

from namebuckets.config import PartitionConfig
from namebuckets.data.formats import Bucket, CutPoint
from namebuckets.data.table import FrequencyTable
from namebuckets.errors import TableError
from namebuckets.search.refiner import DEFAULT_SEARCH_RADIUS, find_cut

logger = logging.getLogger(__name__)

FIRST_KEY = "A"
LAST_KEY = "Z"

class Partitioner:
    """Splits a frequency table into alphabetic buckets of roughly equal mass."""

    def __init__(self, table: FrequencyTable, search_radius: int = DEFAULT_SEARCH_RADIUS):
        if table.total <= 0:
            raise TableError("frequency table has no frequency mass")
        self.table = table
        self.search_radius = search_radius

    @classmethod
    def from_config(cls, table: FrequencyTable, config: PartitionConfig) -> "Partitioner":
        return cls(table, search_radius=config.search_radius)

    def cut_points(self, no_buckets: int, max_deviation_count: int) -> List[CutPoint]:
        """The no_buckets-1 internal cuts, each derived independently."""
        bucket_size = self.table.total // no_buckets
        return [
            find_cut(self.table, k * bucket_size, max_deviation_count, self.search_radius)
            for k in range(1, no_buckets)
        ]

    def assemble(self, no_buckets: int, max_deviation_percentage: float) -> List[Bucket]:
        """
        Compute `no_buckets` contiguous buckets covering "A" to "Z".

        Args:
            no_buckets: Number of buckets, at least 1.
            max_deviation_percentage: Allowed share deviation per bucket as a
                fraction (0.02 = 2%).

        Returns:
            Buckets in key order whose shares sum to 1.
        """
        PartitionConfig(no_buckets, max_deviation_percentage, self.search_radius).validate()

        total = self.table.total
        max_deviation_count = int(total * max_deviation_percentage)
        cuts = self.cut_points(no_buckets, max_deviation_count)

        buckets = []
        last_boundary = FIRST_KEY
        last_count = 0
        for cut in cuts:
            buckets.append(Bucket(last_boundary, cut.end_string, (cut.count - last_count) / total))
            last_boundary = cut.start_string
            last_count = cut.count
        buckets.append(Bucket(last_boundary, LAST_KEY, (total - last_count) / total))

        logger.info("Split %d keys (total %d) into %d buckets at %.1f%% tolerance",
                    len(self.table), total, len(buckets), max_deviation_percentage * 100)
        return buckets

    def run(self, config: PartitionConfig) -> List[Bucket]:
        return self.assemble(config.no_buckets, config.max_deviation_percentage)
