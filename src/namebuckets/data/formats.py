from dataclasses import dataclass
from typing import Tuple

@dataclass(frozen=True)
class FrequencyEntry:
    """One row of the frequency table: running total up to and including `key`."""
    cumulative_count: int
    key: str

@dataclass(frozen=True)
class CutPoint:
    '''Chosen table row plus the strings closing one bucket and opening the next'''
    table_index: int
    count: int
    end_string: str
    start_string: str

@dataclass(frozen=True)
class Bucket:
    '''Contiguous key range and its share of total frequency mass'''
    start_key: str
    end_key: str
    share: float # fraction in [0, 1], not percent

    def as_row(self) -> Tuple[str, str, str]:
        """CSV row: share scaled to percent and stringified."""
        return (self.start_key, self.end_key, str(self.share * 100.0))
