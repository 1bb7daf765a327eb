
import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from namebuckets.errors import InvalidBucketCount, InvalidParameter
from namebuckets.search.refiner import DEFAULT_SEARCH_RADIUS

load_dotenv()

DEFAULT_BUCKETS = 4
DEFAULT_PERCENTAGE = 2 # whole percent, 2 = 2%
DEFAULT_TABLE_PATH = "table.json"


@dataclass(frozen=True)
class PartitionConfig:
    '''Parameters of one bucket computation'''
    no_buckets: int = DEFAULT_BUCKETS
    max_deviation_percentage: float = DEFAULT_PERCENTAGE / 100.0
    search_radius: int = DEFAULT_SEARCH_RADIUS

    def validate(self) -> "PartitionConfig":
        if self.no_buckets < 1:
            raise InvalidBucketCount(self.no_buckets)
        if not 0.0 < self.max_deviation_percentage <= 1.0:
            raise InvalidParameter(
                f"max deviation percentage must be in (0, 1], got {self.max_deviation_percentage}"
            )
        if self.search_radius < 1:
            raise InvalidParameter(f"search radius must be >= 1, got {self.search_radius}")
        return self

    def override(self, no_buckets: Optional[int] = None, percentage: Optional[int] = None,
                 search_radius: Optional[int] = None) -> "PartitionConfig":
        """Apply command-line values on top; `percentage` is in whole percent."""
        changes = {}
        if no_buckets is not None:
            changes["no_buckets"] = no_buckets
        if percentage is not None:
            changes["max_deviation_percentage"] = percentage / 100.0
        if search_radius is not None:
            changes["search_radius"] = search_radius
        return replace(self, **changes).validate()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidParameter(f"{name} must be an integer, got {raw!r}")


def load_config() -> PartitionConfig:
    """Read defaults from the environment (and .env)."""
    return PartitionConfig(
        no_buckets=_env_int("NAMEBUCKETS_BUCKETS", DEFAULT_BUCKETS),
        max_deviation_percentage=_env_int("NAMEBUCKETS_PERCENTAGE", DEFAULT_PERCENTAGE) / 100.0,
        search_radius=_env_int("NAMEBUCKETS_SEARCH_RADIUS", DEFAULT_SEARCH_RADIUS),
    ).validate()


def table_path() -> str:
    return os.getenv("NAMEBUCKETS_TABLE", DEFAULT_TABLE_PATH)


def log_level() -> str:
    return os.getenv("NAMEBUCKETS_LOG_LEVEL", "WARNING").upper()
