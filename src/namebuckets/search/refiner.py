"""Turning an approximate cut row into the shortest cut string near it."""

import logging
import os

from namebuckets.data.formats import CutPoint
from namebuckets.data.table import FrequencyTable
from namebuckets.errors import BoundaryInvariantError
from namebuckets.search.locator import locate

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_RADIUS = 2000


def boundary_width(table: FrequencyTable, i: int) -> int:
    """Characters needed to tell keys[i-1] apart from keys[i]."""
    if i < 1 or i >= len(table):
        raise BoundaryInvariantError(f"no boundary before row {i} in a table of {len(table)} rows")
    before, at = table.keys[i - 1], table.keys[i]
    return len(os.path.commonprefix([before, at])) + 1


def refine(table: FrequencyTable, approx_index: int, target_count: int,
           max_deviation_count: int, search_radius: int = DEFAULT_SEARCH_RADIUS) -> int:
    """
    Look around `approx_index` for a row with a narrower boundary.

    Distances 1..search_radius-1 are tried below then above the start row. A
    candidate wins only if its width is strictly smaller than the best so far
    and its count is closer to the target than half the allowed deviation, so
    on equal width the first one scanned is kept.
    """
    half_deviation = max_deviation_count // 2
    counts = table.counts
    length = len(table)

    best_index = approx_index
    best_width = boundary_width(table, approx_index)

    def try_index(j: int) -> None:
        nonlocal best_index, best_width
        width = boundary_width(table, j)
        if width < best_width and abs(target_count - counts[j]) < half_deviation:
            best_index = j
            best_width = width

    for d in range(1, search_radius):
        if d < approx_index:
            try_index(approx_index - d)
        if approx_index + d < length:
            try_index(approx_index + d)

    return best_index


def next_boundary(boundary: str) -> str:
    """Bump the last character by one code point: "SMIT" -> "SMIU".

    There is no alphabet ceiling, so "AZ" becomes "A[".
    """
    if not boundary:
        raise ValueError("cannot derive the next boundary of an empty string")
    return boundary[:-1] + chr(ord(boundary[-1]) + 1)


def cut_point(table: FrequencyTable, index: int) -> CutPoint:
    width = boundary_width(table, index)
    previous_key = table.keys[index - 1]
    end_string = previous_key[:min(width, len(previous_key))]
    return CutPoint(
        table_index=index,
        count=table.counts[index],
        end_string=end_string,
        start_string=next_boundary(end_string),
    )


def find_cut(table: FrequencyTable, target_count: int, max_deviation_count: int,
             search_radius: int = DEFAULT_SEARCH_RADIUS) -> CutPoint:
    """Locate, refine and derive the cut nearest `target_count`."""
    approx = locate(table, target_count)
    best = refine(table, approx, target_count, max_deviation_count, search_radius)
    cut = cut_point(table, best)
    logger.debug("target %d: row %d -> row %d, cut %s|%s at %d",
                 target_count, approx, best, cut.end_string, cut.start_string, cut.count)
    return cut
