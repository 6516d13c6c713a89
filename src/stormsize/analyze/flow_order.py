"""Ordering of storm pipe segments from upstream to downstream.

Two strategies are provided:

- ``ElevationFlowOrder`` sorts by elevation, higher segments first. It does
  not look at connectivity and is only exact for a single descending chain.
- ``ConnectivityFlowOrder`` joins coinciding endpoints into junctions and
  walks the resulting directed graph topologically. Where connectivity is
  missing it falls back to the elevation order.
"""

import heapq
import logging
from collections.abc import Sequence

import numpy as np
from scipy.spatial import KDTree

from ..models import ClassifiedSegment

log = logging.getLogger(__name__)


def _elevation_key(segment: ClassifiedSegment, position: int) -> tuple[float, int]:
    return (-segment.order_elevation, position)


class ElevationFlowOrder:
    """Orders segments by descending elevation, keeping input order on ties."""

    def order(self, segments: Sequence[ClassifiedSegment]) -> list[ClassifiedSegment]:
        # sorted() is stable, equal elevations keep their input order
        return sorted(segments, key=lambda segment: -segment.order_elevation)


class ConnectivityFlowOrder:
    """Orders segments along the pipe network built from their endpoints.

    Each segment is an edge directed from its higher to its lower endpoint.
    A segment precedes another when its low end meets the other's high end
    within ``tolerance``. Among segments ready to be emitted the higher one
    (then the earlier one in input order) comes first.
    """

    def __init__(self, tolerance: float = 0.01) -> None:
        """Initialize the connectivity order.

        Parameters
        ----------
        tolerance : float
            Maximum 3D distance between two endpoints to count as connected
        """
        self.tolerance = tolerance

    def _build_edges(self, segments: Sequence[ClassifiedSegment]) -> list[set[int]]:
        successors: list[set[int]] = [set() for _ in segments]
        coords = []
        owners: list[tuple[int, bool]] = []  # (segment position, is low end)
        for position, classified in enumerate(segments):
            high, low = classified.segment.high_point, classified.segment.low_point
            if high is None or low is None:
                continue
            coords.append((high.east, high.north, high.altitude))
            owners.append((position, False))
            coords.append((low.east, low.north, low.altitude))
            owners.append((position, True))

        if len(coords) < 4:
            return successors

        tree = KDTree(np.array(coords))
        for first, second in sorted(tree.query_pairs(r=self.tolerance)):
            seg_a, a_is_low = owners[first]
            seg_b, b_is_low = owners[second]
            if seg_a == seg_b or a_is_low == b_is_low:
                continue
            if a_is_low:
                successors[seg_a].add(seg_b)
            else:
                successors[seg_b].add(seg_a)
        return successors

    def order(self, segments: Sequence[ClassifiedSegment]) -> list[ClassifiedSegment]:
        successors = self._build_edges(segments)
        indegree = [0] * len(segments)
        for targets in successors:
            for target in targets:
                indegree[target] += 1
        log.debug(f"Built flow graph with {sum(indegree)} connections for {len(segments)} segments")

        ready = [_elevation_key(segments[pos], pos) for pos in range(len(segments)) if indegree[pos] == 0]
        heapq.heapify(ready)
        emitted = [False] * len(segments)
        ordered: list[ClassifiedSegment] = []

        while len(ordered) < len(segments):
            if not ready:
                # Only cycles are left, break one at its highest segment
                position = min(
                    (pos for pos in range(len(segments)) if not emitted[pos]),
                    key=lambda pos: _elevation_key(segments[pos], pos),
                )
                log.warning(f"Cycle in pipe network at segment {segments[position].identity!r}")
                indegree[position] = 0
                ready.append(_elevation_key(segments[position], position))

            _, position = heapq.heappop(ready)
            if emitted[position]:
                continue
            emitted[position] = True
            ordered.append(segments[position])
            for target in sorted(successors[position]):
                indegree[target] -= 1
                if indegree[target] == 0 and not emitted[target]:
                    heapq.heappush(ready, _elevation_key(segments[target], target))

        return ordered
