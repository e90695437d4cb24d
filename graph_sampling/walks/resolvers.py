"""
Candidate Resolver Module.

A resolver answers one question for the coordinator: given a walker's current
position, which nodes may it step to next?

Resolvers differ by:
- Edge direction exposed ('out', 'in' or 'both')
- Whether self-loops are dropped
- Whether nodes already seen during the run are dropped (self-avoiding walks)
"""

import numpy as np
from typing import Dict, Optional

from ..graph import SamplingGraph


DIRECTIONS = ('out', 'in', 'both')


class CandidateResolver:
    """
    Resolve the eligible neighbor set of a position.

    The result is a sorted array of distinct node indices. It depends only on
    (graph, position, visited), so repeated calls return equal arrays.

    Example:
        >>> from graph_sampling.graph import SamplingGraph
        >>> from graph_sampling.walks import CandidateResolver
        >>>
        >>> graph = SamplingGraph.from_edge_list([(0, 1), (0, 0), (2, 0)])
        >>> CandidateResolver(direction='both').resolve(graph, 0)
        array([1, 2])
    """

    def __init__(
        self,
        direction: str = 'out',
        exclude_self_loops: bool = True,
        exclude_visited: bool = False
    ):
        """
        Initialize resolver.

        Args:
            direction: Which edges to follow ('out', 'in' or 'both')
            exclude_self_loops: Drop the current position from its candidates
            exclude_visited: Drop nodes flagged in the visited mask
        """
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction: {direction}")

        self.direction = direction
        self.exclude_self_loops = exclude_self_loops
        self.exclude_visited = exclude_visited

    def neighbors(self, graph: SamplingGraph, position: int) -> np.ndarray:
        """
        Neighborhood of position before visited-node filtering.

        Args:
            graph: Graph being sampled
            position: Current node

        Returns:
            Sorted array of distinct neighbor indices
        """
        if self.direction == 'out':
            raw = graph.out_neighbors(position)
        elif self.direction == 'in':
            raw = graph.in_neighbors(position)
        else:
            raw = np.concatenate([graph.out_neighbors(position),
                                  graph.in_neighbors(position)])

        candidates = np.unique(raw)

        if self.exclude_self_loops:
            candidates = candidates[candidates != position]

        return candidates

    def filter_visited(
        self,
        candidates: np.ndarray,
        visited: Optional[np.ndarray]
    ) -> np.ndarray:
        """Drop candidates flagged in visited (no-op unless exclude_visited)."""
        if not self.exclude_visited or visited is None or len(candidates) == 0:
            return candidates
        return candidates[~visited[candidates]]

    def resolve(
        self,
        graph: SamplingGraph,
        position: int,
        visited: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """
        Resolve the candidate set of position.

        Args:
            graph: Graph being sampled
            position: Current node
            visited: Read-only boolean mask [num_nodes] of nodes seen so far

        Returns:
            Sorted array of eligible node indices (empty means stalled)
        """
        return self.filter_visited(self.neighbors(graph, position), visited)

    def __repr__(self) -> str:
        return (f"CandidateResolver(direction={self.direction!r}, "
                f"exclude_self_loops={self.exclude_self_loops}, "
                f"exclude_visited={self.exclude_visited})")


class CandidateCache:
    """
    Per-run memo of resolved neighborhoods, used in fast mode.

    Each node's neighborhood is materialized at most once per run. The
    visited filter is applied on every call because the visited mask changes
    between rounds, so the cache returns exactly what the wrapped resolver
    would.
    """

    def __init__(self, resolver: CandidateResolver):
        self.resolver = resolver
        self._neighbors: Dict[int, np.ndarray] = {}
        self.hits = 0
        self.misses = 0

    def resolve(
        self,
        graph: SamplingGraph,
        position: int,
        visited: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """Same contract as CandidateResolver.resolve."""
        candidates = self._neighbors.get(position)
        if candidates is None:
            candidates = self.resolver.neighbors(graph, position)
            candidates.setflags(write=False)
            self._neighbors[position] = candidates
            self.misses += 1
        else:
            self.hits += 1

        return self.resolver.filter_visited(candidates, visited)

    def __len__(self) -> int:
        return len(self._neighbors)
