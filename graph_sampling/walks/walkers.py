"""
Step Policy Module.

A step policy decides where a walker goes next, given the candidate set the
resolver produced. Policies hold no per-walker state: the coordinator owns
every walker's position and passes it in.

Key Concept:
    An empty candidate set is a stall and returns None. A single candidate is
    a legitimate forced step and is always taken.
"""

import numpy as np
from typing import Optional

from ..graph import SamplingGraph


class StepPolicy:
    """
    Base class for step policies.

    Subclasses implement _choose(), which is only called with at least one
    candidate.

    Attributes:
        name: Short identifier used in logs
        record_candidates: Whether the coordinator should record every
            examined candidate as visited, not just the chosen node
    """

    name = 'step'

    def __init__(self, record_candidates: bool = False):
        self.record_candidates = record_candidates

    def select_next(
        self,
        graph: SamplingGraph,
        candidates: np.ndarray,
        position: int,
        rng: np.random.Generator
    ) -> Optional[int]:
        """
        Choose the next position.

        Args:
            graph: Graph being sampled (read-only)
            candidates: Sorted array of eligible nodes
            position: Current node
            rng: Generator all randomness is drawn from

        Returns:
            Next node index, or None if the walker is stalled
        """
        if len(candidates) == 0:
            return None
        if len(candidates) == 1:
            return int(candidates[0])
        return int(self._choose(graph, candidates, position, rng))

    def _choose(
        self,
        graph: SamplingGraph,
        candidates: np.ndarray,
        position: int,
        rng: np.random.Generator
    ) -> int:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(record_candidates={self.record_candidates})"


class UniformStep(StepPolicy):
    """Simple random walk: every candidate is equally likely."""

    name = 'uniform'

    def _choose(self, graph, candidates, position, rng):
        return candidates[rng.integers(len(candidates))]


class DegreeWeightedStep(StepPolicy):
    """
    Preferential movement: candidates weighted by degree.

    The weight of a candidate is (degree + smoothing) ** exponent, so sinks
    with degree 0 remain reachable as long as smoothing > 0.
    """

    name = 'degree_weighted'

    def __init__(
        self,
        degree_kind: str = 'out',
        exponent: float = 1.0,
        smoothing: float = 1.0,
        record_candidates: bool = False
    ):
        """
        Initialize degree-weighted policy.

        Args:
            degree_kind: 'out', 'in' or 'total'
            exponent: Power applied to the smoothed degree
            smoothing: Constant added to every degree
            record_candidates: See StepPolicy
        """
        super().__init__(record_candidates)
        if smoothing < 0:
            raise ValueError(f"smoothing must be non-negative, got {smoothing}")
        self.degree_kind = degree_kind
        self.exponent = exponent
        self.smoothing = smoothing

    def _choose(self, graph, candidates, position, rng):
        degrees = graph.degrees(self.degree_kind)[candidates].astype(np.float64)
        weights = (degrees + self.smoothing) ** self.exponent

        total = weights.sum()
        if total <= 0:
            # All-zero weights (no smoothing on sinks): fall back to uniform
            return candidates[rng.integers(len(candidates))]

        return rng.choice(candidates, p=weights / total)


class HighestDegreeStep(StepPolicy):
    """
    Deterministic step to the highest-degree candidate.

    Ties go to the lowest node index. No randomness is consumed.
    """

    name = 'highest_degree'

    def __init__(self, degree_kind: str = 'out', record_candidates: bool = False):
        super().__init__(record_candidates)
        self.degree_kind = degree_kind

    def _choose(self, graph, candidates, position, rng):
        degrees = graph.degrees(self.degree_kind)[candidates]
        # candidates are sorted, so argmax's first hit is the lowest index
        return candidates[int(np.argmax(degrees))]
