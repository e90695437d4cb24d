"""
Walk Policy Module for Graph Sampling.

This module implements the three interchangeable policies a sampling
strategy is made of:

1. Candidate resolution: which neighbors a walker may step to
2. Step policy: which candidate the walker actually moves to
3. Selection policy: which visited nodes are committed to the sample

The policies are small values with no knowledge of each other; the round
coordinator combines them.

Classes:
    CandidateResolver: Eligible neighbor set of a position
    CandidateCache: Fast-mode memo around a resolver
    UniformStep, DegreeWeightedStep, HighestDegreeStep: Step policies
    VisitationRecord: One round's visits
    EveryRoundSelection, RoundBasedSelection, ThresholdSelection: Selection policies

Example:
    >>> from graph_sampling.walks import CandidateResolver, UniformStep
    >>> from graph_sampling.walks import EveryRoundSelection
    >>>
    >>> resolver = CandidateResolver(direction='both')
    >>> walker = UniformStep()
    >>> sampler = EveryRoundSelection()
"""

from .resolvers import CandidateResolver, CandidateCache
from .walkers import StepPolicy, UniformStep, DegreeWeightedStep, HighestDegreeStep
from .samplers import (
    VisitationRecord,
    SelectionPolicy,
    EveryRoundSelection,
    RoundBasedSelection,
    ThresholdSelection,
)

__all__ = [
    'CandidateResolver',
    'CandidateCache',
    'StepPolicy',
    'UniformStep',
    'DegreeWeightedStep',
    'HighestDegreeStep',
    'VisitationRecord',
    'SelectionPolicy',
    'EveryRoundSelection',
    'RoundBasedSelection',
    'ThresholdSelection',
]
