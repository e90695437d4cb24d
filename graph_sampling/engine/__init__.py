"""
Sampling Engine Module.

This module drives sampling runs:
1. Run configuration and validation
2. Round-by-round coordination of walkers and policies
3. Strategy registry and factory
4. Progress monitoring and metric logging

Classes:
    SamplingConfig: Configuration of one run
    RoundCoordinator: Executes rounds until a termination condition holds
    SamplingResult: Sample, termination status and per-round history
    SamplingStatus: TARGET_MET, ROUND_CAP or NO_PROGRESS
    SamplingLogger: Per-round metrics and JSON logs

Example:
    >>> from graph_sampling.engine import build, RoundCoordinator
    >>>
    >>> resolver, walker, sampler, config = build(
    ...     'random_walk', target_fraction=0.3, walker_count=4, seed=42
    ... )
    >>> coordinator = RoundCoordinator(resolver, walker, sampler)
    >>> result = coordinator.run(graph, config)
"""

from .config import SamplingConfig
from .errors import SamplingError, UnknownAlgorithm, EmptyGraph, StallExhausted, NoProgress
from .callbacks import ProgressMonitor, SamplingLogger
from .coordinator import RoundCoordinator, SamplingResult, SamplingStatus, WalkerState
from .factory import (
    build,
    build_from_config,
    register_algorithm,
    unregister_algorithm,
    available_algorithms,
    sample_graph,
)

__all__ = [
    'SamplingConfig',
    'SamplingError',
    'UnknownAlgorithm',
    'EmptyGraph',
    'StallExhausted',
    'NoProgress',
    'ProgressMonitor',
    'SamplingLogger',
    'RoundCoordinator',
    'SamplingResult',
    'SamplingStatus',
    'WalkerState',
    'build',
    'build_from_config',
    'register_algorithm',
    'unregister_algorithm',
    'available_algorithms',
    'sample_graph',
]
