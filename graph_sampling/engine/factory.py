"""
Sampling Algorithm Factory Module.

This module maps an algorithm identifier plus tuning parameters to a concrete
(resolver, walker, sampler) strategy and a run configuration.

Adding a strategy means registering one more builder here; the round
coordinator is not touched.

Built-in algorithms:
    random_walk: Follow out-edges uniformly, commit every round
    undirected_random_walk: Follow edges in both directions uniformly
    random_stroll: Self-avoiding random walk (never revisits a seen node)
    degree_biased_walk: Prefer high-degree neighbors
    highest_degree_walk: Always move to the highest-degree unseen neighbor
    snowball_walk: Record a walker's whole neighborhood at each step
    round_based_random_walk: Random walk committing every `rounds` rounds
    threshold_walk: Commit nodes reached by `min_walkers` distinct walkers
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from ..graph import SamplingGraph
from ..walks import (
    CandidateResolver,
    StepPolicy,
    UniformStep,
    DegreeWeightedStep,
    HighestDegreeStep,
    SelectionPolicy,
    EveryRoundSelection,
    RoundBasedSelection,
    ThresholdSelection,
)
from .config import SamplingConfig
from .coordinator import RoundCoordinator, SamplingResult
from .errors import UnknownAlgorithm


Strategy = Tuple[CandidateResolver, StepPolicy, SelectionPolicy]
StrategyBuilder = Callable[[Dict[str, Any], SamplingConfig], Strategy]

_REGISTRY: Dict[str, StrategyBuilder] = {}


def register_algorithm(name: str) -> Callable[[StrategyBuilder], StrategyBuilder]:
    """
    Register a strategy builder under name.

    A builder receives the tuning params and the run config and returns a
    fresh (resolver, walker, sampler) triple.

    Example:
        >>> @register_algorithm('in_edge_walk')
        ... def _in_edge_walk(params, config):
        ...     return (CandidateResolver(direction='in'), UniformStep(),
        ...             EveryRoundSelection())
    """
    def decorator(builder: StrategyBuilder) -> StrategyBuilder:
        if name in _REGISTRY:
            raise ValueError(f"Sampling algorithm already registered: {name}")
        _REGISTRY[name] = builder
        return builder
    return decorator


def unregister_algorithm(name: str) -> None:
    """Remove a registered strategy (mainly for tests)."""
    _REGISTRY.pop(name, None)


def available_algorithms() -> List[str]:
    """Names of all registered algorithms, sorted."""
    return sorted(_REGISTRY)


def build(
    algorithm_id: str,
    target_fraction: float,
    walker_count: int = 1,
    seed: Optional[int] = None,
    fast: bool = False,
    **params
) -> Tuple[CandidateResolver, StepPolicy, SelectionPolicy, SamplingConfig]:
    """
    Build a strategy and its run configuration.

    Args:
        algorithm_id: Registered algorithm name
        target_fraction: Requested coverage in (0, 1]
        walker_count: Number of walkers
        seed: Run seed
        fast: Memoize candidate neighborhoods during the run
        **params: Run options (round_cap, stall_retries, reseed, grace_rounds,
            independent_streams) and strategy tuning params

    Returns:
        Tuple of (resolver, walker, sampler, config)

    Raises:
        UnknownAlgorithm: If algorithm_id is not registered
        ValueError: If a parameter is invalid
    """
    if algorithm_id not in _REGISTRY:
        raise UnknownAlgorithm(algorithm_id, available_algorithms())

    config = SamplingConfig.from_dict({
        **params,
        'algorithm_id': algorithm_id,
        'target_fraction': target_fraction,
        'walker_count': walker_count,
        'seed': seed,
        'fast': fast,
    })

    resolver, walker, sampler = _REGISTRY[algorithm_id](config.params, config)
    return resolver, walker, sampler, config


def build_from_config(
    config: SamplingConfig
) -> Tuple[CandidateResolver, StepPolicy, SelectionPolicy, SamplingConfig]:
    """Build a strategy for an existing configuration."""
    if config.algorithm_id not in _REGISTRY:
        raise UnknownAlgorithm(config.algorithm_id, available_algorithms())

    resolver, walker, sampler = _REGISTRY[config.algorithm_id](config.params, config)
    return resolver, walker, sampler, config


def sample_graph(
    graph: SamplingGraph,
    config: SamplingConfig,
    rng: Optional[np.random.Generator] = None,
    verbose: bool = False
) -> SamplingResult:
    """
    Convenience function to build a strategy and run it once.

    Args:
        graph: Graph to sample
        config: Run configuration (algorithm_id selects the strategy)
        rng: Optional run generator
        verbose: Print progress

    Returns:
        SamplingResult
    """
    resolver, walker, sampler, config = build_from_config(config)
    coordinator = RoundCoordinator(resolver, walker, sampler, verbose=verbose)
    return coordinator.run(graph, config, rng=rng)


# ---------------------------------------------------------------------------
# Built-in strategies
# ---------------------------------------------------------------------------

@register_algorithm('random_walk')
def _random_walk(params, config):
    return (
        CandidateResolver(direction=params.get('direction', 'out')),
        UniformStep(),
        EveryRoundSelection()
    )


@register_algorithm('undirected_random_walk')
def _undirected_random_walk(params, config):
    return (
        CandidateResolver(direction='both'),
        UniformStep(),
        EveryRoundSelection()
    )


@register_algorithm('random_stroll')
def _random_stroll(params, config):
    return (
        CandidateResolver(direction=params.get('direction', 'out'), exclude_visited=True),
        UniformStep(),
        EveryRoundSelection()
    )


@register_algorithm('degree_biased_walk')
def _degree_biased_walk(params, config):
    return (
        CandidateResolver(direction=params.get('direction', 'out')),
        DegreeWeightedStep(
            degree_kind=params.get('degree_kind', 'out'),
            exponent=params.get('exponent', 1.0),
            smoothing=params.get('smoothing', 1.0)
        ),
        EveryRoundSelection()
    )


@register_algorithm('highest_degree_walk')
def _highest_degree_walk(params, config):
    # Without excluding seen nodes a deterministic walker oscillates between hubs
    return (
        CandidateResolver(direction=params.get('direction', 'out'), exclude_visited=True),
        HighestDegreeStep(degree_kind=params.get('degree_kind', 'out')),
        EveryRoundSelection()
    )


@register_algorithm('snowball_walk')
def _snowball_walk(params, config):
    return (
        CandidateResolver(direction=params.get('direction', 'out')),
        UniformStep(record_candidates=True),
        EveryRoundSelection()
    )


@register_algorithm('round_based_random_walk')
def _round_based_random_walk(params, config):
    return (
        CandidateResolver(direction=params.get('direction', 'out')),
        UniformStep(),
        RoundBasedSelection(period=int(params.get('rounds', 5)))
    )


@register_algorithm('threshold_walk')
def _threshold_walk(params, config):
    min_walkers = int(params.get('min_walkers', 2))
    if min_walkers > config.walker_count:
        raise ValueError(
            f"threshold_walk needs min_walkers ({min_walkers}) <= "
            f"walker_count ({config.walker_count})"
        )
    return (
        CandidateResolver(direction=params.get('direction', 'out')),
        UniformStep(),
        ThresholdSelection(min_walkers=min_walkers)
    )
