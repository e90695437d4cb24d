"""
Round Coordinator Module.

This module drives a sampling run. It owns every piece of mutable run state
(walker positions, the per-round visitation record, the growing sample) and
calls the three policies of a strategy in a fixed order each round.

Key Concept:
    One round:
    1. Every active walker resolves its candidate set; empty means stalled
    2. Every non-stalled walker takes one step; the step is recorded
    3. The selection policy turns the round's record into an addition delta
    4. Stalled walkers are reseeded, or retired once their budget is spent
    5. The run stops on TARGET_MET, NO_PROGRESS or ROUND_CAP

    All randomness comes from the run generator (or per-walker generators
    spawned from it), so a fixed seed reproduces the same sample.
"""

import torch
import numpy as np
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Set, Tuple, Union
from dataclasses import dataclass, field

from ..graph import SamplingGraph
from ..walks import CandidateCache, CandidateResolver, StepPolicy, SelectionPolicy
from ..walks import VisitationRecord
from .callbacks import ProgressMonitor, SamplingLogger
from .config import SamplingConfig
from .errors import EmptyGraph, NoProgress, SamplingError, StallExhausted


class SamplingStatus(Enum):
    """Why a run stopped."""
    TARGET_MET = "TARGET_MET"
    ROUND_CAP = "ROUND_CAP"
    NO_PROGRESS = "NO_PROGRESS"


@dataclass
class WalkerState:
    """
    Position and stall bookkeeping of one walker.

    Attributes:
        walker_id: Index of the walker within the run
        position: Current node, or None before the first placement
        stalls: Consecutive rounds this walker found no candidates
        retired: Whether the walker stopped permanently
        fresh: Whether the walker was just (re)placed and the placement
            has not been recorded yet
        rng: Private generator, or None to use the run generator
    """
    walker_id: int
    position: Optional[int] = None
    stalls: int = 0
    retired: bool = False
    fresh: bool = False
    rng: Optional[np.random.Generator] = None


@dataclass
class SamplingResult:
    """
    Outcome of a sampling run.

    Attributes:
        sample: Committed node indices
        status: Termination status
        rounds: Number of rounds executed
        num_nodes: Node count of the sampled graph
        target_fraction: Requested coverage
        history: Sample size after each round
        retired: (walker_id, round_index) of every retired walker
        algorithm_id: Strategy that produced the sample
    """
    sample: FrozenSet[int]
    status: SamplingStatus
    rounds: int
    num_nodes: int
    target_fraction: float
    history: List[int] = field(default_factory=list)
    retired: List[Tuple[int, int]] = field(default_factory=list)
    algorithm_id: str = ''

    @property
    def coverage(self) -> float:
        return len(self.sample) / self.num_nodes if self.num_nodes > 0 else 0.0

    @property
    def is_partial(self) -> bool:
        return self.status != SamplingStatus.TARGET_MET

    @property
    def nodes(self) -> List[int]:
        """Sampled node indices in ascending order."""
        return sorted(self.sample)

    def to_tensor(self) -> torch.Tensor:
        """Sampled node indices as a sorted long tensor."""
        return torch.tensor(self.nodes, dtype=torch.long)

    def raise_for_status(self) -> 'SamplingResult':
        """
        Raise NoProgress if the target coverage was not reached.

        Returns:
            self, so the call can be chained
        """
        if self.is_partial:
            raise NoProgress(self)
        return self

    def __len__(self) -> int:
        return len(self.sample)


class RoundCoordinator:
    """
    Run round-based sampling with one (resolver, walker, sampler) strategy.

    The coordinator never needs to change when a new strategy is added:
    it only talks to the policy interfaces.

    Example:
        >>> from graph_sampling.engine import RoundCoordinator, SamplingConfig
        >>> from graph_sampling.walks import CandidateResolver, UniformStep
        >>> from graph_sampling.walks import EveryRoundSelection
        >>>
        >>> coordinator = RoundCoordinator(
        ...     resolver=CandidateResolver(direction='both'),
        ...     walker=UniformStep(),
        ...     sampler=EveryRoundSelection()
        ... )
        >>> config = SamplingConfig(target_fraction=0.5, seed=42)
        >>> result = coordinator.run(graph, config)
        >>> print(result.status, len(result.sample))
    """

    def __init__(
        self,
        resolver: CandidateResolver,
        walker: StepPolicy,
        sampler: SelectionPolicy,
        verbose: bool = False
    ):
        """
        Initialize coordinator.

        Args:
            resolver: Candidate resolver
            walker: Step policy
            sampler: Selection policy
            verbose: Print progress when no logger is passed to run()
        """
        self.resolver = resolver
        self.walker = walker
        self.sampler = sampler
        self.verbose = verbose

    def run(
        self,
        graph: SamplingGraph,
        config: SamplingConfig,
        rng: Optional[np.random.Generator] = None,
        logger: Optional[SamplingLogger] = None
    ) -> SamplingResult:
        """
        Sample graph until a termination condition holds.

        Args:
            graph: Graph to sample
            config: Run configuration
            rng: Run generator. If None, seeded from config.seed
            logger: Optional per-round metrics logger

        Returns:
            SamplingResult with the sample and termination status

        Raises:
            EmptyGraph: If the graph has no nodes
        """
        num_nodes = graph.num_nodes
        if num_nodes == 0:
            raise EmptyGraph("Cannot sample a graph with no nodes")

        if rng is None:
            rng = np.random.default_rng(config.seed)
        if logger is None and self.verbose:
            logger = SamplingLogger(verbose=True)

        resolver = CandidateCache(self.resolver) if config.fast else self.resolver
        self.sampler.reset()

        walkers = self._init_walkers(config, rng)
        round_cap = config.effective_round_cap(num_nodes)
        monitor = ProgressMonitor(patience=config.grace_rounds)

        sample: Set[int] = set()
        sample_order: List[int] = []
        seen = np.zeros(num_nodes, dtype=bool)
        seen_view = seen.view()
        seen_view.setflags(write=False)

        history: List[int] = []
        retired: List[Tuple[int, int]] = []
        status = None
        round_index = 0

        if self.verbose:
            print(f"Sampling {graph}: {config.algorithm_id}, "
                  f"{config.walker_count} walker(s), target {config.target_fraction:.2%}, "
                  f"round cap {round_cap}{' (fast)' if config.fast else ''}")

        while status is None:
            record = VisitationRecord(round_index)
            stalled = self._advance(graph, resolver, walkers, record, seen, seen_view, rng)

            delta = self.sampler.select(record, round_index)
            for node in sorted(delta):
                node = int(node)
                if not 0 <= node < num_nodes or not seen[node]:
                    raise SamplingError(
                        f"{self.sampler!r} selected node {node}, which no walker visited"
                    )
                if node not in sample:
                    sample.add(node)
                    sample_order.append(node)

            for state in stalled:
                try:
                    self._reseed(state, sample_order, num_nodes, config, rng, round_index)
                except StallExhausted as exc:
                    state.retired = True
                    retired.append((state.walker_id, round_index))
                    if logger is not None:
                        logger.log_event(round_index, 'walker_retired',
                                         walker=exc.walker_id, stalls=exc.stalls)

            history.append(len(sample))
            monitor.update(len(sample), round_index)
            active = sum(1 for w in walkers if not w.retired)

            if logger is not None:
                logger.log_round(round_index, {
                    'sample_size': len(sample),
                    'coverage': len(sample) / num_nodes,
                    'visited': len(record),
                    'committed': len(delta),
                    'stalled': len(stalled),
                    'active_walkers': active,
                })

            status = self._check_termination(
                len(sample), num_nodes, config, active, monitor, round_index, round_cap
            )
            round_index += 1

        result = SamplingResult(
            sample=frozenset(sample),
            status=status,
            rounds=round_index,
            num_nodes=num_nodes,
            target_fraction=config.target_fraction,
            history=history,
            retired=retired,
            algorithm_id=config.algorithm_id
        )

        if self.verbose:
            print(f"Sampling finished: {status.value} after {result.rounds} rounds, "
                  f"{len(result)} nodes ({result.coverage:.2%})")

        return result

    def _init_walkers(
        self,
        config: SamplingConfig,
        rng: np.random.Generator
    ) -> List[WalkerState]:
        """Create unstarted walkers, with private streams if configured."""
        if config.independent_streams:
            streams = rng.spawn(config.walker_count)
        else:
            streams = [None] * config.walker_count

        return [WalkerState(walker_id=i, rng=stream) for i, stream in enumerate(streams)]

    def _advance(
        self,
        graph: SamplingGraph,
        resolver: Union[CandidateResolver, CandidateCache],
        walkers: List[WalkerState],
        record: VisitationRecord,
        seen: np.ndarray,
        seen_view: np.ndarray,
        rng: np.random.Generator
    ) -> List[WalkerState]:
        """
        Move every active walker one step and fill the round's record.

        Returns:
            Walkers that stalled this round
        """
        stalled = []

        def visit(node: int, walker_id: int):
            record.add(node, walker_id)
            seen[node] = True

        for state in walkers:
            if state.retired:
                continue

            walker_rng = state.rng if state.rng is not None else rng

            if state.position is None:
                state.position = int(walker_rng.integers(graph.num_nodes))
                state.fresh = True
            if state.fresh:
                # Landing on an unseen node is progress, like a step
                if not seen[state.position]:
                    state.stalls = 0
                visit(state.position, state.walker_id)
                state.fresh = False

            candidates = resolver.resolve(graph, state.position, seen_view)
            next_node = self.walker.select_next(graph, candidates, state.position, walker_rng)

            if next_node is None:
                stalled.append(state)
                continue

            if self.walker.record_candidates:
                for node in candidates.tolist():
                    visit(node, state.walker_id)

            state.position = next_node
            state.stalls = 0
            visit(next_node, state.walker_id)

        return stalled

    def _reseed(
        self,
        state: WalkerState,
        sample_order: List[int],
        num_nodes: int,
        config: SamplingConfig,
        rng: np.random.Generator,
        round_index: int
    ) -> None:
        """
        Place a stalled walker on a fresh start node.

        Raises:
            StallExhausted: If the walker's consecutive stalls exceed its budget
        """
        state.stalls += 1
        if state.stalls > config.stall_retries:
            raise StallExhausted(state.walker_id, state.stalls, round_index)

        walker_rng = state.rng if state.rng is not None else rng

        if config.reseed == 'sample' and sample_order:
            state.position = sample_order[int(walker_rng.integers(len(sample_order)))]
        else:
            state.position = int(walker_rng.integers(num_nodes))
        state.fresh = True

    @staticmethod
    def _check_termination(
        sample_size: int,
        num_nodes: int,
        config: SamplingConfig,
        active_walkers: int,
        monitor: ProgressMonitor,
        round_index: int,
        round_cap: int
    ) -> Optional[SamplingStatus]:
        """Termination status after a round, or None to keep going."""
        if sample_size / num_nodes >= config.target_fraction:
            return SamplingStatus.TARGET_MET
        if active_walkers == 0 and monitor.exhausted:
            return SamplingStatus.NO_PROGRESS
        if round_index + 1 >= round_cap:
            return SamplingStatus.ROUND_CAP
        return None

    def get_statistics(self) -> Dict:
        """Describe the configured strategy."""
        return {
            'resolver': repr(self.resolver),
            'walker': repr(self.walker),
            'sampler': repr(self.sampler),
        }
