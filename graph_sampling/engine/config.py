"""
Sampling run configuration.
"""

from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, Optional


RESEED_MODES = ('uniform', 'sample')


@dataclass
class SamplingConfig:
    """
    Configuration of one sampling run.

    Attributes:
        target_fraction: Stop once |sample| / N reaches this value, in (0, 1]
        walker_count: Number of walkers advancing each round
        round_cap: Maximum number of rounds (None derives 10 * N at run time)
        seed: Seed of the run's random generator (None for fresh entropy)
        fast: Memoize candidate neighborhoods for the run
        algorithm_id: Registered strategy name
        stall_retries: Consecutive stalls tolerated before a walker retires
        reseed: Where stalled walkers restart: 'uniform' or 'sample'
        grace_rounds: Rounds without growth, once all walkers retired,
            before the run stops with NO_PROGRESS
        independent_streams: Give each walker its own generator spawned
            from the run generator
        params: Strategy tuning parameters passed to the factory
    """
    target_fraction: float = 0.1
    walker_count: int = 1
    round_cap: Optional[int] = None
    seed: Optional[int] = None
    fast: bool = False
    algorithm_id: str = 'random_walk'
    stall_retries: int = 3
    reseed: str = 'uniform'
    grace_rounds: int = 5
    independent_streams: bool = False
    params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not 0.0 < self.target_fraction <= 1.0:
            raise ValueError(
                f"target_fraction must be in (0, 1], got {self.target_fraction}"
            )
        if self.walker_count < 1:
            raise ValueError(f"walker_count must be >= 1, got {self.walker_count}")
        if self.round_cap is not None and self.round_cap < 1:
            raise ValueError(f"round_cap must be >= 1, got {self.round_cap}")
        if self.stall_retries < 0:
            raise ValueError(f"stall_retries must be >= 0, got {self.stall_retries}")
        if self.reseed not in RESEED_MODES:
            raise ValueError(f"Unknown reseed mode: {self.reseed}")
        if self.grace_rounds < 1:
            raise ValueError(f"grace_rounds must be >= 1, got {self.grace_rounds}")

    def effective_round_cap(self, num_nodes: int) -> int:
        """Round cap for a graph of num_nodes nodes."""
        if self.round_cap is not None:
            return self.round_cap
        return 10 * max(num_nodes, 1)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'SamplingConfig':
        """
        Build a config from a plain dictionary (e.g. a YAML section).

        Keys that are not config fields are treated as strategy params.
        """
        names = {f.name for f in fields(cls)}
        known = {k: v for k, v in values.items() if k in names and k != 'params'}
        params = dict(values.get('params') or {})
        params.update({k: v for k, v in values.items() if k not in names})
        return cls(params=params, **known)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
