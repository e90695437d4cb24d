"""
Sampling error types.

UnknownAlgorithm and EmptyGraph are raised before any round runs.
StallExhausted is handled inside the coordinator by retiring the walker.
NoProgress is only raised on request, by SamplingResult.raise_for_status().
"""


class SamplingError(Exception):
    """Base class for sampling errors."""


class UnknownAlgorithm(SamplingError, ValueError):
    """Algorithm identifier is not registered with the factory."""

    def __init__(self, algorithm_id: str, available=()):
        self.algorithm_id = algorithm_id
        self.available = tuple(available)
        message = f"Unknown sampling algorithm: {algorithm_id}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class EmptyGraph(SamplingError, ValueError):
    """Graph has no nodes to sample."""


class StallExhausted(SamplingError):
    """A walker stalled more times in a row than its retry budget allows."""

    def __init__(self, walker_id: int, stalls: int, round_index: int):
        self.walker_id = walker_id
        self.stalls = stalls
        self.round_index = round_index
        super().__init__(
            f"Walker {walker_id} stalled {stalls} times in a row (round {round_index})"
        )


class NoProgress(SamplingError):
    """Run stopped before reaching its target coverage."""

    def __init__(self, result):
        self.result = result
        super().__init__(
            f"Sampling stopped with {result.status.value} after {result.rounds} rounds "
            f"at coverage {result.coverage:.3f} (target {result.target_fraction:.3f})"
        )
