"""
Sampling Callbacks Module.

This module implements callbacks for run control and monitoring:
- ProgressMonitor: Count rounds without sample growth
- SamplingLogger: Log per-round metrics and run summary
"""

import json
import time
from pathlib import Path
from typing import Dict, Optional, List, Any


class ProgressMonitor:
    """
    Track sample growth and count stagnant rounds.

    The coordinator feeds the sample size after every round. Once all
    walkers are retired, the run stops when the stagnant count reaches
    `patience`.

    Example:
        >>> monitor = ProgressMonitor(patience=3)
        >>> monitor.update(5, round_index=0)
        False
        >>> monitor.update(5, round_index=1)
        False
        >>> monitor.counter
        1
    """

    def __init__(self, patience: int = 5):
        """
        Initialize progress monitor.

        Args:
            patience: Number of rounds without growth that counts as stalled
        """
        self.patience = patience

        self.best_size = -1
        self.counter = 0
        self.best_round = 0

    def update(self, size: int, round_index: int = 0) -> bool:
        """
        Record the sample size after a round.

        Args:
            size: Current sample size
            round_index: Current round number

        Returns:
            True if the sample has not grown for `patience` rounds
        """
        if size > self.best_size:
            self.best_size = size
            self.best_round = round_index
            self.counter = 0
            return False

        self.counter += 1
        return self.counter >= self.patience

    @property
    def exhausted(self) -> bool:
        return self.counter >= self.patience

    def reset(self):
        """Reset monitor state."""
        self.best_size = -1
        self.counter = 0
        self.best_round = 0

    def state_dict(self) -> Dict:
        """Get state for serialization."""
        return {
            'best_size': self.best_size,
            'counter': self.counter,
            'best_round': self.best_round
        }


class SamplingLogger:
    """
    Log sampling metrics and progress.

    Provides:
    - Console logging
    - JSON metrics file (when log_dir is given)
    - Run time tracking

    Example:
        >>> logger = SamplingLogger(log_dir='logs', log_every=10)
        >>> result = coordinator.run(graph, config, logger=logger)
        >>> logger.save_final()
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        log_every: int = 10,
        verbose: bool = True
    ):
        """
        Initialize logger.

        Args:
            log_dir: Directory for log files (None keeps metrics in memory only)
            log_every: Print to console every N rounds
            verbose: Whether to print to console
        """
        self.log_dir = Path(log_dir) if log_dir is not None else None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_every = log_every
        self.verbose = verbose

        self.round_metrics: List[Dict] = []
        self.events: List[Dict] = []
        self.start_time = time.time()

    def log_round(self, round_index: int, metrics: Dict[str, Any]):
        """
        Log metrics for a round.

        Args:
            round_index: Round number
            metrics: Round metrics (sample size, coverage, active walkers, ...)
        """
        record = {
            'round': round_index,
            'timestamp': time.time() - self.start_time,
            **metrics
        }
        self.round_metrics.append(record)

        if self.verbose and round_index % self.log_every == 0:
            self._print_round(round_index, metrics)

    def log_event(self, round_index: int, event: str, **details):
        """Log a discrete event such as a walker retirement."""
        record = {'round': round_index, 'event': event, **details}
        self.events.append(record)

        if self.verbose:
            extra = ", ".join(f"{k}={v}" for k, v in details.items())
            print(f"Round {round_index:5d} | {event}" + (f" ({extra})" if extra else ""))

    def _print_round(self, round_index: int, metrics: Dict[str, Any]):
        """Print round summary to console."""
        parts = [f"Round {round_index:5d}"]

        for key, value in metrics.items():
            if isinstance(value, float):
                parts.append(f"{key}: {value:.4f}")
            else:
                parts.append(f"{key}: {value}")

        print(" | ".join(parts))

    def save_final(self, extra_info: Optional[Dict] = None) -> Dict:
        """
        Build the run summary and save logs if a log_dir was given.

        Args:
            extra_info: Additional info to include

        Returns:
            Summary dictionary
        """
        total_time = time.time() - self.start_time

        summary = {
            'total_rounds': len(self.round_metrics),
            'total_time_seconds': total_time,
            'final_metrics': self.round_metrics[-1] if self.round_metrics else {},
            'num_events': len(self.events),
        }

        if extra_info:
            summary.update(extra_info)

        if self.log_dir is not None:
            with open(self.log_dir / 'round_metrics.json', 'w') as f:
                json.dump(self.round_metrics, f, indent=2)

            with open(self.log_dir / 'sampling_summary.json', 'w') as f:
                json.dump({**summary, 'events': self.events}, f, indent=2)

            if self.verbose:
                print(f"Logs saved to {self.log_dir}")

        return summary

    def get_metric_history(self, metric_name: str) -> List[Any]:
        """Get history of a specific metric."""
        return [m.get(metric_name) for m in self.round_metrics
                if metric_name in m]
