"""
Selection Policy Module.

This module decides which visited nodes are committed to the permanent
sample. The coordinator hands each policy one round's visitation record and
unions whatever the policy returns into the sample.

Policies:
    EveryRoundSelection: Commit every node visited this round
    RoundBasedSelection: Batch visited nodes and commit every k-th round
    ThresholdSelection: Commit a node once enough distinct walkers reached it

Key Concept:
    select() only ever returns an addition, and only nodes that appeared in
    some record it was given. Policies never keep a reference to a record;
    anything they need across rounds they copy into their own state.
"""

from collections.abc import Mapping
from typing import Dict, FrozenSet, Iterator, Set


class VisitationRecord(Mapping):
    """
    Visits of a single round: node index -> ids of walkers that visited it.

    Built by the coordinator, read by a selection policy, then discarded.
    Mapping access is read-only; only the coordinator calls add().

    Example:
        >>> record = VisitationRecord(round_index=0)
        >>> record.add(5, walker_id=0)
        >>> record.add(5, walker_id=1)
        >>> record.walkers(5)
        frozenset({0, 1})
    """

    def __init__(self, round_index: int):
        self.round_index = round_index
        self._visits: Dict[int, Set[int]] = {}

    def add(self, node: int, walker_id: int) -> None:
        """Record that walker_id visited node during this round."""
        self._visits.setdefault(int(node), set()).add(walker_id)

    def walkers(self, node: int) -> FrozenSet[int]:
        """Distinct walkers that visited node this round."""
        return frozenset(self._visits.get(node, ()))

    def nodes(self) -> Set[int]:
        """Distinct nodes visited this round."""
        return set(self._visits)

    def __getitem__(self, node: int) -> FrozenSet[int]:
        return frozenset(self._visits[node])

    def __iter__(self) -> Iterator[int]:
        return iter(self._visits)

    def __len__(self) -> int:
        return len(self._visits)

    def __repr__(self) -> str:
        return f"VisitationRecord(round_index={self.round_index}, nodes={len(self)})"


class SelectionPolicy:
    """Base class for selection policies."""

    name = 'selection'

    def select(self, record: VisitationRecord, round_index: int) -> Set[int]:
        """
        Choose nodes to commit this round.

        Args:
            record: This round's visitation record
            round_index: Index of the current round (starting at 0)

        Returns:
            Set of node indices to add to the sample
        """
        raise NotImplementedError

    def reset(self) -> None:
        """Forget any state carried across rounds (called at run start)."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class EveryRoundSelection(SelectionPolicy):
    """Commit all distinct nodes visited this round."""

    name = 'every_round'

    def select(self, record, round_index):
        return record.nodes()


class RoundBasedSelection(SelectionPolicy):
    """
    Commit the accumulated visited set every k-th round.

    Visited nodes are collected each round and released when
    round_index % period == 0; other rounds return an empty set. With
    period=1 this behaves exactly like EveryRoundSelection.
    """

    name = 'round_based'

    def __init__(self, period: int = 5):
        """
        Initialize round-based policy.

        Args:
            period: Commit every `period` rounds (k >= 1)
        """
        if period < 1:
            raise ValueError(f"period must be >= 1, got {period}")
        self.period = period
        self._pending: Set[int] = set()

    def select(self, record, round_index):
        self._pending.update(record)

        if round_index % self.period != 0:
            return set()

        selected = self._pending
        self._pending = set()
        return selected

    @property
    def pending(self) -> FrozenSet[int]:
        """Visited nodes waiting for the next commit round."""
        return frozenset(self._pending)

    def reset(self):
        self._pending = set()

    def __repr__(self) -> str:
        return f"RoundBasedSelection(period={self.period})"


class ThresholdSelection(SelectionPolicy):
    """
    Commit a node once at least m distinct walkers have visited it.

    Walker counts accumulate across rounds inside the policy. Each node is
    returned at most once.
    """

    name = 'threshold'

    def __init__(self, min_walkers: int = 2):
        """
        Initialize threshold policy.

        Args:
            min_walkers: Distinct walkers required before a node is committed
        """
        if min_walkers < 1:
            raise ValueError(f"min_walkers must be >= 1, got {min_walkers}")
        self.min_walkers = min_walkers
        self._walkers: Dict[int, Set[int]] = {}
        self._committed: Set[int] = set()

    def select(self, record, round_index):
        selected = set()

        for node in record:
            if node in self._committed:
                continue

            seen_by = self._walkers.setdefault(node, set())
            seen_by.update(record.walkers(node))

            if len(seen_by) >= self.min_walkers:
                selected.add(node)
                self._committed.add(node)
                del self._walkers[node]

        return selected

    def visit_count(self, node: int) -> int:
        """Distinct walkers seen so far at a node not yet committed."""
        return len(self._walkers.get(node, ()))

    def reset(self):
        self._walkers = {}
        self._committed = set()

    def __repr__(self) -> str:
        return f"ThresholdSelection(min_walkers={self.min_walkers})"
