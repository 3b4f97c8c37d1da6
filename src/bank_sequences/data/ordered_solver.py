"""Ordered backtracking solver.

Builds a sequence whose rows are strictly ascending while respecting the
bank limits and an optional rule. The search is depth-first over
positions with a randomised branch order, run from an explicit stack of
choice points, and restarted from scratch a bounded number of times.
"""

import logging
import warnings
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Union

import numpy as np

from ..config.defaults import MAX_RESTARTS
from ..config.random_state import resolve_rng
from ..core.bank import validate_bank, resolve_dimensions, available_values
from ..core.reshape import fold_rows, position_in_row
from .diagnostics import UnsatisfiableWarning
from .rules import RuleLike, as_rule, evaluate_rule

logger = logging.getLogger(__name__)


@dataclass
class ChoicePoint:
    """Untried candidates for one position of the search."""
    position: int
    candidates: List[int]
    cursor: int = 0

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.candidates)

    def next_candidate(self) -> int:
        candidate = self.candidates[self.cursor]
        self.cursor += 1
        return candidate


@dataclass
class SolveStats:
    """Counters describing the last :meth:`OrderedSolver.solve` call."""
    attempts: int = 0
    nodes: int = 0
    backtracks: int = 0
    solved: bool = False
    history: List[int] = field(default_factory=list)


class OrderedSolver:
    """Depth-first solver producing strictly ascending rows.

    Parameters
    ----------
    bank : Mapping[int, int]
        Value -> maximum occurrence count
    dims : Sequence[int]
        ``[length]`` or ``[rows, columns]``; a 1-D request is one row
    rule : RuleLike, optional
        Called as ``rule(candidate, built, row_size)``
    max_restarts : int
        Number of full search attempts before giving up
    rng : np.random.Generator, optional
        Source for the branch order; defaults to the shared generator
    seed : int, optional
        Seed for a private generator when ``rng`` is not given
    """

    def __init__(self,
                 bank: Mapping[int, int],
                 dims: Sequence[int],
                 rule: Optional[RuleLike] = None,
                 max_restarts: int = MAX_RESTARTS,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        self.bank = validate_bank(bank)
        self.shape = resolve_dimensions(dims)
        self.rule = as_rule(rule)
        self.max_restarts = max_restarts
        self.rng = resolve_rng(rng, seed)
        self.stats = SolveStats()

    @property
    def row_size(self) -> int:
        return self.shape.row_size

    def candidates_for(self, sequence: List[int], usage: Counter) -> List[int]:
        """Admissible values for the next position, in randomised order.

        The first position of a row takes any value still under its limit;
        later positions must exceed the previous value.
        """
        position = len(sequence)
        minimum = None if position_in_row(position, self.row_size) == 0 else sequence[-1]
        candidates = available_values(self.bank, usage, minimum)
        if len(candidates) > 1:
            order = self.rng.permutation(len(candidates))
            candidates = [candidates[i] for i in order]
        return candidates

    def solve_once(self) -> Optional[List[int]]:
        """Run one complete search.

        Returns
        -------
        Optional[List[int]]
            A full-length sequence, or None when every branch failed
        """
        total = self.shape.total
        if total == 0:
            return []

        sequence: List[int] = []
        usage: Counter = Counter()
        # Invariant: len(stack) == len(sequence) + 1
        stack = [ChoicePoint(0, self.candidates_for(sequence, usage))]

        while stack:
            frame = stack[-1]
            if frame.exhausted:
                stack.pop()
                if sequence:
                    undone = sequence.pop()
                    usage[undone] -= 1
                    self.stats.backtracks += 1
                continue

            candidate = frame.next_candidate()
            self.stats.nodes += 1
            if not evaluate_rule(self.rule, candidate, sequence, self.row_size):
                continue

            sequence.append(candidate)
            usage[candidate] += 1
            if len(sequence) == total:
                return sequence
            stack.append(ChoicePoint(len(sequence), self.candidates_for(sequence, usage)))

        return None

    def solve(self, warn: bool = True, stacklevel: int = 2) -> List[int]:
        """Search with restarts.

        ``stacklevel`` picks the frame an :class:`UnsatisfiableWarning` is
        attributed to, counted from this method.

        Returns
        -------
        List[int]
            The first full-length solution, or an empty list after
            ``max_restarts`` failed attempts
        """
        self.stats = SolveStats()
        for attempt in range(1, self.max_restarts + 1):
            self.stats.attempts = attempt
            nodes_before = self.stats.nodes
            result = self.solve_once()
            self.stats.history.append(self.stats.nodes - nodes_before)
            if result is not None:
                self.stats.solved = True
                logger.debug("Ordered solve succeeded on attempt %d (%d nodes)",
                             attempt, self.stats.nodes)
                return result
            logger.debug("Ordered solve attempt %d exhausted all branches", attempt)

        if warn:
            warnings.warn(
                f"No ordered sequence of {self.shape.total} elements satisfies the "
                f"constraints after {self.max_restarts} attempts",
                UnsatisfiableWarning,
                stacklevel=stacklevel,
            )
        return []

    def __repr__(self) -> str:
        return (f"OrderedSolver(bank_size={len(self.bank)}, "
                f"total={self.shape.total}, row_size={self.row_size})")


def generate_ordered(bank: Mapping[int, int],
                     dims: Sequence[int],
                     rule: Optional[RuleLike] = None,
                     *,
                     max_restarts: int = MAX_RESTARTS,
                     rng: Optional[np.random.Generator] = None,
                     seed: Optional[int] = None,
                     warn: bool = True,
                     stacklevel: int = 2) -> Union[List[int], List[List[int]]]:
    """
    Generate a sequence or matrix with strictly ascending rows.

    Parameters
    ----------
    bank : Mapping[int, int]
        Value -> maximum occurrence count
    dims : Sequence[int]
        ``[length]`` or ``[rows, columns]``
    rule : RuleLike, optional
        Extra constraint, called as ``rule(candidate, built, row_size)``
    max_restarts : int
        Full search attempts before giving up
    rng : np.random.Generator, optional
        Generator for the branch order
    seed : int, optional
        Seed for a private generator
    warn : bool
        Emit :class:`UnsatisfiableWarning` when no solution is found
    stacklevel : int
        Frame the warning is attributed to; the default is the caller

    Returns
    -------
    List[int] or List[List[int]]
        Flat sequence for 1-D requests, list of rows for 2-D requests;
        empty when the constraints could not be satisfied

    Examples
    --------
    >>> generate_ordered({1: 3, 2: 3, 3: 3, 4: 3, 5: 3, 6: 3}, [6, 3], seed=7)  # doctest: +SKIP
    [[1, 4, 6], [2, 3, 5], ...]
    """
    solver = OrderedSolver(bank, dims, rule, max_restarts=max_restarts, rng=rng, seed=seed)
    flat = solver.solve(warn=warn, stacklevel=stacklevel + 1)
    if solver.shape.is_2d:
        return fold_rows(flat, solver.shape.columns)
    return flat
