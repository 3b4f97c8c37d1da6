"""Constraint rules evaluated against the sequence built so far.

Every rule answers one question: may ``candidate`` be appended to
``built``? Rules receive the optional ``row_size`` of the output so that
row-aware rules can locate the current row. Rules are immutable objects;
combinators hold their children and can be inspected through ``.rules``
or ``.rule``.

Examples
--------
>>> from bank_sequences.data.rules import and_, only_even, in_range
>>> rule = and_([only_even, in_range(2, 8)])
>>> rule(4, []), rule(3, []), rule(10, [])
(True, False, False)
>>> (only_even & ~in_range(2, 8))(10, [])
True
"""

import inspect
import math
import numbers
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..core.reshape import row_of, position_in_row

RuleLike = Union['Rule', Callable[..., bool]]


def _is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def _current_row(built: Sequence[int], row_size: Optional[int]) -> Sequence[int]:
    """Values already placed in the row the next candidate lands in."""
    if not row_size:
        return built
    start = row_of(len(built), row_size) * row_size
    return built[start:]


class Rule:
    """Base class for candidate rules.

    Subclasses implement :meth:`accept`. Calling a rule rejects
    non-finite candidates before delegating, so subclasses only ever see
    real numbers.
    """

    def accept(self, candidate, built: Sequence[int], row_size: Optional[int] = None) -> bool:
        raise NotImplementedError

    def __call__(self, candidate, built: Sequence[int], row_size: Optional[int] = None) -> bool:
        if not _is_finite_number(candidate):
            return False
        return bool(self.accept(candidate, built, row_size))

    def __and__(self, other: RuleLike) -> 'AllOf':
        return AllOf([self, other])

    def __or__(self, other: RuleLike) -> 'AnyOf':
        return AnyOf([self, other])

    def __invert__(self) -> 'Negation':
        return Negation(self)

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({params})"


class FunctionRule(Rule):
    """Adapter for plain functions.

    Functions taking ``(candidate, built)`` and functions taking
    ``(candidate, built, row_size)`` are both supported.
    """

    def __init__(self, func: Callable[..., bool]):
        self.func = func
        self.wants_row_size = _accepts_row_size(func)

    def accept(self, candidate, built, row_size=None):
        if self.wants_row_size:
            return self.func(candidate, built, row_size)
        return self.func(candidate, built)

    def __repr__(self) -> str:
        return f"FunctionRule({getattr(self.func, '__name__', self.func)!r})"


def _accepts_row_size(func: Callable) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False
    positional = 0
    for parameter in signature.parameters.values():
        if parameter.kind == parameter.VAR_POSITIONAL:
            return True
        if parameter.kind in (parameter.POSITIONAL_ONLY, parameter.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional >= 3


def as_rule(rule: Optional[RuleLike]) -> Optional[Rule]:
    """Wrap ``rule`` in a :class:`Rule` unless it already is one."""
    if rule is None or isinstance(rule, Rule):
        return rule
    if not callable(rule):
        raise TypeError(f"Rule must be callable, got {type(rule).__name__}")
    return FunctionRule(rule)


# ============================================================================
# Combinators
# ============================================================================

class AllOf(Rule):
    """Accepts iff every child accepts; an empty list always accepts."""

    def __init__(self, rules: Iterable[RuleLike]):
        self.rules = tuple(as_rule(rule) for rule in rules)

    def accept(self, candidate, built, row_size=None):
        return all(rule(candidate, built, row_size) for rule in self.rules)


class AnyOf(Rule):
    """Accepts iff some child accepts; an empty list always rejects."""

    def __init__(self, rules: Iterable[RuleLike]):
        self.rules = tuple(as_rule(rule) for rule in rules)

    def accept(self, candidate, built, row_size=None):
        return any(rule(candidate, built, row_size) for rule in self.rules)


class Negation(Rule):
    """Inverts a child rule. Non-finite candidates stay rejected."""

    def __init__(self, rule: RuleLike):
        self.rule = as_rule(rule)

    def accept(self, candidate, built, row_size=None):
        return not self.rule(candidate, built, row_size)


def and_(rules: Iterable[RuleLike]) -> AllOf:
    """Combine rules so that all must accept."""
    return AllOf(rules)


def or_(rules: Iterable[RuleLike]) -> AnyOf:
    """Combine rules so that at least one must accept."""
    return AnyOf(rules)


def not_(rule: RuleLike) -> Negation:
    """Invert a rule."""
    return Negation(rule)


# ============================================================================
# Candidate-only rules
# ============================================================================

class Parity(Rule):
    def __init__(self, even: bool):
        self.even = even

    def accept(self, candidate, built, row_size=None):
        return (candidate % 2 == 0) == self.even


class InRange(Rule):
    """Inclusive range test, optionally inverted."""

    def __init__(self, minimum, maximum, inside: bool = True):
        self.minimum = minimum
        self.maximum = maximum
        self.inside = inside

    def accept(self, candidate, built, row_size=None):
        within = self.minimum <= candidate <= self.maximum
        return within if self.inside else not within


class Divisibility(Rule):
    def __init__(self, divisor, divisible: bool = True):
        if divisor == 0:
            raise ValueError("Divisor must be non-zero")
        self.divisor = divisor
        self.divisible = divisible

    def accept(self, candidate, built, row_size=None):
        return (candidate % self.divisor == 0) == self.divisible


class Prime(Rule):
    def accept(self, candidate, built, row_size=None):
        if candidate < 2 or candidate != int(candidate):
            return False
        n = int(candidate)
        for i in range(2, math.isqrt(n) + 1):
            if n % i == 0:
                return False
        return True


class PerfectSquare(Rule):
    def accept(self, candidate, built, row_size=None):
        if candidate < 0 or candidate != int(candidate):
            return False
        root = math.isqrt(int(candidate))
        return root * root == candidate


# ============================================================================
# History rules
# ============================================================================

class CompareWithLast(Rule):
    """Compares the candidate with the last element; the first element always passes."""

    _OPERATORS = {
        '>': lambda a, b: a > b,
        '<': lambda a, b: a < b,
        '!=': lambda a, b: a != b,
    }

    def __init__(self, op: str):
        if op not in self._OPERATORS:
            raise ValueError(f"Unknown comparison '{op}'. Available: {list(self._OPERATORS)}")
        self.op = op

    def accept(self, candidate, built, row_size=None):
        if not built:
            return True
        return self._OPERATORS[self.op](candidate, built[-1])


class DifferenceBound(Rule):
    """Bounds |candidate - last| from above or below."""

    def __init__(self, limit, upper: bool):
        self.limit = limit
        self.upper = upper

    def accept(self, candidate, built, row_size=None):
        if not built:
            return True
        diff = abs(candidate - built[-1])
        return diff <= self.limit if self.upper else diff >= self.limit


class AlternateEvenOdd(Rule):
    def accept(self, candidate, built, row_size=None):
        if not built:
            return True
        return (built[-1] % 2 == 0) != (candidate % 2 == 0)


class MaxOccurrences(Rule):
    """The candidate may already appear at most ``max_count - 1`` times."""

    def __init__(self, max_count: int):
        self.max_count = max_count

    def accept(self, candidate, built, row_size=None):
        return sum(1 for value in built if value == candidate) < self.max_count


class NoRepeatInLast(Rule):
    """Rejects candidates present among the last ``positions`` elements.

    Follows slice semantics: ``0`` covers the whole history and a negative
    count skips that many leading elements.
    """

    def __init__(self, positions: int):
        self.positions = positions

    def accept(self, candidate, built, row_size=None):
        return candidate not in built[-self.positions:]


class SumBound(Rule):
    """Strict bound on the running sum including the candidate."""

    def __init__(self, limit, below: bool):
        self.limit = limit
        self.below = below

    def accept(self, candidate, built, row_size=None):
        total = sum(built) + candidate
        return total < self.limit if self.below else total > self.limit


class AverageInRange(Rule):
    """Inclusive bounds on the running average; the first element always passes."""

    def __init__(self, minimum, maximum):
        self.minimum = minimum
        self.maximum = maximum

    def accept(self, candidate, built, row_size=None):
        if not built:
            return True
        average = (sum(built) + candidate) / (len(built) + 1)
        return self.minimum <= average <= self.maximum


class BalanceEvenOdd(Rule):
    """Caps how far the even count may run ahead of the odd count and vice versa."""

    def __init__(self, max_imbalance: int = 1):
        self.max_imbalance = max_imbalance

    def accept(self, candidate, built, row_size=None):
        even_count = sum(1 for value in built if value % 2 == 0)
        odd_count = len(built) - even_count
        if candidate % 2 == 0:
            return (even_count + 1) - odd_count <= self.max_imbalance
        return (odd_count + 1) - even_count <= self.max_imbalance


# ============================================================================
# Position rules
# ============================================================================

class ByPosition(Rule):
    """Applies the rule registered for the current position, if any."""

    def __init__(self, rules: Mapping[int, RuleLike]):
        self.rules: Dict[int, Rule] = {int(pos): as_rule(rule) for pos, rule in rules.items()}

    def accept(self, candidate, built, row_size=None):
        rule = self.rules.get(len(built))
        return rule(candidate, built, row_size) if rule is not None else True


class OnPositionParity(Rule):
    """Applies ``rule`` only on even (0, 2, 4, ...) or odd positions."""

    def __init__(self, rule: RuleLike, even: bool):
        self.rule = as_rule(rule)
        self.even = even

    def accept(self, candidate, built, row_size=None):
        if (len(built) % 2 == 0) != self.even:
            return True
        return self.rule(candidate, built, row_size)


class ValueAtPositions(Rule):
    """``value`` may only be placed at the given 0-based positions."""

    def __init__(self, positions: Iterable[int], value):
        self.positions = frozenset(positions)
        self.value = value

    def accept(self, candidate, built, row_size=None):
        if candidate == self.value:
            return len(built) in self.positions
        return True


# ============================================================================
# Row-aware rules
# ============================================================================

class NoRepeatInRow(Rule):
    def accept(self, candidate, built, row_size=None):
        return candidate not in _current_row(built, row_size)


class NoAdjacentInRow(Rule):
    """Neighbours inside a row may not differ by exactly one."""

    def accept(self, candidate, built, row_size=None):
        row = _current_row(built, row_size)
        if not row:
            return True
        return abs(candidate - row[-1]) != 1


class MaxDifferenceInRow(Rule):
    def __init__(self, limit):
        self.limit = limit

    def accept(self, candidate, built, row_size=None):
        row = _current_row(built, row_size)
        if not row:
            return True
        return abs(candidate - row[-1]) <= self.limit


class NoRunInRow(Rule):
    """Forbids ``length`` consecutive integers (n, n+1, ...) inside a row."""

    def __init__(self, length: int = 3):
        if length < 2:
            raise ValueError(f"Run length must be at least 2, got {length}")
        self.length = length

    def accept(self, candidate, built, row_size=None):
        row = _current_row(built, row_size)
        if len(row) < self.length - 1:
            return True
        window = list(row[-(self.length - 1):]) + [candidate]
        return not all(b == a + 1 for a, b in zip(window, window[1:]))


class NoColumnRepeat(Rule):
    """One column may not hold the same value in ``rows`` successive rows."""

    def __init__(self, rows: int = 3):
        if rows < 2:
            raise ValueError(f"Row count must be at least 2, got {rows}")
        self.rows = rows

    def accept(self, candidate, built, row_size=None):
        if not row_size:
            return True
        position = len(built)
        row = row_of(position, row_size)
        if row < self.rows - 1:
            return True
        column = position_in_row(position, row_size)
        above = [built[(row - k) * row_size + column] for k in range(1, self.rows)]
        return not all(value == candidate for value in above)


class MaxConsecutiveRowsWith(Rule):
    """A value may appear in at most ``max_rows`` consecutive rows."""

    def __init__(self, max_rows: int = 2):
        self.max_rows = max_rows

    def accept(self, candidate, built, row_size=None):
        if not row_size:
            return True
        row = row_of(len(built), row_size)
        if row < self.max_rows:
            return True
        for k in range(1, self.max_rows + 1):
            start = (row - k) * row_size
            if candidate not in built[start:start + row_size]:
                return True
        return False


# ============================================================================
# Rule library
# ============================================================================

only_even = Parity(even=True)
only_odd = Parity(even=False)
ascending = CompareWithLast('>')
descending = CompareWithLast('<')
different = CompareWithLast('!=')
no_consecutive_repeats = CompareWithLast('!=')
no_duplicates = MaxOccurrences(1)
alternate_even_odd = AlternateEvenOdd()
only_primes = Prime()
only_squares = PerfectSquare()
no_repeat_in_row = NoRepeatInRow()
no_adjacent_in_row = NoAdjacentInRow()


def in_range(minimum, maximum) -> InRange:
    """Allow only values in ``[minimum, maximum]``."""
    return InRange(minimum, maximum)


def not_in_range(minimum, maximum) -> InRange:
    """Exclude values in ``[minimum, maximum]``."""
    return InRange(minimum, maximum, inside=False)


def max_occurrences(max_count: int) -> MaxOccurrences:
    """Allow each value at most ``max_count`` times in the whole sequence."""
    return MaxOccurrences(max_count)


def no_repeat_in_last(positions: int) -> NoRepeatInLast:
    return NoRepeatInLast(positions)


def sum_less_than(max_sum) -> SumBound:
    """Keep the running sum strictly below ``max_sum``."""
    return SumBound(max_sum, below=True)


def sum_greater_than(min_sum) -> SumBound:
    """Require the running sum to stay strictly above ``min_sum``."""
    return SumBound(min_sum, below=False)


def average_in_range(minimum, maximum) -> AverageInRange:
    return AverageInRange(minimum, maximum)


def divisible_by(divisor) -> Divisibility:
    return Divisibility(divisor)


def not_divisible_by(divisor) -> Divisibility:
    return Divisibility(divisor, divisible=False)


def by_position(rules: Mapping[int, RuleLike]) -> ByPosition:
    """Apply a different rule at specific 0-based positions.

    Examples
    --------
    >>> by_position({0: only_even, 1: only_odd})(3, [2])
    True
    """
    return ByPosition(rules)


def on_even_positions(rule: RuleLike) -> OnPositionParity:
    return OnPositionParity(rule, even=True)


def on_odd_positions(rule: RuleLike) -> OnPositionParity:
    return OnPositionParity(rule, even=False)


def max_difference(max_diff) -> DifferenceBound:
    """Consecutive elements may differ by at most ``max_diff``."""
    return DifferenceBound(max_diff, upper=True)


def min_difference(min_diff) -> DifferenceBound:
    """Consecutive elements must differ by at least ``min_diff``."""
    return DifferenceBound(min_diff, upper=False)


def balance_even_odd(max_imbalance: int = 1) -> BalanceEvenOdd:
    return BalanceEvenOdd(max_imbalance)


def value_at_positions(positions: Iterable[int], value) -> ValueAtPositions:
    return ValueAtPositions(positions, value)


def max_difference_in_row(limit) -> MaxDifferenceInRow:
    return MaxDifferenceInRow(limit)


def no_run_in_row(length: int = 3) -> NoRunInRow:
    return NoRunInRow(length)


def no_column_repeat(rows: int = 3) -> NoColumnRepeat:
    return NoColumnRepeat(rows)


def max_consecutive_rows_with(max_rows: int = 2) -> MaxConsecutiveRowsWith:
    return MaxConsecutiveRowsWith(max_rows)


def evaluate_rule(rule: Optional[Rule], candidate, built: List[int],
                  row_size: Optional[int] = None) -> bool:
    """Evaluate an optional rule; no rule accepts everything."""
    if rule is None:
        return _is_finite_number(candidate)
    return rule(candidate, built, row_size)
