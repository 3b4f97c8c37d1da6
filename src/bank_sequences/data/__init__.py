"""Constrained generation engine.

This package provides the two generation strategies and the rule library
they share.

Key Components
--------------
- Rules: candidate predicates with AND/OR/NOT combinators
- Sequence generator: stochastic draws with retry-and-reject
- Ordered solver: backtracking search with ascending rows
- Validation: post-hoc checks of generated output

Examples
--------
>>> from bank_sequences.data import generate_ordered, rules
>>> bank = {value: 3 for value in range(1, 7)}
>>> matrix = generate_ordered(bank, [6, 3], rules.no_run_in_row(3))
>>> all(row[0] < row[1] < row[2] for row in matrix)
True
"""

from . import rules

from .rules import (
    Rule,
    AllOf,
    AnyOf,
    Negation,
    as_rule,
    and_,
    or_,
    not_
)

from .diagnostics import (
    GenerationWarning,
    ExhaustionWarning,
    UnsatisfiableWarning
)

from .sequence_generator import (
    SequenceGenerator,
    GenerationConfig,
    generate_random,
    generate_sequence,
    draw_sequence
)

from .ordered_solver import (
    OrderedSolver,
    ChoicePoint,
    SolveStats,
    generate_ordered
)

from .validation import validate_generated_sequence

__all__ = [
    # Core classes
    'SequenceGenerator',
    'OrderedSolver',
    'GenerationConfig',
    'ChoicePoint',
    'SolveStats',

    # Generation functions
    'generate_random',
    'generate_ordered',
    'generate_sequence',
    'draw_sequence',

    # Rules
    'rules',
    'Rule',
    'AllOf',
    'AnyOf',
    'Negation',
    'as_rule',
    'and_',
    'or_',
    'not_',

    # Diagnostics
    'GenerationWarning',
    'ExhaustionWarning',
    'UnsatisfiableWarning',

    # Validation
    'validate_generated_sequence'
]
