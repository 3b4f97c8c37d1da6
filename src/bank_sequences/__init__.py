"""
Bank Sequences - constrained generation of numeric sequences and matrices.

Values are drawn from a bank of allowed numbers with per-value occurrence
limits, filtered by composable rules, either stochastically or through an
ordered backtracking solver.
"""

__version__ = "0.1.0"

from .data import generate_random, generate_ordered
from .core import decompress_row, decompress_matrix

__all__ = [
    'generate_random',
    'generate_ordered',
    'decompress_row',
    'decompress_matrix',
]
