"""
Generation engine tests for Bank Sequences.

Covers:
- Rule library and combinators
- Stochastic generator
- Ordered backtracking solver
- Output validation
"""
