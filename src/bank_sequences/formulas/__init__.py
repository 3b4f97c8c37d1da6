"""Formula evaluation helpers."""

from .interpreter import evaluate, substitute, FormulaEvaluationError

__all__ = [
    'evaluate',
    'substitute',
    'FormulaEvaluationError'
]
