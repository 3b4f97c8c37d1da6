"""Warning categories emitted when generation cannot complete.

Running out of candidates is an expected outcome under tight rules, so
the generators report it through :mod:`warnings` and return partial or
empty output instead of raising.
"""


class GenerationWarning(UserWarning):
    """Base category for generation diagnostics."""


class ExhaustionWarning(GenerationWarning):
    """The stochastic generator hit its draw cap and stopped early."""


class UnsatisfiableWarning(GenerationWarning):
    """The ordered solver used every restart without a full solution."""
