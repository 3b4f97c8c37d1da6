"""Stochastic bank sampling with retry-and-reject.

Each position draws uniformly from all bank values until one is under its
occurrence limit and accepted by the rule, up to a fixed number of draws.
Draws land on exhausted values as well; those simply count as failed
attempts, so rejection rates climb as limits fill up.
"""

import logging
import warnings
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Union

import numpy as np

from ..config.defaults import MAX_ATTEMPTS, MAX_RESTARTS
from ..config.random_state import resolve_rng
from ..config.settings import Settings, get_config
from ..core.bank import validate_bank, resolve_dimensions
from ..core.reshape import fold_rows
from .diagnostics import ExhaustionWarning
from .ordered_solver import generate_ordered
from .rules import RuleLike, as_rule, evaluate_rule

logger = logging.getLogger(__name__)


def draw_sequence(bank: Mapping[int, int],
                  total: int,
                  rule: Optional[RuleLike] = None,
                  row_size: Optional[int] = None,
                  max_attempts: int = MAX_ATTEMPTS,
                  rng: Optional[np.random.Generator] = None,
                  warn: bool = True,
                  stacklevel: int = 2) -> List[int]:
    """
    Draw a flat sequence of up to ``total`` values.

    Parameters
    ----------
    bank : Mapping[int, int]
        Validated bank
    total : int
        Number of elements requested
    rule : RuleLike, optional
        Called as ``rule(candidate, built, row_size)``
    row_size : Optional[int]
        Row length passed through to the rule
    max_attempts : int
        Draws allowed per position
    rng : np.random.Generator, optional
        Random source; defaults to the shared generator
    warn : bool
        Emit :class:`ExhaustionWarning` when a position cannot be filled
    stacklevel : int
        Frame the warning is attributed to, counted from this function

    Returns
    -------
    List[int]
        Sequence of length ``total``, or shorter if generation stopped early
    """
    rule = as_rule(rule)
    rng = resolve_rng(rng)
    values = list(bank.keys())
    sequence: List[int] = []
    usage: Counter = Counter()

    for position in range(total):
        chosen = None
        # An empty bank has nothing to draw
        attempts = max_attempts if values else 0

        for _ in range(attempts):
            selected = values[int(rng.integers(len(values)))]
            if usage[selected] >= bank[selected]:
                continue
            if evaluate_rule(rule, selected, sequence, row_size):
                chosen = selected
                break

        if chosen is None:
            logger.debug("Draw cap reached at position %d with %d/%d elements",
                         position, len(sequence), total)
            if warn:
                warnings.warn(
                    f"Could not find valid number at position {position} "
                    f"(element {position + 1} of {total}) after {max_attempts} attempts",
                    ExhaustionWarning,
                    stacklevel=stacklevel,
                )
            break

        sequence.append(chosen)
        usage[chosen] += 1

    return sequence


def generate_random(bank: Mapping[int, int],
                    dims: Sequence[int],
                    rule: Optional[RuleLike] = None,
                    *,
                    max_attempts: int = MAX_ATTEMPTS,
                    rng: Optional[np.random.Generator] = None,
                    seed: Optional[int] = None,
                    warn: bool = True,
                    stacklevel: int = 2) -> Union[List[int], List[List[int]]]:
    """
    Generate a sequence or matrix by random draws from the bank.

    Parameters
    ----------
    bank : Mapping[int, int]
        Value -> maximum occurrence count
    dims : Sequence[int]
        ``[length]`` or ``[rows, columns]``
    rule : RuleLike, optional
        Extra constraint. For 2-D requests it receives the column count as
        ``row_size``; for 1-D requests ``row_size`` is None.
    max_attempts : int
        Draws allowed per position
    rng : np.random.Generator, optional
        Random source
    seed : int, optional
        Seed for a private generator when ``rng`` is not given
    warn : bool
        Emit :class:`ExhaustionWarning` on early stop
    stacklevel : int
        Frame the warning is attributed to; the default is the caller

    Returns
    -------
    List[int] or List[List[int]]
        Flat sequence, or rows for 2-D requests. A partial result has fewer
        elements than requested and its last row may be short.

    Examples
    --------
    >>> generate_random({1: 3, 2: 3, 3: 3}, [2, 3], seed=0)  # doctest: +SKIP
    [[2, 3, 1], [1, 3, 2]]
    """
    bank = validate_bank(bank)
    shape = resolve_dimensions(dims)
    row_size = shape.columns if shape.is_2d else None

    flat = draw_sequence(bank, shape.total, rule, row_size, max_attempts,
                         resolve_rng(rng, seed), warn, stacklevel + 1)

    if shape.is_2d:
        return fold_rows(flat, shape.columns)
    return flat


@dataclass
class GenerationConfig:
    """Configuration for a single generation call."""
    bank: Dict[int, int]
    dims: List[int]
    rule: Optional[RuleLike] = None
    ordered: bool = False
    max_attempts: int = MAX_ATTEMPTS
    max_restarts: int = MAX_RESTARTS
    seed: Optional[int] = None
    warn: bool = True


def generate_sequence(config: GenerationConfig,
                      rng: Optional[np.random.Generator] = None,
                      stacklevel: int = 2) -> Union[List[int], List[List[int]]]:
    """
    Generate output according to configuration.

    Parameters
    ----------
    config : GenerationConfig
        Generation configuration
    rng : np.random.Generator, optional
        Overrides ``config.seed``
    stacklevel : int
        Frame generation warnings are attributed to

    Returns
    -------
    List[int] or List[List[int]]
    """
    if config.ordered:
        return generate_ordered(config.bank, config.dims, config.rule,
                                max_restarts=config.max_restarts, rng=rng,
                                seed=config.seed, warn=config.warn,
                                stacklevel=stacklevel + 1)
    return generate_random(config.bank, config.dims, config.rule,
                           max_attempts=config.max_attempts, rng=rng,
                           seed=config.seed, warn=config.warn,
                           stacklevel=stacklevel + 1)


class SequenceGenerator:
    """Generation front end bound to a :class:`Settings` instance."""

    def __init__(self,
                 settings: Optional[Settings] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize sequence generator.

        Parameters
        ----------
        settings : Optional[Settings]
            Caps and diagnostics; defaults to the global configuration
        rng : Optional[np.random.Generator]
            Generator shared by every call made through this instance
        """
        self.settings = settings if settings is not None else get_config()
        self.rng = rng

    def config_for(self, bank: Mapping[int, int], dims: Sequence[int],
                   rule: Optional[RuleLike] = None, ordered: bool = False) -> GenerationConfig:
        """Build a :class:`GenerationConfig` carrying this generator's settings."""
        return GenerationConfig(
            bank=dict(bank),
            dims=list(dims),
            rule=rule,
            ordered=ordered,
            max_attempts=self.settings.max_attempts,
            max_restarts=self.settings.max_restarts,
            warn=self.settings.warn_on_exhaustion,
        )

    def generate_random(self, bank, dims, rule=None):
        """Stochastic generation with the configured draw cap."""
        return generate_sequence(self.config_for(bank, dims, rule), self.rng, stacklevel=3)

    def generate_ordered(self, bank, dims, rule=None):
        """Ordered generation with the configured restart cap."""
        return generate_sequence(self.config_for(bank, dims, rule, ordered=True), self.rng,
                                 stacklevel=3)

    def __repr__(self) -> str:
        return (f"SequenceGenerator(max_attempts={self.settings.max_attempts}, "
                f"max_restarts={self.settings.max_restarts})")
