"""Default generation limits and named presets."""

from dataclasses import dataclass
from typing import List

# Hard iteration ceilings used by the generators
MAX_ATTEMPTS = 1000  # random draws per position (stochastic generator)
MAX_RESTARTS = 50    # full search attempts (ordered solver)

# Soft sizing guidelines; exceeding them only produces warnings
RECOMMENDED_MAX_ELEMENTS = 400
RECOMMENDED_MAX_BANK = 200


@dataclass
class DefaultConfig:
    """Base configuration structure for sequence generation."""

    max_attempts: int
    max_restarts: int
    warn_on_exhaustion: bool = True
    max_total_elements: int = RECOMMENDED_MAX_ELEMENTS
    max_bank_size: int = RECOMMENDED_MAX_BANK


STANDARD_CONFIG = DefaultConfig(
    max_attempts=MAX_ATTEMPTS,
    max_restarts=MAX_RESTARTS,
)

GENERATION_PRESETS = {
    "standard": STANDARD_CONFIG,
    # Fail fast, useful in interactive sessions
    "quick": DefaultConfig(
        max_attempts=100,
        max_restarts=10,
    ),
    # Tight constraint sets that need more search
    "exhaustive": DefaultConfig(
        max_attempts=10000,
        max_restarts=200,
        max_total_elements=1000,
    ),
}


def validate_config(config: DefaultConfig) -> List[str]:
    """Validate configuration parameters and return list of warnings."""
    warnings = []

    if config.max_attempts < 1:
        warnings.append(f"max_attempts {config.max_attempts} is not positive; "
                        "the stochastic generator will produce nothing")

    if config.max_restarts < 1:
        warnings.append(f"max_restarts {config.max_restarts} is not positive; "
                        "the ordered solver will produce nothing")

    if config.max_total_elements > RECOMMENDED_MAX_ELEMENTS:
        warnings.append(f"max_total_elements {config.max_total_elements} exceeds "
                        f"recommended {RECOMMENDED_MAX_ELEMENTS}; backtracking may be slow")

    if config.max_bank_size > RECOMMENDED_MAX_BANK:
        warnings.append(f"max_bank_size {config.max_bank_size} exceeds "
                        f"recommended {RECOMMENDED_MAX_BANK}")

    return warnings
