"""Configuration management for Bank Sequences.

Provides generation caps, presets and random generator management for
reproducible sequence generation.
"""

from .settings import get_config, set_config, Settings
from .random_state import set_global_seed, get_random_state, get_rng, resolve_rng
from .defaults import STANDARD_CONFIG, GENERATION_PRESETS, DefaultConfig, validate_config

__all__ = [
    'get_config',
    'set_config',
    'set_global_seed',
    'get_random_state',
    'get_rng',
    'resolve_rng',
    'Settings',
    'STANDARD_CONFIG',
    'GENERATION_PRESETS',
    'DefaultConfig',
    'validate_config'
]
