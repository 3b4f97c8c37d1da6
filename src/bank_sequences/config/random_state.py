"""Shared random generator management for reproducible sequence generation."""

import random
import numpy as np
from typing import Optional, Dict, Any
import os
import hashlib

ENV_SEED_VARIABLE = 'BANK_SEQUENCES_SEED'

# Global random state storage
_GLOBAL_SEED: Optional[int] = None
_RNG_STATE: Optional[Dict[str, Any]] = None
_GLOBAL_RNG: np.random.Generator = np.random.default_rng()

def set_global_seed(seed: int) -> None:
    """Reseed the shared generator used when no explicit one is supplied.

    Also seeds Python's built-in ``random`` module so that user rules
    relying on it are reproducible as well.

    Parameters
    ----------
    seed : int
        Random seed value for reproducibility

    Examples
    --------
    >>> set_global_seed(42)
    >>> # Subsequent generate_random / generate_ordered calls are reproducible
    """
    global _GLOBAL_SEED, _RNG_STATE, _GLOBAL_RNG

    _GLOBAL_SEED = seed

    random.seed(seed)
    _GLOBAL_RNG = np.random.default_rng(seed)

    # Store the initial state for reference
    _RNG_STATE = {
        'seed': seed,
        'python_state': random.getstate(),
        'generator_state': _GLOBAL_RNG.bit_generator.state
    }

def get_global_seed() -> Optional[int]:
    """Get the current global random seed.

    Returns
    -------
    Optional[int]
        Current global seed, or None if not set
    """
    return _GLOBAL_SEED

def get_random_state() -> Optional[Dict[str, Any]]:
    """Get the generator states captured by the last :func:`set_global_seed`.

    Returns
    -------
    Optional[Dict[str, Any]]
        Dictionary containing RNG states, or None if not initialized
    """
    return _RNG_STATE

def get_rng() -> np.random.Generator:
    """Return the shared generator."""
    return _GLOBAL_RNG

def resolve_rng(rng: Optional[np.random.Generator] = None,
                seed: Optional[int] = None) -> np.random.Generator:
    """Pick the generator a generation call should draw from.

    An explicit ``rng`` wins, then a fresh generator for ``seed``, then the
    shared generator.

    Parameters
    ----------
    rng : Optional[np.random.Generator]
        Caller-owned generator
    seed : Optional[int]
        Seed for a private generator

    Returns
    -------
    np.random.Generator
    """
    if rng is not None:
        return rng
    if seed is not None:
        return np.random.default_rng(seed)
    return _GLOBAL_RNG

def create_deterministic_seed(base_string: str) -> int:
    """Create a deterministic seed from a string.

    Useful for deriving reproducible seeds from puzzle names or
    configuration hashes.

    Parameters
    ----------
    base_string : str
        String to hash for seed generation

    Returns
    -------
    int
        Deterministic seed value

    Examples
    --------
    >>> seed = create_deterministic_seed("grid_6x3_v1")
    >>> set_global_seed(seed)
    """
    hash_object = hashlib.sha256(base_string.encode())
    hash_hex = hash_object.hexdigest()

    # Convert first 8 hex characters to integer
    seed = int(hash_hex[:8], 16)

    return seed % (2**31 - 1)

def reset_random_state() -> None:
    """Reset the shared generators to the state of the last seeding.

    Only works if set_global_seed() was called previously.
    """
    if _RNG_STATE is None:
        raise RuntimeError("Random state not initialized. Call set_global_seed() first.")

    random.setstate(_RNG_STATE['python_state'])
    _GLOBAL_RNG.bit_generator.state = _RNG_STATE['generator_state']

def get_environment_seed() -> int:
    """Get seed from environment variable if available.

    Checks for the BANK_SEQUENCES_SEED environment variable.

    Returns
    -------
    int
        Seed from environment, or a default value if not set
    """
    env_seed = os.environ.get(ENV_SEED_VARIABLE)

    if env_seed is not None:
        try:
            return int(env_seed)
        except ValueError:
            # Non-numeric values are hashed into a seed
            return create_deterministic_seed(env_seed)

    return 42

def ensure_reproducibility() -> int:
    """Seed the shared generator unless a seed is already set.

    Returns
    -------
    int
        The seed in effect
    """
    if _GLOBAL_SEED is None:
        seed = get_environment_seed()
        set_global_seed(seed)
        return seed
    return _GLOBAL_SEED

# Seed on import only when the environment asks for it
if os.environ.get(ENV_SEED_VARIABLE):
    ensure_reproducibility()
