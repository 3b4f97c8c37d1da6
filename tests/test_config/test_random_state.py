"""Tests for shared random generator management."""

import pytest
import random
import numpy as np
import hashlib

from bank_sequences.config import random_state
from bank_sequences.config.random_state import (
    set_global_seed,
    get_global_seed,
    get_random_state,
    get_rng,
    resolve_rng,
    create_deterministic_seed,
    reset_random_state,
    get_environment_seed,
    ensure_reproducibility
)


class TestSetGlobalSeed:
    """Test suite for set_global_seed function."""

    def test_set_global_seed_basic(self):
        """Test basic seed setting functionality."""
        set_global_seed(42)

        assert get_global_seed() == 42

        state = get_random_state()
        assert state is not None
        assert state['seed'] == 42
        assert 'python_state' in state
        assert 'generator_state' in state

    def test_set_global_seed_reproducibility(self):
        """Test that setting the same seed produces reproducible results."""
        set_global_seed(123)
        random_val1 = random.random()
        draws1 = get_rng().integers(0, 1000, size=5)

        set_global_seed(123)
        random_val2 = random.random()
        draws2 = get_rng().integers(0, 1000, size=5)

        assert random_val1 == random_val2
        np.testing.assert_array_equal(draws1, draws2)

    def test_set_global_seed_different_seeds(self):
        """Test that different seeds produce different results."""
        set_global_seed(100)
        draws1 = get_rng().random(5)

        set_global_seed(200)
        draws2 = get_rng().random(5)

        assert not np.array_equal(draws1, draws2)

    def test_set_global_seed_replaces_generator(self):
        """A new seed installs a new shared generator."""
        set_global_seed(1)
        first = get_rng()
        set_global_seed(2)
        assert get_rng() is not first
        assert get_global_seed() == 2


class TestResolveRng:
    """Test suite for resolve_rng precedence."""

    def test_explicit_generator_wins(self):
        generator = np.random.default_rng(0)
        assert resolve_rng(generator, seed=5) is generator

    def test_seed_builds_private_generator(self):
        a = resolve_rng(seed=9).random(3)
        b = resolve_rng(seed=9).random(3)
        np.testing.assert_array_equal(a, b)
        assert resolve_rng(seed=9) is not get_rng()

    def test_default_is_shared_generator(self):
        set_global_seed(7)
        assert resolve_rng() is get_rng()


class TestDeterministicSeed:
    """Test suite for create_deterministic_seed."""

    def test_same_string_same_seed(self):
        assert create_deterministic_seed("grid_6x3") == create_deterministic_seed("grid_6x3")

    def test_different_strings_differ(self):
        assert create_deterministic_seed("a") != create_deterministic_seed("b")

    def test_matches_sha256_prefix(self):
        expected = int(hashlib.sha256(b"bank").hexdigest()[:8], 16) % (2**31 - 1)
        assert create_deterministic_seed("bank") == expected

    def test_seed_in_valid_range(self):
        for text in ["", "x", "a much longer experiment identifier"]:
            assert 0 <= create_deterministic_seed(text) < 2**31 - 1


class TestResetRandomState:
    """Test suite for reset_random_state."""

    def test_reset_replays_draws(self):
        set_global_seed(55)
        first = get_rng().integers(0, 100, size=4)
        python_first = random.random()

        reset_random_state()
        second = get_rng().integers(0, 100, size=4)
        python_second = random.random()

        np.testing.assert_array_equal(first, second)
        assert python_first == python_second

    def test_reset_without_seed_raises(self, monkeypatch):
        monkeypatch.setattr(random_state, '_RNG_STATE', None)
        with pytest.raises(RuntimeError, match="not initialized"):
            reset_random_state()


class TestEnvironmentSeed:
    """Test suite for environment driven seeding."""

    def test_integer_value(self, monkeypatch):
        monkeypatch.setenv('BANK_SEQUENCES_SEED', '123')
        assert get_environment_seed() == 123

    def test_non_integer_value_is_hashed(self, monkeypatch):
        monkeypatch.setenv('BANK_SEQUENCES_SEED', 'experiment')
        assert get_environment_seed() == create_deterministic_seed('experiment')

    def test_default_value(self, monkeypatch):
        monkeypatch.delenv('BANK_SEQUENCES_SEED', raising=False)
        assert get_environment_seed() == 42

    def test_ensure_reproducibility_sets_seed(self, monkeypatch):
        monkeypatch.setattr(random_state, '_GLOBAL_SEED', None)
        monkeypatch.setenv('BANK_SEQUENCES_SEED', '77')
        assert ensure_reproducibility() == 77
        assert get_global_seed() == 77

    def test_ensure_reproducibility_keeps_existing_seed(self):
        set_global_seed(31)
        assert ensure_reproducibility() == 31
