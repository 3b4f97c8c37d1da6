"""Tests for configuration settings functionality."""

import pytest
import numpy as np

from bank_sequences.config import settings as settings_module
from bank_sequences.config.settings import (
    Settings,
    get_config,
    set_config
)
from bank_sequences.config.random_state import get_global_seed, get_rng


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep the process-wide configuration and config lookup paths clean."""
    monkeypatch.setattr(settings_module, '_GLOBAL_CONFIG', None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('HOME', str(tmp_path / 'home'))
    (tmp_path / 'home').mkdir()


class TestSettingsDataclass:
    """Test suite for the Settings dataclass."""

    def test_settings_default_initialization(self):
        """Test Settings initialization with default values."""
        settings = Settings()

        assert settings.max_attempts == 1000
        assert settings.max_restarts == 50
        assert settings.warn_on_exhaustion is True
        assert settings.max_total_elements == 400
        assert settings.max_bank_size == 200
        assert settings.random_seed is None
        assert settings.verbose is False

    def test_verbose_settings_warn_about_bad_caps(self):
        with pytest.warns(UserWarning, match="max_attempts"):
            Settings(max_attempts=0, verbose=True)

    def test_quiet_settings_do_not_warn(self, recwarn):
        Settings(max_attempts=0)
        assert len(recwarn) == 0

    def test_update_returns_new_instance(self):
        settings = Settings()
        updated = settings.update(max_restarts=7)

        assert updated.max_restarts == 7
        assert settings.max_restarts == 50
        assert updated is not settings

    def test_to_default_config(self):
        config = Settings(max_attempts=10, max_restarts=3).to_default_config()
        assert config.max_attempts == 10
        assert config.max_restarts == 3


class TestPresets:
    """Test suite for Settings.from_preset."""

    @pytest.mark.parametrize("preset,attempts,restarts", [
        ("standard", 1000, 50),
        ("quick", 100, 10),
        ("exhaustive", 10000, 200),
    ])
    def test_known_presets(self, preset, attempts, restarts):
        settings = Settings.from_preset(preset)
        assert settings.max_attempts == attempts
        assert settings.max_restarts == restarts

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown preset"):
            Settings.from_preset("nonexistent")


class TestTomlLoading:
    """Test suite for TOML round trips."""

    def test_round_trip(self, tmp_path):
        original = Settings(max_attempts=250, max_restarts=12,
                            warn_on_exhaustion=False, random_seed=9)
        path = tmp_path / "settings.toml"
        original.to_toml(path)

        loaded = Settings.from_toml(path)
        assert loaded == original

    def test_round_trip_without_seed(self, tmp_path):
        path = tmp_path / "settings.toml"
        Settings().to_toml(path)
        assert Settings.from_toml(path).random_seed is None

    def test_sectioned_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            "[generation]\n"
            "max_attempts = 300\n"
            "\n"
            "[advanced]\n"
            "random_seed = 5\n"
        )
        settings = Settings.from_toml(path)
        assert settings.max_attempts == 300
        assert settings.max_restarts == 50
        assert settings.random_seed == 5

    def test_flat_file(self, tmp_path):
        path = tmp_path / "flat.toml"
        path.write_text("max_restarts = 4\nverbose = false\n")
        assert Settings.from_toml(path).max_restarts == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Settings.from_toml(tmp_path / "missing.toml")


class TestGlobalConfig:
    """Test suite for get_config / set_config."""

    def test_default_is_standard_preset(self):
        assert get_config() == Settings.from_preset("standard")

    def test_preset_fallback(self):
        assert get_config(preset="quick").max_attempts == 100

    def test_cached_until_reload(self):
        first = get_config(preset="quick")
        assert get_config(preset="exhaustive") is first
        assert get_config(preset="exhaustive", reload=True).max_attempts == 10000

    def test_loads_default_file_from_cwd(self, tmp_path):
        (tmp_path / "bank_sequences.toml").write_text("[generation]\nmax_restarts = 8\n")
        assert get_config().max_restarts == 8

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("max_attempts = 42\n")
        assert get_config(config_path=path).max_attempts == 42

    def test_broken_default_file_warns_and_falls_back(self, tmp_path):
        (tmp_path / "bank_sequences.toml").write_text("this is not = = toml")
        with pytest.warns(UserWarning, match="Could not load config"):
            settings = get_config(preset="quick")
        assert settings.max_attempts == 100

    def test_config_seed_is_applied(self, tmp_path):
        path = tmp_path / "seeded.toml"
        path.write_text("[advanced]\nrandom_seed = 321\n")
        get_config(config_path=path)
        assert get_global_seed() == 321

    def test_set_config(self):
        custom = Settings(max_attempts=5, random_seed=11)
        set_config(custom)

        assert get_config() is custom
        assert get_global_seed() == 11
        expected = np.random.default_rng(11).random()
        assert get_rng().random() == expected
