"""Main configuration settings with TOML loading support."""

from dataclasses import dataclass, asdict
from typing import Optional, Union
from pathlib import Path
import warnings

try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # Backport for older Python
    except ImportError:
        tomllib = None

try:
    import tomli_w
except ImportError:
    tomli_w = None

from .defaults import GENERATION_PRESETS, DefaultConfig, validate_config

@dataclass
class Settings:
    """Configuration settings for Bank Sequences.

    Can be loaded from TOML files for user customization while providing
    the standard generation caps as defaults.
    """

    # Iteration ceilings
    max_attempts: int = 1000
    max_restarts: int = 50

    # Diagnostics
    warn_on_exhaustion: bool = True

    # Sizing guidelines
    max_total_elements: int = 400
    max_bank_size: int = 200

    # Reproducibility
    random_seed: Optional[int] = None

    verbose: bool = False

    def __post_init__(self):
        """Validate settings after initialization."""
        messages = validate_config(self.to_default_config())
        if messages and self.verbose:
            for message in messages:
                warnings.warn(f"Configuration warning: {message}", UserWarning)

    def to_default_config(self) -> DefaultConfig:
        """Project the settings onto the preset structure."""
        return DefaultConfig(
            max_attempts=self.max_attempts,
            max_restarts=self.max_restarts,
            warn_on_exhaustion=self.warn_on_exhaustion,
            max_total_elements=self.max_total_elements,
            max_bank_size=self.max_bank_size,
        )

    @classmethod
    def from_preset(cls, preset: str) -> 'Settings':
        """Create settings from a preset configuration.

        Parameters
        ----------
        preset : str
            Preset name ('standard', 'quick', 'exhaustive')

        Returns
        -------
        Settings
            Settings object with preset values
        """
        if preset not in GENERATION_PRESETS:
            raise ValueError(f"Unknown preset '{preset}'. Available: {list(GENERATION_PRESETS.keys())}")

        config = GENERATION_PRESETS[preset]
        return cls(
            max_attempts=config.max_attempts,
            max_restarts=config.max_restarts,
            warn_on_exhaustion=config.warn_on_exhaustion,
            max_total_elements=config.max_total_elements,
            max_bank_size=config.max_bank_size,
        )

    @classmethod
    def from_toml(cls, toml_path: Union[str, Path]) -> 'Settings':
        """Load settings from TOML file.

        Parameters
        ----------
        toml_path : Union[str, Path]
            Path to TOML configuration file

        Returns
        -------
        Settings
            Settings object with values from TOML file

        Raises
        ------
        ImportError
            If tomllib is not available
        FileNotFoundError
            If TOML file doesn't exist
        """
        if tomllib is None:
            raise ImportError("tomllib not available. Install tomli for Python < 3.11")

        toml_path = Path(toml_path)
        if not toml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {toml_path}")

        with open(toml_path, 'rb') as f:
            config_data = tomllib.load(f)

        settings_data = {}

        # Nested sections
        for section in ('generation', 'limits', 'advanced'):
            if section in config_data:
                settings_data.update(config_data[section])

        # Flat keys
        for key, value in config_data.items():
            if not isinstance(value, dict):
                settings_data[key] = value

        return cls(**settings_data)

    def to_toml(self, toml_path: Union[str, Path]) -> None:
        """Save settings to TOML file.

        Parameters
        ----------
        toml_path : Union[str, Path]
            Path where to save TOML configuration file

        Raises
        ------
        ImportError
            If tomli_w is not available
        """
        if tomli_w is None:
            raise ImportError("tomli_w not available. Install tomli-w for TOML writing")

        config_data = {
            'generation': {
                'max_attempts': self.max_attempts,
                'max_restarts': self.max_restarts,
                'warn_on_exhaustion': self.warn_on_exhaustion
            },
            'limits': {
                'max_total_elements': self.max_total_elements,
                'max_bank_size': self.max_bank_size
            },
            'advanced': {
                'verbose': self.verbose
            }
        }
        # TOML has no null
        if self.random_seed is not None:
            config_data['advanced']['random_seed'] = self.random_seed

        toml_path = Path(toml_path)
        with open(toml_path, 'wb') as f:
            tomli_w.dump(config_data, f)

    def update(self, **kwargs) -> 'Settings':
        """Create new Settings with updated values.

        Parameters
        ----------
        **kwargs
            Settings fields to update

        Returns
        -------
        Settings
            New Settings object with updated values
        """
        current_dict = asdict(self)
        current_dict.update(kwargs)
        return Settings(**current_dict)


# Global configuration instance
_GLOBAL_CONFIG: Optional[Settings] = None

def get_config(config_path: Optional[Union[str, Path]] = None,
               preset: Optional[str] = None,
               reload: bool = False) -> Settings:
    """Get global configuration settings.

    Parameters
    ----------
    config_path : Optional[Union[str, Path]]
        Path to TOML configuration file. If None, looks for default locations.
    preset : Optional[str]
        Preset configuration name ('standard', 'quick', 'exhaustive').
        Ignored if config_path is provided.
    reload : bool
        Force reload configuration even if already loaded

    Returns
    -------
    Settings
        Global configuration settings
    """
    global _GLOBAL_CONFIG

    if _GLOBAL_CONFIG is not None and not reload:
        return _GLOBAL_CONFIG

    if config_path is not None:
        _GLOBAL_CONFIG = Settings.from_toml(config_path)
    else:
        default_paths = [
            'bank_sequences.toml',
            Path.home() / '.bank_sequences.toml',
        ]

        config_loaded = False
        for path in default_paths:
            if Path(path).exists():
                try:
                    _GLOBAL_CONFIG = Settings.from_toml(path)
                    config_loaded = True
                    break
                except (OSError, ValueError, TypeError) as e:
                    warnings.warn(f"Could not load config from {path}: {e}", UserWarning)
                    continue

        if not config_loaded:
            _GLOBAL_CONFIG = Settings.from_preset(preset or 'standard')

    if _GLOBAL_CONFIG.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(_GLOBAL_CONFIG.random_seed)

    return _GLOBAL_CONFIG

def set_config(settings: Settings) -> None:
    """Set global configuration settings.

    Parameters
    ----------
    settings : Settings
        Settings object to use as global configuration
    """
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = settings

    if settings.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(settings.random_seed)
