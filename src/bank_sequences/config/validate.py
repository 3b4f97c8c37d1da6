"""Environment validation for Bank Sequences dependencies."""

import sys
import warnings
from importlib import metadata
from packaging import version


def check_environment(min_numpy: str = "1.22") -> None:
    """Check that environment meets minimum dependency requirements.

    The generators rely on ``numpy.random.Generator``, which needs a
    reasonably recent NumPy.

    Parameters
    ----------
    min_numpy : str, default="1.22"
        Minimum required NumPy version

    Raises
    ------
    RuntimeError
        If any dependency requirements are not met

    Examples
    --------
    >>> check_environment()
    >>> check_environment(min_numpy="1.24")
    """
    errors = []

    if sys.version_info < (3, 8):
        errors.append(f"Python 3.8+ required, found {sys.version_info.major}.{sys.version_info.minor}")

    try:
        import numpy as np
        numpy_version = np.__version__
        if version.parse(numpy_version) < version.parse(min_numpy):
            errors.append(f"NumPy {min_numpy}+ required, found {numpy_version}")
    except ImportError:
        errors.append("NumPy not installed - required for random generation")

    optional_warnings = []

    try:
        import tomli_w  # noqa: F401
    except ImportError:
        optional_warnings.append("tomli-w not found - required for writing TOML settings")

    if sys.version_info < (3, 11):
        try:
            import tomli  # noqa: F401
        except ImportError:
            optional_warnings.append("tomli not found - required for reading TOML settings")

    if errors:
        error_msg = "Environment validation failed:\n" + "\n".join(f"  - {err}" for err in errors)

        if optional_warnings:
            error_msg += "\n\nWarnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)

        error_msg += "\n\nTo install required dependencies:\n  pip install numpy packaging"

        raise RuntimeError(error_msg)

    if optional_warnings:
        warning_msg = "Environment warnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)
        warnings.warn(warning_msg, UserWarning)


def get_dependency_versions() -> dict:
    """Get versions of all relevant dependencies.

    Returns
    -------
    dict
        Dictionary mapping package names to version strings
    """
    versions = {
        'python': f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    }

    try:
        import numpy as np
        versions['numpy'] = np.__version__
    except ImportError:
        versions['numpy'] = 'not installed'

    for dist in ('packaging', 'tomli-w'):
        try:
            versions[dist] = metadata.version(dist)
        except metadata.PackageNotFoundError:
            versions[dist] = 'not installed'

    return versions
