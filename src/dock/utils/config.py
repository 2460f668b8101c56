"""
Configuration for dock.

Defaults live in ``DEFAULTS``; the user's ``~/.config/dock/config.toml`` can
override them under its ``[defaults]`` table, and import renames are read
from ``[defaults.import-mappings]``:

    ```toml
    [defaults]
    python-version = "3.12"

    [defaults.import-mappings]
    sklearn = "scikit-learn"
    ```
"""
import logging
import pathlib as pl
import sys
from typing import Any, Dict, Optional, Union

# tomllib is Python 3.11+, tomli provides the same API for older versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .classes import DockConfig, RegistryErrorPolicy
from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_PATH = pl.Path.home() / ".config" / "dock" / "config.toml"

# Config file key -> DockConfig attribute
_KEYS = {
    "python-version": "python_version",
    "on-registry-error": "on_registry_error",
    "container-tool": "container_tool",
    "python-executable": "python_executable",
    "registry-url": "registry_url",
    "registry-timeout": "registry_timeout",
    "jobs": "jobs",
}

_STRING_KEYS = ("python-version", "container-tool", "python-executable", "registry-url")

DEFAULTS = {key: getattr(DockConfig(), attr) for key, attr in _KEYS.items()}


def get_default(key: str) -> Any:
    """Get a default value."""
    return DEFAULTS.get(key)


def _parse_mappings(raw: Any, path: pl.Path) -> Dict[str, str]:
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: 'defaults.import-mappings' must be a table")
    for key, value in raw.items():
        if not isinstance(value, str):
            raise ConfigError(
                f"{path}: import mapping for '{key}' must be a string, got {type(value).__name__}"
            )
    return dict(raw)


def parse_config(data: Dict[str, Any], path: pl.Path = CONFIG_PATH) -> DockConfig:
    """
    Build a ``DockConfig`` from parsed TOML data.

    Parameters:
        data (Dict[str, Any]):
            The whole parsed document. Only the ``defaults`` table is read.
        path (pl.Path):
            Source file, used in error messages.

    Returns:
        DockConfig: Settings with file values laid over ``DEFAULTS``.

    Raises:
        ConfigError: If a known key has the wrong type or value.
    """
    defaults = data.get("defaults", {})
    if not isinstance(defaults, dict):
        raise ConfigError(f"{path}: 'defaults' must be a table")

    values = dict(DEFAULTS)
    values.update({k: v for k, v in defaults.items() if k != "import-mappings"})

    kwargs: Dict[str, Any] = {
        "import_mappings": _parse_mappings(defaults.get("import-mappings", {}), path),
    }

    for key in _STRING_KEYS:
        if not isinstance(values[key], str):
            raise ConfigError(f"{path}: '{key}' must be a string")
        kwargs[_KEYS[key]] = values[key]

    try:
        kwargs["on_registry_error"] = RegistryErrorPolicy(values["on-registry-error"])
    except ValueError:
        choices = ", ".join(p.value for p in RegistryErrorPolicy)
        raise ConfigError(f"{path}: 'on-registry-error' must be one of: {choices}") from None

    timeout = values["registry-timeout"]
    if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
        raise ConfigError(f"{path}: 'registry-timeout' must be a number")
    kwargs["registry_timeout"] = timeout

    jobs = values["jobs"]
    if isinstance(jobs, bool) or not isinstance(jobs, int) or jobs < 1:
        raise ConfigError(f"{path}: 'jobs' must be a positive integer")
    kwargs["jobs"] = jobs

    return DockConfig(**kwargs)


def load_config(path: Optional[Union[str, pl.Path]] = None) -> DockConfig:
    """
    Load the user's configuration.

    Parameters:
        path (Optional[Union[str, pl.Path]]):
            Config file to read. Default is ``~/.config/dock/config.toml``.

    Returns:
        DockConfig: Parsed settings, or pure defaults if the file does not exist.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed.
    """
    config_path = pl.Path(path) if path is not None else CONFIG_PATH
    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return parse_config({}, config_path)

    try:
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to parse config file {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return parse_config(data, config_path)
