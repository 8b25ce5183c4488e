"""Configuration loading for StockVision.

Settings live in a TOML file, by default ``~/.config/stockvision/config.toml``.
A missing file means built-in defaults; user values are merged over them.
"""

import copy
import os
from pathlib import Path
from typing import Optional

import toml

CONFIG_DIR = Path.home() / ".config" / "stockvision"
CONFIG_ENV_VAR = "STOCKVISION_CONFIG"

DEFAULT_CONFIG = {
    "data": {
        "db_path": str(CONFIG_DIR / "stockvision.db"),
        "timeframe": "1day",
    },
    "backtest": {
        "fast_period": 20,
        "slow_period": 50,
        "initial_capital": 10000.0,
        "fee_bps": 5.0,
    },
    "scan": {
        "watchlist": "default",
        "limit": 20,
    },
}


class ConfigError(Exception):
    """Raised when the configuration file exists but cannot be read."""


def get_config_path(config_path: Optional[Path] = None) -> Path:
    """Resolve the config file path: explicit, then env var, then default."""
    if config_path is not None:
        return Path(config_path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return CONFIG_DIR / "config.toml"


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    Args:
        config_path: Optional explicit path to a TOML file.

    Returns:
        Configuration dictionary with ``data``, ``backtest`` and ``scan``
        sections.

    Raises:
        ConfigError: The file exists but is not valid TOML.
    """
    path = get_config_path(config_path)
    if not path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        user_config = toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    return _merge(DEFAULT_CONFIG, user_config)


def write_default_config(config_path: Optional[Path] = None) -> Path:
    """Write the default configuration template if none exists.

    Returns:
        Path of the config file.
    """
    path = get_config_path(config_path)
    if path.exists():
        return path

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)
    return path
