"""
Configuration loading and management for the Digital Asset Desk.

Settings are read from a YAML file, then a .env file, then environment
variables; later sources override earlier ones.
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import dotenv_values

from asset_desk.formatters import LOCALES
from asset_desk.models import AppConfig


DEFAULT_CONFIG_FILE = Path("asset_desk.yaml")
DEFAULT_ENV_FILE = Path(".env")

# Environment variable -> config field
ENV_VARIABLES = {
    "ASSET_DESK_DATA_DIR": "data_dir",
    "ASSET_DESK_LOCALE": "locale",
    "ASSET_DESK_CURRENCY_SYMBOL": "currency_symbol",
    "ASSET_DESK_EXPIRING_DAYS": "expiring_window_days",
    "ASSET_DESK_ACTIVITY_LOG": "activity_log",
}


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""
    pass


def load_app_config(
    config_path: str | Path | None = None,
    env_file: str | Path | None = None,
    environ: Optional[dict[str, str]] = None,
) -> AppConfig:
    """
    Load application configuration from all sources.

    Sources are checked in this order (later sources override earlier):
    1. YAML config file (asset_desk.yaml in the working directory by default)
    2. .env file
    3. Environment variables

    Args:
        config_path: YAML file; an explicit path must exist
        env_file: .env file (defaults to .env in the working directory)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: If a source cannot be read or a value is invalid
    """
    raw: dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")
        raw.update(_read_yaml(path))
    elif DEFAULT_CONFIG_FILE.exists():
        raw.update(_read_yaml(DEFAULT_CONFIG_FILE))

    env_path = Path(env_file) if env_file else DEFAULT_ENV_FILE
    if env_path.exists():
        raw.update(_from_environment(dotenv_values(env_path)))

    raw.update(_from_environment(os.environ if environ is None else environ))

    return _parse_app_config(raw)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "r") as f:
            loaded = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}")

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    return loaded


def _from_environment(values: Any) -> dict[str, Any]:
    result = {}
    for variable, field_name in ENV_VARIABLES.items():
        value = values.get(variable)
        if value:
            result[field_name] = value
    return result


def _parse_app_config(raw: dict[str, Any]) -> AppConfig:
    """
    Parse and validate a raw configuration dictionary into AppConfig.

    Raises:
        ConfigurationError: If a field is invalid
    """
    unknown = set(raw) - set(ENV_VARIABLES.values())
    if unknown:
        raise ConfigurationError(f"Unknown configuration field(s): {', '.join(sorted(unknown))}")

    config = AppConfig()

    if "data_dir" in raw:
        data_dir = str(raw["data_dir"]).strip()
        if not data_dir:
            raise ConfigurationError("data_dir cannot be empty")
        config.data_dir = Path(data_dir).expanduser()

    if "locale" in raw:
        locale = str(raw["locale"]).strip()
        if locale not in LOCALES:
            raise ConfigurationError(
                f"Unsupported locale {locale!r}. Expected one of: {', '.join(LOCALES)}"
            )
        config.locale = locale

    if "currency_symbol" in raw:
        config.currency_symbol = str(raw["currency_symbol"])

    if "expiring_window_days" in raw:
        try:
            days = int(raw["expiring_window_days"])
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Invalid expiring_window_days: {raw['expiring_window_days']!r}"
            )
        if days < 0:
            raise ConfigurationError(f"expiring_window_days must be >= 0, got {days}")
        config.expiring_window_days = days

    if raw.get("activity_log"):
        config.activity_log = Path(str(raw["activity_log"])).expanduser()

    return config


def write_config(config: AppConfig, output_path: str | Path) -> None:
    """
    Write an AppConfig to a YAML file.

    Args:
        config: The configuration to write
        output_path: Path to write the YAML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = {
        "data_dir": str(config.data_dir),
        "locale": config.locale,
        "currency_symbol": config.currency_symbol,
        "expiring_window_days": config.expiring_window_days,
    }
    if config.activity_log is not None:
        config_dict["activity_log"] = str(config.activity_log)

    with open(output_path, "w") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
