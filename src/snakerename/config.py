"""Configuration loading for snakerename.

Settings come from a YAML file. Command-line flags always win over the file.
"""

import os
from typing import Any, Dict, Optional

import yaml

from .utils import debug_print

CONFIG_ENV_VAR = "SNAKERENAME_CONFIG"
DEFAULT_CONFIG_FILENAME = ".snakerename.yaml"

OUTPUT_FORMATS = ("table", "json")

DEFAULT_CONFIG: Dict[str, Any] = {
    "output": "table",
    "in_place": False,
    "debug": False,
}


class ConfigError(Exception):
    """Raised when a configuration file is missing, malformed, or has bad values."""


def find_config_file(explicit_path: Optional[str] = None) -> Optional[str]:
    """Locate the configuration file to use, if any.

    Lookup order: explicit path, $SNAKERENAME_CONFIG, ./.snakerename.yaml
    """
    if explicit_path:
        return explicit_path

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        debug_print(f"Using config from ${CONFIG_ENV_VAR}: {env_path}")  # pragma: no mutate
        return env_path

    if os.path.isfile(DEFAULT_CONFIG_FILENAME):
        return DEFAULT_CONFIG_FILENAME

    return None


def validate_config(raw) -> Dict[str, Any]:
    """Merge raw YAML data over the defaults, rejecting unknown keys and bad types"""
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(raw).__name__}")

    unknown = sorted(set(raw) - set(DEFAULT_CONFIG))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(map(str, unknown))}")

    config = dict(DEFAULT_CONFIG)
    config.update(raw)

    if config["output"] not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output format '{config['output']}', expected one of: "
            f"{', '.join(OUTPUT_FORMATS)}"
        )
    for key in ("in_place", "debug"):
        if not isinstance(config[key], bool):
            raise ConfigError(f"Configuration key '{key}' must be true or false")

    return config


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration, falling back to defaults when no file is found.

    Args:
        path: Explicit configuration file; must exist when given

    Returns:
        Dictionary with every key of DEFAULT_CONFIG

    Raises:
        ConfigError: If the file cannot be read or contains invalid settings
    """
    config_path = find_config_file(path)
    if config_path is None:
        debug_print("No configuration file found, using defaults")  # pragma: no mutate
        return dict(DEFAULT_CONFIG)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Could not read configuration file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML in {config_path}: {e}") from e

    config = validate_config(raw)
    debug_print(f"Loaded configuration from {config_path}: {config}")  # pragma: no mutate
    return config


def apply_config_defaults(args, config: Dict[str, Any]):
    """Fill in argparse values the user did not set from configuration"""
    if not args.json and config["output"] == "json":
        args.json = True
    if not args.in_place and config["in_place"]:
        args.in_place = True
    if not args.debug and config["debug"]:
        args.debug = True
    return args
