"""Configuration loader for secretenv."""
import logging
from pathlib import Path
from typing import Dict, Any
import yaml

from .preferences import get_preference

logger = logging.getLogger(__name__)

CONFIG_PATH_PREFERENCE = "config_path"


def default_config_path() -> Path:
    return Path.home() / ".config" / "secretenv" / "config.yml"


def _get_config_path() -> str:
    """
    Get config file path using XDG Base Directory standard.

    Priority order:
    1. User preference (stored in ~/.config/secretenv/preferences.json)
    2. Default location: ~/.config/secretenv/config.yml

    Returns:
        Absolute path to config file

    Raises:
        FileNotFoundError: If config file doesn't exist in any location
    """
    config_path_pref = get_preference(CONFIG_PATH_PREFERENCE)
    if config_path_pref:
        config_path = Path(config_path_pref)
        if config_path.exists():
            logger.info(f"Using config from preference: {config_path}")
            return str(config_path)
        else:
            logger.warning(f"Config path from preference doesn't exist: {config_path}")

    default_config = default_config_path()
    if default_config.exists():
        logger.info(f"Using default config location: {default_config}")
        return str(default_config)

    raise FileNotFoundError(
        "Configuration file not found. Create one with:\n\n"
        f"   mkdir -p {default_config.parent}\n"
        f"   cat > {default_config} <<EOF\n"
        "   aws:\n"
        "     region: us-west-2\n"
        "   EOF\n\n"
        "or point to an existing file with:\n"
        "   secretenv-config set-path /path/to/config.yml\n"
    )


class ConfigError(Exception):
    """Configuration error exception."""
    pass


def _require_string(section: Dict[str, Any], key: str, where: str, config_path: str) -> None:
    if not isinstance(section[key], str) or not section[key]:
        raise ConfigError(f"'{where}.{key}' must be a non-empty string in config at {config_path}")


def load_config() -> Dict[str, Any]:
    """
    Load and validate configuration from YAML file.

    Returns:
        Dict containing configuration with keys:
        - aws: dict with region and optional profile
        - output: optional dict with dir

    Raises:
        FileNotFoundError: If no config file exists
        ConfigError: If the config file is unreadable or invalid
    """
    # Resolved on every call so preference changes apply immediately
    config_path = _get_config_path()

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    if not config:
        raise ConfigError(f"Config file at {config_path} is empty")

    if not isinstance(config, dict):
        raise ConfigError(f"Config file at {config_path} must contain a mapping")

    if 'aws' not in config or not isinstance(config['aws'], dict):
        raise ConfigError(
            f"Missing 'aws' section in config at {config_path}\n"
            f"Required format:\n"
            f"aws:\n"
            f"  region: us-west-2\n"
            f"  profile: optional-profile-name"
        )

    aws = config['aws']
    if 'region' not in aws:
        raise ConfigError("Missing 'aws.region' in config")
    _require_string(aws, 'region', 'aws', config_path)

    if 'profile' in aws and aws['profile'] is not None:
        _require_string(aws, 'profile', 'aws', config_path)

    if 'output' in config:
        output = config['output']
        if not isinstance(output, dict):
            raise ConfigError(f"'output' must be a mapping in config at {config_path}")
        if 'dir' in output:
            _require_string(output, 'dir', 'output', config_path)

    logger.info(f"Configuration loaded successfully from {config_path}")
    logger.debug(f"Using region: {aws['region']}")

    return config


def load_optional_config() -> Dict[str, Any]:
    """
    Load configuration if a config file exists.

    Returns:
        The validated config, or an empty dict when no config file is present

    Raises:
        ConfigError: If a config file exists but is invalid
    """
    try:
        return load_config()
    except FileNotFoundError:
        logger.debug("No config file found, using built-in defaults")
        return {}
