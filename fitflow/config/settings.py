"""
Configuration management for FitFlow.

Loads YAML configuration from file with sensible defaults and validation.
Supports environment variable substitution using ${ENV_VAR} syntax.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from fitflow.exceptions import InvalidConfigurationError
from fitflow.logging_config import get_logger

logger = get_logger(__name__)


VALID_STORE_BACKENDS = ["file", "memory"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${FITFLOW_HOME}" -> value of FITFLOW_HOME env var
        "${FITFLOW_LOG_LEVEL:INFO}" -> value of FITFLOW_LOG_LEVEL or "INFO" if not set
    """
    if isinstance(value, str):
        # Pattern matches ${VAR} or ${VAR:default}
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


@dataclass
class StorageConfig:
    """Session store configuration."""

    backend: str = "file"
    session_store: str = ""


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    json_format: bool = True


@dataclass
class UIConfig:
    """Terminal UI preferences."""

    compact_mode: bool = False       # Use compact banners
    show_hints: bool = True          # Show keyboard hints


@dataclass
class FitFlowConfig:
    """Main FitFlow configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def get_default_home() -> str:
    """Get the default FitFlow home directory."""
    return os.path.expanduser("~/.fitflow")


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.join(get_default_home(), "config.yaml")


def get_default_config(home_dir: Optional[str] = None) -> FitFlowConfig:
    """
    Get default configuration with sensible defaults.

    Args:
        home_dir: Directory holding the session store and log file.
            Defaults to ``~/.fitflow``.

    Returns:
        FitFlowConfig: Default configuration object
    """
    home_dir = home_dir or get_default_home()

    return FitFlowConfig(
        storage=StorageConfig(
            backend="file",
            session_store=os.path.join(home_dir, "session_store.json"),
        ),
        logging=LoggingConfig(
            level="INFO",
            file=os.path.join(home_dir, "fitflow.log"),
            json_format=True,
        ),
        ui=UIConfig(),
    )


def load_config(
    config_path: Optional[str] = None,
    home_dir: Optional[str] = None,
) -> FitFlowConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.
        home_dir: Directory used for default storage and log paths.

    Returns:
        FitFlowConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = (
            os.path.join(home_dir, "config.yaml") if home_dir else get_default_config_path()
        )

    config_path = os.path.expanduser(str(config_path))

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config(home_dir)

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        )
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        )

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config(home_dir)

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': top level must be a mapping"
        )

    config_data = _expand_env_vars(config_data)

    try:
        config = _build_config_from_dict(config_data, home_dir)
        _validate_config(config)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        )

    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


def _as_bool(value: Any, name: str) -> bool:
    """Interpret YAML booleans and env-expanded strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "yes", "1", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "no", "0", "off"):
        return False
    raise InvalidConfigurationError(f"{name} must be a boolean, got {value!r}")


def _build_config_from_dict(
    config_data: Dict[str, Any],
    home_dir: Optional[str] = None,
) -> FitFlowConfig:
    """
    Build configuration object from dictionary, filling gaps with defaults.

    Args:
        config_data: Parsed YAML data
        home_dir: Directory used for default paths

    Returns:
        FitFlowConfig: Configuration object (not yet validated)
    """
    default_config = get_default_config(home_dir)

    storage_data = config_data.get("storage") or {}
    storage = StorageConfig(
        backend=str(storage_data.get("backend", default_config.storage.backend)),
        session_store=os.path.expanduser(
            str(storage_data.get("session_store", default_config.storage.session_store))
        ),
    )

    logging_data = config_data.get("logging") or {}
    log_file = logging_data.get("file", default_config.logging.file)
    logging_config = LoggingConfig(
        level=str(logging_data.get("level", default_config.logging.level)),
        file=os.path.expanduser(str(log_file)) if log_file else "",
        json_format=_as_bool(
            logging_data.get("json_format", default_config.logging.json_format),
            "logging.json_format",
        ),
    )

    ui_data = config_data.get("ui") or {}
    ui = UIConfig(
        compact_mode=_as_bool(ui_data.get("compact_mode", False), "ui.compact_mode"),
        show_hints=_as_bool(ui_data.get("show_hints", True), "ui.show_hints"),
    )

    return FitFlowConfig(storage=storage, logging=logging_config, ui=ui)


def _validate_config(config: FitFlowConfig) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration to validate

    Raises:
        InvalidConfigurationError: If configuration is invalid
    """
    if config.storage.backend not in VALID_STORE_BACKENDS:
        raise InvalidConfigurationError(
            f"storage backend must be one of {VALID_STORE_BACKENDS}, "
            f"got '{config.storage.backend}'"
        )

    if config.storage.backend == "file" and not config.storage.session_store:
        logger.error("Configuration validation failed: session_store path cannot be empty")
        raise InvalidConfigurationError("session_store path cannot be empty")

    if config.logging.level.upper() not in VALID_LOG_LEVELS:
        raise InvalidConfigurationError(
            f"logging level must be one of {VALID_LOG_LEVELS}, "
            f"got '{config.logging.level}'"
        )
