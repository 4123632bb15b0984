"""
Configuration management for FitFlow.

Handles loading and validation of configuration files.
"""

from fitflow.config.settings import (
    FitFlowConfig,
    LoggingConfig,
    StorageConfig,
    UIConfig,
    get_default_config,
    get_default_config_path,
    load_config,
)

__all__ = [
    "FitFlowConfig",
    "LoggingConfig",
    "StorageConfig",
    "UIConfig",
    "get_default_config",
    "get_default_config_path",
    "load_config",
]
