# CFSync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from cfsync.config.defaults import DEFAULT_CONFIG, generate_default_config
from cfsync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from cfsync.config.schema import (
    CfsyncConfig,
    EnvironmentConfig,
    OutputConfig,
    SpaceConfig,
    SyncSettings,
)

__all__ = [
    # Schema
    "CfsyncConfig",
    "EnvironmentConfig",
    "OutputConfig",
    "SpaceConfig",
    "SyncSettings",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
