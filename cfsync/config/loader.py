# CFSync Configuration Loader
# Locate, read, write and check the YAML configuration file

import copy
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from cfsync.config.defaults import DEFAULT_CONFIG, generate_default_config
from cfsync.config.schema import CfsyncConfig
from cfsync.errors import ConfigError
from cfsync.utils.files import atomic_write, ensure_dir

CONFIG_ENV_VAR = "CFSYNC_CONFIG"


def get_config_dir() -> Path:
    """Directory holding the default configuration and history files."""
    return Path.home() / ".config" / "cfsync"


def get_config_path() -> Path:
    """Configuration file in use: ``$CFSYNC_CONFIG`` if set, else the default location."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else get_config_dir() / "config.yaml"


def _read_config_data(path: Path) -> Optional[dict[str, Any]]:
    """
    Parse a configuration file.

    Returns None for an empty file.

    Raises:
        ConfigError: If the file isn't valid YAML or its top level isn't a mapping.
    """
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e

    if raw is not None and not isinstance(raw, dict):
        raise ConfigError(f"Configuration must be a mapping: {path}")
    return raw


def load_config(config_path: Optional[Path] = None) -> CfsyncConfig:
    """
    Read and validate the configuration.

    Sections missing from the file fall back to the defaults.

    Args:
        config_path: File to read. Defaults to get_config_path().

    Returns:
        Validated CfsyncConfig.

    Raises:
        FileNotFoundError: If there is no configuration file.
        ConfigError: If the file can't be parsed.
        ValidationError: If the merged configuration is invalid.
    """
    path = config_path or get_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}\nRun 'cfsync config init' to create one.")

    data = _read_config_data(path) or {}
    return CfsyncConfig.model_validate(_merge_with_defaults(data))


def save_config(config: CfsyncConfig, config_path: Optional[Path] = None) -> Path:
    """Write a configuration to disk, replacing the file atomically. Returns the path written."""
    path = config_path or get_config_path()
    content = yaml.dump(
        config.model_dump(exclude_none=True, mode="json"),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    atomic_write(path, content)
    return path


def ensure_config_exists(config_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Write the default configuration unless a file is already there.

    Returns:
        Tuple of (path, created).
    """
    path = config_path or get_config_path()
    if path.exists():
        return path, False

    ensure_dir(path.parent)
    path.write_text(generate_default_config(), encoding="utf-8")
    return path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Check a configuration file as written, without applying defaults.

    Args:
        config_path: File to check. Defaults to get_config_path().

    Returns:
        Tuple of (valid, problems). Problems are human-readable, one per line.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return False, [f"Configuration file not found: {path}"]

    try:
        data = _read_config_data(path)
    except ConfigError as e:
        # Keep the parser detail, drop the path the caller already knows
        message = e.message.replace(f" in {path}", "").replace(f": {path}", "")
        return False, [message]

    if data is None:
        return False, ["Configuration file is empty"]

    try:
        CfsyncConfig.model_validate(data)
    except ValidationError as e:
        problems = []
        for error in e.errors():
            location = " -> ".join(str(part) for part in error["loc"])
            problems.append(f"{location}: {error['msg']}" if location else error["msg"])
        return False, problems

    if not data.get("environments"):
        return False, ["No environments defined"]
    return True, []


def _merge_with_defaults(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay a loaded file on the defaults, one section at a time."""
    merged = copy.deepcopy(DEFAULT_CONFIG)

    for section in ("space", "sync", "output"):
        if isinstance(data.get(section), dict):
            merged[section].update(data[section])

    # Environments are never merged with the defaults
    if "environments" in data:
        merged["environments"] = data["environments"] or {}

    return merged
