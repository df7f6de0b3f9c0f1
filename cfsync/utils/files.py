# CFSync File Utilities
# Path expansion and safe writes for config, history and export files

import json
import os
import tempfile
from pathlib import Path
from typing import Any

import yaml


def expand_path(path: str | Path) -> Path:
    """Expand ~ and environment variables in a path."""
    return Path(os.path.expandvars(str(path))).expanduser()


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists, creating if necessary.

    Args:
        path: Directory path.

    Returns:
        The path that was ensured.
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """
    Atomically write text to a file.

    Writes a temporary file next to the target and renames it into place.
    """
    ensure_dir(path.parent)

    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            f.write(content)
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def is_json_path(path: Path) -> bool:
    return path.suffix.lower() == ".json"


def read_document(path: Path) -> Any:
    """
    Read a JSON or YAML document.

    YAML is a superset of JSON, so one loader reads both.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        yaml.YAMLError: If the file can't be parsed.
    """
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_document(path: Path, data: Any) -> None:
    """Write a document as JSON or YAML depending on the file suffix."""
    if is_json_path(path):
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    else:
        content = yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    atomic_write(path, content)
