# CFSync Default Configuration
# Default configuration as Python dict and YAML generator

from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "space": {
        "id": "my-space",
        "name": "",
    },
    "environments": {
        "master": {
            "export_path": "~/cfsync/environments/master.json",
            "description": "Production content",
        },
        "staging": {
            "export_path": "~/cfsync/environments/staging.json",
            "description": "Staging content",
        },
    },
    "sync": {
        "source": "master",
        "target": "staging",
        "max_depth": 50,
    },
    "output": {
        "verbose": False,
        "colored": True,
        "history_file": "~/.config/cfsync/history.yaml",
        "history_limit": 100,
    },
}

CONFIG_HEADER = """\
# CFSync Configuration
# Environments are space export files (JSON or YAML) with "entries" and "assets".
# sync.source is read from, sync.target is written to; they must differ.

"""


def generate_default_config() -> str:
    """Generate the default configuration file content."""
    body = yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return CONFIG_HEADER + body
