# CFSync Utilities Module
# File helpers shared by config, history and clients

from cfsync.utils.files import (
    atomic_write,
    ensure_dir,
    expand_path,
    is_json_path,
    read_document,
    write_document,
)

__all__ = [
    "atomic_write",
    "ensure_dir",
    "expand_path",
    "is_json_path",
    "read_document",
    "write_document",
]
