# CFSync Client Module
# Content client capability and its implementations

from cfsync.client.base import AssetResult, ContentClient, EntryResult, WriteResult
from cfsync.client.export import ExportFileClient, list_environments, load_export, save_export
from cfsync.client.memory import InMemoryContentClient

__all__ = [
    # Capability
    "ContentClient",
    "EntryResult",
    "AssetResult",
    "WriteResult",
    # Implementations
    "InMemoryContentClient",
    "ExportFileClient",
    # Export files
    "list_environments",
    "load_export",
    "save_export",
]
