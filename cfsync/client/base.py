# CFSync Content Client
# Read/write capability the resolver and engine are built on

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from cfsync.graph.types import Asset, Entry


@dataclass
class EntryResult:
    """Result of fetching an entry from the source environment."""

    success: bool
    entry: Optional[Entry] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, entry: Entry) -> "EntryResult":
        return cls(success=True, entry=entry)

    @classmethod
    def fail(cls, error: str) -> "EntryResult":
        return cls(success=False, error=error)


@dataclass
class AssetResult:
    """Result of fetching an asset from the source environment."""

    success: bool
    asset: Optional[Asset] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, asset: Asset) -> "AssetResult":
        return cls(success=True, asset=asset)

    @classmethod
    def fail(cls, error: str) -> "AssetResult":
        return cls(success=False, error=error)


@dataclass
class WriteResult:
    """Result of writing an item to the target environment."""

    success: bool
    created: bool = False
    error: Optional[str] = None

    @classmethod
    def fail(cls, error: str) -> "WriteResult":
        return cls(success=False, error=error)


@runtime_checkable
class ContentClient(Protocol):
    """
    One logical read or write per call against the content backend.

    Backend failures are reported through the result values; implementations
    do not raise for them.
    """

    def fetch_entry(self, entry_id: str) -> EntryResult:
        """Read one entry from the source environment."""
        ...

    def fetch_asset(self, asset_id: str) -> AssetResult:
        """Read one asset from the source environment."""
        ...

    def write_entry(self, entry: Entry) -> WriteResult:
        """Create or update an entry in the target environment."""
        ...

    def write_asset(self, asset: Asset) -> WriteResult:
        """Create or update an asset in the target environment, then process it."""
        ...
