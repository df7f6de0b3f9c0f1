# CFSync In-Memory Client
# Source and target environments held in memory

import copy
from collections.abc import Iterable
from typing import Any, Optional

from cfsync.client.base import AssetResult, EntryResult, WriteResult
from cfsync.graph.types import Asset, Entry, ItemKind, NodeKey


def next_version(existing: Optional[dict[str, Any]], incoming: dict[str, Any]) -> dict[str, Any]:
    """
    Build the sys metadata of a written item.

    Creates start at version 1; updates bump the target's version.
    """
    sys = {k: v for k, v in incoming.items() if k not in ("version", "publishedAt")}
    sys["version"] = (existing.get("version") or 0) + 1 if existing is not None else 1
    return sys


def process_asset_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """
    Make an uploaded asset usable.

    Each locale of the ``file`` field that carries an ``upload`` and no
    ``url`` gets its ``url`` from the upload.
    """
    files = fields.get("file")
    if not isinstance(files, dict):
        return fields

    processed = {}
    for locale, file_info in files.items():
        if isinstance(file_info, dict) and file_info.get("upload") and not file_info.get("url"):
            upload = file_info["upload"]
            file_info = {k: v for k, v in file_info.items() if k != "upload"}
            file_info["url"] = upload
        processed[locale] = file_info
    return {**fields, "file": processed}


class InMemoryContentClient:
    """
    Content client over in-memory environments.

    Fetches read from the source items; writes create or update items in
    the target and are logged in call order.
    """

    def __init__(self, entries: Iterable[Entry] = (), assets: Iterable[Asset] = ()):
        """
        Initialize client.

        Args:
            entries: Entries of the source environment.
            assets: Assets of the source environment.
        """
        self.entries: dict[str, Entry] = {entry.id: entry for entry in entries}
        self.assets: dict[str, Asset] = {asset.id: asset for asset in assets}
        self.target_entries: dict[str, Entry] = {}
        self.target_assets: dict[str, Asset] = {}
        self.fetch_log: list[NodeKey] = []
        self.write_log: list[NodeKey] = []

    def add_entry(self, entry: Entry) -> Entry:
        self.entries[entry.id] = entry
        return entry

    def add_asset(self, asset: Asset) -> Asset:
        self.assets[asset.id] = asset
        return asset

    def fetch_entry(self, entry_id: str) -> EntryResult:
        self.fetch_log.append(NodeKey(ItemKind.ENTRY, entry_id))
        entry = self.entries.get(entry_id)
        if entry is None:
            return EntryResult.fail(f"Entry not found: {entry_id}")
        return EntryResult.ok(copy.deepcopy(entry))

    def fetch_asset(self, asset_id: str) -> AssetResult:
        self.fetch_log.append(NodeKey(ItemKind.ASSET, asset_id))
        asset = self.assets.get(asset_id)
        if asset is None:
            return AssetResult.fail(f"Asset not found: {asset_id}")
        return AssetResult.ok(copy.deepcopy(asset))

    def write_entry(self, entry: Entry) -> WriteResult:
        self.write_log.append(NodeKey(ItemKind.ENTRY, entry.id))
        existing = self.target_entries.get(entry.id)
        self.target_entries[entry.id] = Entry(
            id=entry.id,
            content_type=entry.content_type,
            fields=copy.deepcopy(entry.fields),
            sys=next_version(existing.sys if existing else None, entry.sys),
        )
        return WriteResult(success=True, created=existing is None)

    def write_asset(self, asset: Asset) -> WriteResult:
        self.write_log.append(NodeKey(ItemKind.ASSET, asset.id))
        existing = self.target_assets.get(asset.id)
        self.target_assets[asset.id] = Asset(
            id=asset.id,
            fields=process_asset_fields(copy.deepcopy(asset.fields)),
            sys=next_version(existing.sys if existing else None, asset.sys),
        )
        return WriteResult(success=True, created=existing is None)
