# CFSync Export File Client
# Environments backed by space export documents (JSON or YAML)

from pathlib import Path
from typing import Any, Optional

import yaml

from cfsync.client.base import AssetResult, EntryResult, WriteResult
from cfsync.client.memory import InMemoryContentClient
from cfsync.graph.types import Asset, ContentItem, Entry
from cfsync.utils.files import read_document, write_document

EXPORT_SUFFIXES = (".json", ".yaml", ".yml")


def load_export(path: Path) -> tuple[list[Entry], list[Asset], dict[str, Any]]:
    """
    Load a space export document.

    Args:
        path: Path to a JSON or YAML export.

    Returns:
        Tuple of (entries, assets, other top-level keys).

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the document is not a space export.
    """
    try:
        data = read_document(path)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid export file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid export file {path}: expected a mapping at top level")

    raw_entries = data.get("entries") or []
    raw_assets = data.get("assets") or []
    if not isinstance(raw_entries, list) or not isinstance(raw_assets, list):
        raise ValueError(f"Invalid export file {path}: 'entries' and 'assets' must be lists")

    entries = [Entry.from_dict(item) for item in raw_entries if isinstance(item, dict)]
    assets = [Asset.from_dict(item) for item in raw_assets if isinstance(item, dict)]
    extra = {k: v for k, v in data.items() if k not in ("entries", "assets")}
    return entries, assets, extra


def save_export(path: Path, entries: list[Entry], assets: list[Asset], extra: Optional[dict[str, Any]] = None) -> None:
    """Write a space export document, keeping any extra top-level keys."""
    data: dict[str, Any] = dict(extra or {})
    data["entries"] = [entry.to_dict() for entry in entries]
    data["assets"] = [asset.to_dict() for asset in assets]
    write_document(path, data)


def list_environments(directory: Path) -> dict[str, Path]:
    """
    List environments stored as export files in a directory.

    Args:
        directory: Directory containing ``<environment>.json`` / ``.yaml`` files.

    Returns:
        Dict of environment id to export path, sorted by id.
    """
    if not directory.is_dir():
        return {}

    environments: dict[str, Path] = {}
    for path in sorted(directory.iterdir()):
        if path.is_file() and path.suffix.lower() in EXPORT_SUFFIXES and not path.name.startswith("."):
            environments.setdefault(path.stem, path)
    return environments


class ExportFileClient(InMemoryContentClient):
    """
    Content client reading a source export and writing a target export.

    The target document is saved after every write. A missing target file
    is an empty environment.
    """

    def __init__(self, source_path: Path, target_path: Optional[Path] = None):
        """
        Initialize client.

        Args:
            source_path: Export file of the source environment.
            target_path: Export file of the target environment. Without one, writes fail.
        """
        super().__init__()
        self.source_path = source_path
        self.target_path = target_path
        self.source_error: Optional[str] = None
        self.target_error: Optional[str] = None if target_path else "No target environment configured"
        self._target_extra: dict[str, Any] = {}

        try:
            entries, assets, _ = load_export(source_path)
        except (OSError, ValueError) as e:
            self.source_error = str(e)
        else:
            for entry in entries:
                self.add_entry(entry)
            for asset in assets:
                self.add_asset(asset)

        if target_path is not None and target_path.exists():
            try:
                entries, assets, self._target_extra = load_export(target_path)
            except (OSError, ValueError) as e:
                self.target_error = str(e)
            else:
                self.target_entries = {entry.id: entry for entry in entries}
                self.target_assets = {asset.id: asset for asset in assets}

    def fetch_entry(self, entry_id: str) -> EntryResult:
        if self.source_error:
            return EntryResult.fail(self.source_error)
        return super().fetch_entry(entry_id)

    def fetch_asset(self, asset_id: str) -> AssetResult:
        if self.source_error:
            return AssetResult.fail(self.source_error)
        return super().fetch_asset(asset_id)

    def write_entry(self, entry: Entry) -> WriteResult:
        if self.target_error:
            return WriteResult.fail(self.target_error)
        previous = self.target_entries.get(entry.id)
        return self._persist(super().write_entry(entry), self.target_entries, entry.id, previous)

    def write_asset(self, asset: Asset) -> WriteResult:
        if self.target_error:
            return WriteResult.fail(self.target_error)
        previous = self.target_assets.get(asset.id)
        return self._persist(super().write_asset(asset), self.target_assets, asset.id, previous)

    def _persist(
        self,
        result: WriteResult,
        items: dict[str, ContentItem],
        item_id: str,
        previous: Optional[ContentItem],
    ) -> WriteResult:
        """
        Save the target document after a successful write.

        If the save fails, the written item is rolled back to ``previous``
        (removed when it didn't exist), so the next save doesn't persist it.
        """
        if not result.success:
            return result
        try:
            save_export(
                self.target_path,
                list(self.target_entries.values()),
                list(self.target_assets.values()),
                self._target_extra,
            )
        except OSError as e:
            if previous is None:
                items.pop(item_id, None)
            else:
                items[item_id] = previous
            return WriteResult.fail(f"Failed to save {self.target_path}: {e}")
        return result
