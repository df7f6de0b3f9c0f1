# CFSync Sync History
# Persistent record of completed sync runs

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml

from cfsync.sync.engine import SyncResult
from cfsync.utils.files import atomic_write

DEFAULT_HISTORY_LIMIT = 100


@dataclass
class RunRecord:
    """Summary of a single sync run."""

    root_id: str
    source: str
    target: str
    timestamp: str  # ISO format datetime
    success: bool
    entries_synced: int = 0
    assets_synced: int = 0
    skipped: int = 0
    errors: int = 0
    duration: float = 0.0
    dry_run: bool = False

    @classmethod
    def from_result(cls, result: SyncResult, *, root_id: str, source: str, target: str) -> "RunRecord":
        """Create a record from a sync result."""
        return cls(
            root_id=root_id,
            source=source,
            target=target,
            timestamp=datetime.now().isoformat(timespec="seconds"),
            success=result.success,
            entries_synced=result.entries_synced,
            assets_synced=result.assets_synced,
            skipped=result.skipped_count,
            errors=len(result.errors),
            duration=round(result.duration, 3),
            dry_run=result.dry_run,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RunRecord":
        return cls(
            root_id=data.get("root_id", ""),
            source=data.get("source", ""),
            target=data.get("target", ""),
            timestamp=data.get("timestamp", ""),
            success=bool(data.get("success", False)),
            entries_synced=data.get("entries_synced", 0),
            assets_synced=data.get("assets_synced", 0),
            skipped=data.get("skipped", 0),
            errors=data.get("errors", 0),
            duration=data.get("duration", 0.0),
            dry_run=bool(data.get("dry_run", False)),
        )


class SyncHistory:
    """
    Sync run history backed by a YAML file.

    Records are kept oldest first and trimmed to ``limit`` on save.
    """

    def __init__(self, path: Path, limit: int = DEFAULT_HISTORY_LIMIT):
        """
        Initialize history.

        Args:
            path: Path to the history file.
            limit: Maximum number of runs kept. 0 keeps everything.
        """
        self.path = path
        self.limit = limit
        self._records: Optional[list[RunRecord]] = None

    @property
    def records(self) -> list[RunRecord]:
        """Get records, loading if necessary."""
        if self._records is None:
            self._records = self.load()
        return self._records

    def load(self) -> list[RunRecord]:
        """Load records from file."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError:
            try:
                with open(self.path, encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError):
                return []
        except OSError:
            return []

        runs = data.get("runs") if isinstance(data, dict) else data
        if not isinstance(runs, list):
            return []
        return [RunRecord.from_dict(item) for item in runs if isinstance(item, dict)]

    def save(self) -> None:
        """Save records to file."""
        records = self.records[-self.limit :] if self.limit > 0 else self.records
        self._records = records
        content = yaml.dump(
            {"runs": [record.to_dict() for record in records]},
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
        atomic_write(self.path, content)

    def record(self, run: RunRecord) -> RunRecord:
        """Append a run and save."""
        self.records.append(run)
        self.save()
        return run

    def recent(self, count: int = 10) -> list[RunRecord]:
        """Return the most recent runs, newest first."""
        if count <= 0:
            return []
        return list(reversed(self.records[-count:]))

    def clear(self) -> None:
        """Remove all records."""
        self._records = []
        self.save()
