# CFSync Sync Progress
# Progress events emitted while a sync runs

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SyncPhase(str, Enum):
    """Phase of a sync run."""

    RESOLVING = "resolving"
    SYNCING = "syncing"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True)
class SyncProgress:
    """A single progress event."""

    phase: SyncPhase
    current: int
    total: int
    message: str
    current_item: Optional[str] = None

    @property
    def fraction(self) -> float:
        """Completed share of the run, 0.0 to 1.0."""
        if self.total <= 0:
            return 1.0 if self.phase == SyncPhase.COMPLETE else 0.0
        return min(self.current / self.total, 1.0)


ProgressCallback = Callable[[SyncProgress], None]
