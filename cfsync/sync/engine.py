# CFSync Sync Engine
# Replay a resolved dependency graph against the target environment

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

from cfsync.client.base import ContentClient, WriteResult
from cfsync.graph.types import DependencyGraph, DependencyNode, ItemKind
from cfsync.sync.order import build_execution_order, count_skipped
from cfsync.sync.progress import ProgressCallback, SyncPhase, SyncProgress

logger = logging.getLogger(__name__)


@dataclass
class SyncError:
    """A single item that failed to sync."""

    item_id: str
    item_type: ItemKind
    message: str


@dataclass
class SyncResult:
    """Result of a complete sync run."""

    success: bool
    entries_synced: int = 0
    assets_synced: int = 0
    skipped_count: int = 0
    errors: list[SyncError] = field(default_factory=list)
    duration: float = 0.0
    dry_run: bool = False

    @property
    def total_synced(self) -> int:
        return self.entries_synced + self.assets_synced

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0


class SyncEngine:
    """
    Synchronizes a dependency graph to the target environment.

    Items are written one at a time in execution order. A failed item is
    recorded and the run continues; every run reaches the complete phase.
    """

    def __init__(self, client: ContentClient):
        """
        Initialize sync engine.

        Args:
            client: Content client writing to the target environment.
        """
        self.client = client

    def execute(
        self,
        graph: DependencyGraph,
        on_progress: Optional[ProgressCallback] = None,
        *,
        dry_run: bool = False,
    ) -> SyncResult:
        """
        Sync every scheduled node of a graph.

        Args:
            graph: Resolved dependency graph.
            on_progress: Optional callback receiving progress events in order.
            dry_run: If True, don't write anything; scheduled items count as synced.

        Returns:
            SyncResult with counts, skipped items and per-item errors.
        """
        notify = on_progress or (lambda progress: None)
        result = SyncResult(success=True, skipped_count=count_skipped(graph), dry_run=dry_run)

        start = time.monotonic()
        order = build_execution_order(graph)
        total = len(order)

        notify(SyncProgress(phase=SyncPhase.SYNCING, current=0, total=total, message="Starting sync..."))

        for position, node in enumerate(order, start=1):
            notify(
                SyncProgress(
                    phase=SyncPhase.SYNCING,
                    current=position,
                    total=total,
                    current_item=node.id,
                    message=f"Syncing {node.kind.value}: {node.id}",
                )
            )

            write_result = WriteResult(success=True) if dry_run else self._write(node)

            if write_result.success:
                if node.kind == ItemKind.ASSET:
                    result.assets_synced += 1
                else:
                    result.entries_synced += 1
            else:
                message = write_result.error or "Unknown error"
                logger.warning("Failed to sync %s %s: %s", node.kind.value, node.id, message)
                result.errors.append(SyncError(item_id=node.id, item_type=node.kind, message=message))

        result.duration = time.monotonic() - start
        result.success = not result.errors

        notify(
            SyncProgress(
                phase=SyncPhase.COMPLETE,
                current=total,
                total=total,
                message=f"Sync complete: {result.entries_synced} entries, {result.assets_synced} assets",
            )
        )

        return result

    def _write(self, node: DependencyNode) -> WriteResult:
        """Write one node through the client, turning unexpected failures into results."""
        try:
            if node.kind == ItemKind.ASSET:
                return self.client.write_asset(node.data)
            return self.client.write_entry(node.data)
        except Exception as e:
            return WriteResult.fail(str(e) or type(e).__name__)
