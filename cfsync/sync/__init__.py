# CFSync Sync Module
# Execution order, sync engine, progress events and run history

from cfsync.sync.engine import SyncEngine, SyncError, SyncResult
from cfsync.sync.history import RunRecord, SyncHistory
from cfsync.sync.order import SyncPlan, build_execution_order, count_skipped, plan
from cfsync.sync.progress import ProgressCallback, SyncPhase, SyncProgress

__all__ = [
    # Order
    "SyncPlan",
    "build_execution_order",
    "count_skipped",
    "plan",
    # Engine
    "SyncEngine",
    "SyncError",
    "SyncResult",
    # Progress
    "ProgressCallback",
    "SyncPhase",
    "SyncProgress",
    # History
    "RunRecord",
    "SyncHistory",
]
