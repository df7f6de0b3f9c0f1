"""CFSync - dependency-aware content synchronization between environments.

Resolves every entry and asset reachable from a root entry in a source
environment and replays them against a target environment in an order
that keeps references intact.
"""

__version__ = "1.0.0"
__author__ = "CFSync Contributors"

__all__ = [
    "__version__",
    "Asset",
    "DependencyGraph",
    "DependencyNode",
    "DependencyResolver",
    "Entry",
    "ItemKind",
    "ResolutionFailed",
    "SyncEngine",
    "SyncError",
    "SyncProgress",
    "SyncResult",
    "build_execution_order",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("Asset", "DependencyGraph", "DependencyNode", "Entry", "ItemKind"):
        from cfsync.graph import types

        return getattr(types, name)
    if name == "DependencyResolver":
        from cfsync.graph.resolver import DependencyResolver

        return DependencyResolver
    if name == "ResolutionFailed":
        from cfsync.errors import ResolutionFailed

        return ResolutionFailed
    if name in ("SyncEngine", "SyncError", "SyncResult"):
        from cfsync.sync import engine

        return getattr(engine, name)
    if name == "SyncProgress":
        from cfsync.sync.progress import SyncProgress

        return SyncProgress
    if name == "build_execution_order":
        from cfsync.sync.order import build_execution_order

        return build_execution_order
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
