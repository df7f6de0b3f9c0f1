# CFSync Graph Module
# Data model, link extraction and dependency resolution

from cfsync.graph.links import Link, extract_links, iter_links
from cfsync.graph.resolver import DEFAULT_MAX_DEPTH, DependencyResolver
from cfsync.graph.types import (
    Asset,
    ContentItem,
    DependencyGraph,
    DependencyNode,
    Entry,
    ItemKind,
    NodeKey,
    NodeStatus,
    PruneReason,
)

__all__ = [
    # Types
    "Asset",
    "ContentItem",
    "DependencyGraph",
    "DependencyNode",
    "Entry",
    "ItemKind",
    "NodeKey",
    "NodeStatus",
    "PruneReason",
    # Links
    "Link",
    "extract_links",
    "iter_links",
    # Resolver
    "DEFAULT_MAX_DEPTH",
    "DependencyResolver",
]
