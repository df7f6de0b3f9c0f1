# CFSync Dependency Resolver
# Discover every entry and asset reachable from a root entry

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from cfsync.errors import ResolutionFailed
from cfsync.graph.links import extract_links
from cfsync.graph.types import (
    DependencyGraph,
    DependencyNode,
    ItemKind,
    NodeKey,
    NodeStatus,
    PruneReason,
)

if TYPE_CHECKING:
    from cfsync.client.base import ContentClient

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 50


@dataclass
class _Traversal:
    """Bookkeeping owned by a single resolve() call."""

    visited: set[NodeKey] = field(default_factory=set)
    nodes: dict[NodeKey, DependencyNode] = field(default_factory=dict)
    entry_count: int = 0
    asset_count: int = 0
    root_error: Optional[str] = None


class DependencyResolver:
    """
    Resolves the dependency graph of an entry.

    Traversal is depth-first with one fetch outstanding at a time. Two cycle
    detectors run side by side: an entry id reappearing on its own path is
    an entry loop, and a content type reappearing on the path is a content
    type loop. Shared references elsewhere in the graph reuse the node
    already resolved.

    All traversal state is local to a resolve() call, so one resolver can
    serve independent resolutions.
    """

    def __init__(self, client: ContentClient, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Initialize resolver.

        Args:
            client: Content client reading from the source environment.
            max_depth: Depth at which traversal stops descending.
        """
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.client = client
        self.max_depth = max_depth

    def resolve(self, entry_id: str) -> DependencyGraph:
        """
        Resolve the graph rooted at an entry.

        Args:
            entry_id: Root entry id.

        Returns:
            DependencyGraph with every reachable entry and asset.

        Raises:
            ResolutionFailed: If the root entry cannot be fetched.
        """
        traversal = _Traversal()
        root = self._resolve_entry(traversal, entry_id, 0, frozenset(), frozenset())

        if root is None:
            raise ResolutionFailed(entry_id, traversal.root_error)

        logger.debug(
            "Resolved %s: %d entries, %d assets",
            entry_id,
            traversal.entry_count,
            traversal.asset_count,
        )
        return DependencyGraph(
            root=root,
            all_nodes=traversal.nodes,
            entry_count=traversal.entry_count,
            asset_count=traversal.asset_count,
        )

    def _resolve_entry(
        self,
        traversal: _Traversal,
        entry_id: str,
        depth: int,
        content_types: frozenset[str],
        entry_path: frozenset[str],
    ) -> Optional[DependencyNode]:
        """Resolve one entry and, unless pruned, its links."""
        key = NodeKey(ItemKind.ENTRY, entry_id)

        if entry_id in entry_path:
            existing = traversal.nodes.get(key)
            if existing is None:
                return None
            logger.debug("Entry loop at %s (depth %d)", entry_id, depth)
            return existing.pruned_copy(PruneReason.ENTRY_LOOP)

        if key in traversal.visited:
            return traversal.nodes.get(key)

        if depth >= self.max_depth:
            return traversal.nodes.get(key)

        traversal.visited.add(key)

        result = self.client.fetch_entry(entry_id)
        if not result.success or result.entry is None:
            if depth == 0:
                traversal.root_error = result.error
            else:
                logger.debug("Dropping entry %s: %s", entry_id, result.error or "not found")
            return None

        entry = result.entry

        if entry.content_type in content_types:
            logger.debug("Content type loop at %s (%s)", entry_id, entry.content_type)
            traversal.entry_count += 1
            node = DependencyNode(
                id=entry_id,
                kind=ItemKind.ENTRY,
                data=entry,
                depth=depth,
                status=NodeStatus.PRUNED,
                prune_reason=PruneReason.CONTENT_TYPE_LOOP,
            )
            traversal.nodes[key] = node
            return node

        child_types = content_types | {entry.content_type}
        child_path = entry_path | {entry_id}

        traversal.entry_count += 1
        node = DependencyNode(id=entry_id, kind=ItemKind.ENTRY, data=entry, depth=depth)
        traversal.nodes[key] = node

        for link in extract_links(entry.fields):
            if link.link_type == ItemKind.ENTRY:
                child = self._resolve_entry(traversal, link.id, depth + 1, child_types, child_path)
            else:
                child = self._resolve_asset(traversal, link.id, depth + 1)

            if child is not None and not node.has_child(child.key):
                node.children.append(child)

        return node

    def _resolve_asset(self, traversal: _Traversal, asset_id: str, depth: int) -> Optional[DependencyNode]:
        """Resolve one asset. Assets have no outgoing links."""
        key = NodeKey(ItemKind.ASSET, asset_id)

        if key in traversal.visited:
            return traversal.nodes.get(key)

        if depth >= self.max_depth:
            return traversal.nodes.get(key)

        traversal.visited.add(key)

        result = self.client.fetch_asset(asset_id)
        if not result.success or result.asset is None:
            logger.debug("Dropping asset %s: %s", asset_id, result.error or "not found")
            return None

        traversal.asset_count += 1
        node = DependencyNode(id=asset_id, kind=ItemKind.ASSET, data=result.asset, depth=depth)
        traversal.nodes[key] = node
        return node
