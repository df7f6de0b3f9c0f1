# CFSync Execution Order
# Linearize a dependency graph so dependencies sync before dependents

from dataclasses import dataclass, field

from cfsync.graph.types import (
    Asset,
    DependencyGraph,
    DependencyNode,
    Entry,
    ItemKind,
    NodeKey,
)


def _assets_first(children: list[DependencyNode]) -> list[DependencyNode]:
    """Stable sort placing asset children before entry children."""
    return sorted(children, key=lambda child: child.kind != ItemKind.ASSET)


def build_execution_order(graph: DependencyGraph) -> list[DependencyNode]:
    """
    Build the order in which nodes are synced.

    Post-order depth-first traversal over every node in discovery order.
    Children are visited before their parent and asset children before
    entry children. Pruned nodes are never scheduled.

    Args:
        graph: Resolved dependency graph.

    Returns:
        Nodes to sync, in order. Each key appears once.
    """
    visited: set[NodeKey] = set()
    order: list[DependencyNode] = []

    def visit(node: DependencyNode) -> None:
        # A pruned entry-loop clone shares its key with the real node
        if node.is_pruned or node.key in visited:
            return
        visited.add(node.key)

        for child in _assets_first(node.children):
            visit(child)

        order.append(node)

    for node in graph.all_nodes.values():
        visit(node)

    return order


def count_skipped(graph: DependencyGraph) -> int:
    """Number of pruned nodes in the graph, whatever the prune reason."""
    return sum(1 for node in graph.all_nodes.values() if node.is_pruned)


@dataclass
class SyncPlan:
    """What a sync of a graph would write, and in which order."""

    entries: list[Entry] = field(default_factory=list)
    assets: list[Asset] = field(default_factory=list)
    order: list[NodeKey] = field(default_factory=list)
    skipped: int = 0

    @property
    def total(self) -> int:
        return len(self.order)


def plan(graph: DependencyGraph) -> SyncPlan:
    """Build a sync plan without touching the target environment."""
    sync_plan = SyncPlan(skipped=count_skipped(graph))

    for node in build_execution_order(graph):
        sync_plan.order.append(node.key)
        if isinstance(node.data, Asset):
            sync_plan.assets.append(node.data)
        else:
            sync_plan.entries.append(node.data)

    return sync_plan
