# CFSync Graph Types
# Entries, assets and the dependency graph built from them

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Union

TITLE_FIELDS = ("title", "name", "internalName", "slug")
DEFAULT_LOCALE = "en-US"


class ItemKind(str, Enum):
    """Kind of a content item."""

    ENTRY = "entry"
    ASSET = "asset"


class NodeStatus(str, Enum):
    """Resolution status of a dependency node."""

    RESOLVED = "resolved"
    PRUNED = "pruned"


class PruneReason(str, Enum):
    """Why a node was pruned during resolution."""

    ENTRY_LOOP = "entry-loop"
    CONTENT_TYPE_LOOP = "content-type-loop"


@dataclass(frozen=True)
class NodeKey:
    """Identity of a node in the dependency graph."""

    kind: ItemKind
    id: str

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.id}"


def _localized_string(value: Any) -> Optional[str]:
    """Pick the default-locale string from a localized field value."""
    if isinstance(value, str):
        return value
    if not isinstance(value, dict) or not value:
        return None
    localized = value.get(DEFAULT_LOCALE)
    if localized is None:
        localized = next(iter(value.values()))
    return localized if isinstance(localized, str) else None


@dataclass
class Entry:
    """
    A structured content item.

    Field values are kept exactly as the backend returns them; they may
    contain links to other entries and assets at any depth.
    """

    id: str
    content_type: str
    fields: dict[str, Any] = field(default_factory=dict)
    sys: dict[str, Any] = field(default_factory=dict)

    @property
    def version(self) -> Optional[int]:
        return self.sys.get("version")

    @property
    def title(self) -> str:
        """Human-readable title, falling back to the id."""
        for key in TITLE_FIELDS:
            title = _localized_string(self.fields.get(key))
            if title:
                return title
        return self.id

    def to_dict(self) -> dict[str, Any]:
        """Convert to the backend document shape."""
        sys = {**self.sys, "id": self.id, "type": "Entry"}
        sys["contentType"] = {"sys": {"id": self.content_type}}
        return {"sys": sys, "fields": self.fields}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        """Create from the backend document shape."""
        sys = dict(data.get("sys") or {})
        content_type = sys.pop("contentType", None) or {}
        return cls(
            id=sys.pop("id", ""),
            content_type=(content_type.get("sys") or {}).get("id", ""),
            fields=dict(data.get("fields") or {}),
            sys={k: v for k, v in sys.items() if k != "type"},
        )


@dataclass
class Asset:
    """A media item. Assets have fields but no content type and no outgoing links."""

    id: str
    fields: dict[str, Any] = field(default_factory=dict)
    sys: dict[str, Any] = field(default_factory=dict)

    @property
    def version(self) -> Optional[int]:
        return self.sys.get("version")

    @property
    def title(self) -> str:
        return _localized_string(self.fields.get("title")) or self.id

    def to_dict(self) -> dict[str, Any]:
        """Convert to the backend document shape."""
        return {"sys": {**self.sys, "id": self.id, "type": "Asset"}, "fields": self.fields}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Asset":
        """Create from the backend document shape."""
        sys = dict(data.get("sys") or {})
        return cls(
            id=sys.pop("id", ""),
            fields=dict(data.get("fields") or {}),
            sys={k: v for k, v in sys.items() if k != "type"},
        )


ContentItem = Union[Entry, Asset]


@dataclass
class DependencyNode:
    """
    A discovered vertex of the dependency graph.

    Pruned nodes never have children; ``prune_reason`` is only set when
    ``status`` is ``PRUNED``.
    """

    id: str
    kind: ItemKind
    data: ContentItem
    children: list[DependencyNode] = field(default_factory=list)
    depth: int = 0
    status: NodeStatus = NodeStatus.RESOLVED
    prune_reason: Optional[PruneReason] = None

    @property
    def key(self) -> NodeKey:
        return NodeKey(self.kind, self.id)

    @property
    def is_pruned(self) -> bool:
        return self.status == NodeStatus.PRUNED

    @property
    def title(self) -> str:
        return self.data.title

    @property
    def type_label(self) -> str:
        """Content type id for entries, ``Asset`` for assets."""
        if isinstance(self.data, Entry):
            return self.data.content_type
        return "Asset"

    def has_child(self, key: NodeKey) -> bool:
        return any(child.key == key for child in self.children)

    def pruned_copy(self, reason: PruneReason) -> DependencyNode:
        """Return a childless pruned clone sharing this node's payload."""
        return DependencyNode(
            id=self.id,
            kind=self.kind,
            data=self.data,
            children=[],
            depth=self.depth,
            status=NodeStatus.PRUNED,
            prune_reason=reason,
        )


@dataclass(frozen=True)
class DependencyGraph:
    """
    All entries and assets reachable from a root entry.

    ``all_nodes`` holds each distinct item exactly once, in discovery order.
    The graph is not modified after resolution.
    """

    root: DependencyNode
    all_nodes: dict[NodeKey, DependencyNode]
    entry_count: int = 0
    asset_count: int = 0

    def get(self, kind: ItemKind, item_id: str) -> Optional[DependencyNode]:
        return self.all_nodes.get(NodeKey(kind, item_id))

    def pruned_nodes(self) -> list[DependencyNode]:
        return [node for node in self.all_nodes.values() if node.is_pruned]

    def __iter__(self) -> Iterator[DependencyNode]:
        return iter(self.all_nodes.values())

    def __len__(self) -> int:
        return len(self.all_nodes)

    def __contains__(self, key: object) -> bool:
        return key in self.all_nodes
