# CFSync Link Extraction
# Find link references embedded anywhere in entry field values

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from cfsync.graph.types import ItemKind

LINK_TYPES = {
    "Entry": ItemKind.ENTRY,
    "Asset": ItemKind.ASSET,
}


@dataclass(frozen=True)
class Link:
    """A reference from a field value to another entry or asset."""

    link_type: ItemKind
    id: str

    @classmethod
    def from_value(cls, value: Any) -> Optional[Link]:
        """
        Recognise a link value.

        Only ``{"sys": {"type": "Link", "linkType": "Entry"|"Asset", "id": str}}``
        is a link. Anything else, including near misses, is ordinary data.

        Args:
            value: Any field value.

        Returns:
            Link or None.
        """
        if not isinstance(value, Mapping):
            return None
        sys = value.get("sys")
        if not isinstance(sys, Mapping) or sys.get("type") != "Link":
            return None
        link_type = LINK_TYPES.get(sys.get("linkType"))
        link_id = sys.get("id")
        if link_type is None or not isinstance(link_id, str) or not link_id:
            return None
        return cls(link_type=link_type, id=link_id)

    def to_dict(self) -> dict[str, Any]:
        link_type = "Entry" if self.link_type == ItemKind.ENTRY else "Asset"
        return {"sys": {"type": "Link", "linkType": link_type, "id": self.id}}


def iter_links(value: Any) -> Iterator[Link]:
    """
    Walk a field value and yield every link in document order.

    Mappings and ordered sequences are descended into; a link is yielded
    without descending further. Scalars yield nothing.
    """
    link = Link.from_value(value)
    if link is not None:
        yield link
        return

    if isinstance(value, Mapping):
        for item in value.values():
            yield from iter_links(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from iter_links(item)


def extract_links(fields: Any) -> list[Link]:
    """Return all links found in an entry's fields."""
    return list(iter_links(fields))
