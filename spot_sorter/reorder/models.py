"""
Data models for the reorder engine.

Entries describe the flat playlist container as read from the collaborator;
Nodes are the tree rebuilt from it; Moves are what gets sent back.

Usage:
    from spot_sorter.reorder.models import Entry, EntryKind

    entries = [
        Entry(0, EntryKind.GROUP_START, "Chill"),
        Entry(1, EntryKind.ITEM, "Lo-fi Beats"),
        Entry(2, EntryKind.GROUP_END),
    ]
"""

from dataclasses import dataclass, field
from enum import Enum


class EntryKind(Enum):
    """
    Type of one slot in the playlist container.

    Values match the strings used in snapshot files.
    """
    ITEM = "item"
    GROUP_START = "group_start"
    GROUP_END = "group_end"
    PLACEHOLDER = "placeholder"

    @classmethod
    def parse(cls, value: str) -> "EntryKind":
        """
        Parse a kind name, accepting the playlist-container aliases.

        Raises:
            ValueError: If the name is unknown.
        """
        normalized = value.strip().lower().replace("-", "_")
        normalized = _KIND_ALIASES.get(normalized, normalized)
        return cls(normalized)


_KIND_ALIASES = {
    "playlist": "item",
    "folder_start": "group_start",
    "start_folder": "group_start",
    "folder_end": "group_end",
    "end_folder": "group_end",
}


@dataclass(frozen=True)
class Entry:
    """
    One position of the flat container.

    Attributes:
        position: 0-based position, contiguous over the container.
        kind: What occupies the slot.
        name: Playlist or folder name; None for end markers and placeholders.
        loaded: False while the collaborator is still fetching the playlist.
    """
    position: int
    kind: EntryKind
    name: str | None = None
    loaded: bool = True


@dataclass
class Node:
    """
    A playlist (leaf) or folder (group) in the rebuilt tree.

    Attributes:
        origin_position: Position of the playlist or the folder start marker.
        name: Sort key.
        end_position: Position of the matching folder end marker; None for leaves.
        children: Owned child nodes, in current sibling order.
        is_group: True for folders, including empty ones.
    """
    origin_position: int
    name: str
    end_position: int | None = None
    children: list["Node"] = field(default_factory=list)
    is_group: bool = False


@dataclass(frozen=True)
class Move:
    """Relocate the entry at `source` so it ends up at `destination`."""
    source: int
    destination: int
