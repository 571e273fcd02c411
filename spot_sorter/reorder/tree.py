"""
Rebuild the folder tree from the flat container encoding.

Folders are encoded as a start marker, their members, and an end marker.
The builder keeps a stack of open folders instead of parent pointers on
the nodes; once the scan is done only child lists remain.
"""

from typing import Iterable

from spot_sorter.core.exceptions import StructuralError
from spot_sorter.core.logger import get_logger
from spot_sorter.reorder.models import Entry, EntryKind, Node

logger = get_logger(__name__)


def build_tree(entries: Iterable[Entry]) -> list[Node]:
    """
    Build the root forest from entries in container order.

    Args:
        entries: Entries sorted by position.

    Returns:
        Root-level nodes in container order. Folders own their members.

    Raises:
        StructuralError: On a folder end with no open folder, a folder left
                         open at the end, or a playlist/folder without a name.
    """
    forest: list[Node] = []
    open_groups: list[Node] = []
    placeholders = 0

    for entry in entries:
        siblings = open_groups[-1].children if open_groups else forest

        if entry.kind is EntryKind.ITEM:
            siblings.append(Node(entry.position, _require_name(entry)))

        elif entry.kind is EntryKind.GROUP_START:
            group = Node(entry.position, _require_name(entry), is_group=True)
            siblings.append(group)
            open_groups.append(group)

        elif entry.kind is EntryKind.GROUP_END:
            if not open_groups:
                raise StructuralError(
                    f"Folder end at position {entry.position} has no matching folder start",
                    details={"position": entry.position}
                )
            open_groups.pop().end_position = entry.position

        else:
            placeholders += 1

    if open_groups:
        unclosed = open_groups[-1]
        raise StructuralError(
            f"Folder '{unclosed.name}' at position {unclosed.origin_position} is never closed",
            details={"position": unclosed.origin_position, "open_folders": len(open_groups)}
        )

    if placeholders:
        logger.debug(f"Skipped {placeholders} placeholder entries")

    return forest


def _require_name(entry: Entry) -> str:
    if entry.name is None:
        raise StructuralError(
            f"Entry at position {entry.position} ({entry.kind.value}) has no name",
            details={"position": entry.position}
        )
    return entry.name
