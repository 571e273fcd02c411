"""
In-memory playlist container, optionally loaded from a snapshot file.

Used to preview a reorder without touching Spotify, and by the tests as
a faithful simulation of the live container.

Snapshot file format (YAML or JSON, parsed with PyYAML):

    entries:
      - {kind: folder_start, name: "Workout"}
      - {kind: playlist, name: "Running"}
      - {kind: playlist, name: "Cardio", loaded: false}
      - {kind: folder_end}
      - {kind: placeholder}

Kinds: item/playlist, group_start/folder_start, group_end/folder_end,
placeholder. 'loaded' defaults to true.
"""

from pathlib import Path
from typing import Any, Iterable

import yaml

from spot_sorter.container.base import PlaylistContainer
from spot_sorter.core.exceptions import SnapshotError
from spot_sorter.core.logger import get_logger
from spot_sorter.reorder.models import Entry, EntryKind
from spot_sorter.reorder.moves import apply_move

logger = get_logger(__name__)


class MemoryContainer(PlaylistContainer):
    """
    List-backed container.

    Moves are applied with apply_move(), the same definition of a move
    that the engine uses to track the live order.

    With placeholder_mode "absent", placeholders keep their physical slots
    but are invisible to move addressing: move positions index the
    sequence of non-placeholder entries. With "trailing" they are ordinary
    live slots.

    Attributes:
        label: Name used in log messages (snapshot file name, by default).
        placeholder_mode: "absent" or "trailing".
    """

    def __init__(
        self,
        entries: Iterable[Entry],
        label: str = "memory",
        placeholder_mode: str = "absent"
    ) -> None:
        self._entries: list[Entry] = list(entries)
        self.label = label
        self.placeholder_mode = placeholder_mode
        self.moves_applied = 0

    def count(self) -> int:
        return len(self._entries)

    def entry_kind(self, index: int) -> EntryKind:
        return self._entries[index].kind

    def entry_name(self, index: int) -> str | None:
        return self._entries[index].name

    def is_loaded(self, index: int) -> bool:
        return self._entries[index].loaded

    def move(self, from_position: int, to_position: int) -> None:
        if self.placeholder_mode == "trailing":
            apply_move(self._entries, from_position, to_position)
        else:
            slots = [
                i for i, e in enumerate(self._entries)
                if e.kind is not EntryKind.PLACEHOLDER
            ]
            live = [self._entries[i] for i in slots]
            apply_move(live, from_position, to_position)
            for slot, entry in zip(slots, live):
                self._entries[slot] = entry
        self.moves_applied += 1

    def describe(self) -> str:
        return self.label

    def entries(self) -> list[Entry]:
        """Entries in current order (positions are those of the original snapshot)."""
        return list(self._entries)

    def names(self) -> list[str | None]:
        """Entry names in current order."""
        return [e.name for e in self._entries]

    def render_tree(self, indent: str = "  ") -> list[str]:
        """
        Return the current order as indented lines, one per playlist or folder.

        Folder end markers close a level and are not printed; placeholders
        are shown as '<placeholder>'.
        """
        lines = []
        depth = 0
        for entry in self._entries:
            if entry.kind is EntryKind.GROUP_END:
                depth = max(depth - 1, 0)
                continue
            if entry.kind is EntryKind.GROUP_START:
                lines.append(f"{indent * depth}{entry.name}/")
                depth += 1
            elif entry.kind is EntryKind.PLACEHOLDER:
                lines.append(f"{indent * depth}<placeholder>")
            else:
                lines.append(f"{indent * depth}{entry.name}")
        return lines


def load_snapshot(path: Path, placeholder_mode: str = "absent") -> MemoryContainer:
    """
    Load a snapshot file into a MemoryContainer.

    Args:
        path: YAML or JSON file with a top-level 'entries' list.
        placeholder_mode: Passed through to MemoryContainer.

    Returns:
        MemoryContainer labelled with the file name.

    Raises:
        SnapshotError: If the file is missing, unparsable, or malformed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise SnapshotError(
            f"Snapshot file not found: {path}",
            details={"file_path": str(path)}
        ) from e
    except IOError as e:
        raise SnapshotError(
            f"Failed to read snapshot file: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e
    except yaml.YAMLError as e:
        raise SnapshotError(
            f"Invalid snapshot syntax: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    if not isinstance(raw, dict) or not isinstance(raw.get("entries"), list):
        raise SnapshotError(
            "Snapshot must contain a top-level 'entries' list",
            details={"file_path": str(path)}
        )

    entries = [_parse_entry(i, row, path) for i, row in enumerate(raw["entries"])]
    logger.debug(f"Loaded {len(entries)} entries from {path}")
    return MemoryContainer(entries, label=path.name, placeholder_mode=placeholder_mode)


def _parse_entry(position: int, row: Any, path: Path) -> Entry:
    if not isinstance(row, dict) or "kind" not in row:
        raise SnapshotError(
            f"Snapshot entry {position} must be a mapping with a 'kind'",
            details={"file_path": str(path), "position": position}
        )

    try:
        kind = EntryKind.parse(str(row["kind"]))
    except ValueError as e:
        raise SnapshotError(
            f"Snapshot entry {position} has unknown kind: {row['kind']!r}",
            details={"file_path": str(path), "position": position}
        ) from e

    name = row.get("name")
    if name is not None:
        name = str(name)

    loaded = row.get("loaded", True)
    if not isinstance(loaded, bool):
        raise SnapshotError(
            f"Snapshot entry {position}: 'loaded' must be true or false",
            details={"file_path": str(path), "position": position}
        )

    return Entry(position, kind, name, loaded)
