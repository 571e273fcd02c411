"""
Interface of the ordered playlist container the reorder engine works against.

A container is a flat list of playlists, folder markers and placeholders,
addressed by 0-based position, with a single mutation primitive: move one
entry to another position.
"""

from abc import ABC, abstractmethod

from spot_sorter.reorder.models import EntryKind


class PlaylistContainer(ABC):
    """
    Abstract ordered playlist container.

    Implementations must apply move() immediately, with remove-then-insert
    semantics: after move(a, b) the entry formerly at a is at b and the
    entries in between have shifted by one.

    The engine assumes nothing else mutates the container while a reorder
    pass is running.
    """

    @abstractmethod
    def count(self) -> int:
        """Number of entries, placeholders included."""

    @abstractmethod
    def entry_kind(self, index: int) -> EntryKind:
        """Kind of the entry at `index`."""

    @abstractmethod
    def entry_name(self, index: int) -> str | None:
        """Name of the playlist or folder at `index`; None for other kinds."""

    @abstractmethod
    def is_loaded(self, index: int) -> bool:
        """Whether the playlist at `index` is fully loaded."""

    @abstractmethod
    def move(self, from_position: int, to_position: int) -> None:
        """Relocate the entry at `from_position` so it ends up at `to_position`."""

    def describe(self) -> str:
        """Short label used in log messages."""
        return type(self).__name__
