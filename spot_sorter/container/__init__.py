"""
Playlist containers the reorder engine can work against.

    - PlaylistContainer: abstract interface (count/kind/name/loaded/move)
    - MemoryContainer: list-backed simulation, loadable from a snapshot file

The Spotify-backed container lives in spot_sorter.spotify.
"""

from spot_sorter.container.base import PlaylistContainer
from spot_sorter.container.memory import MemoryContainer, load_snapshot

__all__ = [
    "PlaylistContainer",
    "MemoryContainer",
    "load_snapshot",
]
