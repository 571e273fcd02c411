"""
A Spotify playlist exposed as a playlist container.

The Web API has no folders and no way to reorder the user's playlist
library, but a single playlist's items can be reordered one range at a
time. Each track becomes an item named after the track; items whose track
object is missing (removed or unavailable content) become placeholders.
Those still occupy a position in the playlist, so this container must be
sorted with placeholder_mode="trailing".
"""

from typing import Any

from spot_sorter.container.base import PlaylistContainer
from spot_sorter.core.logger import get_logger
from spot_sorter.reorder.models import Entry, EntryKind
from spot_sorter.reorder.moves import apply_move
from spot_sorter.spotify.client import SpotifyClient

logger = get_logger(__name__)

PLACEHOLDER_MODE = "trailing"


class SpotifyPlaylistContainer(PlaylistContainer):
    """
    Container backed by one Spotify playlist.

    All items are fetched once at construction. Moves are sent to Spotify
    immediately and mirrored on the local copy, so the container stays
    consistent with the remote playlist as long as nobody else edits it
    during the pass.

    Attributes:
        playlist_id: Spotify playlist ID.
        name: Playlist name.
        snapshot_id: Version of the playlist the local copy matches.
    """

    def __init__(self, client: SpotifyClient, playlist_id: str) -> None:
        self._client = client
        self.playlist_id = playlist_id

        info = client.playlist(playlist_id)
        self.name: str = info.get("name", playlist_id)
        self.snapshot_id: str | None = info.get("snapshot_id")

        items = client.playlist_all_items(playlist_id)
        self._entries = [_item_to_entry(i, item) for i, item in enumerate(items)]

        logger.info(f"Fetched {len(self._entries)} items from playlist '{self.name}'")

    def count(self) -> int:
        return len(self._entries)

    def entry_kind(self, index: int) -> EntryKind:
        return self._entries[index].kind

    def entry_name(self, index: int) -> str | None:
        return self._entries[index].name

    def is_loaded(self, index: int) -> bool:
        return self._entries[index].loaded

    def move(self, from_position: int, to_position: int) -> None:
        if from_position == to_position:
            return

        # insert_before counts positions before the item is taken out
        insert_before = to_position if to_position < from_position else to_position + 1

        new_snapshot = self._client.reorder_playlist_item(
            self.playlist_id,
            range_start=from_position,
            insert_before=insert_before,
            snapshot_id=self.snapshot_id
        )
        if new_snapshot:
            self.snapshot_id = new_snapshot

        apply_move(self._entries, from_position, to_position)

    def describe(self) -> str:
        return f"playlist '{self.name}'"

    def names(self) -> list[str | None]:
        """Track names in current order."""
        return [e.name for e in self._entries]


def _item_to_entry(position: int, item: dict[str, Any]) -> Entry:
    track = item.get("track") if item else None
    if not track or track.get("name") is None:
        return Entry(position, EntryKind.PLACEHOLDER)
    return Entry(position, EntryKind.ITEM, track["name"])
