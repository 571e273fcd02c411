"""Test configuration and fixtures"""

import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest
import yaml

from spot_sorter.container import MemoryContainer
from spot_sorter.reorder.models import Entry, EntryKind
from spot_sorter.spotify.client import SpotifyClient


def make_entries(*rows):
    """
    Build entries from compact rows.

    A plain string is a loaded playlist; tuples are (kind, name) or
    (kind, name, loaded) with kind given as its snapshot string.
    """
    entries = []
    for position, row in enumerate(rows):
        if isinstance(row, str):
            entries.append(Entry(position, EntryKind.ITEM, row))
        else:
            kind, name, *rest = row
            loaded = rest[0] if rest else True
            entries.append(Entry(position, EntryKind.parse(kind), name, loaded))
    return entries


def folder(name, *members):
    """Rows for a folder wrapping `members`."""
    return [("folder_start", name), *members, ("folder_end", None)]


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def fruit_entries():
    """Five flat playlists with a duplicated name"""
    return make_entries("banana", "apple", "cherry", "date", "apple")


@pytest.fixture
def library_entries():
    """A nested library with folders, a placeholder and an empty folder"""
    return make_entries(
        "Road Trip",
        *folder("Workout", "Running", "Cardio", *folder("Yoga", "Stretch", "Breath")),
        ("placeholder", None),
        "Acoustic",
        *folder("Empty"),
        "Zebra",
        "apple",
    )


@pytest.fixture
def library_container(library_entries):
    """MemoryContainer over library_entries"""
    return MemoryContainer(library_entries, label="library")


@pytest.fixture
def write_snapshot(temp_dir):
    """Write a snapshot file and return its path"""
    def _write(entries, name="snapshot.yaml"):
        path = temp_dir / name
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"entries": entries}, f)
        return path
    return _write


@pytest.fixture
def mock_spotify():
    """Mock spotipy.Spotify instance"""
    spotify = Mock()
    spotify.current_user.return_value = {"id": "test_user"}
    spotify.playlist.return_value = {
        "id": "pl123",
        "name": "Test Playlist",
        "snapshot_id": "snap-0",
        "tracks": {"total": 0},
    }
    spotify.playlist_reorder_items.side_effect = (
        lambda playlist_id, **kwargs: {"snapshot_id": f"snap-{spotify.playlist_reorder_items.call_count}"}
    )
    return spotify


@pytest.fixture(autouse=True)
def reset_spotify_client():
    """Keep the SpotifyClient singleton isolated between tests"""
    SpotifyClient.reset()
    yield
    SpotifyClient.reset()

