"""
spot-sorter: Sort playlists and playlist folders alphabetically.

This package reorders a flat playlist container, where folders are encoded
as start and end markers around their members, so that every folder level
is in name order. It computes the minimal set of single-entry moves that
reaches the sorted order and issues them one by one against the container.

Architecture:
    A reorder pass runs in four steps, all planned before the first move:

    STEP 1 (reorder/tree.py): Rebuild the folder tree
        - Read every entry (kind, name, loaded flag) from the container
        - Refuse to start while any playlist is still loading
        - Match folder start and end markers

    STEP 2 (reorder/sorter.py): Sort every level
        - Stable merge sort by name, case-sensitive
        - Folder contents are sorted before the folder itself is placed

    STEP 3 (reorder/flatten.py): Flatten to a target order
        - Folder start, sorted members, folder end

    STEP 4 (reorder/moves.py, reorder/engine.py): Move
        - Turn the target order into single-entry moves
        - Skip entries that are already in place
        - Apply each move to the container immediately

Modules:
    core/       - Configuration, logging, progress bar, exceptions
    reorder/    - The reorder engine (STEPS 1-4)
    container/  - Container interface and in-memory/snapshot container
    spotify/    - Spotify API client and playlist-backed container
    utils/      - Utility functions
    cli.py      - Command-line interface

Usage:
    Command Line:
        spot-sort --snapshot library.yaml
        spot-sort --snapshot library.yaml --dry-run
        spot-sort --url "https://open.spotify.com/playlist/..."

    Python API:
        from spot_sorter.container import load_snapshot
        from spot_sorter.reorder import reorder_container

        container = load_snapshot(Path("library.yaml"))
        plan = reorder_container(container)
        print(container.render_tree())

Configuration:
    An optional config.yaml in the current directory:

        spotify:
          client_id: "your_client_id"
          client_secret: "your_client_secret"

        output:
          directory: "~/.spot-sorter"

        sort:
          placeholders: absent
          dry_run: false

Dependencies:
    - spotipy: Spotify API client
    - click: CLI framework
    - rich-click: CLI colors
    - rich: Progress bar
    - tqdm: Log output that does not break progress bars
    - pyyaml: Configuration and snapshot file parsing
    - python-dotenv: Spotify credentials from a .env file
"""

__version__ = "0.1.0"
__author__ = "spot-sorter"
__license__ = "MIT"

# Convenience imports for common usage
from spot_sorter.core import (
    Config,
    ConfigError,
    NotReadyError,
    SnapshotError,
    SpotifyError,
    SpotSorterError,
    StructuralError,
    get_logger,
    load_config,
    setup_logging,
)
from spot_sorter.container import MemoryContainer, PlaylistContainer, load_snapshot
from spot_sorter.reorder import Entry, EntryKind, Move, ReorderPlan, plan_reorder, reorder_container

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "SpotSorterError",
    "ConfigError",
    "SnapshotError",
    "StructuralError",
    "NotReadyError",
    "SpotifyError",
    # Engine
    "Entry",
    "EntryKind",
    "Move",
    "ReorderPlan",
    "plan_reorder",
    "reorder_container",
    # Containers
    "PlaylistContainer",
    "MemoryContainer",
    "load_snapshot",
]
