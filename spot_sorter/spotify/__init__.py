"""
Spotify integration module for spot-sorter.

    - SpotifyClient: Singleton API client (OAuth, playlist read/modify)
    - SpotifyPlaylistContainer: one playlist's tracks as a playlist container

Usage:
    from spot_sorter.spotify import SpotifyClient, SpotifyPlaylistContainer

    SpotifyClient.init(client_id, client_secret)
    container = SpotifyPlaylistContainer(SpotifyClient(), playlist_id)
"""

from spot_sorter.spotify.client import SpotifyClient
from spot_sorter.spotify.container import PLACEHOLDER_MODE, SpotifyPlaylistContainer

__all__ = [
    "SpotifyClient",
    "SpotifyPlaylistContainer",
    "PLACEHOLDER_MODE",
]
