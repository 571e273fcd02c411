"""
Spotify API client singleton for spot-sorter.

This module provides a singleton wrapper around the spotipy library,
ensuring that only one Spotify client instance exists throughout
the application lifetime.

Singleton Pattern:
    SpotifyClient must be initialized once with init(), and subsequent
    calls to SpotifyClient() return the same instance. Attempting to call
    init() twice raises an error.

Authentication:
    Reordering a playlist modifies it, so only the OAuth (user) flow is
    supported. The user authenticates once in the browser; spotipy caches
    the token for later runs.

Usage:
    from spot_sorter.spotify.client import SpotifyClient

    SpotifyClient.init(client_id="...", client_secret="...")

    client = SpotifyClient()
    items = client.playlist_all_items("37i9dQZF1DXcBWIGoYBM5M")
"""

from typing import Any

import spotipy
from spotipy.oauth2 import SpotifyOAuth

from spot_sorter.core.exceptions import SpotifyError
from spot_sorter.core.logger import get_logger

logger = get_logger(__name__)

# Read access for private playlists, write access for reordering
OAUTH_SCOPE = "playlist-read-private playlist-modify-public playlist-modify-private"
DEFAULT_REDIRECT_URI = "http://127.0.0.1:8888/callback"


class SpotifyClientMeta(type):
    """
    Metaclass implementing the singleton pattern for SpotifyClient.

    This metaclass ensures:
    1. SpotifyClient cannot be instantiated before init() is called
    2. init() can only be called once
    3. After init(), SpotifyClient() always returns the same instance
    """

    _instance: "SpotifyClient | None" = None
    _initialized: bool = False

    def __call__(cls) -> "SpotifyClient":
        """
        Get the SpotifyClient singleton instance.

        Raises:
            SpotifyError: If init() has not been called yet.
        """
        if cls._instance is None:
            raise SpotifyError(
                "SpotifyClient not initialized. Call SpotifyClient.init("
                "client_id, client_secret) first.",
                is_auth_error=True
            )
        return cls._instance

    def init(
        cls,
        client_id: str,
        client_secret: str,
        redirect_uri: str = DEFAULT_REDIRECT_URI,
        spotify_instance: spotipy.Spotify | None = None
    ) -> "SpotifyClient":
        """
        Initialize the SpotifyClient singleton.

        Args:
            client_id: Spotify application client ID from Developer Dashboard.
            client_secret: Spotify application client secret.
            redirect_uri: OAuth redirect URI registered for the application.
            spotify_instance: Pre-built spotipy client, mainly for tests.
                              When given, no OAuth manager is created.

        Returns:
            The initialized SpotifyClient singleton instance.

        Raises:
            SpotifyError: If init() has already been called.
            SpotifyError: If authentication fails.

        Behavior:
            1. Check that init() hasn't been called before
            2. Create spotipy.Spotify with an OAuth manager
            3. Test the connection by fetching the current user
            4. Store instance as singleton
        """
        if cls._initialized:
            raise SpotifyError(
                "SpotifyClient.init() has already been called. "
                "Use SpotifyClient() to get the existing instance.",
                is_auth_error=True
            )

        try:
            if spotify_instance is None:
                auth_manager = SpotifyOAuth(
                    client_id=client_id,
                    client_secret=client_secret,
                    redirect_uri=redirect_uri,
                    scope=OAUTH_SCOPE,
                    open_browser=True
                )
                spotify_instance = spotipy.Spotify(auth_manager=auth_manager)

            user = spotify_instance.current_user()
            logger.debug(f"Authenticated as {user.get('id') if user else 'unknown user'}")

            instance = super().__call__(spotify_instance)
            cls._instance = instance
            cls._initialized = True

            return instance

        except spotipy.SpotifyException as e:
            raise SpotifyError(
                f"Spotify authentication failed: {e}",
                details={"original_error": str(e)},
                is_auth_error=True
            ) from e
        except Exception as e:
            raise SpotifyError(
                f"Failed to initialize Spotify client: {e}",
                details={"original_error": str(e)},
                is_auth_error=True
            ) from e

    def is_initialized(cls) -> bool:
        """Check if the SpotifyClient has been initialized."""
        return cls._initialized

    def reset(cls) -> None:
        """
        Reset the singleton state (for testing only).

        Warning:
            Do not use this in production code. It exists only to
            enable proper test isolation.
        """
        cls._instance = None
        cls._initialized = False


class SpotifyClient(metaclass=SpotifyClientMeta):
    """
    Singleton Spotify API client.

    Wraps spotipy.Spotify and maps its exceptions to SpotifyError.

    Attributes:
        _spotify: The underlying spotipy.Spotify instance.
    """

    def __init__(self, spotify_instance: spotipy.Spotify) -> None:
        """
        Note:
            Called by the metaclass init() method. Do not call directly.
        """
        self._spotify = spotify_instance

    # =========================================================================
    # Playlist Operations
    # =========================================================================

    def playlist(self, playlist_id: str) -> dict[str, Any]:
        """
        Get playlist metadata (name, owner, snapshot_id, track count).

        Raises:
            SpotifyError: If playlist not found, private, or network error.
        """
        try:
            result = self._spotify.playlist(
                playlist_id,
                fields="id,name,owner,snapshot_id,tracks.total,uri"
            )
            if result is None:
                raise SpotifyError(
                    f"Playlist not found: {playlist_id}",
                    details={"playlist_id": playlist_id}
                )
            return result
        except spotipy.SpotifyException as e:
            raise _map_exception(e, "fetch playlist", playlist_id) from e

    def playlist_items(
        self,
        playlist_id: str,
        limit: int = 100,
        offset: int = 0
    ) -> dict[str, Any]:
        """
        Get one page of playlist items.

        Returns:
            Dictionary with 'items', 'total' and 'next' (None on the last page).

        Raises:
            SpotifyError: If playlist not found or network error.
        """
        try:
            result = self._spotify.playlist_items(
                playlist_id,
                fields="items(is_local,track(id,name,type)),total,next",
                limit=min(limit, 100),
                offset=offset,
                additional_types=["track", "episode"]
            )
            if result is None:
                raise SpotifyError(
                    f"Failed to fetch playlist items: {playlist_id}",
                    details={"playlist_id": playlist_id}
                )
            return result
        except spotipy.SpotifyException as e:
            raise _map_exception(e, "fetch playlist items", playlist_id) from e

    def playlist_all_items(self, playlist_id: str) -> list[dict[str, Any]]:
        """
        Get ALL items of a playlist, handling pagination automatically.

        Makes one request per 100 items.
        """
        all_items: list[dict[str, Any]] = []
        offset = 0

        while True:
            response = self.playlist_items(playlist_id, limit=100, offset=offset)
            items = response.get("items", [])
            all_items.extend(items)

            if response.get("next") is None:
                break
            offset += 100

        return all_items

    def reorder_playlist_item(
        self,
        playlist_id: str,
        range_start: int,
        insert_before: int,
        snapshot_id: str | None = None
    ) -> str | None:
        """
        Move the single item at `range_start` to before `insert_before`.

        Note that `insert_before` is expressed in positions *before* the
        item is removed, as the Web API defines it.

        Args:
            playlist_id: Playlist to modify.
            range_start: Current position of the item.
            insert_before: Position to insert before.
            snapshot_id: Playlist version the positions refer to.

        Returns:
            The new snapshot_id returned by Spotify.

        Raises:
            SpotifyError: On permission, rate limit or network errors.
        """
        try:
            result = self._spotify.playlist_reorder_items(
                playlist_id,
                range_start=range_start,
                insert_before=insert_before,
                range_length=1,
                snapshot_id=snapshot_id
            )
            return result.get("snapshot_id") if result else None
        except spotipy.SpotifyException as e:
            raise _map_exception(e, "reorder playlist", playlist_id) from e


def _map_exception(e: spotipy.SpotifyException, action: str, playlist_id: str) -> SpotifyError:
    """Convert a spotipy exception into a SpotifyError with the right flags."""
    if e.http_status == 429:
        return SpotifyError(
            f"Rate limited while trying to {action}: {playlist_id}",
            details={"playlist_id": playlist_id, "http_status": 429},
            is_rate_limit=True
        )
    if e.http_status == 401:
        return SpotifyError(
            "Authentication expired or invalid",
            details={"playlist_id": playlist_id, "http_status": 401},
            is_auth_error=True
        )
    if e.http_status == 404:
        return SpotifyError(
            f"Playlist not found: {playlist_id}",
            details={"playlist_id": playlist_id, "http_status": 404}
        )
    return SpotifyError(
        f"Failed to {action}: {e}",
        details={"playlist_id": playlist_id, "original_error": str(e)}
    )
