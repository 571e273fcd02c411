"""
Utility functions for spot-sorter.
"""


def extract_spotify_id(url_or_id: str) -> str:
    """
    Extract Spotify ID from a URL or return ID as-is.

    Handles various Spotify URL formats:
        - https://open.spotify.com/playlist/ID
        - https://open.spotify.com/playlist/ID?si=xxx
        - spotify:playlist:ID
        - Just the ID

    Examples:
        extract_spotify_id("https://open.spotify.com/playlist/abc123?si=xyz")
        # Returns: "abc123"

        extract_spotify_id("spotify:playlist:abc123")
        # Returns: "abc123"
    """
    if url_or_id.startswith("spotify:"):
        return url_or_id.split(":")[-1]

    if "spotify.com" in url_or_id:
        url_or_id = url_or_id.split("?")[0]
        return url_or_id.rstrip("/").split("/")[-1]

    return url_or_id


def extract_playlist_id(url: str) -> str:
    """
    Extract playlist ID from a Spotify playlist URL, URI or bare ID.

    Raises:
        ValueError: If a URL or URI is given that does not point to a playlist.
    """
    if ("spotify.com" in url or url.startswith("spotify:")) and "playlist" not in url:
        raise ValueError(f"Not a playlist URL: {url}")
    return extract_spotify_id(url)
