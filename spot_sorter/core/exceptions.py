"""
Exception classes for spot-sorter.

This module defines all custom exceptions used throughout the application.
Planning failures (StructuralError, NotReadyError, AllocationError) are
raised before the first move is issued. A SpotifyError can also come from
a move, leaving the playlist partially sorted; re-running sorts the rest.

Exception Hierarchy:
    SpotSorterError (base)
        ConfigError - Configuration file issues
        SnapshotError - Snapshot file cannot be read or parsed
        StructuralError - Unbalanced folder markers in the container
        NotReadyError - Some playlists are not loaded yet
        AllocationError - Ran out of memory while planning
        SpotifyError - Spotify API issues
"""


class SpotSorterError(Exception):
    """
    Base exception for all spot-sorter errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch all spot-sorter errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (positions, paths).

    Example:
        try:
            plan = plan_reorder(entries)
        except SpotSorterError as e:
            logger.error(f"Reorder failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'position': Container position involved in the error
                     - 'file_path': File that caused the error
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SpotSorterError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - config.yaml has invalid YAML syntax
        - A section is not a dictionary
        - Invalid field values (e.g., unknown placeholder mode)
        - Spotify credentials missing when a Spotify playlist is sorted

    Example:
        raise ConfigError(
            "'sort.placeholders' must be one of: absent, trailing",
            details={'field': 'sort.placeholders', 'value': 'middle'}
        )
    """
    pass


class SnapshotError(SpotSorterError):
    """
    Raised when a container snapshot file cannot be loaded.

    Common causes:
        - File not found or unreadable
        - Invalid YAML/JSON syntax
        - Missing 'entries' list or an entry with an unknown kind
    """
    pass


class StructuralError(SpotSorterError):
    """
    Raised when the folder markers of a container are not properly nested.

    This is fatal to the reorder pass: the partially built tree is
    discarded and no move is issued.

    Common causes:
        - A folder end marker with no open folder
        - The container ends while a folder is still open
        - A playlist or folder start without a name

    Example:
        raise StructuralError(
            "Folder end at position 7 has no matching folder start",
            details={'position': 7}
        )
    """
    pass


class NotReadyError(SpotSorterError):
    """
    Raised when one or more playlists are not fully loaded yet.

    This is a recoverable condition: the caller may retry the pass once
    loading completes. No partial reorder is attempted.

    Attributes:
        unloaded: Number of playlists that reported not loaded.
    """

    def __init__(self, message: str, unloaded: int, details: dict | None = None) -> None:
        """
        Initialize not-ready error with the count of unloaded playlists.

        Args:
            message: Human-readable error description.
            unloaded: Number of playlists that are not loaded.
            details: Optional dictionary with additional context.
        """
        super().__init__(message, details)
        self.unloaded = unloaded


class AllocationError(SpotSorterError):
    """
    Raised when memory runs out while building the tree or the move list.

    Planning always completes before the first move, so the container
    is untouched when this is raised.
    """
    pass


class SpotifyError(SpotSorterError):
    """
    Raised when there's an issue with the Spotify API.

    Can be CRITICAL (auth failure) or recoverable (rate limit).

    Common causes:
        - Invalid or expired credentials (CRITICAL)
        - Rate limiting (may be recoverable with retry)
        - Playlist not found, private, or not owned by the user
        - Network connectivity issues

    Attributes:
        is_auth_error: True if this is an authentication error (CRITICAL).
        is_rate_limit: True if this is a rate limit error (may retry).

    Example:
        raise SpotifyError(
            "Failed to reorder playlist: insufficient scope",
            details={'playlist_id': playlist_id, 'http_status': 403}
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        is_auth_error: bool = False,
        is_rate_limit: bool = False
    ) -> None:
        """
        Initialize Spotify error with additional flags.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
            is_auth_error: Set to True if this is an authentication failure.
            is_rate_limit: Set to True if this is a rate limit error.
        """
        super().__init__(message, details)
        self.is_auth_error = is_auth_error
        self.is_rate_limit = is_rate_limit
