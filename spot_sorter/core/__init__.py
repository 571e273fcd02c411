"""
Core module for spot-sorter.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with multiple outputs
    - progress: Rich progress bar for applying moves

Usage:
    from spot_sorter.core import (
        Config, load_config,
        setup_logging, get_logger,
        SpotSorterError, StructuralError, NotReadyError
    )
"""

from spot_sorter.core.config import (
    Config,
    OutputConfig,
    SortConfig,
    SpotifyConfig,
    get_spotify_credentials,
    load_config,
)
from spot_sorter.core.exceptions import (
    AllocationError,
    ConfigError,
    NotReadyError,
    SnapshotError,
    SpotifyError,
    SpotSorterError,
    StructuralError,
)
from spot_sorter.core.logger import (
    get_logger,
    log_move,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "SpotifyConfig",
    "OutputConfig",
    "SortConfig",
    "load_config",
    "get_spotify_credentials",
    # Exceptions
    "SpotSorterError",
    "ConfigError",
    "SnapshotError",
    "StructuralError",
    "NotReadyError",
    "AllocationError",
    "SpotifyError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_move",
    "shutdown_logging",
]
