"""
Configuration management for spot-sorter.

This module handles loading, validating, and providing access to the
application configuration stored in config.yaml.

The configuration file contains:
    - Spotify API credentials (only needed to sort a Spotify playlist)
    - Output directory for log files
    - Sort behavior (placeholder handling, dry run)

Unlike the credentials, nothing else is mandatory: a missing config.yaml
yields the defaults, which is enough to sort a snapshot file.

Spotify credentials may also come from the environment (SPOTIFY_CLIENT_ID,
SPOTIFY_CLIENT_SECRET, SPOTIFY_REDIRECT_URI), optionally through a .env
file. Environment values override the file.

Example config.yaml:
    spotify:
      client_id: "your_client_id_here"
      client_secret: "your_client_secret_here"
      redirect_uri: "http://127.0.0.1:8888/callback"

    output:
      directory: "~/.spot-sorter"

    sort:
      placeholders: absent   # absent | trailing
      dry_run: false
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from spot_sorter.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_OUTPUT_DIRECTORY = "~/.spot-sorter"
DEFAULT_REDIRECT_URI = "http://127.0.0.1:8888/callback"

# How placeholder entries relate to the live container positions
PLACEHOLDER_MODES = ("absent", "trailing")


@dataclass(frozen=True)
class SpotifyConfig:
    """
    Spotify API credentials configuration.

    These credentials are obtained from the Spotify Developer Dashboard:
    https://developer.spotify.com/dashboard

    Attributes:
        client_id: The Spotify application client ID, or None if not configured.
        client_secret: The Spotify application client secret, or None.
        redirect_uri: OAuth redirect URI registered for the application.
    """
    client_id: str | None
    client_secret: str | None
    redirect_uri: str

    @property
    def is_configured(self) -> bool:
        """True when both client_id and client_secret are available."""
        return bool(self.client_id and self.client_secret)


@dataclass(frozen=True)
class OutputConfig:
    """
    Output directory configuration.

    Attributes:
        directory: Absolute path of the directory holding the logs/ folder.
                   Path expansion is performed (~ is expanded to home directory).
    """
    directory: Path


@dataclass(frozen=True)
class SortConfig:
    """
    Reorder behavior configuration.

    Attributes:
        placeholders: 'absent' when placeholder entries do not occupy live
                      positions in the container, 'trailing' when they do
                      (they are then collected after the sorted entries).
        dry_run: Plan the moves without applying them.
    """
    placeholders: str = "absent"
    dry_run: bool = False


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Attributes:
        spotify: Spotify API credentials.
        output: Output directory settings.
        sort: Reorder behavior settings.

    Example:
        config = load_config()
        print(f"Logging to: {config.output.directory / 'logs'}")
        print(f"Placeholders: {config.sort.placeholders}")
    """
    spotify: SpotifyConfig
    output: OutputConfig
    sort: SortConfig


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory.
                     An explicit path must exist; the implicit one may not.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is missing, the YAML is
                     invalid, or a field has an invalid value.

    Behavior:
        1. Load .env into the environment (existing variables win)
        2. Locate and parse the config file, if any
        3. Validate each section, applying defaults
        4. Apply environment overrides for Spotify credentials
    """
    load_dotenv()

    raw_config: dict[str, Any] = {}

    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if config_path.exists():
            raw_config = _read_config_file(config_path)
    else:
        if not config_path.exists():
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                details={"file_path": str(config_path)}
            )
        raw_config = _read_config_file(config_path)

    _validate_sections(raw_config)

    return Config(
        spotify=_parse_spotify_config(raw_config.get("spotify")),
        output=_parse_output_config(raw_config.get("output")),
        sort=_parse_sort_config(raw_config.get("sort"))
    )


def _read_config_file(config_path: Path) -> dict[str, Any]:
    """
    Read and parse a YAML config file.

    An empty file is treated as an empty configuration.

    Raises:
        ConfigError: On read errors, invalid YAML, or a non-mapping document.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return raw_config


def _validate_sections(raw_config: dict[str, Any]) -> None:
    """Check that every present section is a dictionary."""
    for section in ("spotify", "output", "sort"):
        value = raw_config.get(section)
        if value is not None and not isinstance(value, dict):
            raise ConfigError(
                f"Section '{section}' must be a dictionary",
                details={"section": section}
            )


def _optional_string(section: dict[str, Any], key: str, field: str) -> str | None:
    value = section.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(
            f"'{field}' must be a string",
            details={"field": field}
        )
    return value.strip() or None


def _parse_spotify_config(spotify_section: dict[str, Any] | None) -> SpotifyConfig:
    """
    Parse the Spotify section and apply environment overrides.

    Credentials are optional here; get_spotify_credentials() enforces
    them when they are actually needed.
    """
    section = spotify_section or {}

    client_id = _optional_string(section, "client_id", "spotify.client_id")
    client_secret = _optional_string(section, "client_secret", "spotify.client_secret")
    redirect_uri = _optional_string(section, "redirect_uri", "spotify.redirect_uri")

    client_id = os.environ.get("SPOTIFY_CLIENT_ID") or client_id
    client_secret = os.environ.get("SPOTIFY_CLIENT_SECRET") or client_secret
    redirect_uri = os.environ.get("SPOTIFY_REDIRECT_URI") or redirect_uri

    return SpotifyConfig(
        client_id=client_id,
        client_secret=client_secret,
        redirect_uri=redirect_uri or DEFAULT_REDIRECT_URI
    )


def _parse_output_config(output_section: dict[str, Any] | None) -> OutputConfig:
    """
    Parse the output section.

    Expands ~ to home directory and converts to absolute Path.
    Does NOT create the directory (setup_logging does that).
    """
    section = output_section or {}
    directory = section.get("directory", DEFAULT_OUTPUT_DIRECTORY)

    if not isinstance(directory, str) or not directory.strip():
        raise ConfigError(
            "'output.directory' must be a non-empty string",
            details={"field": "output.directory"}
        )

    return OutputConfig(directory=Path(directory.strip()).expanduser().resolve())


def _parse_sort_config(sort_section: dict[str, Any] | None) -> SortConfig:
    """
    Parse the sort section, applying defaults for missing fields.

    Raises:
        ConfigError: If placeholders is not a known mode or dry_run is not a bool.
    """
    if sort_section is None:
        return SortConfig()

    placeholders = sort_section.get("placeholders", "absent")
    if placeholders not in PLACEHOLDER_MODES:
        raise ConfigError(
            f"'sort.placeholders' must be one of: {', '.join(PLACEHOLDER_MODES)}",
            details={"field": "sort.placeholders", "value": placeholders}
        )

    dry_run = sort_section.get("dry_run", False)
    if not isinstance(dry_run, bool):
        raise ConfigError(
            "'sort.dry_run' must be true or false",
            details={"field": "sort.dry_run", "value": dry_run}
        )

    return SortConfig(placeholders=placeholders, dry_run=dry_run)


def get_spotify_credentials(config: Config) -> tuple[str, str]:
    """
    Return (client_id, client_secret), failing if either is missing.

    Raises:
        ConfigError: If the credentials are not configured anywhere.
    """
    if not config.spotify.is_configured:
        raise ConfigError(
            "Spotify credentials missing: set spotify.client_id and "
            "spotify.client_secret in config.yaml or SPOTIFY_CLIENT_ID / "
            "SPOTIFY_CLIENT_SECRET in the environment",
            details={"field": "spotify"}
        )
    return config.spotify.client_id, config.spotify.client_secret
