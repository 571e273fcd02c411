"""
Command-line interface for spot-sorter.

This module implements the CLI using Click, with rich-click for the
help output colors.

Commands:
    spot-sort --snapshot <file>         Sort a container snapshot (YAML/JSON)
    spot-sort --url <playlist_url>      Sort a Spotify playlist's tracks by name
    spot-sort --version                 Show version and exit

Options:
    --dry-run                           Plan the moves but do not apply them
    --placeholders absent|trailing      How placeholders map to live positions
    --config <path>                     Configuration file (default ./config.yaml)
    --verbose                           Show every move on the console

Exit Codes:
    0   success (including "already sorted")
    1   configuration error
    2   snapshot or folder structure error
    3   playlists not loaded yet (retry later)
    4   Spotify error
    5   other spot-sorter error
    130 interrupted
"""

import sys
from pathlib import Path
from typing import Optional

import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = ""
click.rich_click.MAX_WIDTH = 100
click.rich_click.OPTION_GROUPS = {
    "cli": [
        {
            "name": "Input Sources",
            "options": ["--snapshot", "--url"],
        },
        {
            "name": "Sort Options",
            "options": ["--dry-run", "--placeholders"],
        },
        {
            "name": "Advanced Options",
            "options": ["--config", "--verbose"],
        },
        {
            "name": "Info",
            "options": ["--version", "--help"],
        },
    ],
}

from spot_sorter import __version__
from spot_sorter.container import MemoryContainer, PlaylistContainer, load_snapshot
from spot_sorter.core import (
    Config,
    ConfigError,
    NotReadyError,
    SnapshotError,
    SpotifyError,
    SpotSorterError,
    StructuralError,
    get_logger,
    get_spotify_credentials,
    load_config,
    setup_logging,
    shutdown_logging,
)
from spot_sorter.core.progress import ReorderProgressBar
from spot_sorter.reorder import PLACEHOLDER_MODES, ReorderPlan, apply_move, reorder_container
from spot_sorter.spotify import PLACEHOLDER_MODE as SPOTIFY_PLACEHOLDER_MODE
from spot_sorter.spotify import SpotifyClient, SpotifyPlaylistContainer
from spot_sorter.utils import extract_playlist_id

logger = get_logger(__name__)


@click.command()
@click.option(
    "--snapshot",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    metavar="<file.yaml>",
    help="Container snapshot to sort (YAML or JSON)"
)
@click.option(
    "--url",
    type=str,
    default=None,
    metavar="<spotify-url>",
    help="Spotify playlist whose tracks are sorted by name"
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Plan the moves without applying them (also sort.dry_run in config.yaml)"
)
@click.option(
    "--placeholders",
    type=click.Choice(PLACEHOLDER_MODES),
    default=None,
    help="absent: placeholders are not live slots; trailing: they are, and go last"
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    metavar="<config.yaml>",
    help="Configuration file (default: ./config.yaml)"
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show every move on the console"
)
@click.option(
    "--version",
    is_flag=True,
    help="Show version and exit."
)
@click.pass_context
def cli(
    ctx: click.Context,
    snapshot: Optional[Path],
    url: Optional[str],
    dry_run: bool,
    placeholders: Optional[str],
    config_path: Optional[Path],
    verbose: bool,
    version: bool
) -> None:
    """
    spot-sorter: Sort playlists and playlist folders alphabetically.

    Every folder level is sorted by name, case-sensitively, keeping folders
    together with their contents. Only the entries that are out of place
    are moved.

    \b
    USAGE:
        spot-sort --snapshot library.yaml              # Sort a snapshot
        spot-sort --snapshot library.yaml --dry-run    # Only show the moves
        spot-sort --url "https://open.spotify.com/playlist/..."
    """
    if version:
        click.echo(f"spot-sorter {__version__}")
        ctx.exit(0)

    if not snapshot and not url:
        click.echo(ctx.get_help())
        ctx.exit(0)

    if snapshot and url:
        raise click.UsageError("Cannot use both --snapshot and --url")

    if url and placeholders == "absent":
        raise click.UsageError(
            "Unavailable tracks occupy playlist positions; --url always uses --placeholders trailing"
        )

    if url:
        try:
            extract_playlist_id(url)
        except ValueError as e:
            raise click.UsageError(str(e)) from e

    _run_sort({
        "snapshot": snapshot,
        "url": url,
        "dry_run": dry_run,
        "placeholders": placeholders,
        "config_path": config_path,
        "verbose": verbose,
    })


def _run_sort(options: dict) -> None:
    """
    Execute one reorder pass based on CLI options.

    1. Load configuration and set up logging
    2. Open the container (snapshot file or Spotify playlist)
    3. Plan the reorder; report the plan
    4. Apply the moves unless this is a dry run
    5. Report results

    Raises:
        SystemExit: On fatal errors (with the documented exit code).
    """
    try:
        config = load_config(options["config_path"])

        logs_dir = setup_logging(config.output.directory, verbose=options["verbose"])
        logger.info(f"spot-sorter {__version__} starting")
        logger.debug(f"Logs in {logs_dir}")

        dry_run = options["dry_run"] or config.sort.dry_run

        if options["url"]:
            placeholder_mode = SPOTIFY_PLACEHOLDER_MODE
            container: PlaylistContainer = _open_spotify_playlist(config, options["url"])
        else:
            placeholder_mode = options["placeholders"] or config.sort.placeholders
            container = load_snapshot(options["snapshot"], placeholder_mode=placeholder_mode)

        plan = reorder_container(
            container,
            placeholder_mode=placeholder_mode,
            dry_run=dry_run,
            progress_factory=ReorderProgressBar
        )

        if isinstance(container, MemoryContainer):
            _print_result(container, plan, dry_run)

        logger.info("spot-sorter completed successfully")

    except ConfigError as e:
        click.echo(f"Configuration error: {e.message}", err=True)
        sys.exit(1)

    except (SnapshotError, StructuralError) as e:
        click.echo(f"Cannot sort: {e.message}", err=True)
        logger.error(f"Cannot sort: {e.message}")
        sys.exit(2)

    except NotReadyError as e:
        click.echo(f"ERROR: {e.unloaded} playlists could not be loaded, try again later", err=True)
        logger.error(e.message)
        sys.exit(3)

    except SpotifyError as e:
        click.echo(f"Spotify error: {e.message}", err=True)
        if e.is_auth_error:
            click.echo("Check your client_id and client_secret in config.yaml", err=True)
        logger.error(f"Spotify error: {e.message}", exc_info=True)
        sys.exit(4)

    except SpotSorterError as e:
        click.echo(f"Error: {e.message}", err=True)
        logger.error(f"Error: {e.message}", exc_info=True)
        sys.exit(5)

    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        logger.info("Interrupted by user")
        sys.exit(130)

    finally:
        shutdown_logging()


def _open_spotify_playlist(config: Config, url: str) -> SpotifyPlaylistContainer:
    """Initialize the Spotify client and fetch the playlist."""
    client_id, client_secret = get_spotify_credentials(config)

    if not SpotifyClient.is_initialized():
        SpotifyClient.init(
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=config.spotify.redirect_uri
        )

    return SpotifyPlaylistContainer(SpotifyClient(), extract_playlist_id(url))


def _print_result(container: MemoryContainer, plan: ReorderPlan, dry_run: bool) -> None:
    """Print the planned moves (dry run) or the resulting order."""
    if dry_run:
        live = plan.live_entries()
        for move in plan.moves:
            entry = live[move.source]
            label = entry.name if entry.name is not None else f"<{entry.kind.value}>"
            click.echo(f"move {move.source:>4} -> {move.destination:<4} {label}")
            apply_move(live, move.source, move.destination)
        return

    for line in container.render_tree():
        click.echo(line)


def main() -> None:
    """
    Entry point for the CLI.

    This function is called when running `spot-sort` from the command line.
    """
    cli()


if __name__ == "__main__":
    main()
