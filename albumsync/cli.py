"""Click-based CLI for AlbumSync - two-way photo album synchronization."""

from __future__ import annotations

import signal
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import click
import yaml

from albumsync import __version__
from albumsync.config import (
    ensure_config_exists,
    get_config_path,
    get_state_path,
    load_config,
    validate_config_file,
)
from albumsync.logger import setup_logging
from albumsync.metadata import SidecarMetadata
from albumsync.output import Console, create_console
from albumsync.remote import FolderRemoteStore
from albumsync.sync import StateManager, SyncEngine, SyncOutcome


@click.group()
@click.version_option(version=__version__, prog_name="albumsync")
def cli() -> None:
    """AlbumSync - two-way synchronization of photo albums.

    Keeps every subdirectory of the local photo root in step with the remote
    album of the same title.

    \b
    Newer local files are uploaded, newer remote items downloaded,
    and photos tagged "delete" or found in the recycle bin are recycled.
    """
    pass


def _load_or_exit(console: Console):
    try:
        return load_config()
    except FileNotFoundError as e:
        console.print_error(str(e))
        sys.exit(1)


def _build_engine(config, outcome: Optional[SyncOutcome] = None) -> SyncEngine:
    store = FolderRemoteStore(Path(config.remote.path).expanduser(), trash_title=config.remote.trash_album)
    return SyncEngine(
        config,
        store,
        state_manager=StateManager(get_state_path()),
        outcome=outcome,
        metadata=SidecarMetadata(),
    )


@contextmanager
def _cancel_on_interrupt(outcome: SyncOutcome, console: Console) -> Iterator[None]:
    """Turn the first Ctrl-C into a cancellation request; a second one aborts."""

    def handler(signum, frame):
        if outcome.is_cancelled():
            raise KeyboardInterrupt
        console.print_warning("Cancelling after the current item... (press Ctrl-C again to abort)")
        outcome.cancel()

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


# ============================================================================
# Sync Commands
# ============================================================================


@cli.command()
@click.option("--album", "-a", "album_title", help="Sync only this album")
@click.option("--days", type=click.IntRange(min=1), help="Only consider changes from the last N days")
@click.option("--force", "-f", is_flag=True, help="Sync albums even if unchanged since their last sync")
@click.option("--dry-run", "-n", is_flag=True, help="Preview changes without applying")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def sync(album_title: Optional[str], days: Optional[int], force: bool, dry_run: bool, verbose: bool) -> None:
    """Synchronize local album directories with remote albums.

    \b
    Examples:
        albumsync sync                     # Sync all changed albums
        albumsync sync --album Holidays    # Sync one album
        albumsync sync --days 30 --force   # Recheck the last 30 days everywhere
        albumsync sync --dry-run           # Show what would happen
    """
    console = create_console(verbose=verbose)
    config = _load_or_exit(console)

    verbose = verbose or config.output.verbose
    console = create_console(verbose=verbose, colored=config.output.colored)
    setup_logging(verbose=verbose, log_file=config.output.log_file, console=console.rich)

    if days is not None:
        config.sync.max_age_days = days

    outcome = SyncOutcome(listener=console.progress)
    engine = _build_engine(config, outcome)

    try:
        with _cancel_on_interrupt(outcome, console):
            result = engine.sync(album_title=album_title, force=force, dry_run=dry_run)
    except KeyError as e:
        console.print_error(str(e.args[0]) if e.args else str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        console.print_warning("Sync aborted")
        sys.exit(130)

    console.print_sync_result(result, dry_run=dry_run)

    if result.failed or not result.success:
        sys.exit(1)


@cli.command()
@click.option("--album", "-a", "album_title", help="Show only this album")
@click.option("--verbose", "-v", is_flag=True, help="Show unchanged items and reasons")
def status(album_title: Optional[str], verbose: bool) -> None:
    """Show the planned synchronization status without making changes.

    \b
    Examples:
        albumsync status                   # Plans for all albums
        albumsync status --album Holidays  # Plan for one album
    """
    console = create_console(verbose=verbose)
    config = _load_or_exit(console)
    setup_logging(verbose=verbose, console=console.rich)

    engine = _build_engine(config)

    try:
        plans = engine.get_status(album_title)
    except KeyError as e:
        console.print_error(str(e.args[0]) if e.args else str(e))
        sys.exit(1)

    if not plans:
        console.print_warning("No albums found")
        sys.exit(1)

    console.print_status(plans)

    if not any(plan.has_changes for plan in plans.values()):
        console.print()
        console.print_success("Everything is in sync!")


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Configuration management.

    \b
    Main settings:
    - photo_root: local directory holding one subdirectory per album
    - remote.path: location of the remote album store
    - remote.trash_album: album that receives recycled items
    - sync.max_age_days: only consider recent changes
    - exclude_albums: album titles never synced
    """
    pass


@config.command("init")
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing configuration")
def config_init(force: bool) -> None:
    """Create a default configuration file."""
    console = create_console()
    path = get_config_path()

    if path.exists() and force:
        path.unlink()

    path, created = ensure_config_exists(path)
    if created:
        console.print_success(f"Created configuration: {path}")
    else:
        console.print_info(f"Configuration already exists: {path}")
        console.print("[dim]Use --force to overwrite it.[/dim]")


@config.command("show")
def config_show() -> None:
    """Show the current configuration."""
    console = create_console()
    path = get_config_path()

    if not path.exists():
        console.print_warning(f"Configuration file not found: {path}")
        console.print("[dim]Run 'albumsync config init' to create one.[/dim]")
        return

    loaded = load_config(path)
    console.print_config_summary(str(path), str(loaded.photo_root_path), loaded.remote.path)
    console.print(yaml.safe_dump(loaded.model_dump(mode="json"), default_flow_style=False, sort_keys=False), markup=False)


@config.command("validate")
def config_validate() -> None:
    """Validate the configuration file."""
    console = create_console()
    valid, errors = validate_config_file()

    if valid:
        console.print_success("Configuration is valid")
        return

    console.print_error("Configuration has errors:")
    for error in errors:
        console.print(f"  [red]•[/red] {error}")
    sys.exit(1)


if __name__ == "__main__":
    cli()
