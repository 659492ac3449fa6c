# AlbumSync Console Output
# Rich-based console output for user-friendly display

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from albumsync.sync.actions import ActionType, SyncDecision, SyncPlan
from albumsync.sync.album import AlbumSyncResult
from albumsync.sync.engine import SyncResult


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for sync operations.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored, highlight=False)

    @property
    def rich(self) -> RichConsole:
        """Underlying Rich console (shared with the log handler)."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{message}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{message}[/blue]")

    def progress(self, message: str) -> None:
        """Progress listener for SyncOutcome; only shown in verbose mode."""
        if self.verbose:
            self._console.print(f"[dim]{message}[/dim]")

    def print_status(self, plans: dict[str, SyncPlan]) -> None:
        """
        Print planned changes for multiple albums.

        Args:
            plans: Dict of album title to plan.
        """
        if not plans:
            self._console.print("[dim]No albums to display[/dim]")
            return

        for title, plan in plans.items():
            self._print_album_plan(title, plan)

    def _print_album_plan(self, title: str, plan: SyncPlan) -> None:
        """Print the plan of a single album."""
        self._console.print(f"\n[bold]{title}[/bold]")

        if plan.total == 0:
            self._console.print("  [dim]No items found[/dim]")
            return

        parts = []
        if plan.unchanged:
            parts.append(f"[green]{len(plan.unchanged)} unchanged[/green]")
        if plan.uploads:
            parts.append(f"[yellow]{len(plan.uploads)} to upload[/yellow]")
        if plan.downloads:
            parts.append(f"[cyan]{len(plan.downloads)} to download[/cyan]")
        if plan.deletes:
            parts.append(f"[red]{len(plan.deletes)} to delete[/red]")
        if plan.discarded:
            parts.append(f"[dim]{plan.discarded} duplicates ignored[/dim]")

        self._console.print(f"  {plan.total} items: {', '.join(parts)}")

        if self.verbose or plan.has_changes:
            self._print_decisions(plan)

    def _print_decisions(self, plan: SyncPlan) -> None:
        """Print one line per decision, in execution order."""
        for decision in plan.decisions:
            if decision.action == ActionType.UNCHANGED and not self.verbose:
                continue
            self._console.print(f"    {self._get_action_icon(decision.action)} {self._format_decision(decision)}")

    def _format_decision(self, decision: SyncDecision) -> str:
        name = decision.name
        if decision.action == ActionType.UPLOAD:
            text = f"[yellow]{name}[/yellow] → remote"
        elif decision.action == ActionType.DOWNLOAD:
            text = f"[cyan]{name}[/cyan] ← remote"
        elif decision.action == ActionType.DELETE:
            text = f"[red]{name}[/red] (recycle)"
        else:
            text = f"[dim]{name}[/dim]"

        if self.verbose and decision.reason:
            text += f" [dim]- {decision.reason}[/dim]"
        return text

    def _get_action_icon(self, action_type: ActionType) -> str:
        """Get icon for action type."""
        icons = {
            ActionType.UNCHANGED: "[green]✓[/green]",
            ActionType.UPLOAD: "[yellow]↑[/yellow]",
            ActionType.DOWNLOAD: "[cyan]↓[/cyan]",
            ActionType.DELETE: "[red]×[/red]",
        }
        return icons.get(action_type, "?")

    def print_sync_result(self, result: SyncResult, *, dry_run: bool = False) -> None:
        """
        Print sync result summary.

        Args:
            result: Sync result to display.
            dry_run: Whether this was a dry run (changes wording).
        """
        self._console.print()

        for title, album_result in result.album_results.items():
            self._print_album_result(title, album_result, dry_run=dry_run)

        if result.skipped_albums and self.verbose:
            self._console.print(f"[dim]Unchanged since last sync: {', '.join(result.skipped_albums)}[/dim]")

        self._console.print()

        status_text = "Dry run completed" if dry_run else "Sync completed"
        if result.aborted:
            status_text = "Sync cancelled"

        if result.success:
            header = f"[green]{status_text}[/green]"
            border = "green" if not result.has_issues else "yellow"
        else:
            header = f"[red]{status_text} with errors[/red]" if not result.aborted else f"[yellow]{status_text}[/yellow]"
            border = "red" if not result.aborted else "yellow"

        self._console.print(
            Panel(
                f"{header}\n"
                f"Albums: {result.synced_albums}/{result.total_albums}"
                f" ({len(result.skipped_albums)} unchanged)\n"
                f"Items: {result.downloaded} downloaded, {result.uploaded} uploaded, {result.failed} failed",
                title="Summary",
                border_style=border,
            )
        )

    def _print_album_result(self, title: str, result: AlbumSyncResult, *, dry_run: bool = False) -> None:
        """Print result for a single album."""
        if result.error_message:
            self._console.print(f"[red]✗[/red] [bold]{title}[/bold] - {result.error_message}")
            return

        plan = result.plan
        if dry_run:
            if not plan.has_changes:
                self._console.print(f"[green]✓[/green] [bold]{title}[/bold] - no changes")
                return
            self._console.print(
                f"[green]✓[/green] [bold]{title}[/bold] - would upload {len(plan.uploads)}, "
                f"download {len(plan.downloads)}, delete {len(plan.deletes)}"
            )
            if self.verbose:
                self._print_decisions(plan)
            return

        if result.uploaded == result.downloaded == result.failed == result.recycled == 0:
            self._console.print(f"[green]✓[/green] [bold]{title}[/bold] - no changes")
            return

        marker = "[green]✓[/green]" if result.success else "[red]✗[/red]"
        self._console.print(
            f"{marker} [bold]{title}[/bold] - {result.uploaded} uploaded, {result.downloaded} downloaded, "
            f"{result.recycled} recycled, {result.failed} failed"
        )

    def print_config_summary(self, config_path: str, photo_root: str, remote_path: str) -> None:
        """Print configuration summary."""
        table = Table(show_header=False, box=None)
        table.add_column("Key", style="bold")
        table.add_column("Value")
        table.add_row("Config", config_path)
        table.add_row("Photos", photo_root)
        table.add_row("Remote", remote_path)
        self._console.print(Panel(table, title="AlbumSync Configuration", border_style="blue"))


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
