# CFSync Console Output
# Rich-based console output for user-friendly display

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from cfsync.graph.types import DependencyGraph, DependencyNode, ItemKind, PruneReason
from cfsync.sync.engine import SyncResult
from cfsync.sync.history import RunRecord
from cfsync.sync.order import SyncPlan
from cfsync.sync.progress import ProgressCallback, SyncProgress

PRUNE_LABELS = {
    PruneReason.ENTRY_LOOP: "circular reference",
    PruneReason.CONTENT_TYPE_LOOP: "content type loop",
}


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for resolve and sync operations.
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
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{message}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{message}[/blue]")

    def print_graph(self, graph: DependencyGraph) -> None:
        """
        Print the dependency tree of a graph.

        Args:
            graph: Resolved dependency graph.
        """
        tree = Tree(self._node_label(graph.root))
        self._add_children(tree, graph.root)
        self._console.print(tree)

    def _add_children(self, branch: Tree, node: DependencyNode) -> None:
        for child in node.children:
            sub = branch.add(self._node_label(child))
            self._add_children(sub, child)

    def _node_label(self, node: DependencyNode) -> Text:
        """Build the tree label for a node."""
        text = Text()
        if node.is_pruned:
            reason = PRUNE_LABELS.get(node.prune_reason, "pruned")
            text.append("⊘ ", style="dim")
            text.append(node.title, style="dim")
            text.append(f" ({node.type_label})", style="dim")
            text.append(" skipped", style="yellow")
            text.append(f" - {reason}", style="dim yellow")
            return text

        icon = "▪" if node.kind == ItemKind.ENTRY else "▫"
        style = "cyan bold" if node.kind == ItemKind.ENTRY else "magenta"
        text.append(f"{icon} ")
        text.append(node.title, style=style)
        text.append(f" ({node.type_label})", style="dim")
        text.append(f" {node.id}", style="dim")
        if self.verbose:
            text.append(f" depth {node.depth}", style="dim")
        return text

    def print_graph_summary(self, graph: DependencyGraph) -> None:
        """Print entry, asset and skipped counts of a graph."""
        skipped = len(graph.pruned_nodes())
        parts = [
            f"[cyan]{graph.entry_count}[/cyan] entries",
            f"[magenta]{graph.asset_count}[/magenta] assets",
        ]
        if skipped:
            parts.append(f"[yellow]{skipped}[/yellow] skipped")
        self._console.print(", ".join(parts))

    def print_plan(self, sync_plan: SyncPlan, *, dry_run: bool = False) -> None:
        """
        Print the execution order of a sync.

        Args:
            sync_plan: Plan to display.
            dry_run: Whether this is a dry run (changes wording).
        """
        if not sync_plan.order:
            self._console.print("[dim]Nothing to sync[/dim]")
            return

        title = "Planned Sync (dry-run)" if dry_run else "Sync Order"
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Type", style="magenta")
        table.add_column("ID", style="cyan")

        for position, key in enumerate(sync_plan.order, start=1):
            table.add_row(str(position), key.kind.value, key.id)

        self._console.print()
        self._console.print(f"[bold]{title}[/bold]")
        self._console.print(table)
        if sync_plan.skipped:
            self._console.print(f"[dim]{sync_plan.skipped} skipped (content type loop)[/dim]")
        self._console.print()

    def print_sync_result(self, result: SyncResult) -> None:
        """
        Print sync result summary.

        Args:
            result: Sync result to display.
        """
        sync_verb = "would sync" if result.dry_run else "synced"
        status_text = "Dry run completed" if result.dry_run else "Sync completed"

        lines = [
            f"[green]{status_text}[/green]" if result.success else f"[red]{status_text} with errors[/red]",
            f"Entries: {result.entries_synced} {sync_verb}",
            f"Assets: {result.assets_synced} {sync_verb}",
        ]
        if result.skipped_count:
            lines.append(f"Skipped: {result.skipped_count}")
        if result.errors:
            lines.append(f"Errors: {len(result.errors)}")
        if self.verbose:
            lines.append(f"Duration: {result.duration:.2f}s")

        self._console.print()
        self._console.print(
            Panel(
                "\n".join(lines),
                title="Summary",
                border_style="green" if result.success else "red",
            )
        )

        for error in result.errors:
            item = f"{error.item_type.value} {escape(error.item_id)}"
            self._console.print(f"    [red]✗[/red] {item}: {escape(error.message)}")

    def print_history(self, records: list[RunRecord]) -> None:
        """Print recent sync runs."""
        if not records:
            self._console.print("[dim]No sync runs recorded[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("When")
        table.add_column("Root", style="cyan")
        table.add_column("Direction")
        table.add_column("Entries", justify="right")
        table.add_column("Assets", justify="right")
        table.add_column("Skipped", justify="right", style="dim")
        table.add_column("Status")

        for record in records:
            if record.success:
                status = "[green]ok[/green]"
            else:
                status = f"[red]{record.errors} errors[/red]"
            if record.dry_run:
                status += " [dim](dry-run)[/dim]"
            table.add_row(
                record.timestamp.replace("T", " "),
                record.root_id,
                f"{record.source} → {record.target}",
                str(record.entries_synced),
                str(record.assets_synced),
                str(record.skipped),
                status,
            )

        self._console.print(table)

    def print_environments(self, environments: dict[str, Path], *, source: str = "", target: str = "") -> None:
        """
        Print configured environments.

        Args:
            environments: Dict of environment name to export path.
            source: Name of the default source environment.
            target: Name of the default target environment.
        """
        table = Table(show_header=True, header_style="bold")
        table.add_column("Environment")
        table.add_column("Role")
        table.add_column("Export", style="dim")
        table.add_column("Present", justify="center")

        for name, path in sorted(environments.items()):
            role = "source" if name == source else "target" if name == target else ""
            present = "[green]✓[/green]" if path.exists() else "[red]✗[/red]"
            table.add_row(name, role, str(path), present)

        self._console.print(table)

    @contextmanager
    def progress(self) -> Iterator[ProgressCallback]:
        """
        Display a progress bar for resolution or a sync run.

        An event with a zero total shows an indeterminate spinner.

        Yields:
            Callback receiving SyncProgress events.
        """
        columns = [
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
        ]
        with Progress(*columns, console=self._console, transient=True) as bar:
            task = bar.add_task("Starting sync...", total=None)

            def update(event: SyncProgress) -> None:
                bar.update(task, total=event.total or None, completed=event.current, description=event.message)
                if self.verbose and event.current_item:
                    bar.console.log(event.message)

            yield update

    def confirm(self, message: str, default: bool = False) -> bool:
        """
        Ask for confirmation.

        Args:
            message: Confirmation message.
            default: Default value if user just presses enter.

        Returns:
            True if confirmed.
        """
        suffix = " [Y/n]" if default else " [y/N]"
        response = self._console.input(f"{message}{escape(suffix)}: ").strip().lower()

        if not response:
            return default

        return response in ("y", "yes")


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
