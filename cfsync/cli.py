"""Click-based CLI for CFSync - dependency-aware content sync between environments."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.logging import RichHandler

from cfsync import __version__
from cfsync.client.export import ExportFileClient, list_environments
from cfsync.config import (
    CfsyncConfig,
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from cfsync.errors import ConfigError, ResolutionFailed
from cfsync.graph.resolver import DependencyResolver
from cfsync.graph.types import DependencyGraph
from cfsync.output.console import Console, create_console
from cfsync.sync.engine import SyncEngine
from cfsync.sync.history import RunRecord, SyncHistory
from cfsync.sync.order import plan
from cfsync.sync.progress import ProgressCallback, SyncPhase, SyncProgress

EXIT_FAILURE = 1
EXIT_ITEM_ERRORS = 2


def _configure_logging(console: Console, verbose: bool) -> None:
    """Route library log records through Rich."""
    handler = RichHandler(console=console.rich, show_path=False, show_time=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _load_config_or_exit(console: Console) -> CfsyncConfig:
    """Load configuration, printing errors and exiting on failure."""
    try:
        return load_config()
    except (FileNotFoundError, ConfigError) as e:
        console.print_error(str(e))
        sys.exit(EXIT_FAILURE)
    except ValidationError as e:
        console.print_error(f"Invalid configuration: {get_config_path()}")
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            console.print(f"  • {loc}: {error['msg']}" if loc else f"  • {error['msg']}")
        sys.exit(EXIT_FAILURE)


def _environment_path_or_exit(console: Console, config: CfsyncConfig, name: str) -> Path:
    """Get an environment's export path, exiting if it isn't configured."""
    try:
        return config.get_export_path(name)
    except KeyError as e:
        console.print_error(e.args[0])
        sys.exit(EXIT_FAILURE)


def _make_client(
    console: Console,
    config: CfsyncConfig,
    source: str,
    target: Optional[str] = None,
) -> ExportFileClient:
    """Create a client for a source and an optional target environment."""
    if source == target:
        console.print_error("Source and target environments must be different")
        sys.exit(EXIT_FAILURE)

    source_path = _environment_path_or_exit(console, config, source)
    target_path = _environment_path_or_exit(console, config, target) if target else None
    client = ExportFileClient(source_path, target_path)

    if client.source_error:
        console.print_error(client.source_error)
        sys.exit(EXIT_FAILURE)
    return client


def _resolve_with_progress(
    resolver: DependencyResolver,
    entry_id: str,
    on_progress: ProgressCallback,
) -> DependencyGraph:
    """
    Resolve a root entry, reporting the resolving phase.

    A root that can't be resolved is reported in the error phase before
    ResolutionFailed propagates.
    """
    on_progress(
        SyncProgress(
            phase=SyncPhase.RESOLVING,
            current=0,
            total=0,
            current_item=entry_id,
            message=f"Resolving {entry_id}...",
        )
    )
    try:
        graph = resolver.resolve(entry_id)
    except ResolutionFailed as e:
        on_progress(SyncProgress(phase=SyncPhase.ERROR, current=0, total=0, current_item=entry_id, message=e.message))
        raise

    on_progress(
        SyncProgress(
            phase=SyncPhase.RESOLVING,
            current=len(graph),
            total=len(graph),
            message=f"Resolved {graph.entry_count} entries, {graph.asset_count} assets",
        )
    )
    return graph


def _resolve_or_exit(console: Console, resolver: DependencyResolver, entry_id: str) -> DependencyGraph:
    """Resolve a root entry behind a spinner, exiting if it can't be resolved."""
    try:
        with console.progress() as on_progress:
            return _resolve_with_progress(resolver, entry_id, on_progress)
    except ResolutionFailed as e:
        console.print_error(e.message)
        sys.exit(EXIT_FAILURE)


@click.group()
@click.version_option(version=__version__, prog_name="cfsync")
def cli() -> None:
    """CFSync - dependency-aware content sync between environments.

    Resolves every entry and asset linked from a root entry and copies them
    from the source environment to the target, dependencies first.

    \b
    Workflow:
      cfsync config init        Create a configuration file
      cfsync resolve ENTRY_ID   Show what an entry depends on
      cfsync sync ENTRY_ID      Copy an entry and its dependencies
    """
    pass


@cli.command()
@click.argument("entry_id")
@click.option("--source", "-s", help="Source environment (default: sync.source)")
@click.option("--max-depth", type=click.IntRange(min=1), help="Maximum link depth to follow")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def resolve(entry_id: str, source: Optional[str], max_depth: Optional[int], verbose: bool) -> None:
    """Resolve and display the dependency tree of an entry."""
    console = create_console(verbose=verbose)
    _configure_logging(console, verbose)

    config = _load_config_or_exit(console)
    client = _make_client(console, config, source or config.sync.source)

    resolver = DependencyResolver(client, max_depth=max_depth or config.sync.max_depth)
    graph = _resolve_or_exit(console, resolver, entry_id)

    console.print_graph(graph)
    console.print()
    console.print_graph_summary(graph)


@cli.command()
@click.argument("entry_id")
@click.option("--source", "-s", help="Source environment (default: sync.source)")
@click.option("--target", "-t", help="Target environment (default: sync.target)")
@click.option("--dry-run", "-n", is_flag=True, help="Preview changes without applying")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def sync(
    entry_id: str,
    source: Optional[str],
    target: Optional[str],
    dry_run: bool,
    yes: bool,
    verbose: bool,
) -> None:
    """Synchronize an entry and everything it links to.

    Linked assets and entries are written before the entries that
    reference them. Circular references are skipped.
    """
    console = create_console(verbose=verbose)
    config = _load_config_or_exit(console)

    console = create_console(verbose=verbose or config.output.verbose, colored=config.output.colored)
    _configure_logging(console, console.verbose)
    source = source or config.sync.source
    target = target or config.sync.target
    client = _make_client(console, config, source, target)

    resolver = DependencyResolver(client, max_depth=config.sync.max_depth)
    graph = _resolve_or_exit(console, resolver, entry_id)

    if console.verbose:
        console.print_graph(graph)
    console.print_graph_summary(graph)

    sync_plan = plan(graph)
    console.print_plan(sync_plan, dry_run=dry_run)

    if not dry_run and not yes:
        if not console.confirm(f"Sync {sync_plan.total} items from {source} to {target}?", default=True):
            console.print_warning("Sync cancelled")
            return

    engine = SyncEngine(client)
    with console.progress() as on_progress:
        result = engine.execute(graph, on_progress, dry_run=dry_run)

    console.print_sync_result(result)

    if config.output.history_file and not dry_run:
        history = SyncHistory(Path(config.output.history_file), limit=config.output.history_limit)
        try:
            history.record(RunRecord.from_result(result, root_id=entry_id, source=source, target=target))
        except OSError as e:
            console.print_warning(f"Could not record sync history: {e}")

    if result.has_errors:
        sys.exit(EXIT_ITEM_ERRORS)


@cli.command()
def environments() -> None:
    """List configured environments.

    Export files lying next to configured ones are listed as well, so a
    new environment can be added to the configuration by name.
    """
    console = create_console()
    config = _load_config_or_exit(console)

    paths = {name: Path(env.export_path) for name, env in config.environments.items()}
    for directory in sorted({path.parent for path in paths.values()}):
        for name, path in list_environments(directory).items():
            if path not in paths.values():
                paths.setdefault(name, path)

    console.print_environments(paths, source=config.sync.source, target=config.sync.target)


@cli.command()
@click.option("--lines", "-n", default=10, type=click.IntRange(min=1), help="Number of runs to show")
def history(lines: int) -> None:
    """Show recent sync runs."""
    console = create_console()
    config = _load_config_or_exit(console)

    if not config.output.history_file:
        console.print_info("Sync history is disabled (output.history_file is not set)")
        return

    runs = SyncHistory(Path(config.output.history_file), limit=config.output.history_limit)
    console.print_history(runs.recent(lines))


# ============================================================================
# Configuration Commands
# ============================================================================


@cli.group()
def config() -> None:
    """Configuration file management."""
    pass


@config.command("init")
def config_init() -> None:
    """Create a default configuration file."""
    console = create_console()
    config_path, created = ensure_config_exists()

    if created:
        console.print_success(f"Created configuration: {config_path}")
        console.print_info("Edit the environments section to point at your export files.")
    else:
        console.print_info(f"Configuration already exists: {config_path}")


@config.command("show")
def config_show() -> None:
    """Show the configuration file path and contents."""
    console = create_console()
    config_path = get_config_path()

    if not config_path.exists():
        console.print_error(f"Configuration file not found: {config_path}")
        sys.exit(EXIT_FAILURE)

    console.print(f"[dim]# {config_path}[/dim]")
    console.print(config_path.read_text(encoding="utf-8"), markup=False)


@config.command("validate")
def config_validate() -> None:
    """Validate the configuration file."""
    console = create_console()
    is_valid, errors = validate_config_file()

    if is_valid:
        console.print_success(f"Configuration is valid: {get_config_path()}")
        return

    console.print_error(f"Configuration is invalid: {get_config_path()}")
    for error in errors:
        console.print(f"  • {error}", markup=False)
    sys.exit(EXIT_FAILURE)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
