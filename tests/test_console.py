# Tests for cfsync.output.console
# Rich-based console output

from io import StringIO
from unittest.mock import patch

from conftest import build_entry, entry_link
from rich.console import Console as RichConsole

from cfsync.graph.resolver import DependencyResolver
from cfsync.graph.types import ItemKind
from cfsync.output.console import Console, create_console
from cfsync.sync.engine import SyncError, SyncResult
from cfsync.sync.history import RunRecord
from cfsync.sync.order import plan
from cfsync.sync.progress import SyncPhase, SyncProgress


def _make_console(verbose: bool = False) -> Console:
    """Create a console with captured output."""
    console = Console(verbose=verbose, colored=False)
    console._console = RichConsole(file=StringIO(), no_color=True, width=120)
    return console


def _get_output(console: Console) -> str:
    """Get captured output from console."""
    console._console.file.seek(0)
    return console._console.file.read()


def _loop_graph(client):
    client.add_entry(build_entry("a", "typeA", ref=entry_link("b")))
    client.add_entry(build_entry("b", "typeB", ref=entry_link("a"), other=entry_link("c")))
    client.add_entry(build_entry("c", "typeA"))
    return DependencyResolver(client).resolve("a")


class TestConsoleBasic:
    """Tests for basic console methods."""

    def test_print(self):
        c = _make_console()
        c.print("hello world")
        assert "hello world" in _get_output(c)

    def test_print_error(self):
        c = _make_console()
        c.print_error("something [failed]")
        output = _get_output(c)
        assert "Error:" in output
        assert "something [failed]" in output

    def test_print_warning(self):
        c = _make_console()
        c.print_warning("be careful")
        output = _get_output(c)
        assert "Warning:" in output
        assert "be careful" in output

    def test_print_success(self):
        c = _make_console()
        c.print_success("all good")
        assert "all good" in _get_output(c)

    def test_print_info(self):
        c = _make_console()
        c.print_info("fyi")
        assert "fyi" in _get_output(c)


class TestConsoleGraph:
    """Tests for dependency tree display."""

    def test_print_graph(self, site_client):
        c = _make_console()
        c.print_graph(DependencyResolver(site_client).resolve("homepage-1"))
        output = _get_output(c)

        assert "Homepage 1" in output
        assert "(page)" in output
        assert "(offer)" in output
        assert "(Asset)" in output
        assert "logo" in output
        assert "depth" not in output

    def test_print_graph_verbose(self, site_client):
        c = _make_console(verbose=True)
        c.print_graph(DependencyResolver(site_client).resolve("homepage-1"))
        assert "depth 2" in _get_output(c)

    def test_pruned_labels(self, client):
        c = _make_console()
        c.print_graph(_loop_graph(client))
        output = _get_output(c)

        assert "skipped - circular reference" in output
        assert "skipped - content type loop" in output

    def test_print_graph_summary(self, client):
        c = _make_console()
        c.print_graph_summary(_loop_graph(client))
        assert "3 entries, 0 assets, 1 skipped" in _get_output(c)

    def test_summary_without_skips(self, site_client):
        c = _make_console()
        c.print_graph_summary(DependencyResolver(site_client).resolve("homepage-1"))
        output = _get_output(c)
        assert "3 entries, 2 assets" in output
        assert "skipped" not in output


class TestConsolePlan:
    """Tests for sync plan display."""

    def test_print_plan(self, site_client):
        c = _make_console()
        c.print_plan(plan(DependencyResolver(site_client).resolve("homepage-1")))
        output = _get_output(c)

        assert "Sync Order" in output
        assert output.index("hero") < output.index("homepage-1")

    def test_print_plan_dry_run_with_skips(self, client):
        c = _make_console()
        c.print_plan(plan(_loop_graph(client)), dry_run=True)
        output = _get_output(c)

        assert "Planned Sync (dry-run)" in output
        assert "1 skipped (content type loop)" in output


class TestConsoleSyncResult:
    """Tests for sync result display."""

    def test_success(self):
        c = _make_console()
        c.print_sync_result(SyncResult(success=True, entries_synced=3, assets_synced=2))
        output = _get_output(c)

        assert "Sync completed" in output
        assert "Entries: 3 synced" in output
        assert "Assets: 2 synced" in output
        assert "Duration" not in output

    def test_dry_run(self):
        c = _make_console()
        c.print_sync_result(SyncResult(success=True, entries_synced=1, dry_run=True))
        output = _get_output(c)

        assert "Dry run completed" in output
        assert "Entries: 1 would sync" in output

    def test_errors_listed(self):
        c = _make_console()
        result = SyncResult(
            success=False,
            entries_synced=1,
            skipped_count=1,
            errors=[SyncError("offer-1", ItemKind.ENTRY, "validation failed")],
        )
        c.print_sync_result(result)
        output = _get_output(c)

        assert "with errors" in output
        assert "Skipped: 1" in output
        assert "Errors: 1" in output
        assert "entry offer-1: validation failed" in output

    def test_verbose_duration(self):
        c = _make_console(verbose=True)
        c.print_sync_result(SyncResult(success=True, duration=1.5))
        assert "Duration: 1.50s" in _get_output(c)


class TestConsoleHistoryAndEnvironments:
    """Tests for history and environment tables."""

    def test_empty_history(self):
        c = _make_console()
        c.print_history([])
        assert "No sync runs recorded" in _get_output(c)

    def test_history_rows(self):
        c = _make_console()
        records = [
            RunRecord("homepage-1", "master", "staging", "2026-01-01T10:00:00", True, 3, 2),
            RunRecord("offer-1", "master", "staging", "2026-01-02T10:00:00", False, errors=2),
        ]
        c.print_history(records)
        output = _get_output(c)

        assert "homepage-1" in output
        assert "2026-01-01 10:00:00" in output
        assert "ok" in output
        assert "2 errors" in output

    def test_environments(self, temp_dir):
        present = temp_dir / "master.json"
        present.write_text("{}", encoding="utf-8")
        c = _make_console()
        c.print_environments({"master": present, "staging": temp_dir / "staging.json"}, source="master", target="staging")
        output = _get_output(c)

        assert "master" in output
        assert "source" in output
        assert "target" in output


class TestConsoleInteraction:
    """Tests for progress and confirmation."""

    def test_progress_callback(self):
        c = _make_console()
        with c.progress() as on_progress:
            on_progress(SyncProgress(SyncPhase.SYNCING, 0, 2, "Starting sync..."))
            on_progress(SyncProgress(SyncPhase.SYNCING, 1, 2, "Syncing entry: a", current_item="a"))
            on_progress(SyncProgress(SyncPhase.COMPLETE, 2, 2, "Sync complete: 1 entries, 0 assets"))

    def test_progress_resolving_and_error_phases(self):
        c = _make_console(verbose=True)
        with c.progress() as on_progress:
            on_progress(SyncProgress(SyncPhase.RESOLVING, 0, 0, "Resolving ghost...", current_item="ghost"))
            on_progress(SyncProgress(SyncPhase.ERROR, 0, 0, "Failed to resolve entry: ghost", current_item="ghost"))

        assert "Failed to resolve entry: ghost" in _get_output(c)

    def test_confirm_yes(self):
        c = _make_console()
        with patch.object(c._console, "input", return_value="yes"):
            assert c.confirm("Proceed?")

    def test_confirm_default(self):
        c = _make_console()
        with patch.object(c._console, "input", return_value=""):
            assert c.confirm("Proceed?", default=True)
            assert not c.confirm("Proceed?", default=False)

    def test_confirm_no(self):
        c = _make_console()
        with patch.object(c._console, "input", return_value="n"):
            assert not c.confirm("Proceed?", default=True)


class TestCreateConsole:
    """Tests for create_console."""

    def test_defaults(self):
        console = create_console()
        assert not console.verbose

    def test_verbose(self):
        assert create_console(verbose=True).verbose

    def test_rich_property(self):
        console = create_console(colored=False)
        assert isinstance(console.rich, RichConsole)
