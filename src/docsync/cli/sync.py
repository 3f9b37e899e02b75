"""
docsync CLI - sync command.

Refreshes the generated sections of the status docs from beads, or with
--check verifies they are current without writing.
"""

from datetime import date
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from docsync.cli.errors import ExitCode, print_error
from docsync.core.config import load_config
from docsync.core.docs.patcher import MarkerNotFoundError
from docsync.core.sync import DocSyncService, DocumentState, SyncResult
from docsync.core.tracker import (
    DocSyncError,
    IssueNotFoundError,
    MalformedDataError,
    SnapshotUnavailableError,
    SourceMode,
    ToolUnavailableError,
)

console = Console(soft_wrap=True)

STATE_STYLES = {
    DocumentState.UPDATED: "[green]updated[/green]",
    DocumentState.UNCHANGED: "[dim]unchanged[/dim]",
    DocumentState.STALE: "[yellow]stale[/yellow]",
}


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}")


def _print_result(result: SyncResult, project_dir: Path) -> None:
    if result.fallback_reason:
        console.print(
            "[yellow]⚠[/yellow]  beads CLI unavailable, used snapshot instead",
            highlight=False,
        )
        console.print(f"[dim]{result.fallback_reason}[/dim]", highlight=False, markup=False)

    table = Table(show_header=True, header_style="bold")
    table.add_column("Document")
    table.add_column("Path")
    table.add_column("State")
    for doc in result.documents:
        try:
            shown = doc.path.relative_to(project_dir)
        except ValueError:
            shown = doc.path
        table.add_row(doc.name, str(shown), STATE_STYLES[doc.state])
    console.print(table)

    console.print(
        f"Release gate {result.release_gate_id}: "
        f"{result.dependencies_closed}/{result.dependencies_total} dependencies closed, "
        f"{result.dependencies_remaining} remaining",
        highlight=False,
    )
    console.print(f"Data source: [bold]{result.source.value}[/bold]", highlight=False)


def sync(
    check: bool = typer.Option(
        False,
        "--check",
        help="Only verify the generated sections are current; never write",
    ),
    source: SourceMode | None = typer.Option(
        None,
        "--source",
        "-s",
        help="Issue source: auto (bd, falling back to snapshot), beads, or snapshot",
        case_sensitive=False,
    ),
    project_dir: Path | None = typer.Option(
        None,
        "--project-dir",
        "-C",
        help="Repository root (defaults to current directory)",
        file_okay=False,
        resolve_path=True,
    ),
    generated_on: str | None = typer.Option(
        None,
        "--date",
        help="Date to stamp in the generated banner (YYYY-MM-DD, defaults to today)",
    ),
) -> None:
    """
    Sync generated status sections in the docs from beads.

    Reads the tracked issues with `bd show --json`. If bd cannot answer,
    the whole run uses the .beads/issues.jsonl snapshot instead.

    Examples:
        docsync sync                       # Update docs in place
        docsync sync --check               # Fail if docs are stale
        docsync sync --source snapshot     # Skip bd entirely
        docsync sync -C ../other-checkout  # Sync another checkout
    """
    root = project_dir or Path.cwd()
    stamp = _parse_date(generated_on)

    try:
        config = load_config(root)
    except ValidationError as e:
        print_error("Invalid docsync configuration", reason=str(e), solution="Check .docsync.json")
        raise typer.Exit(ExitCode.USER_ERROR)

    if source is not None:
        config.tracker.source = source

    service = DocSyncService(config, project_dir=root)
    if stamp is not None:
        service.today = lambda: stamp

    try:
        result = service.run(check=check)
    except ToolUnavailableError as e:
        print_error(str(e), solution="Install beads or run with --source snapshot")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except IssueNotFoundError as e:
        print_error(str(e), solution=f"bd show {e.issue_id}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except (MalformedDataError, SnapshotUnavailableError) as e:
        print_error(str(e), solution="bd export -o .beads/issues.jsonl")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except MarkerNotFoundError as e:
        print_error(
            str(e),
            reason="Generated sections must be wrapped in their start and end markers",
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except DocSyncError as e:
        print_error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except OSError as e:
        print_error(f"Could not update docs: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    _print_result(result, service.project_dir)

    if check and result.stale_documents:
        names = ", ".join(d.name for d in result.stale_documents)
        print_error(f"Generated doc sections are stale: {names}", solution="docsync sync")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
