import logging
import os

import typer
from rich.console import Console
from rich.table import Table

from keymapp_sync.config import DEFAULT_STORE_PATH, DEFAULT_TIMEOUT_SECONDS
from keymapp_sync.db.connection import create_connection, integrity_problems
from keymapp_sync.db.store import get_config, list_revisions, metadata_count
from keymapp_sync.engine import KeymappSync
from keymapp_sync.errors import KeymappSyncError
from keymapp_sync.logging_config import LogLevel, configure_logging
from keymapp_sync.paths import ensure_parent_dir, resolve_store_path
from keymapp_sync.remote.client import OryxClient

app = typer.Typer(help="Populate a ZSA Keymapp database without giving Keymapp network access")
console = Console()
logger = logging.getLogger("keymapp_sync.cli")


@app.command()
def sync(
    layout: str = typer.Option(..., "--layout", help="Link to configure.zsa.io page for layout"),
    path: str = typer.Option(DEFAULT_STORE_PATH, "--path", help="Path to Keymapp config database"),
    mkdir: bool = typer.Option(True, "--mkdir/--no-mkdir", help="Create config directory"),
    timeout: float = typer.Option(DEFAULT_TIMEOUT_SECONDS, "--timeout", help="Per-request timeout (seconds)"),
    log_level: LogLevel = typer.Option(LogLevel.WARNING, "--log-level", case_sensitive=False, help="Log level"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON"),
):
    """Fetch a layout revision and store it in the Keymapp database."""
    configure_logging(level=log_level, json_format=json_logs)

    store_path = resolve_store_path(path)
    if mkdir:
        try:
            ensure_parent_dir(store_path)
        except OSError as e:
            console.print(f"[red]Unable to create config directory: {e}[/red]")
            raise typer.Exit(code=1)

    try:
        with OryxClient(timeout=timeout) as client:
            result = KeymappSync(str(store_path), client=client).run(layout)
    except KeymappSyncError as e:
        logger.debug("Sync failed", exc_info=True)
        console.print(f"[red]Sync failed: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]Stored revision {result.revision_id} in {result.store_path}[/green]")
    if result.config_rows_seeded:
        console.print(f"Seeded {result.config_rows_seeded} default config rows")
    if result.metadata_fetched:
        console.print("Stored configurator metadata")


@app.command()
def status(
    path: str = typer.Option(DEFAULT_STORE_PATH, "--path", help="Path to Keymapp config database"),
):
    """Show what a Keymapp database contains."""
    store_path = resolve_store_path(path)
    if not os.path.exists(store_path):
        console.print(f"[red]No database at {store_path}[/red]")
        raise typer.Exit(code=1)

    try:
        conn = create_connection(str(store_path), read_only=True)
        try:
            config = get_config(conn)
            metadata_rows = metadata_count(conn)
            revisions = list_revisions(conn)
            problems = integrity_problems(conn)
        finally:
            conn.close()
    except KeymappSyncError as e:
        console.print(f"[red]Unable to read database: {e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Keymapp Store")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Path", str(store_path))
    table.add_row("Integrity", "\n".join(problems) if problems else "ok")
    table.add_row("Metadata", "present" if metadata_rows else "missing")
    table.add_row("Revisions", str(len(revisions)))
    console.print(table)

    config_table = Table(title="Config")
    config_table.add_column("Key", style="cyan")
    config_table.add_column("Value")
    for key, value in config.items():
        config_table.add_row(key, value)
    console.print(config_table)

    if revisions:
        revision_table = Table(title="Revisions")
        revision_table.add_column("Revision ID")
        revision_table.add_column("Size (bytes)", justify="right")
        for revision_id, size in revisions:
            revision_table.add_row(revision_id, str(size))
        console.print(revision_table)


def main():
    app()

if __name__ == "__main__":
    main()
