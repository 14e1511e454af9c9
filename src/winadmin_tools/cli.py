"""Command-line interface for winadmin-tools."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from winadmin_tools import __version__
from winadmin_tools.config import Config
from winadmin_tools.rsat import (
    CapabilityClient,
    CapabilityError,
    install_capabilities,
    is_elevated,
    parse_selection,
)
from winadmin_tools.schannel import (
    ProtocolState,
    RegistryUnavailableError,
    WindowsRegistry,
    audit_protocols,
)
from winadmin_tools.sync import (
    BackupError,
    SyncError,
    SyncStatus,
    TemplateUpdater,
    build_report,
    write_report,
)
from winadmin_tools.utils import get_logger, setup_logging
from winadmin_tools.utils.confirmation import ConfirmingRunner

app = typer.Typer(help="Windows administration tools: policy templates, SCHANNEL audit, RSAT.")
console = Console()
logger = get_logger(__name__)

CONFIG_DIR_OPTION = typer.Option(
    None,
    "--config-dir",
    help="Configuration directory. Defaults to ~/.winadmin-tools/",
)
VERBOSE_OPTION = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Enable verbose logging.",
)

STATUS_STYLES = {
    SyncStatus.UPDATED: "green",
    SyncStatus.SKIPPED: "yellow",
    SyncStatus.FAILED: "red",
}

STATE_STYLES = {
    ProtocolState.ENABLED: "green",
    ProtocolState.DISABLED: "red",
    ProtocolState.UNDEFINED: "yellow",
    ProtocolState.KEY_ABSENT: "dim",
}


def _load_config(config_dir: Path | None) -> Config:
    try:
        return Config(config_dir)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command("sync-templates")
def sync_templates(
    source: Optional[Path] = typer.Option(
        None,
        "--source",
        help="Template source folder. Defaults to the configured or local PolicyDefinitions.",
    ),
    dest: Optional[Path] = typer.Option(
        None,
        "--dest",
        help="Central Store folder. Defaults to the configured or detected domain store.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be copied without copying.",
    ),
    backup: bool = typer.Option(
        True,
        "--backup/--no-backup",
        help="Back up the Central Store before updating.",
    ),
    verbose: bool = VERBOSE_OPTION,
    config_dir: Optional[Path] = CONFIG_DIR_OPTION,
) -> None:
    """Copy newer ADMX/ADML templates into the Central Store."""
    setup_logging(
        log_level=logging.DEBUG if verbose else logging.INFO,
        config_dir=config_dir,
    )
    logger.info(f"winadmin-tools v{__version__}")

    config = _load_config(config_dir)

    try:
        updater = TemplateUpdater(config, source_dir=source, central_store=dest)

        mode_str = "[bold cyan]DRY RUN[/bold cyan]" if dry_run else "[bold green]SYNC[/bold green]"
        console.print(f"Starting {mode_str}: {updater.source_dir} -> {updater.central_store}")

        run = updater.run(dry_run=dry_run, backup=backup)
    except (ValueError, BackupError, SyncError) as e:
        logger.error(f"Template update failed: {e}", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    result = run.result
    if run.backup_path:
        console.print(f"Backup saved to [cyan]{run.backup_path}[/cyan]")

    report_file = write_report(build_report(result), config.log_dir)

    table = Table(title="Template Sync Results")
    table.add_column("File", style="cyan")
    table.add_column("Status")
    table.add_column("Detail")
    for name, outcome in result.outcomes.items():
        style = STATUS_STYLES[outcome.status]
        table.add_row(name, f"[{style}]{outcome.status.value}[/{style}]", outcome.reason or "")
    console.print(table)

    console.print(f"{result}")
    console.print(f"Report written to [cyan]{report_file}[/cyan]")

    exit_code = 0 if result.files_failed == 0 else 1
    raise typer.Exit(code=exit_code)


@app.command()
def backup(
    dest: Optional[Path] = typer.Option(
        None,
        "--dest",
        help="Central Store folder to back up.",
    ),
    config_dir: Optional[Path] = CONFIG_DIR_OPTION,
) -> None:
    """Back up the Central Store without syncing."""
    setup_logging(config_dir=config_dir)
    config = _load_config(config_dir)

    try:
        updater = TemplateUpdater(config, central_store=dest)
        backup_path = updater.backup()
    except (ValueError, BackupError) as e:
        logger.error(f"Backup failed: {e}", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    if backup_path is None:
        console.print(f"[yellow]Nothing to back up: {updater.central_store} does not exist[/yellow]")
        return

    config.storage.set_last_backup(backup_path)
    console.print(f"[green]✓ Backup saved to {backup_path}[/green]")


@app.command("audit-schannel")
def audit_schannel(
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON.",
    ),
    verbose: bool = VERBOSE_OPTION,
    config_dir: Optional[Path] = CONFIG_DIR_OPTION,
) -> None:
    """Report TLS/SSL protocol enablement from the SCHANNEL registry keys."""
    setup_logging(
        log_level=logging.DEBUG if verbose else logging.INFO,
        config_dir=config_dir,
    )

    try:
        reader = WindowsRegistry()
    except RegistryUnavailableError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    statuses = audit_protocols(reader)

    if as_json:
        console.print_json(data=[status.model_dump(mode="json") for status in statuses])
        return

    table = Table(title="SCHANNEL Protocols")
    table.add_column("Protocol", style="cyan")
    table.add_column("Role", style="cyan")
    table.add_column("State")
    table.add_column("DisabledByDefault")
    for status in statuses:
        if status.error:
            state = f"[red]Error: {status.error}[/red]"
        else:
            style = STATE_STYLES[status.state]
            state = f"[{style}]{status.state.label}[/{style}]"
        disabled_by_default = "-" if status.disabled_by_default is None else str(status.disabled_by_default)
        table.add_row(status.protocol, status.role, state, disabled_by_default)
    console.print(table)


@app.command("install-rsat")
def install_rsat(
    install_all: bool = typer.Option(
        False,
        "--all",
        help="Install every missing RSAT capability without prompting for a selection.",
    ),
    confirm: bool = typer.Option(
        False,
        "--confirm",
        help="Print each PowerShell command and prompt before running it.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Try to install even without administrator rights.",
    ),
    config_dir: Optional[Path] = CONFIG_DIR_OPTION,
) -> None:
    """Interactively install Remote Server Administration Tools."""
    setup_logging(config_dir=config_dir)

    if not is_elevated() and not force:
        console.print("[red]Administrator rights are required. Re-run elevated or pass --force.[/red]")
        raise typer.Exit(code=1)

    client = CapabilityClient(runner=ConfirmingRunner() if confirm else None)

    try:
        with console.status("Querying available RSAT capabilities..."):
            capabilities = client.list_capabilities()
    except CapabilityError as e:
        logger.error(f"Listing capabilities failed: {e}", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    missing = [c for c in capabilities if not c.is_installed]
    if not missing:
        console.print("[green]All RSAT capabilities are already installed.[/green]")
        return

    table = Table(title="Installable RSAT Capabilities")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("State", style="yellow")
    for idx, capability in enumerate(missing, 1):
        table.add_row(str(idx), capability.label, capability.state)
    console.print(table)

    if install_all:
        selected = missing
    else:
        while True:
            answer = Prompt.ask("Enter numbers to install (e.g. 1,3,5-7) or 'all'")
            try:
                selected = [missing[i] for i in parse_selection(answer, len(missing))]
                break
            except ValueError as e:
                console.print(f"[yellow]{e}[/yellow]")

    result = install_capabilities(client, selected)

    if result.succeeded:
        console.print("\n[green]Installed:[/green]")
        for name in result.succeeded:
            console.print(f"  - {name}")
    if result.failed:
        console.print("\n[red]Failed:[/red]")
        for name, reason in result.failed.items():
            console.print(f"  - {name}: {reason}")

    raise typer.Exit(code=0 if not result.failed else 1)


@app.command()
def configure(
    config_dir: Optional[Path] = CONFIG_DIR_OPTION,
) -> None:
    """Set template source, Central Store and language folders."""
    setup_logging(config_dir=config_dir)
    config = _load_config(config_dir)

    console.print("[bold cyan]winadmin-tools Configuration[/bold cyan]\n")

    source_dir = Prompt.ask("Template source folder", default=str(config.source_dir))
    central_store = Prompt.ask(
        "Central Store folder",
        default=str(config.central_store) if config.central_store else None,
    )
    languages = Prompt.ask(
        "Language folders (comma separated)",
        default=",".join(config.languages),
    )
    backup_dir = Prompt.ask("Backup folder", default=str(config.backup_dir))

    try:
        config.update_settings(
            source_dir=source_dir,
            central_store=central_store or None,
            languages=[lang.strip() for lang in languages.split(",")],
            backup_dir=backup_dir,
        )
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Settings saved to {config.storage.settings_file}[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"winadmin-tools v{__version__}")


def main() -> None:
    """Main entry point."""
    try:
        # Non-standalone so Ctrl-C reaches us instead of click's exit code 1
        exit_code = app(standalone_mode=False)
    except (KeyboardInterrupt, click.exceptions.Abort):
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(0)
    except click.exceptions.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Unexpected error: {e}[/red]")
        sys.exit(1)
    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()
