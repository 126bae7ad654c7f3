"""CLI application entry point."""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from claude_config.config.loader import USER_CONFIG_PATH, load_config
from claude_config.config.schema import InstallerConfig, TransportKind
from claude_config.core.installer import install
from claude_config.core.manifest import InstallMode, destination_root, get_manifest
from claude_config.fetch.selector import select_transport
from claude_config.utils.errors import (
    ExitCode,
    InstallerError,
    MissingDependencyError,
    TransferError,
)
from claude_config.utils.output import (
    console,
    print_banner,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from claude_config.utils.paths import ensure_dir, expand_path

app = typer.Typer(
    name="claude-config",
    help="Install shared CLAUDE.md guidelines and skills into a project or ~/.claude",
)


# Template for init command
TEMPLATE_CONFIG = """version: "1.0"

# Repository the guideline files are downloaded from.
# CLAUDE_GITHUB_USER, CLAUDE_GITHUB_REPO and CLAUDE_GITHUB_BRANCH override these.
source:
  host: "raw.githubusercontent.com"
  user: "MrKnights1"
  repo: "claude-config"
  branch: "main"

settings:
  # Tried in order; the first one available is used (curl, wget or httpx)
  transports:
    - curl
    - wget
  timeout: 30.0
  update_gitignore: true
  keep_going: false
"""


def _load_config_or_exit(config: Optional[Path]) -> InstallerConfig:
    try:
        return load_config(config)
    except InstallerError as e:
        print_error(e.message)
        raise typer.Exit(e.exit_code)


def _print_next_steps(mode: InstallMode) -> None:
    console.print()
    console.print("[yellow]Next steps:[/yellow]")
    if mode is InstallMode.GLOBAL:
        console.print("  1. Review ~/.claude/CLAUDE.md")
        console.print("  2. Review guidelines in ~/.claude/.claude/")
        console.print("  3. Skills are available from ~/.claude/skills/")
        console.print("  4. Start using Claude Code!")
    else:
        console.print("  1. Customize CLAUDE.md 'Common Commands' for your project")
        console.print("  2. Review guidelines in .claude/ directory")
        console.print("  3. Commit files to your repository")
        console.print("  4. Start using Claude Code!")
    console.print()
    console.print(
        "[blue]Tip:[/blue] Press [yellow]#[/yellow] in Claude Code to update CLAUDE.md"
    )


def run_install(
    mode: InstallMode,
    transport: Optional[TransportKind] = None,
    config: Optional[Path] = None,
    keep_going: Optional[bool] = None,
    update_gitignore: bool = True,
    dry_run: bool = False,
) -> None:
    """Load configuration and install the manifest for mode.

    Raises:
        typer.Exit: With the matching ExitCode on any failure
    """
    cfg = _load_config_or_exit(config)
    settings = cfg.settings

    root = destination_root(mode)
    base_url = cfg.source.base_url
    kinds = [transport] if transport else settings.transports
    if keep_going is None:
        keep_going = settings.keep_going

    print_banner("CLAUDE.md Installer")
    print_info(f"Source: {base_url}")
    print_info(f"Destination: {root}")

    token = os.getenv("GITHUB_TOKEN")
    if token and not cfg.source.accepts_token:
        print_warning(f"GITHUB_TOKEN is not sent to {cfg.source.host}")
        token = None

    try:
        selected = select_transport(kinds, token=token, timeout=settings.timeout)
    except MissingDependencyError as e:
        if not dry_run:
            print_error(e.message)
            raise typer.Exit(e.exit_code)
        # A dry run downloads nothing, so it can still show the plan
        print_warning(e.message)
    else:
        print_info(f"Transport: {selected.name}")

    if dry_run:
        print_warning("DRY RUN MODE - No changes will be made")
        entries = get_manifest(mode)
        print_info(f"Would install {len(entries)} file(s):")
        for entry in entries:
            console.print(f"  • {entry.remote} -> {entry.destination(root)}")
        return

    console.print()
    try:
        result = asyncio.run(
            install(
                mode,
                base_url,
                root,
                transport=selected,
                keep_going=keep_going,
                update_gitignore=update_gitignore and settings.update_gitignore,
            )
        )
    except InstallerError as e:
        print_error(e.message)
        if isinstance(e, TransferError):
            print_info("Re-run the installer to retry; existing files are overwritten")
        raise typer.Exit(e.exit_code)

    if not result.ok:
        console.print()
        print_error(f"Failed to install {len(result.failures)} file(s):")
        for failure in result.failures:
            console.print(f"  • {failure.path}: {escape(failure.reason)}")
        raise typer.Exit(ExitCode.TRANSFER_FAILED)

    console.print()
    print_success("Installation complete!")
    _print_next_steps(mode)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    global_: bool = typer.Option(
        False,
        "--global",
        "-g",
        help="Install into ~/.claude instead of the current project",
    ),
    transport: Optional[TransportKind] = typer.Option(
        None,
        "--transport",
        "-t",
        case_sensitive=False,
        help="Force a transport instead of picking the first available one",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (merged on top of the default search)",
    ),
    keep_going: Optional[bool] = typer.Option(
        None,
        "--keep-going/--fail-fast",
        help="Attempt every file and report failures at the end",
    ),
    no_gitignore: bool = typer.Option(
        False,
        "--no-gitignore",
        help="Leave .gitignore untouched",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be done without making changes",
    ),
):
    """Install CLAUDE.md and the .claude guidelines and skills.

    Runs the install when no command is given; the options above only apply
    to the install.
    """
    if ctx.invoked_subcommand is not None:
        return

    mode = InstallMode.GLOBAL if global_ else InstallMode.PROJECT
    run_install(
        mode,
        transport=transport,
        config=config,
        keep_going=keep_going,
        update_gitignore=not no_gitignore,
        dry_run=dry_run,
    )


@app.command("list")
def list_files(
    global_: bool = typer.Option(
        False,
        "--global",
        "-g",
        help="Show the global layout under ~/.claude",
    ),
):
    """List the files the installer manages and whether they exist."""
    mode = InstallMode.GLOBAL if global_ else InstallMode.PROJECT
    root = destination_root(mode)

    console.print(f"[bold]Destination:[/bold] {root}")
    console.print()

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Remote", style="green")
    table.add_column("Local")
    table.add_column("Installed")

    installed = 0
    for entry in get_manifest(mode):
        exists = entry.destination(root).is_file()
        installed += exists
        status = "[green]✓[/green]" if exists else "[red]✗[/red]"
        table.add_row(entry.remote, entry.local, status)

    console.print(table)
    print_info(f"{installed}/{len(get_manifest(mode))} file(s) installed")


@app.command()
def init(
    path: Optional[Path] = typer.Argument(
        None,
        help=f"Where to write the config (default: {USER_CONFIG_PATH})",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite existing config file",
    ),
):
    """Create a configuration template.

    The template lists every setting with its default value.
    """
    if path is None:
        path = expand_path(USER_CONFIG_PATH)

    if path.exists() and not force:
        print_error(f"Config file already exists: {path}")
        print_info("Use --force to overwrite")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    try:
        ensure_dir(path.parent)
        path.write_text(TEMPLATE_CONFIG, encoding="utf-8")
    except OSError as e:
        print_error(f"Failed to create config: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    print_success(f"Created config file: {path}")
    print_info("Edit the file to change where files are downloaded from")


if __name__ == "__main__":
    app()
