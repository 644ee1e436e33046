"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from spotifetch import __version__
from spotifetch.api.client import LookupClient
from spotifetch.core.session import LookupSession, NotifyKind
from spotifetch.exceptions import SpotifetchError
from spotifetch.models.config import AppConfig
from spotifetch.storage.config_manager import ConfigManager
from spotifetch.storage.history import HistoryStore
from spotifetch.storage.kv_store import JsonFileStore

from .formatters import (
    print_app_download,
    print_config,
    print_history_table,
    print_song_panel,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("spotifetch")

app = typer.Typer(
    name="spotifetch",
    help=(
        "Paste a Spotify song link, get a download link. Use 'spotifetch"
        " <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "spotifetch"


CONFIG_DIR = get_config_dir()

NOTIFY_STYLES = {
    NotifyKind.SUCCESS: "[green]✓ {}[/green]",
    NotifyKind.INFO: "[cyan]ℹ {}[/cyan]",
    NotifyKind.ERROR: "[red]✗ {}[/red]",
}


def print_notification(kind: NotifyKind, message: str) -> None:
    console.print(NOTIFY_STYLES[kind].format(escape(message)), highlight=False)


def load_config() -> AppConfig:
    return ConfigManager(CONFIG_DIR / "config.ini").load_config()


def open_history(config: AppConfig) -> HistoryStore:
    return HistoryStore(
        JsonFileStore(CONFIG_DIR / "storage"),
        key=config.history_storage_key,
        max_items=config.history_max_items,
    )


def build_session(config: AppConfig, client: LookupClient) -> LookupSession:
    return LookupSession(
        client=client,
        history=open_history(config),
        on_notify=print_notification,
    )


async def _run_lookup(session: LookupSession, url: str | None = None) -> bool:
    """Submits a link and renders the result. Returns True on success."""
    with console.status("[cyan]Fetching song...[/cyan]"):
        outcome = await session.submit(url)
    if outcome and outcome.ok:
        print_song_panel(outcome.result, console)
        return True
    return False


async def _offer_copied_link(session: LookupSession, last_seen: str | None) -> str | None:
    """
    One clipboard poll of `watch`. A link is offered only when it differs from
    the previous poll; returns what the clipboard held this time.
    """
    copied = await session.watcher.check_once(current_input_is_empty=True)
    if copied == last_seen:
        return copied
    if copied and await session.on_activate():
        if typer.confirm("Would you like to fetch it?", default=True):
            session.accept_suggestion()
            await _run_lookup(session)
        session.set_input("")
    return copied


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """Spotify Song Downloader CLI"""
    if version:
        console.print(f"[bold]spotifetch[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("spotifetch").setLevel(log_level)

    if show_config:
        config_file = CONFIG_DIR / "config.ini"
        print_config(config_file, ConfigManager(config_file).get_config_as_dict())
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def fetch(
    url: str | None = typer.Argument(None, help="A Spotify track link."),
    from_history: int | None = typer.Option(
        None,
        "--from-history",
        "-H",
        min=1,
        help="Fetch entry N from the history instead (see 'spotifetch history').",
    ),
):
    """Resolve a Spotify track link into a download link."""
    if url is not None and from_history is not None:
        raise typer.BadParameter(
            "Give either a URL or --from-history, not both.", param_hint="URL"
        )

    async def _fetch_async() -> bool:
        config = load_config()
        async with LookupClient(config.api_base_url, config.request_timeout) as client:
            session = build_session(config, client)
            if from_history is not None:
                entries = session.state.history
                if from_history > len(entries):
                    console.print(
                        f"[red]✗ History has only {len(entries)} entries.[/red]"
                    )
                    return False
                session.load_from_history(entries[from_history - 1].source_url)
            elif url is not None:
                session.set_input(url)
            return await _run_lookup(session)

    if not asyncio.run(_fetch_async()):
        raise typer.Exit(code=1)


@app.command()
def paste():
    """Fetch the Spotify link currently in the clipboard."""

    async def _paste_async() -> bool:
        config = load_config()
        async with LookupClient(config.api_base_url, config.request_timeout) as client:
            session = build_session(config, client)
            if await session.paste_from_clipboard() is None:
                return False
            return await _run_lookup(session)

    if not asyncio.run(_paste_async()):
        raise typer.Exit(code=1)


@app.command()
def watch(
    interval: float = typer.Option(
        2.0, "--interval", "-i", min=0.5, help="Seconds between clipboard checks."
    ),
):
    """Watch the clipboard and offer to fetch copied Spotify track links."""

    async def _watch_async():
        config = load_config()
        async with LookupClient(config.api_base_url, config.request_timeout) as client:
            session = build_session(config, client)
            console.print(
                "[bold cyan]Watching clipboard for Spotify track links...[/bold cyan] "
                "[dim](Ctrl+C to stop)[/dim]"
            )
            last_seen = None
            while True:
                last_seen = await _offer_copied_link(session, last_seen)
                await asyncio.sleep(interval)

    asyncio.run(_watch_async())


@app.command()
def history():
    """Show your recent lookups."""
    config = load_config()
    print_history_table(open_history(config).load(), console)


@app.command(name="clear-history")
def clear_history(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Bypass the confirmation prompt.",
    ),
):
    """Remove all entries from the lookup history."""
    if not force and not typer.confirm(
        "Are you sure you want to clear your download history?"
    ):
        console.print("[yellow]Operation cancelled.[/yellow]")
        raise typer.Abort()

    config = load_config()
    open_history(config).clear()
    print_notification(
        NotifyKind.SUCCESS, "History Cleared. Your download history has been removed."
    )


@app.command(name="app")
def app_info():
    """Show how to play downloaded songs and where to get the Android app."""
    print_app_download(load_config(), console)


@app.command()
def init(
    api_url: str | None = typer.Option(
        None, "--api-url", help="Base URL of the lookup service."
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Request timeout in seconds."
    ),
    history_size: int | None = typer.Option(
        None, "--history-size", help="How many lookups to keep in history."
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
    ),
):
    """Write a configuration file with default or given settings."""
    config_file = CONFIG_DIR / "config.ini"
    if (
        config_file.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {
        key: value
        for key, value in {
            "api_base_url": api_url,
            "request_timeout": timeout,
            "history_max_items": history_size,
        }.items()
        if value is not None
    }
    try:
        ConfigManager(config_file).save_new_config(settings)
    except SpotifetchError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    console.print(f"\n[bold green]✓ Configuration saved to '{config_file}'[/bold green]")


@app.command()
def diagnose():
    """Diagnose common configuration and connectivity issues."""
    console.print("\n[bold cyan]Running diagnostics...[/bold cyan]\n")
    issues_found = False
    config_file = CONFIG_DIR / "config.ini"
    if config_file.is_file():
        console.print(f"[green]✓[/] Config file exists at: [dim]{config_file}[/dim]")
    else:
        console.print("[yellow]○[/] No config file, using defaults.")
    try:
        config = ConfigManager(config_file).load_config()
        console.print("[green]✓[/] Configuration is valid.")
    except SpotifetchError as e:
        console.print(f"[red]✗ Configuration validation failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    console.print("\n[dim]Testing connectivity to the lookup service...[/dim]")

    async def test_connection():
        import aiohttp

        try:
            timeout = aiohttp.ClientTimeout(total=10)
            async with (
                aiohttp.ClientSession(timeout=timeout) as session,
                session.get(config.api_base_url) as resp,
            ):
                # Any answer below 500 means the service is up.
                if resp.status < 500:
                    console.print(
                        f"[green]✓[/] Lookup service reachable (Status: {resp.status})."
                    )
                    return True
                console.print(
                    f"[red]✗ Lookup service unavailable (Status: {resp.status}).[/red]"
                )
                return False
        except Exception as e:
            console.print(f"[red]✗ Connection test failed: {escape(str(e))}[/red]")
            return False

    if not asyncio.run(test_connection()):
        issues_found = True
    console.print()
    if not issues_found:
        console.print(
            "[bold green]✓ All checks passed! Your setup looks good.[/bold green]\n"
        )
    else:
        console.print(
            "[bold red]✗ Some issues were found. "
            "Please review the messages above.[/bold red]\n"
        )
