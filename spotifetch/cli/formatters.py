"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from spotifetch.models.config import AppConfig
from spotifetch.models.track import HistoryEntry, LookupResult
from spotifetch.utils.formatting import format_age, truncate


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ValidationFailedError": [
            "• Use a link that points directly to a track.",
            "• Album, playlist and artist links are not supported.",
        ],
        "ConfigurationError": [
            "• Check the values in your configuration file.",
            "• Run `spotifetch init --force` to write a fresh one.",
        ],
        "ClipboardUnavailableError": [
            "• Your system may not expose a clipboard to terminal programs.",
            "• On Linux, install xclip or xsel (or wl-clipboard on Wayland).",
            "• Pass the link directly: `spotifetch fetch <URL>`.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_song_panel(result: LookupResult, console: Console | None = None):
    """Displays a resolved track and its download link."""
    console = console or Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Title:", Text(result.title, style="bold"))
    table.add_row("Artist:", Text(result.artist) if result.artist else "[dim]N/A[/dim]")
    if result.thumbnail_url:
        table.add_row("Cover:", Text(result.thumbnail_url, style="dim"))
    table.add_row(
        "Download:",
        Text(result.download_link, style=Style(link=result.download_link)),
    )

    console.print(
        Panel(
            table,
            title="[bold green]✓ Song Found[/bold green]",
            border_style="green",
        )
    )


def print_history_table(entries: list[HistoryEntry], console: Console | None = None):
    """Displays the recent lookups, newest first."""
    console = console or Console()
    if not entries:
        console.print("[dim]No lookups in history yet.[/dim]")
        return

    table = Table(title="Your Recent Downloads")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Artist")
    table.add_column("Link", style="dim")
    table.add_column("When", style="green")
    for i, entry in enumerate(entries, 1):
        table.add_row(
            str(i),
            escape(entry.title),
            escape(entry.artist),
            escape(truncate(entry.source_url)),
            format_age(entry.timestamp),
        )
    console.print(table)
    console.print(
        "[dim]Fetch one again with[/dim] [cyan]spotifetch fetch --from-history N[/cyan]"
    )


def print_app_download(config: AppConfig, console: Console | None = None):
    """Shows where to get the companion app and how to play downloaded files."""
    console = console or Console()
    tips = Table.grid(padding=(0, 1))
    tips.add_column(style="bold cyan")
    tips.add_column()
    tips.add_row(
        "Playing Downloaded Music:",
        "After downloading, check your device's default music player. "
        "The song should appear there automatically.",
    )
    tips.add_row(
        "If Not Found:",
        'Look for a folder named "Spotify Downloader" (or your browser\'s '
        "default download folder) in your file manager.",
    )
    tips.add_row(
        "File Extension:",
        "If the file has a .bin extension, rename it to .mp3 so your player "
        "recognizes it.",
    )

    content = Table.grid(padding=(1, 0))
    content.add_row(tips)
    content.add_row(
        Text.assemble(
            ("Android app (.apk): ", "bold"),
            (config.app_download_url, Style(link=config.app_download_url)),
        )
    )
    content.add_row(
        '[dim](You may need to enable "Install from Unknown Sources" in your '
        "Android settings.)[/dim]"
    )

    console.print(
        Panel(
            content,
            title="[bold green]How to Use & Download Our App[/bold green]",
            border_style="green",
        )
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    console = Console()
    content = "\n".join(
        f"{key} = {escape(str(value))}" for key, value in config_data.items()
    )
    console.print(
        Panel(
            content or "[dim](defaults)[/dim]",
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )
