"""
Entry point of the `spotifetch` command. Runs the Typer app and turns anything
that escapes a command into an error panel and a non-zero exit code.
"""

import asyncio
import logging
import sys

import typer
from rich.console import Console

from spotifetch.cli.app import app
from spotifetch.cli.formatters import format_error_with_suggestions
from spotifetch.exceptions import SpotifetchError

log = logging.getLogger("spotifetch")


def main() -> None:
    console = Console(stderr=True)
    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("\n[yellow]Stopped.[/yellow]")
        sys.exit(0)
    except SpotifetchError as e:
        console.print(format_error_with_suggestions(e))
        sys.exit(1)
    except Exception as e:
        log.debug("Unhandled error", exc_info=True)
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        sys.exit(1)


if __name__ == "__main__":
    main()
