from __future__ import annotations

import sys

from dotenv import load_dotenv
from rich.console import Console

from stackview.app import run
from stackview.config import UsageError, parse_args


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    console = Console()
    error_console = Console(stderr=True)
    try:
        config = parse_args(argv if argv is not None else sys.argv[1:])
    except UsageError as exc:
        error_console.print(str(exc), markup=False, highlight=False)
        return 1
    except ValueError as exc:
        error_console.print(f"[red]Configuration error:[/red] {exc}", highlight=False)
        return 2

    try:
        return run(config, console, error_console)
    except KeyboardInterrupt:
        console.print("\n[bold]Stopped.[/bold]")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
