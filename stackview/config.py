from __future__ import annotations

import argparse
import os
from dataclasses import dataclass

from stackview.api import DEFAULT_PAGE_SIZE, DEFAULT_SITE

DEFAULT_TICK_MS = 200
MAX_PAGE_SIZE = 100


class UsageError(ValueError):
    pass


@dataclass
class AppConfig:
    query: str
    site: str
    page_size: int
    tick_ms: int
    api_key: str
    request_timeout: float | None

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from exc


def _env_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got '{raw}'") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stackview",
        description="Browse Stack Exchange search results and their answers in the terminal.",
    )
    parser.add_argument("query", nargs="?", default="", help="Search term.")
    parser.add_argument("--site", default=os.getenv("STACKVIEW_SITE", DEFAULT_SITE))
    parser.add_argument(
        "--page-size",
        type=int,
        default=_env_int("STACKVIEW_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        help=f"Number of questions to fetch (1-{MAX_PAGE_SIZE}).",
    )
    parser.add_argument("--tick-ms", type=int, default=DEFAULT_TICK_MS)
    parser.add_argument(
        "--timeout",
        type=float,
        default=_env_float("STACKVIEW_TIMEOUT"),
        help="HTTP timeout in seconds. Unset waits as long as the transport allows.",
    )
    return parser


def parse_args(argv: list[str]) -> AppConfig:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.query.strip():
        raise UsageError(parser.format_usage().strip())
    if not 1 <= args.page_size <= MAX_PAGE_SIZE:
        raise ValueError(f"--page-size must be between 1 and {MAX_PAGE_SIZE}")
    if args.tick_ms < 10:
        raise ValueError("--tick-ms must be >= 10")
    if args.timeout is not None and args.timeout <= 0:
        raise ValueError("--timeout must be > 0")
    if not args.site.strip():
        raise ValueError("--site must not be empty")

    return AppConfig(
        query=args.query,
        site=args.site.strip(),
        page_size=args.page_size,
        tick_ms=args.tick_ms,
        api_key=os.getenv("STACKEXCHANGE_KEY", "").strip(),
        request_timeout=args.timeout,
    )
