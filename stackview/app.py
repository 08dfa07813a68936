from __future__ import annotations

import sys
import time
import webbrowser
from functools import partial
from typing import Callable

from rich.console import Console
from rich.live import Live
from rich.markup import escape

from stackview.api import ServiceError, fetch_answers, fetch_questions
from stackview.config import AppConfig
from stackview.keys import KeyReader
from stackview.navigation import (
    BACK,
    ENTER,
    MOVE_NEXT,
    MOVE_PREVIOUS,
    OPEN_LINK,
    PAGE_NEXT,
    PAGE_PREVIOUS,
    QUIT,
    FetchAnswers,
    ViewState,
    append_status,
    current_question,
    dispatch,
    make_view_state,
)
from stackview.render import build_view

KEY_BINDINGS = {
    "q": QUIT,
    "ESC": QUIT,
    "QUIT": QUIT,
    "UP": MOVE_PREVIOUS,
    "DOWN": MOVE_NEXT,
    "PGUP": PAGE_PREVIOUS,
    "PGDN": PAGE_NEXT,
    "RIGHT": ENTER,
    "ENTER": ENTER,
    "LEFT": BACK,
    "BACKSPACE": BACK,
    "o": OPEN_LINK,
}


def open_link(url: str) -> str:
    clean_url = url.strip()
    if not clean_url:
        return "No link available for this question."
    try:
        opened = webbrowser.open(clean_url, new=2)
    except webbrowser.Error as exc:
        return f"Failed to open link: {exc}"
    if not opened:
        return "No web browser available to open the link."
    return ""


def open_current_link(state: ViewState, opener: Callable[[str], str]) -> None:
    question = current_question(state)
    error = opener(question.link)
    append_status(state, error or f"Opened: {question.link}")


def run_loop(
    state: ViewState,
    fetch: FetchAnswers,
    draw: Callable[[ViewState], None],
    read_key: Callable[[float], str | None],
    tick_seconds: float = 0.2,
    clock: Callable[[], float] = time.monotonic,
    opener: Callable[[str], str] = open_link,
) -> None:
    last_tick = clock()
    while True:
        draw(state)

        timeout = max(0.0, tick_seconds - (clock() - last_tick))
        key = read_key(timeout)
        if key is not None:
            action = KEY_BINDINGS.get(key)
            if action == QUIT:
                return
            if action == OPEN_LINK:
                open_current_link(state, opener)
            elif action is not None:
                dispatch(state, action, fetch)

        if clock() - last_tick >= tick_seconds:
            last_tick = clock()


def run(config: AppConfig, console: Console, error_console: Console) -> int:
    try:
        items = fetch_questions(
            config.query,
            site=config.site,
            page_size=config.page_size,
            api_key=config.api_key,
            timeout=config.request_timeout,
        )
    except ServiceError as exc:
        error_console.print(f"[red]Failed to fetch questions:[/red] {exc}", highlight=False)
        return 1

    if not items:
        error_console.print(
            f"[red]No results found for query:[/red] {escape(config.query)}", highlight=False
        )
        return 1

    if not sys.stdin.isatty():
        error_console.print("[red]stackview needs an interactive terminal on stdin.[/red]")
        return 1

    state = make_view_state(items, config.query)
    append_status(state, f"{len(items)} questions from {config.site}")
    fetch = partial(
        fetch_answers,
        site=config.site,
        api_key=config.api_key,
        timeout=config.request_timeout,
    )

    with KeyReader() as keys, Live(
        build_view(state, console.size.width, console.size.height),
        console=console,
        auto_refresh=False,
        screen=True,
        vertical_overflow="crop",
    ) as live:

        def draw(current: ViewState) -> None:
            live.update(build_view(current, console.size.width, console.size.height), refresh=True)

        run_loop(state, fetch, draw, keys.read_key, config.tick_seconds)
    return 0
