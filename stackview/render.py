from __future__ import annotations

from rich.console import Group
from rich.text import Text

from stackview.models import Answer, Owner
from stackview.navigation import DetailMode, ListMode, ViewState, latest_status
from stackview.textlayout import (
    ROW_SEPARATOR,
    detail_width,
    fit_cells,
    prefix_width,
    rule,
    title_width,
    truncate_title,
    wrap,
)
from stackview.timefmt import timestamp_to_elapsed

HEADER_HEIGHT = 2
FOOTER_HEIGHT = 1
ROW_HEIGHT = 2

LIST_HINTS = "↑/↓ move  PgUp/PgDn page  →/Enter open  o browser  q quit"
DETAIL_HINTS = "↑/↓ scroll  PgUp/PgDn page  ←/Backspace back  o browser  q quit"


def _line(*parts: tuple[str, str] | str) -> Text:
    return Text.assemble(*parts, no_wrap=True, overflow="crop")


def answer_count_label(count: int) -> str:
    return f"{count} answer{'' if count == 1 else 's'}"


def list_window(selected_index: int, count: int, capacity: int) -> tuple[int, int]:
    capacity = max(1, capacity)
    start = (selected_index // capacity) * capacity
    return start, min(count, start + capacity)


def build_footer(hints: str, status: str) -> Text:
    message = f"{hints} | {status}" if status else hints
    return Text(message, style="cyan", no_wrap=True, overflow="ellipsis")


def _pad(lines: list[Text], height: int) -> list[Text]:
    shown = lines[: max(0, height)]
    return shown + [Text("") for _ in range(max(0, height) - len(shown))]


def build_question_rows(
    state: ViewState, mode: ListMode, terminal_width: int, capacity: int
) -> list[Text]:
    selected = mode.selected_index
    start, end = list_window(selected, len(state.items), capacity)
    lines: list[Text] = []
    for index in range(start, end):
        question = state.items[index]
        width = title_width(index, terminal_width)
        title = fit_cells(truncate_title(question.title, width), width)
        title_style = "reverse" if index == selected else "white"
        lines.append(
            _line(
                (f"{index + 1}{ROW_SEPARATOR}", "bright_yellow"),
                (title, title_style),
            )
        )
        lines.append(
            _line(
                " " * prefix_width(index),
                (timestamp_to_elapsed(question.creation_date), "bright_black"),
                (f" · {answer_count_label(question.answer_count)}", "bright_black"),
            )
        )
    return lines


def build_list_view(
    state: ViewState, mode: ListMode, terminal_width: int, terminal_height: int
) -> Group:
    body_height = max(0, terminal_height - HEADER_HEIGHT - FOOTER_HEIGHT)
    capacity = max(1, body_height // ROW_HEIGHT)
    header = [_line((f"Results for: {state.query}", "bold white")), Text("")]
    rows = build_question_rows(state, mode, terminal_width, capacity)
    footer = build_footer(LIST_HINTS, latest_status(state))
    return Group(*header, *_pad(rows, body_height), footer)


def _byline(owner: Owner, creation_date: int) -> Text:
    return _line(
        (owner.display_name, "bold"),
        " · ",
        (timestamp_to_elapsed(creation_date), "bright_black"),
    )


def _answer_lines(answer: Answer, width: int) -> list[Text]:
    lines = [_byline(answer.owner, answer.creation_date), _line((rule(width), "bright_green"))]
    lines.extend(_line(line) for line in wrap(answer.body, width))
    lines.append(Text(""))
    return lines


def build_detail_lines(detail: DetailMode, terminal_width: int) -> list[Text]:
    width = detail_width(terminal_width)
    question = detail.question
    lines = [_line((line, "bold")) for line in wrap(question.title, width)]
    lines.append(_line((question.link, "bright_blue")))
    lines.append(Text(""))
    lines.append(_byline(question.owner, question.creation_date))
    lines.append(_line((rule(width), "bright_yellow")))
    lines.extend(_line(line) for line in wrap(question.body, width))
    lines.append(Text(""))
    for answer in detail.answers:
        lines.extend(_answer_lines(answer, width))
    return lines


def build_detail_view(
    state: ViewState, mode: DetailMode, terminal_width: int, terminal_height: int
) -> Group:
    body_height = max(0, terminal_height - FOOTER_HEIGHT)
    lines = build_detail_lines(mode, terminal_width)[mode.scroll :]
    footer = build_footer(DETAIL_HINTS, latest_status(state))
    return Group(*_pad(lines, body_height), footer)


def build_view(state: ViewState, terminal_width: int, terminal_height: int) -> Group:
    mode = state.mode
    if isinstance(mode, DetailMode):
        return build_detail_view(state, mode, terminal_width, terminal_height)
    return build_list_view(state, mode, terminal_width, terminal_height)
