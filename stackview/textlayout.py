from __future__ import annotations

import html
import re
from functools import lru_cache

from rich.cells import cell_len, set_cell_size
from rich.console import Console
from rich.text import Text

ELLIPSIS = "..."
ROW_SEPARATOR = ". "
DETAIL_MARGIN = 4
RULE_GLYPH = "─"

PRE_BLOCK_RE = re.compile(r"<pre\b[^>]*>(.*?)</pre\s*>", re.IGNORECASE | re.DOTALL)
LIST_ITEM_RE = re.compile(r"<li\b[^>]*>", re.IGNORECASE)
BLOCK_BREAK_RE = re.compile(
    r"<(?:br|hr)\b[^>]*>|</?(?:p|div|blockquote|h[1-6]|ul|ol|li|tr|table|pre)\b[^>]*>",
    re.IGNORECASE,
)
HTML_TAG_RE = re.compile(r"<[^>]+>")
WHITESPACE_RE = re.compile(r"\s+")

_layout_console = Console(width=80, color_system=None, force_terminal=False)


def _flow_text(fragment: str) -> list[str]:
    text = WHITESPACE_RE.sub(" ", fragment)
    text = LIST_ITEM_RE.sub("\n* ", text)
    text = BLOCK_BREAK_RE.sub("\n", text)
    text = html.unescape(HTML_TAG_RE.sub("", text))
    return [line.strip() for line in text.split("\n")]


def _preformatted_text(fragment: str) -> list[str]:
    text = fragment.replace("\r\n", "\n").replace("\r", "\n")
    text = html.unescape(HTML_TAG_RE.sub("", text))
    return ["", *(line.rstrip() for line in text.split("\n")), ""]


def strip_markup(markup: str) -> str:
    raw_lines: list[str] = []
    position = 0
    for match in PRE_BLOCK_RE.finditer(markup):
        raw_lines.extend(_flow_text(markup[position : match.start()]))
        raw_lines.extend(_preformatted_text(match.group(1)))
        position = match.end()
    raw_lines.extend(_flow_text(markup[position:]))

    lines: list[str] = []
    for line in raw_lines:
        if line.strip():
            lines.append(line)
        elif lines and lines[-1]:
            lines.append("")
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


@lru_cache(maxsize=256)
def wrap(markup: str, width: int) -> tuple[str, ...]:
    width = max(1, width)
    wrapped: list[str] = []
    for paragraph in strip_markup(markup).split("\n"):
        if not paragraph:
            wrapped.append("")
            continue
        lines = Text(paragraph).wrap(_layout_console, width, overflow="fold")
        wrapped.extend(line.plain.rstrip() for line in lines)
    return tuple(wrapped)


def truncate_title(markup: str, width: int) -> str:
    if width <= 0:
        return ""
    plain = WHITESPACE_RE.sub(" ", strip_markup(markup)).strip()
    if len(plain) <= width:
        return plain
    if width < len(ELLIPSIS):
        return ELLIPSIS[:width]
    return f"{plain[: width - len(ELLIPSIS)]}{ELLIPSIS}"


def fit_cells(text: str, width: int) -> str:
    if cell_len(text) <= width:
        return text
    if width < len(ELLIPSIS):
        return ELLIPSIS[: max(0, width)]
    return f"{set_cell_size(text, width - len(ELLIPSIS))}{ELLIPSIS}"


def prefix_width(index: int) -> int:
    return len(str(index + 1)) + len(ROW_SEPARATOR)


def title_width(index: int, terminal_width: int) -> int:
    return max(1, terminal_width - prefix_width(index))


def detail_width(terminal_width: int) -> int:
    return max(1, terminal_width - DETAIL_MARGIN)


def rule(width: int) -> str:
    return RULE_GLYPH * max(1, width)
