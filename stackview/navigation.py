from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union

from stackview.api import ServiceError
from stackview.models import Answer, Question, error_answer

PAGE_STEP = 5
STATUS_LOG_MAX = 12

MOVE_PREVIOUS = "move_previous"
MOVE_NEXT = "move_next"
PAGE_PREVIOUS = "page_previous"
PAGE_NEXT = "page_next"
ENTER = "enter"
BACK = "back"
QUIT = "quit"
OPEN_LINK = "open_link"

FetchAnswers = Callable[[int], list[Answer]]


@dataclass
class ListMode:
    selected_index: int = 0


@dataclass
class DetailMode:
    question: Question
    answers: tuple[Answer, ...]
    selected_index: int
    scroll: int = 0


Mode = Union[ListMode, DetailMode]


@dataclass
class ViewState:
    items: tuple[Question, ...]
    query: str
    mode: Mode = field(default_factory=ListMode)
    status_log: list[str] = field(default_factory=list)


def make_view_state(items: list[Question], query: str) -> ViewState:
    if not items:
        raise ValueError("cannot browse an empty result set")
    return ViewState(items=tuple(items), query=query, mode=ListMode(selected_index=0))


def append_status(state: ViewState, message: str, max_entries: int = STATUS_LOG_MAX) -> None:
    state.status_log.append(message)
    if len(state.status_log) > max_entries:
        del state.status_log[:-max_entries]


def latest_status(state: ViewState) -> str:
    return state.status_log[-1] if state.status_log else ""


def current_question(state: ViewState) -> Question:
    if isinstance(state.mode, DetailMode):
        return state.mode.question
    return state.items[state.mode.selected_index]


def move_previous(state: ViewState) -> None:
    mode = state.mode
    if isinstance(mode, ListMode):
        i = mode.selected_index
        mode.selected_index = len(state.items) - 1 if i == 0 else i - 1
    elif isinstance(mode, DetailMode):
        mode.scroll = max(0, mode.scroll - 1)


def move_next(state: ViewState) -> None:
    mode = state.mode
    if isinstance(mode, ListMode):
        i = mode.selected_index
        mode.selected_index = 0 if i == len(state.items) - 1 else i + 1
    elif isinstance(mode, DetailMode):
        mode.scroll += 1


def page_previous(state: ViewState) -> None:
    mode = state.mode
    if isinstance(mode, ListMode):
        i = mode.selected_index
        mode.selected_index = 0 if i <= PAGE_STEP else i - PAGE_STEP
    elif isinstance(mode, DetailMode):
        mode.scroll = max(0, mode.scroll - PAGE_STEP)


def page_next(state: ViewState) -> None:
    mode = state.mode
    if isinstance(mode, ListMode):
        i = mode.selected_index
        last = len(state.items) - 1
        mode.selected_index = last if i + PAGE_STEP >= len(state.items) else i + PAGE_STEP
    elif isinstance(mode, DetailMode):
        mode.scroll += PAGE_STEP


def enter(state: ViewState, fetch_answers: FetchAnswers) -> None:
    mode = state.mode
    if not isinstance(mode, ListMode):
        return
    question = state.items[mode.selected_index]
    try:
        answers = tuple(fetch_answers(question.question_id))
    except ServiceError as exc:
        append_status(state, f"Failed to fetch answers for #{question.question_id}: {exc}")
        answers = (error_answer(),)
    state.mode = DetailMode(
        question=question,
        answers=answers,
        selected_index=mode.selected_index,
        scroll=0,
    )


def back(state: ViewState) -> None:
    mode = state.mode
    if isinstance(mode, DetailMode):
        state.mode = ListMode(selected_index=mode.selected_index)


def dispatch(state: ViewState, action: str, fetch_answers: FetchAnswers) -> None:
    if action == MOVE_PREVIOUS:
        move_previous(state)
    elif action == MOVE_NEXT:
        move_next(state)
    elif action == PAGE_PREVIOUS:
        page_previous(state)
    elif action == PAGE_NEXT:
        page_next(state)
    elif action == ENTER:
        enter(state, fetch_answers)
    elif action == BACK:
        back(state)
    else:
        raise ValueError(f"Unknown navigation action '{action}'")
