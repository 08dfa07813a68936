from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Owner:
    display_name: str


@dataclass(frozen=True)
class Question:
    title: str
    body: str
    question_id: int
    creation_date: int
    answer_count: int
    owner: Owner
    link: str


@dataclass(frozen=True)
class Answer:
    body: str
    owner: Owner
    creation_date: int


def _require(raw: dict[str, Any], key: str, kind: type) -> Any:
    if key not in raw:
        raise ValueError(f"missing field '{key}'")
    value = raw[key]
    # bool is an int subclass; the API never sends booleans for these fields.
    if not isinstance(value, kind) or isinstance(value, bool):
        raise ValueError(f"field '{key}' must be {kind.__name__}, got {type(value).__name__}")
    return value


def parse_owner(raw: Any) -> Owner:
    if not isinstance(raw, dict):
        raise ValueError("field 'owner' must be an object")
    return Owner(display_name=_require(raw, "display_name", str))


def parse_question(raw: Any) -> Question:
    if not isinstance(raw, dict):
        raise ValueError("question entry must be an object")
    answer_count = _require(raw, "answer_count", int)
    if answer_count < 0:
        raise ValueError("field 'answer_count' must be >= 0")
    return Question(
        title=_require(raw, "title", str),
        body=_require(raw, "body", str),
        question_id=_require(raw, "question_id", int),
        creation_date=_require(raw, "creation_date", int),
        answer_count=answer_count,
        owner=parse_owner(raw.get("owner")),
        link=_require(raw, "link", str),
    )


def parse_answer(raw: Any) -> Answer:
    if not isinstance(raw, dict):
        raise ValueError("answer entry must be an object")
    return Answer(
        body=_require(raw, "body", str),
        owner=parse_owner(raw.get("owner")),
        creation_date=_require(raw, "creation_date", int),
    )


def parse_items(payload: Any) -> list[Any]:
    if not isinstance(payload, dict):
        raise ValueError("response body must be an object")
    items = payload.get("items")
    if not isinstance(items, list):
        raise ValueError("response body has no 'items' list")
    return items


def error_answer() -> Answer:
    return Answer(
        body="Failed to fetch answers.",
        owner=Owner(display_name="Error"),
        creation_date=0,
    )
