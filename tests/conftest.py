"""Shared pytest fixtures."""

import pytest

from stackview.models import Answer, Owner, Question


def _build_question(index: int, **overrides) -> Question:
    fields = {
        "title": f"Question number {index}",
        "body": f"<p>Body of question {index}</p>",
        "question_id": 1000 + index,
        "creation_date": 1_700_000_000,
        "answer_count": index % 4,
        "owner": Owner(display_name=f"user{index}"),
        "link": f"https://stackoverflow.com/q/{1000 + index}",
    }
    fields.update(overrides)
    return Question(**fields)


@pytest.fixture
def make_question():
    """Factory for questions with predictable fields."""
    return _build_question


@pytest.fixture
def questions() -> list[Question]:
    """Twelve questions in arrival order."""
    return [_build_question(i) for i in range(12)]


@pytest.fixture
def answers() -> list[Answer]:
    """Two answers for a detail view."""
    return [
        Answer(
            body="<p>Use <code>asyncio.gather</code>.</p>",
            owner=Owner("alice"),
            creation_date=1_700_000_000,
        ),
        Answer(body="<p>Or a TaskGroup.</p>", owner=Owner("bob"), creation_date=1_700_000_100),
    ]


@pytest.fixture
def question_payload() -> dict:
    """One raw question entry as the search endpoint returns it."""
    return {
        "title": "How do I use &quot;asyncio&quot;?",
        "body": "<p>I tried things.</p>",
        "question_id": 42,
        "creation_date": 1_700_000_000,
        "answer_count": 3,
        "owner": {"display_name": "carol"},
        "link": "https://stackoverflow.com/q/42",
    }
