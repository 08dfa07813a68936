from __future__ import annotations

from typing import Any

import requests

from stackview.models import Answer, Question, parse_answer, parse_items, parse_question

API_BASE_URL = "https://api.stackexchange.com/2.3"
USER_AGENT = "stackview/0.1"
QUESTIONS_FILTER = "!nNPvSNPI7A"
ANSWERS_FILTER = "!nNPvSNdWme"
DEFAULT_SITE = "stackoverflow"
DEFAULT_PAGE_SIZE = 20


class ServiceError(Exception):
    pass


def _get_json(url: str, params: dict[str, Any], timeout: float | None) -> Any:
    headers = {"User-Agent": USER_AGENT}
    try:
        response = requests.get(url, params=params, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise ServiceError(f"Request failed: {exc}") from exc

    if not response.ok:
        raise ServiceError(f"Request failed with status: {response.status_code}")

    try:
        return response.json()
    except ValueError as exc:
        raise ServiceError(f"Malformed response body: {exc}") from exc


def _with_key(params: dict[str, Any], api_key: str) -> dict[str, Any]:
    if api_key:
        params["key"] = api_key
    return params


def fetch_questions(
    query: str,
    *,
    site: str = DEFAULT_SITE,
    page_size: int = DEFAULT_PAGE_SIZE,
    api_key: str = "",
    timeout: float | None = None,
) -> list[Question]:
    params = _with_key(
        {
            "pagesize": page_size,
            "order": "desc",
            "sort": "activity",
            "answers": 1,
            "site": site,
            "q": query,
            "filter": QUESTIONS_FILTER,
        },
        api_key,
    )
    payload = _get_json(f"{API_BASE_URL}/search/advanced", params, timeout)
    try:
        return [parse_question(raw) for raw in parse_items(payload)]
    except ValueError as exc:
        raise ServiceError(f"Malformed response body: {exc}") from exc


def fetch_answers(
    question_id: int,
    *,
    site: str = DEFAULT_SITE,
    api_key: str = "",
    timeout: float | None = None,
) -> list[Answer]:
    params = _with_key(
        {
            "order": "desc",
            "sort": "activity",
            "site": site,
            "filter": ANSWERS_FILTER,
        },
        api_key,
    )
    payload = _get_json(f"{API_BASE_URL}/questions/{question_id}/answers", params, timeout)
    try:
        return [parse_answer(raw) for raw in parse_items(payload)]
    except ValueError as exc:
        raise ServiceError(f"Malformed response body: {exc}") from exc
