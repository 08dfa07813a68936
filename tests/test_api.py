"""Tests for the Stack Exchange service client."""

from unittest.mock import Mock, patch

import pytest
import requests

from stackview.api import ServiceError, fetch_answers, fetch_questions
from stackview.models import Owner


def _response(payload=None, status_code: int = 200, json_error: Exception | None = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


class TestFetchQuestions:
    """Tests for fetch_questions()."""

    def test_parses_items_in_order(self, question_payload) -> None:
        second = dict(question_payload, question_id=43, title="Second")
        with patch("stackview.api.requests.get") as get:
            get.return_value = _response({"items": [question_payload, second]})
            questions = fetch_questions("asyncio")

        assert [q.question_id for q in questions] == [42, 43]
        first = questions[0]
        assert first.title == "How do I use &quot;asyncio&quot;?"
        assert first.owner == Owner(display_name="carol")
        assert first.answer_count == 3
        assert first.link == "https://stackoverflow.com/q/42"

    def test_request_shape(self, question_payload) -> None:
        with patch("stackview.api.requests.get") as get:
            get.return_value = _response({"items": [question_payload]})
            fetch_questions("asyncio gather", site="superuser", page_size=7, api_key="k3y")

        url = get.call_args.args[0]
        params = get.call_args.kwargs["params"]
        assert url == "https://api.stackexchange.com/2.3/search/advanced"
        assert params["q"] == "asyncio gather"
        assert params["site"] == "superuser"
        assert params["pagesize"] == 7
        assert params["answers"] == 1
        assert params["filter"] == "!nNPvSNPI7A"
        assert params["key"] == "k3y"
        assert "User-Agent" in get.call_args.kwargs["headers"]
        assert get.call_args.kwargs["timeout"] is None

    def test_no_key_by_default(self, question_payload) -> None:
        with patch("stackview.api.requests.get") as get:
            get.return_value = _response({"items": []})
            assert fetch_questions("asyncio") == []
        assert "key" not in get.call_args.kwargs["params"]

    def test_http_error_status(self) -> None:
        with patch("stackview.api.requests.get") as get:
            get.return_value = _response({}, status_code=400)
            with pytest.raises(ServiceError, match="400"):
                fetch_questions("asyncio")

    def test_transport_error(self) -> None:
        with patch("stackview.api.requests.get") as get:
            get.side_effect = requests.ConnectionError("unreachable")
            with pytest.raises(ServiceError, match="unreachable"):
                fetch_questions("asyncio")

    def test_body_not_json(self) -> None:
        with patch("stackview.api.requests.get") as get:
            get.return_value = _response(json_error=ValueError("Expecting value"))
            with pytest.raises(ServiceError, match="Malformed"):
                fetch_questions("asyncio")

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"error_id": 502},
            {"items": "nope"},
            {"items": [{"title": "missing everything"}]},
        ],
    )
    def test_malformed_body(self, payload) -> None:
        with patch("stackview.api.requests.get") as get:
            get.return_value = _response(payload)
            with pytest.raises(ServiceError, match="Malformed"):
                fetch_questions("asyncio")

    def test_wrong_field_type(self, question_payload) -> None:
        question_payload["question_id"] = "42"
        with patch("stackview.api.requests.get") as get:
            get.return_value = _response({"items": [question_payload]})
            with pytest.raises(ServiceError, match="question_id"):
                fetch_questions("asyncio")


class TestFetchAnswers:
    """Tests for fetch_answers()."""

    def test_parses_answers(self) -> None:
        payload = {
            "items": [
                {"body": "<p>A</p>", "owner": {"display_name": "dave"}, "creation_date": 10},
                {"body": "<p>B</p>", "owner": {"display_name": "erin"}, "creation_date": 20},
            ]
        }
        with patch("stackview.api.requests.get") as get:
            get.return_value = _response(payload)
            answers = fetch_answers(42, timeout=5.0)

        assert [a.owner.display_name for a in answers] == ["dave", "erin"]
        assert answers[1].creation_date == 20
        assert get.call_args.args[0] == "https://api.stackexchange.com/2.3/questions/42/answers"
        assert get.call_args.kwargs["params"]["filter"] == "!nNPvSNdWme"
        assert get.call_args.kwargs["timeout"] == 5.0

    def test_missing_owner(self) -> None:
        with patch("stackview.api.requests.get") as get:
            get.return_value = _response({"items": [{"body": "x", "creation_date": 1}]})
            with pytest.raises(ServiceError):
                fetch_answers(42)

    def test_server_error(self) -> None:
        with patch("stackview.api.requests.get") as get:
            get.return_value = _response({}, status_code=503)
            with pytest.raises(ServiceError, match="503"):
                fetch_answers(42)
