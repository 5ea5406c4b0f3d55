"""Unit tests for api/stackexchange.py module."""

import httpx
import pytest

from api.stackexchange import build_params, fetch_answers, fetch_questions
from core.errors import UpstreamFailure
from models.config import Settings


class TestBuildParams:
    def test_defaults(self, bare_settings):
        params = build_params(bare_settings)
        assert params["site"] == "stackoverflow"
        assert params["filter"] == "withbody"
        assert "key" not in params

    def test_api_key_included(self):
        assert build_params(Settings(stackexchange_api_key="k"))["key"] == "k"


class TestFetch:
    async def test_fetch_questions_parses_items(self, bare_settings, mock_client):
        item = {
            "question_id": 1,
            "title": "t",
            "body": "<p>b</p>",
            "score": 3,
            "tags": ["python"],
            "answer_count": 0,
            "owner": {"reputation": 5},
            "view_count": 10,
        }
        async with mock_client(lambda r: httpx.Response(200, json={"items": [item]})) as client:
            questions = await fetch_questions(client, bare_settings, "1")

        assert len(questions) == 1
        assert questions[0].owner_reputation == 5
        assert questions[0].tags == ["python"]

    async def test_deleted_owner_has_no_reputation(self, bare_settings, mock_client):
        item = {"question_id": 1, "title": "t", "owner": {"user_type": "does_not_exist"}}
        async with mock_client(lambda r: httpx.Response(200, json={"items": [item]})) as client:
            questions = await fetch_questions(client, bare_settings, "1")
        assert questions[0].owner_reputation is None

    async def test_fetch_answers_keeps_order(self, bare_settings, mock_client):
        items = [
            {"answer_id": 3, "question_id": 1, "score": 1},
            {"answer_id": 1, "question_id": 1, "score": 9, "is_accepted": True},
        ]
        async with mock_client(lambda r: httpx.Response(200, json={"items": items})) as client:
            answers = await fetch_answers(client, bare_settings, "1")
        assert [a.answer_id for a in answers] == [3, 1]

    async def test_api_error_body(self, bare_settings, mock_client):
        body = {"error_id": 502, "error_name": "throttle_violation", "error_message": "too many"}
        async with mock_client(lambda r: httpx.Response(200, json=body)) as client:
            with pytest.raises(UpstreamFailure) as exc_info:
                await fetch_answers(client, bare_settings, "1")
        assert "too many" in exc_info.value.message

    async def test_rate_limited(self, bare_settings, mock_client):
        async with mock_client(lambda r: httpx.Response(429)) as client:
            with pytest.raises(UpstreamFailure) as exc_info:
                await fetch_questions(client, bare_settings, "1")
        assert exc_info.value.context["status"] == 429

    async def test_unexpected_payload(self, bare_settings, mock_client):
        async with mock_client(
            lambda r: httpx.Response(200, json={"items": [{"title": "no id"}]})
        ) as client:
            with pytest.raises(UpstreamFailure):
                await fetch_questions(client, bare_settings, "1")


class TestPaging:
    async def test_answers_follow_has_more(self, bare_settings, mock_client):
        pages = []

        def handler(request):
            page = int(request.url.params["page"])
            pages.append(page)
            first = (page - 1) * 100
            count = 100 if page == 1 else 50
            items = [
                {"answer_id": first + n, "question_id": 1, "score": 0} for n in range(count)
            ]
            return httpx.Response(200, json={"items": items, "has_more": page == 1})

        async with mock_client(handler) as client:
            answers = await fetch_answers(client, bare_settings, "1")

        assert pages == [1, 2]
        assert len(answers) == 150
        assert [a.answer_id for a in answers] == list(range(150))

    async def test_single_page_makes_one_request(self, bare_settings, mock_client):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json={"items": [], "has_more": False})

        async with mock_client(handler) as client:
            assert await fetch_answers(client, bare_settings, "1") == []
        assert len(calls) == 1
        assert calls[0].url.params["page"] == "1"

    async def test_error_on_later_page_is_not_truncated(self, bare_settings, mock_client):
        def handler(request):
            if request.url.params["page"] == "2":
                return httpx.Response(503)
            items = [{"answer_id": 1, "question_id": 1}]
            return httpx.Response(200, json={"items": items, "has_more": True})

        async with mock_client(handler) as client:
            with pytest.raises(UpstreamFailure):
                await fetch_answers(client, bare_settings, "1")
