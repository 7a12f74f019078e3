"""
Unit tests for IdeaBoardClient.

A mocked ``requests.Session`` stands in for the server; the tests check
URLs, payloads and the ``(data, error)`` contract.
"""

from unittest.mock import Mock

import pytest
import requests

from idea_board_client import IdeaBoardClient


def _response(status_code=200, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.content = b"x" if payload is not None else b""
    response.json.return_value = payload
    response.text = text
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def api(session):
    return IdeaBoardClient("http://board.test/", session=session, timeout=5)


def test_base_url_is_normalised(api):
    assert api.base_url == "http://board.test"


def test_list_ideas_success(api, session):
    ideas = [{"id": "a", "text": "t", "upvotes": 1, "created_at": "2026-01-01T00:00:00Z"}]
    session.request.return_value = _response(payload=ideas)

    data, error = api.list_ideas()

    assert error is None
    assert data == ideas
    session.request.assert_called_once_with(
        method="GET", url="http://board.test/api/ideas", json=None, timeout=5
    )


def test_create_idea_posts_text(api, session):
    session.request.return_value = _response(status_code=201, payload={"id": "a", "text": "t"})

    data, error = api.create_idea("t")

    assert error is None
    assert data["id"] == "a"
    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "POST"
    assert kwargs["url"] == "http://board.test/api/ideas"
    assert kwargs["json"] == {"text": "t"}


def test_upvote_idea_path(api, session):
    session.request.return_value = _response(payload={"id": "abc", "upvotes": 2})

    data, error = api.upvote_idea("abc")

    assert error is None
    assert data["upvotes"] == 2
    assert session.request.call_args.kwargs["url"] == "http://board.test/api/ideas/abc/upvote"


def test_http_error_returns_server_message(api, session):
    session.request.return_value = _response(status_code=400, payload={"error": "Idea text is required"})

    data, error = api.create_idea("")

    assert data is None
    assert error == {"status_code": 400, "message": "Idea text is required"}


def test_http_error_not_found(api, session):
    session.request.return_value = _response(status_code=404, payload={"error": "Idea not found"})

    data, error = api.upvote_idea("missing")

    assert data is None
    assert error["status_code"] == 404


def test_connection_error(api, session):
    session.request.side_effect = requests.ConnectionError("refused")

    data, error = api.list_ideas()

    assert data == []
    assert error["status_code"] is None
    assert "refused" in error["message"]


def test_unexpected_list_payload(api, session):
    session.request.return_value = _response(payload={"ideas": []})

    data, error = api.list_ideas()

    assert data == []
    assert error is not None
