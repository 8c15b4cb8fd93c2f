"""
Issue Fetcher Tests
===================
All HTTP calls are mocked — no real GitHub traffic.
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from bugsquash.models.issue import FetchedIssue
from bugsquash.services.issue_fetcher import IssueFetcher, fold_issue_text

ISSUE_URL = "https://github.com/acme/widgets/issues/17"


def _response(status_code=200, payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.is_success = 200 <= status_code < 300
    resp.json.return_value = payload if payload is not None else {}
    return resp


ISSUE_PAYLOAD = {
    "title": "Crash on save",
    "body": "Clicking save throws TypeError",
    "state": "open",
    "number": 17,
    "html_url": ISSUE_URL,
    "labels": [{"name": "bug"}, {"name": "p1"}],
}


@pytest.fixture
def fetcher():
    return IssueFetcher(api_url="https://api.github.com")


def test_successful_fetch_maps_fields(fetcher):
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(200, ISSUE_PAYLOAD)
        result = asyncio.run(fetcher.fetch(ISSUE_URL))

    assert result.status == "ok"
    assert result.ok is True
    assert result.issue == FetchedIssue(
        title="Crash on save",
        body="Clicking save throws TypeError",
        number=17,
        repo="widgets",
        owner="acme",
        state="open",
        labels=["bug", "p1"],
        url=ISSUE_URL,
    )
    mock_get.assert_awaited_once_with("https://api.github.com/repos/acme/widgets/issues/17")


def test_missing_body_and_labels_default_to_empty(fetcher):
    payload = {"title": "No body", "body": None, "state": "open", "number": 17, "html_url": ISSUE_URL}
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(200, payload)
        issue = asyncio.run(fetcher.fetch_issue(ISSUE_URL))

    assert issue.body == ""
    assert issue.labels == []


def test_not_an_issue_url_skips_network(fetcher):
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        result = asyncio.run(fetcher.fetch("TypeError: x is undefined"))

    assert result.status == "not_an_issue_url"
    assert result.issue is None
    mock_get.assert_not_called()


def test_http_error_is_reported_as_fetch_failed(fetcher):
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(404)
        result = asyncio.run(fetcher.fetch(ISSUE_URL))

    assert result.status == "fetch_failed"
    assert result.reason == "HTTP 404"
    assert result.ok is False


def test_transport_error_is_reported_as_fetch_failed(fetcher):
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.side_effect = httpx.ConnectError("connection refused")
        result = asyncio.run(fetcher.fetch(ISSUE_URL))

    assert result.status == "fetch_failed"
    assert "connection refused" in result.reason


def test_moved_issue_redirect_is_followed():
    moved_url = "https://api.github.com/repos/acme/widgets-v2/issues/17"
    seen = []

    def handler(request):
        seen.append(str(request.url))
        if request.url.path == "/repos/acme/widgets/issues/17":
            return httpx.Response(301, headers={"Location": moved_url})
        return httpx.Response(200, json=ISSUE_PAYLOAD)

    fetcher = IssueFetcher(api_url="https://api.github.com", transport=httpx.MockTransport(handler))
    result = asyncio.run(fetcher.fetch(ISSUE_URL))

    assert result.status == "ok"
    assert result.issue.title == "Crash on save"
    assert result.issue.labels == ["bug", "p1"]
    assert seen == ["https://api.github.com/repos/acme/widgets/issues/17", moved_url]


def test_bad_json_is_reported_as_fetch_failed(fetcher):
    resp = _response(200)
    resp.json.side_effect = ValueError("Expecting value")
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = resp
        result = asyncio.run(fetcher.fetch(ISSUE_URL))

    assert result.status == "fetch_failed"


def test_fetch_issue_collapses_failures_to_none(fetcher):
    with patch("httpx.AsyncClient.get", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = _response(500)
        assert asyncio.run(fetcher.fetch_issue(ISSUE_URL)) is None
        assert asyncio.run(fetcher.fetch_issue("not a url")) is None


def test_request_headers():
    fetcher = IssueFetcher()
    assert fetcher.headers["Accept"] == "application/vnd.github.v3+json"
    assert "Authorization" not in fetcher.headers


# ---------------------------------------------------------------------------
# Folding
# ---------------------------------------------------------------------------
def test_fold_issue_text():
    issue = FetchedIssue(
        title="Crash on save", body="Steps to reproduce...", number=17,
        repo="widgets", owner="acme", labels=["bug", "p1"],
    )
    assert fold_issue_text(issue) == (
        "GitHub Issue #17: Crash on save\n\n"
        "Repository: acme/widgets\n"
        "Labels: bug, p1\n\n"
        "Steps to reproduce..."
    )


def test_fold_issue_text_without_labels():
    issue = FetchedIssue(title="t", number=1, repo="r", owner="o")
    assert "Labels: none\n" in fold_issue_text(issue)
