"""Unit tests for GitHub adapter (mocked API)."""

from unittest.mock import Mock, patch

import pytest
import requests

from notionbot.adapters.base import GitPlatformError
from notionbot.adapters.github import GitHubAdapter
from notionbot.models import PR

PR_DATA = {
    "number": 3,
    "title": "Fix bug",
    "body": "Description",
    "state": "open",
    "head": {"ref": "fix-login-a1b2"},
    "base": {"ref": "main"},
    "html_url": "https://github.com/owner/repo/pull/3",
}


@pytest.fixture
def adapter() -> GitHubAdapter:
    return GitHubAdapter(token="test-token", api_url="https://api.github.com")


def _response(status_code: int, data=None) -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = data
    return resp


def test_session_headers(adapter: GitHubAdapter) -> None:
    """Adapter authenticates with a bearer token."""
    assert adapter._session.headers["Authorization"] == "Bearer test-token"
    assert adapter._session.headers["Accept"] == "application/vnd.github+json"


def test_get_pr_success(adapter: GitHubAdapter) -> None:
    """get_pr returns PR when API returns 200."""
    with patch.object(adapter._session, "request", return_value=_response(200, PR_DATA)) as req:
        pr = adapter.get_pr("owner/repo", 3)

    assert isinstance(pr, PR)
    assert pr.number == 3
    assert pr.title == "Fix bug"
    assert pr.body == "Description"
    assert pr.head_branch == "fix-login-a1b2"
    assert pr.base_branch == "main"
    assert pr.html_url == "https://github.com/owner/repo/pull/3"
    assert req.call_args[0][0] == "GET"
    assert req.call_args[0][1] == "https://api.github.com/repos/owner/repo/pulls/3"


def test_get_pr_null_body_becomes_empty(adapter: GitHubAdapter) -> None:
    """A PR without description has body ''."""
    data = {**PR_DATA, "body": None}
    with patch.object(adapter._session, "request", return_value=_response(200, data)):
        pr = adapter.get_pr("owner/repo", 3)
    assert pr.body == ""


def test_get_pr_404_raises(adapter: GitHubAdapter) -> None:
    """get_pr raises GitPlatformError when PR not found."""
    resp = _response(404, {"message": "Not Found"})
    resp.text = "Not Found"
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(GitPlatformError) as exc_info:
            adapter.get_pr("owner/repo", 999)
    assert "404" in str(exc_info.value)
    assert "Not Found" in str(exc_info.value)


def test_error_without_json_body(adapter: GitHubAdapter) -> None:
    """Non-JSON error bodies fall back to response text."""
    resp = Mock()
    resp.status_code = 502
    resp.text = "Bad gateway"
    resp.json.side_effect = ValueError("no json")
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(GitPlatformError, match="502: Bad gateway"):
            adapter.get_pr("owner/repo", 3)


def test_transport_error_raises(adapter: GitHubAdapter) -> None:
    """Connection failures are reported as GitPlatformError."""
    with patch.object(adapter._session, "request", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(GitPlatformError, match="refused"):
            adapter.get_pr("owner/repo", 3)


def test_update_pr_sends_title_and_body(adapter: GitHubAdapter) -> None:
    """update_pr PATCHes title and body in a single call."""
    data = {**PR_DATA, "title": "Login form", "body": "new body"}
    with patch.object(adapter._session, "request", return_value=_response(200, data)) as req:
        pr = adapter.update_pr("owner/repo", 3, title="Login form", body="new body")

    req.assert_called_once()
    assert req.call_args[0][0] == "PATCH"
    assert req.call_args[0][1].endswith("/repos/owner/repo/pulls/3")
    assert req.call_args[1].get("json") == {"title": "Login form", "body": "new body"}
    assert pr.title == "Login form"
    assert pr.body == "new body"


def test_update_pr_error_raises(adapter: GitHubAdapter) -> None:
    """update_pr raises GitPlatformError on API error."""
    resp = _response(422, {"message": "Validation Failed"})
    resp.text = "Unprocessable"
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(GitPlatformError, match="Validation Failed"):
            adapter.update_pr("owner/repo", 3, title="t", body="b")
