from __future__ import annotations

"""
Integration tests for the GitHub REST client.

Validates URL parsing, pagination, authentication headers, timeout
propagation and conversion of transport/HTTP failures into GithubApiError.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from prgraph.domain.config import GithubClientConfig
from prgraph.domain.errors import GithubApiError
from prgraph.domain.graph_models import ChangeStatus, PullRequestRef
from prgraph.infra.network import (
    fetch_pr_files,
    fetch_pr_info,
    fetch_repository_tree,
    parse_pr_url,
)

REF = PullRequestRef("acme", "widgets", 42)


def _response(payload, status_code=200):
    resp = MagicMock()
    resp.ok = status_code < 400
    resp.status_code = status_code
    resp.reason = "OK" if resp.ok else "Not Found"
    resp.json.return_value = payload
    return resp


def _files(count, offset=0):
    return [{"filename": f"f{offset + i}.py", "status": "added"} for i in range(count)]

# -----------------------------------------------------------------------------
# URL PARSING
# -----------------------------------------------------------------------------

def test_parse_pr_url():
    ref = parse_pr_url("https://github.com/acme/widgets/pull/42/files")
    assert ref == REF


@pytest.mark.parametrize("url", ["", "https://github.com/acme/widgets", "https://example.com/x/y/pull/z"])
def test_parse_pr_url_rejects_other_urls(url):
    with pytest.raises(ValueError):
        parse_pr_url(url)

# -----------------------------------------------------------------------------
# PULL REQUEST FILES
# -----------------------------------------------------------------------------

def test_fetch_pr_files_paginates_until_short_page():
    pages = [_response(_files(2)), _response(_files(2, 2)), _response(_files(1, 4))]
    cfg = GithubClientConfig(api_token="secret", per_page=2, timeout=7)

    with patch("requests.get", side_effect=pages) as mock_get:
        files = fetch_pr_files(REF, cfg)

    assert [f.path for f in files] == ["f0.py", "f1.py", "f2.py", "f3.py", "f4.py"]
    assert all(f.status is ChangeStatus.ADDED for f in files)
    assert mock_get.call_count == 3

    args, kwargs = mock_get.call_args
    assert args[0] == "https://api.github.com/repos/acme/widgets/pulls/42/files"
    assert kwargs["params"] == {"per_page": 2, "page": 3}
    assert kwargs["timeout"] == 7
    assert kwargs["headers"]["Authorization"] == "token secret"
    assert kwargs["headers"]["Accept"] == "application/vnd.github.v3+json"


def test_fetch_pr_files_full_last_page_requests_one_more():
    pages = [_response(_files(2)), _response([])]
    with patch("requests.get", side_effect=pages) as mock_get:
        files = fetch_pr_files(REF, GithubClientConfig(per_page=2))
    assert len(files) == 2
    assert mock_get.call_count == 2


def test_no_token_means_no_authorization_header():
    with patch("requests.get", return_value=_response([])) as mock_get:
        fetch_pr_files(REF)
    assert "Authorization" not in mock_get.call_args[1]["headers"]


def test_fetch_pr_files_http_error():
    with patch("requests.get", return_value=_response({"message": "x"}, 404)):
        with pytest.raises(GithubApiError) as exc_info:
            fetch_pr_files(REF)
    assert exc_info.value.status_code == 404


def test_fetch_pr_files_timeout():
    with patch("requests.get", side_effect=requests.exceptions.Timeout):
        with pytest.raises(GithubApiError):
            fetch_pr_files(REF)


def test_fetch_pr_files_malformed_payload():
    with patch("requests.get", return_value=_response({"not": "a list"})):
        with pytest.raises(GithubApiError):
            fetch_pr_files(REF)

# -----------------------------------------------------------------------------
# PULL REQUEST INFO AND REPOSITORY TREE
# -----------------------------------------------------------------------------

def test_fetch_pr_info():
    payload = {"base": {"sha": "abc123"}, "title": "Fix"}
    with patch("requests.get", return_value=_response(payload)) as mock_get:
        assert fetch_pr_info(REF) == payload
    assert mock_get.call_args[0][0] == "https://api.github.com/repos/acme/widgets/pulls/42"


def test_fetch_repository_tree():
    payload = {
        "sha": "abc123",
        "truncated": False,
        "tree": [{"path": "src", "type": "tree"}, {"path": "src/a.py", "type": "blob"}],
    }
    with patch("requests.get", return_value=_response(payload)) as mock_get:
        entries = fetch_repository_tree(REF, "abc123")

    assert [(e.path, e.kind) for e in entries] == [("src", "tree"), ("src/a.py", "blob")]
    args, kwargs = mock_get.call_args
    assert args[0].endswith("/repos/acme/widgets/git/trees/abc123")
    assert kwargs["params"] == {"recursive": 1}


def test_fetch_repository_tree_malformed():
    with patch("requests.get", return_value=_response({"sha": "x"})):
        with pytest.raises(GithubApiError):
            fetch_repository_tree(REF, "x")


def test_connection_error_wrapped():
    with patch("requests.get", side_effect=requests.exceptions.ConnectionError("down")):
        with pytest.raises(GithubApiError):
            fetch_pr_info(REF)
