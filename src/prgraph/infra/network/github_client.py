from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

import requests

from prgraph.domain.config import GithubClientConfig
from prgraph.domain.errors import GithubApiError
from prgraph.domain.graph_models import ChangedFile, PullRequestRef, RepositoryEntry
from prgraph.infra.network.common import build_headers

logger = logging.getLogger(__name__)

_PR_URL_RE = re.compile(
    r"github\.com/(?P<org>[^/\s]+)/(?P<repo>[^/\s]+)/pull/(?P<id>\d+)"
)


def parse_pr_url(url: str) -> PullRequestRef:
    """
    Extract organization, repository and number from a pull request URL.

    Raises:
        ValueError: If ``url`` does not look like github.com/<org>/<repo>/pull/<id>.
    """
    match = _PR_URL_RE.search(url or "")
    if not match:
        raise ValueError(f"Not a GitHub pull request URL: '{url}'")
    return PullRequestRef(
        organization=match.group("org"),
        repository=match.group("repo"),
        pull_request_id=int(match.group("id")),
    )


def fetch_pr_info(ref: PullRequestRef, config: Optional[GithubClientConfig] = None) -> Dict[str, Any]:
    """Retrieve pull request metadata (base/head revisions, title, ...)."""
    cfg = config or GithubClientConfig()
    url = _pull_url(ref, cfg)
    logger.info(f"Fetching PR info: {ref.organization}/{ref.repository}#{ref.pull_request_id}")

    data = _get_json(url, cfg)
    if not isinstance(data, dict):
        raise GithubApiError("Malformed PR payload (root is not an object).", url=url)
    return data


def fetch_pr_files(ref: PullRequestRef, config: Optional[GithubClientConfig] = None) -> List[ChangedFile]:
    """
    Retrieve every file changed by a pull request.

    Pages are requested until one comes back with fewer than ``per_page``
    entries.
    """
    cfg = config or GithubClientConfig()
    url = f"{_pull_url(ref, cfg)}/files"

    files: List[ChangedFile] = []
    page = 1
    while True:
        data = _get_json(url, cfg, params={"per_page": cfg.per_page, "page": page})
        if not isinstance(data, list):
            raise GithubApiError(f"Malformed files payload on page {page}.", url=url)

        files.extend(ChangedFile.from_github(item) for item in data)
        logger.debug(f"Network: page {page} returned {len(data)} files.")

        if len(data) < cfg.per_page:
            break
        page += 1

    logger.info(f"Network: {len(files)} changed files retrieved.")
    return files


def fetch_repository_tree(
        ref: PullRequestRef,
        sha: str,
        config: Optional[GithubClientConfig] = None,
) -> List[RepositoryEntry]:
    """Retrieve the recursive file listing of the repository at ``sha``."""
    cfg = config or GithubClientConfig()
    url = f"{cfg.api_base}/repos/{ref.organization}/{ref.repository}/git/trees/{sha}"

    data = _get_json(url, cfg, params={"recursive": 1})
    if not isinstance(data, dict) or not isinstance(data.get("tree"), list):
        raise GithubApiError("Malformed tree payload.", url=url)

    if data.get("truncated"):
        logger.warning("Network: Repository listing was truncated by GitHub; context may be partial.")

    return [RepositoryEntry.from_github(item) for item in data["tree"]]


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _pull_url(ref: PullRequestRef, cfg: GithubClientConfig) -> str:
    return f"{cfg.api_base}/repos/{ref.organization}/{ref.repository}/pulls/{ref.pull_request_id}"


def _get_json(url: str, cfg: GithubClientConfig, params: Optional[Dict[str, Any]] = None) -> Any:
    """GET ``url`` and decode JSON, converting failures into GithubApiError."""
    try:
        response = requests.get(
            url,
            headers=build_headers(cfg.api_token),
            params=params,
            timeout=cfg.timeout,
        )
    except requests.exceptions.Timeout as e:
        logger.warning(f"Network: Request timed out after {cfg.timeout}s: {url}")
        raise GithubApiError(f"Request timed out: {url}", url=url) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Network: Communication error: {e}")
        raise GithubApiError(f"Communication error: {e}", url=url) from e

    if not response.ok:
        msg = f"GitHub API error: {response.status_code} {response.reason}"
        logger.error(f"Network: {msg} ({url})")
        raise GithubApiError(msg, status_code=response.status_code, url=url)

    try:
        return response.json()
    except ValueError as e:
        raise GithubApiError("Response body is not valid JSON.", status_code=response.status_code, url=url) from e
