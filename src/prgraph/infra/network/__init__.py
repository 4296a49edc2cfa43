from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the GitHub REST client feeding the graph pipeline.
"""

from prgraph.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT, build_headers
from prgraph.infra.network.github_client import (
    fetch_pr_files,
    fetch_pr_info,
    fetch_repository_tree,
    parse_pr_url,
)

__all__ = [
    "fetch_pr_info",
    "fetch_pr_files",
    "fetch_repository_tree",
    "parse_pr_url",
    "build_headers",
    "USER_AGENT",
    "DEFAULT_TIMEOUT",
]
