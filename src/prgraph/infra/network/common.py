from __future__ import annotations

from typing import Dict, Optional

from prgraph.domain.constants import GITHUB_ACCEPT_HEADER

USER_AGENT = "PRGraph-Client/1.0.0"
DEFAULT_TIMEOUT = 10


def build_headers(api_token: Optional[str] = None) -> Dict[str, str]:
    """Standard GitHub REST headers, authenticated when a token is known."""
    headers = {
        "Accept": GITHUB_ACCEPT_HEADER,
        "User-Agent": USER_AGENT,
    }
    if api_token:
        headers["Authorization"] = f"token {api_token}"
    return headers
