from __future__ import annotations

"""
Error Taxonomy.

Graph construction failures are deterministic and local: they are raised
to the caller with the offending identifier and never retried. Network
failures belong to the fetching layer and have their own type.
"""

from typing import Optional


class GraphError(Exception):
    """Base class for every failure raised by the graph pipeline."""

    def __init__(self, message: str, node_id: Optional[str] = None):
        super().__init__(message)
        self.node_id = node_id


class InvalidInputError(GraphError):
    """Raised when changed-file or repository records cannot form a tree."""


class MalformedGraphError(GraphError):
    """Raised when a node/edge set violates the rooted forest invariant."""


class GithubApiError(Exception):
    """Raised by the GitHub client on transport or HTTP status failures."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
