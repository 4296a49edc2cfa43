from __future__ import annotations

"""
Pull Request Graph Data Models.

Immutable value objects exchanged between the fetching layer, the graph
pipeline and the renderers. Nodes and edges are never mutated in place;
transformations return new instances via ``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Tuple


# -----------------------------------------------------------------------------
# ENUMERATIONS
# -----------------------------------------------------------------------------

class ChangeStatus(str, Enum):
    """Change classification of a file within a pull request."""

    ADDED = "added"
    MODIFIED = "modified"
    REMOVED = "removed"

    @classmethod
    def from_github(cls, raw: str) -> "ChangeStatus":
        """
        Map a GitHub file status onto the three tracked variants.

        GitHub also reports 'renamed', 'copied', 'changed' and 'unchanged';
        those all surface as MODIFIED.
        """
        value = (raw or "").strip().lower()
        if value == cls.ADDED.value:
            return cls.ADDED
        if value == cls.REMOVED.value:
            return cls.REMOVED
        return cls.MODIFIED


class NodeKind(str, Enum):
    """Structural role of a node within the graph."""

    ROOT = "root"
    DIRECTORY = "directory"
    FILE = "file"
    CONTEXT_FILE = "context_file"

# -----------------------------------------------------------------------------
# INPUT RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ChangedFile:
    """
    One file touched by a pull request.

    Attributes:
        path: Repository-relative path using '/' separators.
        status: Change classification.
        additions: Added line count as reported upstream.
        deletions: Removed line count as reported upstream.
        changes: Total changed line count as reported upstream.
    """
    path: str
    status: ChangeStatus = ChangeStatus.MODIFIED
    additions: int = 0
    deletions: int = 0
    changes: int = 0

    @classmethod
    def from_github(cls, payload: Mapping[str, Any]) -> "ChangedFile":
        """Build a record from a GitHub 'pulls/{id}/files' entry."""
        path = payload.get("filename") or payload.get("path") or ""
        return cls(
            path=str(path),
            status=ChangeStatus.from_github(str(payload.get("status", ""))),
            additions=int(payload.get("additions") or 0),
            deletions=int(payload.get("deletions") or 0),
            changes=int(payload.get("changes") or 0),
        )


@dataclass(frozen=True)
class RepositoryEntry:
    """
    One entry of a full repository listing at a given revision.

    Attributes:
        path: Repository-relative path.
        kind: 'blob' for files, 'tree' for directories.
    """
    path: str
    kind: str = "blob"

    @property
    def is_file(self) -> bool:
        return self.kind == "blob"

    @classmethod
    def from_github(cls, payload: Mapping[str, Any]) -> "RepositoryEntry":
        """Build an entry from a GitHub 'git/trees' item."""
        return cls(path=str(payload.get("path") or ""), kind=str(payload.get("type") or "blob"))


@dataclass(frozen=True)
class PullRequestRef:
    """Coordinates of a pull request on GitHub."""

    organization: str
    repository: str
    pull_request_id: int

# -----------------------------------------------------------------------------
# GRAPH COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Node:
    """
    A vertex of the pull request graph.

    Attributes:
        id: Path of the file/directory, or ROOT_ID for the synthetic root.
        kind: Structural role.
        label: Display label (final segment, extended by compression).
        attributes: Opaque presentation metadata passed through unchanged.
    """
    id: str
    kind: NodeKind
    label: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_leaf_file(self) -> bool:
        return self.kind in (NodeKind.FILE, NodeKind.CONTEXT_FILE)


@dataclass(frozen=True)
class Edge:
    """
    A directed parent -> child link.

    Attributes:
        id: '{source}-{target}'.
        source: Parent node id.
        target: Child node id.
        attributes: Opaque presentation metadata.
    """
    id: str
    source: str
    target: str
    attributes: Dict[str, Any] = field(default_factory=dict)


def make_edge(source: str, target: str, attributes: Mapping[str, Any] | None = None) -> Edge:
    """Create an edge with the canonical '{source}-{target}' identifier."""
    return Edge(
        id=f"{source}-{target}",
        source=source,
        target=target,
        attributes=dict(attributes or {}),
    )


@dataclass(frozen=True)
class GraphResult:
    """
    Output of a complete pipeline run.

    Attributes:
        nodes: Nodes in depth-then-path order.
        edges: Parent -> child edges forming a forest rooted at ROOT_ID.
    """
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    def node(self, node_id: str) -> Node:
        """Return the node with ``node_id`` or raise KeyError."""
        for candidate in self.nodes:
            if candidate.id == node_id:
                return candidate
        raise KeyError(node_id)
