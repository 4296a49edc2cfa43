from __future__ import annotations

"""
Pull Request Graph Builder.

Turns the flat list of files changed by a pull request into a directory
forest hanging off a synthetic root node. Optionally adds context files:
unchanged siblings living in the directory of the currently selected
node, taken from the full repository listing.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from prgraph.core.analysis import presentation
from prgraph.core.analysis.paths_sort import sort_paths
from prgraph.domain.constants import (
    DEFAULT_REPOSITORY_NAME,
    DIRECTORY_MARKER,
    PATH_SEPARATOR,
    ROOT_ID,
)
from prgraph.domain.errors import InvalidInputError
from prgraph.domain.graph_models import (
    ChangedFile,
    Edge,
    Node,
    NodeKind,
    RepositoryEntry,
    make_edge,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PATH HELPERS
# -----------------------------------------------------------------------------

def basename(path: str) -> str:
    """Final segment of ``path``."""
    return path.split(PATH_SEPARATOR)[-1]


def parent_directory(path: str) -> str:
    """All segments but the last; empty string for top-level entries."""
    return PATH_SEPARATOR.join(path.split(PATH_SEPARATOR)[:-1])


def directory_prefixes(paths: Iterable[str]) -> List[str]:
    """
    Collect every non-empty proper prefix of every path, deduplicated.

    'a/b/c.txt' contributes 'a' and 'a/b'. First-seen order is kept.
    """
    seen: Dict[str, None] = {}
    for path in paths:
        parts = path.split(PATH_SEPARATOR)[:-1]
        for index in range(len(parts)):
            seen.setdefault(PATH_SEPARATOR.join(parts[: index + 1]), None)
    return list(seen)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_graph(
        changed_files: Sequence[ChangedFile],
        repository_entries: Optional[Sequence[RepositoryEntry]] = None,
        selected_node_id: Optional[str] = None,
        repository_name: str = DEFAULT_REPOSITORY_NAME,
) -> Tuple[List[Node], List[Edge]]:
    """
    Build the uncompressed node and edge sets for a pull request.

    Args:
        changed_files: Files touched by the pull request; paths must be unique.
        repository_entries: Optional full listing of the base revision. Used
            to flag new directories and to derive context files.
        selected_node_id: Optional node to show context around. Without it
            no context files are produced.
        repository_name: Label of the root node.

    Returns:
        Tuple[List[Node], List[Edge]]: Root, directories (path order),
        changed files, context files; and one parent edge per non-root node.

    Raises:
        InvalidInputError: On empty or malformed paths, duplicates, or a path
            used both as a file and as a directory.
    """
    changed_paths = _validate_changed_files(changed_files)
    repo_entries = list(repository_entries or [])
    _validate_repository_entries(repo_entries)

    directories = sort_paths(directory_prefixes(changed_paths))
    clashes = set(directories) & set(changed_paths)
    if clashes:
        offending = sort_paths(clashes)[0]
        raise InvalidInputError(
            f"Path is used both as a changed file and as a directory: '{offending}'",
            node_id=offending,
        )

    repo_paths: Set[str] = {entry.path for entry in repo_entries}
    context_paths: List[str] = []
    if selected_node_id is not None:
        context_paths = _context_paths(
            changed_paths, set(directories), repo_entries, selected_node_id
        )

    # 1. Nodes
    nodes: List[Node] = [
        Node(
            id=ROOT_ID,
            kind=NodeKind.ROOT,
            label=repository_name,
            attributes=presentation.root_attributes(),
        )
    ]

    for directory in directories:
        is_new = bool(repo_entries) and directory not in repo_paths
        nodes.append(Node(
            id=directory,
            kind=NodeKind.DIRECTORY,
            label=basename(directory) + DIRECTORY_MARKER,
            attributes=presentation.directory_attributes(
                is_new, selected=directory == selected_node_id
            ),
        ))

    for record in changed_files:
        nodes.append(Node(
            id=record.path,
            kind=NodeKind.FILE,
            label=basename(record.path),
            attributes=presentation.file_attributes(
                record, selected=record.path == selected_node_id
            ),
        ))

    for path in context_paths:
        nodes.append(Node(
            id=path,
            kind=NodeKind.CONTEXT_FILE,
            label=basename(path),
            attributes=presentation.context_file_attributes(
                selected=path == selected_node_id
            ),
        ))

    # 2. Edges (one per non-root node, pointing from its parent directory)
    edges: List[Edge] = []
    for node in nodes[1:]:
        parent = parent_directory(node.id) or ROOT_ID
        attributes = (
            presentation.context_edge_attributes()
            if node.kind is NodeKind.CONTEXT_FILE
            else None
        )
        edges.append(make_edge(parent, node.id, attributes))

    logger.debug(
        f"Graph built: {len(directories)} directories, {len(changed_paths)} files, "
        f"{len(context_paths)} context files, {len(edges)} edges."
    )
    return nodes, edges

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _check_path(path: str, origin: str) -> None:
    """Reject paths that cannot be placed in the tree."""
    if not path:
        raise InvalidInputError(f"Empty path in {origin}.")
    segments = path.split(PATH_SEPARATOR)
    if segments[0] == ROOT_ID:
        raise InvalidInputError(f"Path collides with the reserved root id in {origin}: '{path}'", node_id=path)
    if "" in segments:
        raise InvalidInputError(f"Path has an empty segment in {origin}: '{path}'", node_id=path)


def _validate_changed_files(changed_files: Sequence[ChangedFile]) -> List[str]:
    paths: List[str] = []
    seen: Set[str] = set()
    for record in changed_files:
        _check_path(record.path, "changed files")
        if record.path in seen:
            raise InvalidInputError(f"Duplicate changed file: '{record.path}'", node_id=record.path)
        seen.add(record.path)
        paths.append(record.path)
    return paths


def _validate_repository_entries(entries: Sequence[RepositoryEntry]) -> None:
    for entry in entries:
        if not entry.path:
            raise InvalidInputError("Empty path in repository listing.")


def _context_paths(
        changed_paths: Sequence[str],
        directories: Set[str],
        repo_entries: Sequence[RepositoryEntry],
        selected_node_id: str,
) -> List[str]:
    """
    Select repository files sharing the selected node's directory.

    The directory must hold at least one changed file. Changed files and
    known directories are excluded; duplicates collapse.
    """
    target_dir = parent_directory(selected_node_id)
    touched_dirs = {parent_directory(path) for path in changed_paths}
    if target_dir not in touched_dirs:
        logger.debug(f"No changed files next to '{selected_node_id}'; no context added.")
        return []

    changed = set(changed_paths)
    found: Dict[str, None] = {}
    for entry in repo_entries:
        if not entry.is_file:
            continue
        path = entry.path
        if path in changed or path in directories or path.split(PATH_SEPARATOR)[0] == ROOT_ID:
            continue
        if "" in path.split(PATH_SEPARATOR):
            continue
        if parent_directory(path) == target_dir:
            found.setdefault(path, None)
    return sort_paths(found)
