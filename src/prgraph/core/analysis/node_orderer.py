from __future__ import annotations

"""
Deterministic Node Ordering.

Orders nodes by distance from the root and then by path so that layout
engines receive identical input for identical graphs. Depth is computed
by an iterative walk up the parent chain guarded by a visited set; a
cycle or a dangling chain is reported instead of looping.
"""

import logging
from collections import Counter
from typing import Dict, List, Sequence

from prgraph.core.analysis.paths_sort import path_sort_key
from prgraph.domain.constants import ROOT_ID
from prgraph.domain.errors import MalformedGraphError
from prgraph.domain.graph_models import Edge, Node

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def node_depths(nodes: Sequence[Node], edges: Sequence[Edge]) -> Dict[str, int]:
    """
    Compute the number of edge hops between each node and the root.

    Raises:
        MalformedGraphError: If a node has several parents, an edge starts
            at an unknown node, the parent chain loops, or a non-root node
            cannot reach the root.
    """
    node_ids = {node.id for node in nodes}
    parent_of = _parent_index(node_ids, edges)

    depths: Dict[str, int] = {}
    for node in nodes:
        if node.id in depths:
            continue

        # Walk up until a node of known depth or a parentless node.
        chain: List[str] = []
        visited = set()
        current = node.id
        while current not in depths:
            if current in visited:
                raise MalformedGraphError(
                    f"Cycle detected in parent chain of '{node.id}' at '{current}'.",
                    node_id=current,
                )
            visited.add(current)
            chain.append(current)
            parent = parent_of.get(current)
            if parent is None:
                if current != ROOT_ID:
                    raise MalformedGraphError(
                        f"Node '{current}' is not connected to the root.",
                        node_id=current,
                    )
                depths[current] = 0
                chain.pop()
                break
            current = parent

        base = depths[current]
        for offset, node_id in enumerate(reversed(chain), start=1):
            depths[node_id] = base + offset

    return depths


def order_nodes(nodes: Sequence[Node], edges: Sequence[Edge]) -> List[Node]:
    """
    Sort nodes by ascending depth, then path order of their ids.

    Ids folding to the same path ('README' and 'readme') fall back to a raw
    string comparison so the result never depends on input order.
    """
    depths = node_depths(nodes, edges)
    return sorted(
        nodes,
        key=lambda node: (depths[node.id], path_sort_key(node.id), node.id),
    )


def check_forest(nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
    """
    Verify the rooted forest invariant.

    Raises:
        MalformedGraphError: On duplicate node or edge ids, a missing or
            parented root, an edge touching an unknown node, or any node
            with more than one parent or no path to the root.
    """
    node_counts = Counter(node.id for node in nodes)
    for node_id, count in node_counts.items():
        if count > 1:
            raise MalformedGraphError(f"Duplicate node id '{node_id}'.", node_id=node_id)

    edge_counts = Counter(edge.id for edge in edges)
    for edge_id, count in edge_counts.items():
        if count > 1:
            raise MalformedGraphError(f"Duplicate edge id '{edge_id}'.", node_id=edge_id)

    if ROOT_ID not in node_counts:
        raise MalformedGraphError("Graph has no root node.", node_id=ROOT_ID)

    for edge in edges:
        if edge.target not in node_counts:
            raise MalformedGraphError(
                f"Edge '{edge.id}' points to unknown node '{edge.target}'.",
                node_id=edge.target,
            )
        if edge.target == ROOT_ID:
            raise MalformedGraphError("Root node has an incoming edge.", node_id=ROOT_ID)

    node_depths(nodes, edges)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _parent_index(node_ids: set, edges: Sequence[Edge]) -> Dict[str, str]:
    """Map each edge target to its single source."""
    parent_of: Dict[str, str] = {}
    for edge in edges:
        if edge.source not in node_ids:
            raise MalformedGraphError(
                f"Edge '{edge.id}' starts at unknown node '{edge.source}'.",
                node_id=edge.source,
            )
        if edge.target in parent_of:
            raise MalformedGraphError(
                f"Node '{edge.target}' has more than one parent.",
                node_id=edge.target,
            )
        parent_of[edge.target] = edge.source
    return parent_of
