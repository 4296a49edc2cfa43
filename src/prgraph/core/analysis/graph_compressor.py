from __future__ import annotations

"""
Pass-Through Directory Compression.

A directory with exactly one child, whose parent has no other child,
adds nothing to the picture. Such nodes are folded into their parent,
whose label grows into a compound path ('src/' absorbing 'main' becomes
'src/main/'). Leaves and their ancestry are preserved.
"""

import dataclasses
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence, Set, Tuple

from prgraph.core.analysis.graph_builder import basename
from prgraph.domain.constants import DIRECTORY_MARKER, PATH_SEPARATOR, ROOT_ID
from prgraph.domain.errors import MalformedGraphError
from prgraph.domain.graph_models import Edge, Node, NodeKind, make_edge

logger = logging.getLogger(__name__)

_EdgeKey = Tuple[str, str]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def compress_graph(
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        collapse_into_root: bool = True,
) -> Tuple[List[Node], List[Edge]]:
    """
    Merge chains of pass-through directories into their parents.

    Candidates are re-evaluated against the updated graph after every
    merge until none is left, so running this twice changes nothing.

    Args:
        nodes: Node set satisfying the rooted forest invariant.
        edges: Edge set satisfying the rooted forest invariant.
        collapse_into_root: Allow the root to absorb its only child. When
            False, a node directly under the root is never merged.

    Returns:
        Tuple[List[Node], List[Edge]]: New node and edge lists. Surviving
        nodes keep their relative order; replacement edges are appended.

    Raises:
        MalformedGraphError: If a replacement edge would reuse the id of a
            different edge already in the graph.
    """
    graph = _MutableGraph(nodes, edges)
    merged = 0

    candidate = graph.next_removable(collapse_into_root)
    while candidate is not None:
        graph.merge_into_parent(candidate)
        merged += 1
        candidate = graph.next_removable(collapse_into_root)

    if merged:
        logger.debug(f"Compression merged {merged} pass-through directories.")
    return graph.nodes(), graph.edges()


def is_removable(
        node_id: str,
        nodes: Sequence[Node],
        edges: Sequence[Edge],
        collapse_into_root: bool = True,
) -> bool:
    """Report whether ``node_id`` would be merged into its parent."""
    return _MutableGraph(nodes, edges).is_removable(node_id, collapse_into_root)


def extend_label(label: str, segment: str, kind: NodeKind) -> str:
    """
    Append ``segment`` to a compound label.

    A directory keeps its trailing marker at the end: 'a/' + 'b' -> 'a/b/'.
    """
    if kind is NodeKind.DIRECTORY and label.endswith(DIRECTORY_MARKER):
        stem = label[: -len(DIRECTORY_MARKER)]
        return f"{stem}{PATH_SEPARATOR}{segment}{DIRECTORY_MARKER}"
    return f"{label}{PATH_SEPARATOR}{segment}"

# -----------------------------------------------------------------------------
# INTERNAL GRAPH VIEW
# -----------------------------------------------------------------------------

class _MutableGraph:
    """
    Working copy with adjacency indexes; inputs are never modified.

    Edges are keyed by their (source, target) pair. Distinct pairs can
    render to the same '{source}-{target}' id once sources skip merged
    ancestors, so ids are tracked separately and a clash is reported.
    """

    def __init__(self, nodes: Sequence[Node], edges: Sequence[Edge]):
        self._nodes: Dict[str, Node] = {node.id: node for node in nodes}
        self._edges: Dict[_EdgeKey, Edge] = {}
        self._edge_ids: Set[str] = set()
        self._outgoing: Dict[str, List[_EdgeKey]] = defaultdict(list)
        self._incoming: Dict[str, List[_EdgeKey]] = defaultdict(list)
        for edge in edges:
            self._add_edge(edge)

    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    def is_removable(self, node_id: str, collapse_into_root: bool) -> bool:
        node = self._nodes.get(node_id)
        if node is None or node.id == ROOT_ID or node.kind is not NodeKind.DIRECTORY:
            return False
        if len(self._outgoing[node_id]) != 1 or len(self._incoming[node_id]) != 1:
            return False

        parent_id = self._incoming[node_id][0][0]
        if parent_id not in self._nodes:
            return False
        if parent_id == ROOT_ID and not collapse_into_root:
            return False
        # A parent fanning out to siblings is a branch point and must stay.
        return len(self._outgoing[parent_id]) == 1

    def next_removable(self, collapse_into_root: bool) -> Optional[str]:
        for node_id in self._nodes:
            if self.is_removable(node_id, collapse_into_root):
                return node_id
        return None

    def merge_into_parent(self, node_id: str) -> None:
        in_edge = self._edges[self._incoming[node_id][0]]
        out_edge = self._edges[self._outgoing[node_id][0]]
        parent = self._nodes[in_edge.source]

        self._nodes[parent.id] = dataclasses.replace(
            parent, label=extend_label(parent.label, basename(node_id), parent.kind)
        )
        del self._nodes[node_id]

        self._drop_edge(in_edge)
        self._drop_edge(out_edge)
        self._add_edge(make_edge(parent.id, out_edge.target, out_edge.attributes))

    def _add_edge(self, edge: Edge) -> None:
        if edge.id in self._edge_ids:
            raise MalformedGraphError(
                f"Edge id '{edge.id}' is ambiguous after merging into '{edge.source}'.",
                node_id=edge.id,
            )
        key = (edge.source, edge.target)
        self._edges[key] = edge
        self._edge_ids.add(edge.id)
        self._outgoing[edge.source].append(key)
        self._incoming[edge.target].append(key)

    def _drop_edge(self, edge: Edge) -> None:
        key = (edge.source, edge.target)
        del self._edges[key]
        self._edge_ids.discard(edge.id)
        self._outgoing[edge.source].remove(key)
        self._incoming[edge.target].remove(key)
