from __future__ import annotations

"""
Graph Renderer.

Converts a pipeline result into a visual ASCII tree for terminals, or into
plain dictionaries ready for JSON serialization by the rendering layer.
"""

from collections import defaultdict
from typing import Any, Dict, List, Sequence

from prgraph.core.analysis.paths_sort import path_sort_key
from prgraph.domain.constants import ROOT_ID, STATUS_MARKER
from prgraph.domain.graph_models import Edge, GraphResult, Node, NodeKind

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_graph_tree(result: GraphResult) -> List[str]:
    """
    Render the graph as indented ASCII lines.

    The root label comes first; children follow in path order using the
    standard connectors (├──, └──). Each entry is suffixed with its change
    marker: [A], [M], [D], [new] for new directories, (context) for
    context files.

    Args:
        result: Graph produced by the pipeline.

    Returns:
        List[str]: Visual lines of the tree.
    """
    by_id = {node.id: node for node in result.nodes}
    children: Dict[str, List[str]] = defaultdict(list)
    for edge in result.edges:
        children[edge.source].append(edge.target)

    lines: List[str] = []
    root = by_id.get(ROOT_ID)
    if root is None:
        return lines

    lines.append(_describe(root))
    _render_children(ROOT_ID, by_id, children, lines, prefix="")
    return lines


def graph_to_dict(result: GraphResult) -> Dict[str, Any]:
    """Serialize nodes and edges into JSON-compatible dictionaries."""
    return {
        "nodes": [node_to_dict(node) for node in result.nodes],
        "edges": [edge_to_dict(edge) for edge in result.edges],
    }


def node_to_dict(node: Node) -> Dict[str, Any]:
    return {
        "id": node.id,
        "kind": node.kind.value,
        "label": node.label,
        "attributes": dict(node.attributes),
    }


def edge_to_dict(edge: Edge) -> Dict[str, Any]:
    return {
        "id": edge.id,
        "source": edge.source,
        "target": edge.target,
        "attributes": dict(edge.attributes),
    }

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _render_children(
        parent_id: str,
        by_id: Dict[str, Node],
        children: Dict[str, List[str]],
        lines: List[str],
        prefix: str,
) -> None:
    entries: Sequence[str] = sorted(
        (child for child in children.get(parent_id, []) if child in by_id),
        key=lambda child: (path_sort_key(child), child),
    )
    total = len(entries)

    for i, child_id in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_describe(by_id[child_id])}")

        new_prefix = prefix + ("    " if is_last else "│   ")
        _render_children(child_id, by_id, children, lines, prefix=new_prefix)


def _describe(node: Node) -> str:
    """Label plus a short change marker."""
    if node.kind is NodeKind.FILE:
        marker = STATUS_MARKER.get(str(node.attributes.get("status", "")), "")
        return f"{node.label} {marker}".rstrip()
    if node.kind is NodeKind.CONTEXT_FILE:
        return f"{node.label} (context)"
    if node.kind is NodeKind.DIRECTORY and node.attributes.get("isNew"):
        return f"{node.label} [new]"
    return node.label
