from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the graph workflow:
1. Builds the directory forest from changed files (plus optional context).
2. Collapses pass-through directory chains.
3. Verifies the rooted forest invariant.
4. Orders nodes by depth and path for stable layout.

The pipeline is pure: it performs no I/O and every call returns fresh
collections.
"""

import logging
from typing import Optional, Sequence

from prgraph.core.analysis.graph_builder import build_graph
from prgraph.core.analysis.graph_compressor import compress_graph
from prgraph.core.analysis.node_orderer import check_forest, order_nodes
from prgraph.domain.constants import DEFAULT_REPOSITORY_NAME
from prgraph.domain.graph_models import ChangedFile, GraphResult, RepositoryEntry

logger = logging.getLogger(__name__)


def run_graph_pipeline(
        changed_files: Sequence[ChangedFile],
        repository_entries: Optional[Sequence[RepositoryEntry]] = None,
        selected_node_id: Optional[str] = None,
        *,
        repository_name: str = DEFAULT_REPOSITORY_NAME,
        compress: bool = True,
        collapse_into_root: bool = True,
) -> GraphResult:
    """
    Execute the full graph pipeline.

    Args:
        changed_files: Files touched by the pull request.
        repository_entries: Optional listing of the base revision.
        selected_node_id: Optional node to show sibling context around.
        repository_name: Label of the root node.
        compress: Merge pass-through directories when True.
        collapse_into_root: Allow the root to absorb its only child.

    Returns:
        GraphResult: Ordered nodes and their edges.

    Raises:
        InvalidInputError: When the input cannot form a tree.
        MalformedGraphError: When an intermediate graph breaks the forest
            invariant.
    """
    logger.info(f"Graph pipeline started for {len(changed_files)} changed files.")

    # -------------------------------------------------------------------------
    # 1) Construction
    # -------------------------------------------------------------------------
    nodes, edges = build_graph(
        changed_files,
        repository_entries=repository_entries,
        selected_node_id=selected_node_id,
        repository_name=repository_name,
    )

    # -------------------------------------------------------------------------
    # 2) Compression
    # -------------------------------------------------------------------------
    if compress:
        before = len(nodes)
        nodes, edges = compress_graph(nodes, edges, collapse_into_root=collapse_into_root)
        logger.debug(f"Compression: {before} -> {len(nodes)} nodes.")

    # -------------------------------------------------------------------------
    # 3) Validation & Ordering
    # -------------------------------------------------------------------------
    check_forest(nodes, edges)
    ordered = order_nodes(nodes, edges)

    logger.info(f"Graph pipeline finished: {len(ordered)} nodes, {len(edges)} edges.")
    return GraphResult(nodes=tuple(ordered), edges=tuple(edges))
