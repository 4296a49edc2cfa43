from __future__ import annotations

"""
Unit tests for Node Ordering.

Verifies depth computation, depth-then-path ordering, independence from
input order, and fail-fast detection of malformed graphs.
"""

import random

import pytest

from prgraph.core.analysis.graph_builder import build_graph
from prgraph.core.analysis.graph_compressor import compress_graph
from prgraph.core.analysis.node_orderer import check_forest, node_depths, order_nodes
from prgraph.domain.constants import ROOT_ID
from prgraph.domain.errors import MalformedGraphError
from prgraph.domain.graph_models import ChangedFile, Node, NodeKind, make_edge


def _dir(node_id):
    return Node(node_id, NodeKind.DIRECTORY, node_id.split("/")[-1] + "/")


def _file(node_id):
    return Node(node_id, NodeKind.FILE, node_id.split("/")[-1])


ROOT = Node(ROOT_ID, NodeKind.ROOT, "repo")

# -----------------------------------------------------------------------------
# DEPTHS AND ORDER
# -----------------------------------------------------------------------------

def test_depths_follow_parent_chain():
    nodes, edges = build_graph([ChangedFile("a/b/c.txt"), ChangedFile("d.txt")])
    depths = node_depths(nodes, edges)
    assert depths == {ROOT_ID: 0, "a": 1, "a/b": 2, "a/b/c.txt": 3, "d.txt": 1}


def test_order_by_depth_then_path():
    nodes, edges = build_graph([
        ChangedFile("z/y.txt"),
        ChangedFile("B.txt"),
        ChangedFile("a/x.txt"),
        ChangedFile("a/b/c.txt"),
    ])
    ordered = [n.id for n in order_nodes(nodes, edges)]
    assert ordered == [ROOT_ID, "a", "B.txt", "z", "a/b", "a/x.txt", "z/y.txt", "a/b/c.txt"]


def test_order_after_compression_uses_new_depths():
    nodes, edges = compress_graph(*build_graph([ChangedFile("top.md"), ChangedFile("a/b/c/d.txt")]))
    ordered = order_nodes(nodes, edges)
    assert [(n.id, n.label) for n in ordered] == [
        (ROOT_ID, "repo"),
        ("a", "a/b/c/"),
        ("top.md", "top.md"),
        ("a/b/c/d.txt", "d.txt"),
    ]


def test_order_independent_of_input_order():
    nodes, edges = build_graph([
        ChangedFile("src/main.py"),
        ChangedFile("src/Main.txt"),
        ChangedFile("docs/README"),
        ChangedFile("docs/readme"),
        ChangedFile("lib/x/y/z.c"),
    ])
    expected = [n.id for n in order_nodes(nodes, edges)]

    rng = random.Random(1234)
    for _ in range(20):
        shuffled_nodes = list(nodes)
        shuffled_edges = list(edges)
        rng.shuffle(shuffled_nodes)
        rng.shuffle(shuffled_edges)
        assert [n.id for n in order_nodes(shuffled_nodes, shuffled_edges)] == expected

    assert expected.index("docs/README") < expected.index("docs/readme")


def test_order_returns_new_list():
    nodes, edges = build_graph([ChangedFile("b.txt"), ChangedFile("a.txt")])
    ordered = order_nodes(nodes, edges)
    assert ordered is not nodes
    assert [n.id for n in nodes] == [ROOT_ID, "b.txt", "a.txt"]

# -----------------------------------------------------------------------------
# MALFORMED GRAPHS
# -----------------------------------------------------------------------------

def test_cycle_detected():
    nodes = [ROOT, _dir("a"), _dir("b")]
    edges = [make_edge("a", "b"), make_edge("b", "a")]
    with pytest.raises(MalformedGraphError) as exc_info:
        node_depths(nodes, edges)
    assert exc_info.value.node_id in {"a", "b"}


def test_self_loop_detected():
    nodes = [ROOT, _dir("a")]
    with pytest.raises(MalformedGraphError):
        order_nodes(nodes, [make_edge("a", "a")])


def test_unreachable_node_detected():
    nodes = [ROOT, _dir("orphan"), _file("orphan/f.txt")]
    edges = [make_edge("orphan", "orphan/f.txt")]
    with pytest.raises(MalformedGraphError) as exc_info:
        order_nodes(nodes, edges)
    assert exc_info.value.node_id == "orphan"


def test_multiple_parents_detected():
    nodes = [ROOT, _dir("a"), _file("f.txt")]
    edges = [make_edge(ROOT_ID, "a"), make_edge(ROOT_ID, "f.txt"), make_edge("a", "f.txt")]
    with pytest.raises(MalformedGraphError) as exc_info:
        node_depths(nodes, edges)
    assert exc_info.value.node_id == "f.txt"


def test_unknown_edge_source_detected():
    nodes = [ROOT, _file("f.txt")]
    with pytest.raises(MalformedGraphError):
        node_depths(nodes, [make_edge("ghost", "f.txt")])


def test_check_forest_accepts_builder_output(sample_changed_files, sample_repository):
    nodes, edges = build_graph(
        sample_changed_files, sample_repository, selected_node_id="src/core/engine.py"
    )
    check_forest(nodes, edges)


@pytest.mark.parametrize("nodes,edges", [
    ([ROOT, ROOT], []),
    ([_file("f.txt")], []),
    ([ROOT, _file("f.txt")], [make_edge(ROOT_ID, "f.txt"), make_edge(ROOT_ID, "f.txt")]),
    ([ROOT, _file("f.txt")], [make_edge(ROOT_ID, "missing.txt")]),
    ([ROOT, _file("f.txt")], [make_edge("f.txt", ROOT_ID)]),
])
def test_check_forest_rejects_violations(nodes, edges):
    with pytest.raises(MalformedGraphError):
        check_forest(nodes, edges)
