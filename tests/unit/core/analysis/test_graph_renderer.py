from __future__ import annotations

"""
Unit tests for the Graph Renderer.

Verifies ASCII connectors, change markers and JSON-ready serialization.
"""

import json

from prgraph.core.analysis.graph_renderer import graph_to_dict, render_graph_tree
from prgraph.core.pipeline.engine import run_graph_pipeline
from prgraph.domain.constants import ROOT_ID
from prgraph.domain.graph_models import ChangedFile, ChangeStatus, GraphResult


def test_render_tree_structure(sample_changed_files, sample_repository):
    result = run_graph_pipeline(
        sample_changed_files, sample_repository, "src/core/engine.py", repository_name="demo"
    )
    lines = render_graph_tree(result)

    assert lines == [
        "demo",
        "├── README.md [D]",
        "└── src/",
        "    ├── core/",
        "    │   ├── config.py (context)",
        "    │   ├── engine.py [M]",
        "    │   ├── models.py [A]",
        "    │   └── utils.py (context)",
        "    └── ui/widgets/",
        "        └── button.tsx [A]",
    ]


def test_render_compressed_root_label():
    result = run_graph_pipeline([ChangedFile("src/a.ts", ChangeStatus.ADDED)])
    assert render_graph_tree(result) == ["repo/src", "└── a.ts [A]"]


def test_render_empty_result():
    assert render_graph_tree(GraphResult()) == []


def test_graph_to_dict_is_json_serializable(sample_changed_files):
    result = run_graph_pipeline(sample_changed_files)
    payload = graph_to_dict(result)

    decoded = json.loads(json.dumps(payload))
    assert decoded["nodes"][0]["id"] == ROOT_ID
    assert decoded["nodes"][0]["kind"] == "root"
    assert len(decoded["edges"]) == len(result.edges)
    assert {"id", "source", "target", "attributes"} <= set(decoded["edges"][0])


def test_render_marks_new_directories(sample_changed_files, sample_repository):
    result = run_graph_pipeline(sample_changed_files, sample_repository, compress=False)
    lines = render_graph_tree(result)
    assert "        └── widgets/ [new]" in lines
    assert "    └── ui/" in lines
