from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures with changed-file and repository listings.
"""

import os
import sys
from typing import List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from prgraph.domain.graph_models import ChangedFile, ChangeStatus, RepositoryEntry  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_changed_files() -> List[ChangedFile]:
    """
    A pull request touching two top-level areas.

    Structure:
    /src
      /core
        engine.py   (modified)
        models.py   (added)
      /ui
        /widgets
          button.tsx (added, new directory)
    README.md       (removed)
    """
    return [
        ChangedFile("src/core/engine.py", ChangeStatus.MODIFIED, additions=3, deletions=1),
        ChangedFile("src/core/models.py", ChangeStatus.ADDED, additions=40),
        ChangedFile("src/ui/widgets/button.tsx", ChangeStatus.ADDED, additions=12),
        ChangedFile("README.md", ChangeStatus.REMOVED, deletions=30),
    ]


@pytest.fixture
def sample_repository() -> List[RepositoryEntry]:
    """Base revision listing matching ``sample_changed_files``."""
    return [
        RepositoryEntry("README.md"),
        RepositoryEntry("LICENSE"),
        RepositoryEntry("src", "tree"),
        RepositoryEntry("src/core", "tree"),
        RepositoryEntry("src/core/engine.py"),
        RepositoryEntry("src/core/utils.py"),
        RepositoryEntry("src/core/config.py"),
        RepositoryEntry("src/core/sub", "tree"),
        RepositoryEntry("src/core/sub/deep.py"),
        RepositoryEntry("src/ui", "tree"),
        RepositoryEntry("src/ui/app.tsx"),
    ]
