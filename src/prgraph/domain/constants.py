from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes graph identifiers, path conventions and the presentation
palette shared by the builder, renderer and CLI.
"""

from typing import Dict

CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# GRAPH IDENTIFIERS
# -----------------------------------------------------------------------------

ROOT_ID = "__ROOT__"
DEFAULT_REPOSITORY_NAME = "repo"
PATH_SEPARATOR = "/"
DIRECTORY_MARKER = "/"

# -----------------------------------------------------------------------------
# PRESENTATION PALETTE
# -----------------------------------------------------------------------------

STATUS_FILL: Dict[str, str] = {
    "added": "green",
    "removed": "red",
    "modified": "#eac32a",
}

STATUS_ICON: Dict[str, str] = {
    "added": "file-new.svg",
    "removed": "file-deleted.svg",
    "modified": "file-modified.svg",
}

STATUS_MARKER: Dict[str, str] = {
    "added": "[A]",
    "removed": "[D]",
    "modified": "[M]",
}

ROOT_FILL = "#404040"
ROOT_SIZE = 8

DIRECTORY_FILL = "#ececec"
DIRECTORY_NEW_FILL = "#004d2a"
DIRECTORY_ICON = "directory.svg"
DIRECTORY_NEW_ICON = "directory-new.svg"
DIRECTORY_SIZE = 10

FILE_SIZE = 10
FALLBACK_FILL = "black"

CONTEXT_FILE_FILL = "#484848"
CONTEXT_FILE_SIZE = 5
CONTEXT_EDGE_FILL = "#2a2a2a"
CONTEXT_EDGE_STYLE = "dotted"

# -----------------------------------------------------------------------------
# GITHUB API
# -----------------------------------------------------------------------------

GITHUB_API_BASE = "https://api.github.com"
GITHUB_ACCEPT_HEADER = "application/vnd.github.v3+json"
GITHUB_TOKEN_ENV = "GITHUB_API_KEY"
DEFAULT_PER_PAGE = 100
