from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the prgraph CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="prgraph",
        description="Render the files changed by a GitHub pull request as a directory tree.",
    )

    # --- Input Sources ---
    p.add_argument(
        "pr_url",
        nargs="?",
        default=None,
        help="Pull request URL, e.g. https://github.com/org/repo/pull/42.",
    )
    p.add_argument(
        "--files",
        dest="files_path",
        default=None,
        help="Offline input: JSON list of changed files (GitHub 'pulls/files' format).",
    )
    p.add_argument(
        "--repo-tree",
        dest="repo_tree_path",
        default=None,
        help="Offline input: JSON repository listing (GitHub 'git/trees' format).",
    )
    p.add_argument(
        "--repo-name",
        dest="repository_name",
        default=None,
        help="Root label for offline input (defaults to 'repo').",
    )

    # --- Graph Shaping ---
    p.add_argument(
        "--select",
        dest="selected_node_id",
        default=None,
        help="Node id (path) whose sibling files are shown as context.",
    )
    p.add_argument(
        "--no-compress",
        action="store_true",
        help="Keep single-child directory chains expanded.",
    )
    p.add_argument(
        "--strict-root",
        action="store_true",
        help="Never merge top-level directories into the root node.",
    )
    p.add_argument(
        "--no-context",
        action="store_true",
        help="Do not add context files around the selected node.",
    )

    # --- Network ---
    p.add_argument(
        "--token",
        dest="api_token",
        default=None,
        help="GitHub API token (overrides GITHUB_API_KEY and stored config).",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore stored configuration.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the effective configuration. A token taken from GITHUB_API_KEY is not written.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print nodes and edges as JSON instead of a tree.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Flags left at their defaults produce no override, so stored settings
    keep precedence over an absent flag.
    """
    overrides: Dict[str, Any] = {}

    if args.api_token:
        overrides["api_token"] = args.api_token
    if args.no_compress:
        overrides["compress"] = False
    if args.strict_root:
        overrides["collapse_into_root"] = False
    if args.no_context:
        overrides["show_context"] = False

    return overrides
