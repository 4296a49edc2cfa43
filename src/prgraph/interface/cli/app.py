from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration merge
(defaults, stored state, CLI overrides), input acquisition (GitHub or
offline JSON files), graph pipeline execution and output rendering.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

from prgraph.core.analysis.graph_renderer import graph_to_dict, render_graph_tree
from prgraph.core.pipeline.engine import run_graph_pipeline
from prgraph.domain.config import get_default_config, load_config, save_config, to_client_config
from prgraph.domain.constants import DEFAULT_REPOSITORY_NAME, GITHUB_TOKEN_ENV
from prgraph.domain.errors import GithubApiError, GraphError
from prgraph.domain.graph_models import ChangedFile, RepositoryEntry
from prgraph.infra.fs import load_json_file
from prgraph.infra.logging import LoggingConfig, configure_logging, get_logger
from prgraph.infra.network import (
    fetch_pr_files,
    fetch_pr_info,
    fetch_repository_tree,
    parse_pr_url,
)
from prgraph.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID_INPUT = 2
EXIT_NETWORK = 3
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional file)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    config = _merge_config(base_conf, cli_args.args_to_overrides(args))

    if args.dump_config:
        print(json.dumps(_masked(config), ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config:
        save_config(_persistable(config, args))
        if not args.pr_url and not args.files_path:
            return EXIT_OK

    if not args.pr_url and not args.files_path:
        print("ERROR: Provide a pull request URL or --files.", file=sys.stderr)
        return EXIT_INVALID_INPUT

    # 4. Input acquisition and pipeline execution
    try:
        changed_files, repo_entries, repository_name = _acquire_inputs(args, config)
        selected = args.selected_node_id if config["show_context"] else None
        result = run_graph_pipeline(
            changed_files,
            repository_entries=repo_entries,
            selected_node_id=selected,
            repository_name=repository_name,
            compress=bool(config["compress"]),
            collapse_into_root=bool(config["collapse_into_root"]),
        )
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except GraphError as e:
        logger.error(f"Graph construction failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except GithubApiError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_NETWORK
    except (OSError, ValueError) as e:
        logger.error(f"Invalid input: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(graph_to_dict(result), ensure_ascii=False, indent=2))
    else:
        print("\n".join(render_graph_tree(result)))

    return EXIT_OK

# -----------------------------------------------------------------------------
# INPUT ACQUISITION
# -----------------------------------------------------------------------------

def _acquire_inputs(
        args: Any,
        config: Dict[str, Any],
) -> Tuple[List[ChangedFile], Optional[List[RepositoryEntry]], str]:
    """Load changed files and repository listing from disk or GitHub."""
    if args.files_path:
        files_payload = load_json_file(args.files_path)
        if not isinstance(files_payload, list):
            raise ValueError(f"Expected a JSON list in '{args.files_path}'.")
        changed = [ChangedFile.from_github(item) for item in files_payload]

        entries: Optional[List[RepositoryEntry]] = None
        if args.repo_tree_path:
            entries = _entries_from_payload(load_json_file(args.repo_tree_path))
        return changed, entries, args.repository_name or DEFAULT_REPOSITORY_NAME

    ref = parse_pr_url(args.pr_url)
    client_config = to_client_config(config)

    changed = fetch_pr_files(ref, client_config)
    entries = None
    try:
        info = fetch_pr_info(ref, client_config)
        base_sha = (info.get("base") or {}).get("sha")
        if base_sha:
            entries = fetch_repository_tree(ref, base_sha, client_config)
    except GithubApiError as e:
        # The listing only enriches the graph; the changed files suffice.
        logger.warning(f"Repository listing unavailable, continuing without context: {e}")

    return changed, entries, args.repository_name or ref.repository


def _entries_from_payload(payload: Any) -> List[RepositoryEntry]:
    """Accept either a bare list or a GitHub '{"tree": [...]}' document."""
    if isinstance(payload, dict):
        payload = payload.get("tree")
    if not isinstance(payload, list):
        raise ValueError("Repository listing must be a JSON list or an object with a 'tree' list.")
    return [RepositoryEntry.from_github(item) for item in payload]

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge restricted to keys already present in ``base``."""
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out


def _masked(config: Dict[str, Any]) -> Dict[str, Any]:
    shown = dict(config)
    if shown.get("api_token"):
        shown["api_token"] = "***"
    return shown


def _persistable(config: Dict[str, Any], args: Any) -> Dict[str, Any]:
    """Settings to write back; an environment-provided token stays out of the file."""
    stored = dict(config)
    env_token = os.environ.get(GITHUB_TOKEN_ENV)
    if not args.api_token and env_token and stored.get("api_token") == env_token:
        stored["api_token"] = None
    return stored


if __name__ == "__main__":
    sys.exit(main())
