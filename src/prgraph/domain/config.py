from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of user preferences as JSON in the user data
directory, merged over built-in defaults. The GitHub token may also come
from the environment; it is handed to the network layer through an
explicit GithubClientConfig, never read from ambient state by the core.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from prgraph.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_PER_PAGE,
    GITHUB_API_BASE,
    GITHUB_TOKEN_ENV,
)
from prgraph.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"


def get_config_file() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Configuration Models
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GithubClientConfig:
    """
    Settings of the GitHub REST client.

    Attributes:
        api_token: Optional personal access token.
        api_base: REST API root URL.
        timeout: Per-request timeout in seconds.
        per_page: Page size for paginated listings.
    """
    api_token: Optional[str] = None
    api_base: str = GITHUB_API_BASE
    timeout: float = 10
    per_page: int = DEFAULT_PER_PAGE


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Network
        "api_token": None,
        "api_base": GITHUB_API_BASE,
        "request_timeout": 10,
        "per_page": DEFAULT_PER_PAGE,

        # Graph shaping
        "compress": True,
        "collapse_into_root": True,
        "show_context": True,
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from disk merged over defaults.

    Unknown keys are ignored. Read or decode failures fall back to defaults.
    The GITHUB_API_KEY environment variable overrides the stored token.

    Args:
        config_file: Optional explicit path; defaults to the user data dir.

    Returns:
        Dict[str, Any]: Effective configuration.
    """
    path = config_file or get_config_file()
    config = get_default_config()

    if os.path.exists(path):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            settings = data.get("settings", data) if isinstance(data, dict) else None
            if isinstance(settings, dict):
                for key in config:
                    if key in settings:
                        config[key] = settings[key]
            else:
                logger.warning("Corrupted config file. Using defaults.")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config: {e}. Using defaults.")
    else:
        logger.debug("Config file not found. Using defaults.")

    env_token = os.environ.get(GITHUB_TOKEN_ENV)
    if env_token:
        config["api_token"] = env_token

    return config


def save_config(config: Dict[str, Any], config_file: Optional[str] = None) -> None:
    """
    Persist configuration to disk under a versioned envelope.

    Args:
        config: The configuration dictionary to save.
        config_file: Optional explicit path; defaults to the user data dir.
    """
    path = config_file or get_config_file()
    state = {"version": CURRENT_CONFIG_VERSION, "settings": config}
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")


def to_client_config(config: Dict[str, Any]) -> GithubClientConfig:
    """Project the network-related keys onto a GithubClientConfig."""
    defaults = GithubClientConfig()
    return GithubClientConfig(
        api_token=config.get("api_token") or None,
        api_base=str(config.get("api_base") or defaults.api_base).rstrip("/"),
        timeout=float(config.get("request_timeout") or defaults.timeout),
        per_page=int(config.get("per_page") or defaults.per_page),
    )
