from __future__ import annotations

import os
from typing import Optional

from . import client as _client
from .client import (
    DEFAULT_API_HOST,
    DEFAULT_API_VERSION,
    DEFAULT_DATASET,
    SanityClient,
    SanityConfig,
)

LOG_LEVEL_ENV = "SANITY_MCP_LOG_LEVEL"


def _get_bool_env(name: str) -> Optional[bool]:
    """Parse an optional boolean environment variable; unset or unknown -> None."""
    raw = os.getenv(name)
    if raw is None:
        return None
    val = raw.strip().lower()
    if val in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if val in {"0", "false", "f", "no", "n", "off"}:
        return False
    return None


def _get_str_env(name: str, default: str) -> str:
    return os.getenv(name, "").strip() or default


def load_env_config(*, use_dotenv: bool = True) -> SanityConfig:
    """Load Sanity connection settings from environment (optional .env)."""
    if use_dotenv:
        _client.load_dotenv()
    return SanityConfig(
        project_id=os.getenv("SANITY_PROJECT_ID", "").strip(),
        dataset=_get_str_env("SANITY_DATASET", DEFAULT_DATASET),
        api_version=_get_str_env("SANITY_API_VERSION", DEFAULT_API_VERSION),
        token=os.getenv("SANITY_TOKEN", "").strip() or None,
        use_cdn=_get_bool_env("SANITY_USE_CDN"),
        api_host=_get_str_env("SANITY_API_HOST", DEFAULT_API_HOST),
    )


def load_log_level(*, use_dotenv: bool = True) -> str:
    if use_dotenv:
        _client.load_dotenv()
    return _get_str_env(LOG_LEVEL_ENV, "INFO")


def create_client_from_env(**kwargs) -> SanityClient:
    """Create a SanityClient from environment variables; fails without a project id."""
    config = load_env_config()
    if not config.project_id:
        raise ValueError("SANITY_PROJECT_ID environment variable is required.")
    return SanityClient(config, **kwargs)


__all__ = ["load_env_config", "load_log_level", "create_client_from_env"]
