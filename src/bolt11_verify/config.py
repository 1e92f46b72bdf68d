"""Settings for reaching a promptd server.

Each value is resolved from an explicit argument first, then environment
variables, then ~/.promptd/config.json, then the built-in default.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

_CONFIG_PATH = Path.home() / ".promptd" / "config.json"

DEFAULT_URL = "http://127.0.0.1:9333"


@dataclass(frozen=True)
class PromptdSettings:
    url: str
    auth_token: str | None = None


def _is_real_value(val: str | None) -> bool:
    """Check if an env var value is real (not a placeholder)."""
    if not val:
        return False
    return not val.startswith("${")


def _load_config(path: Path | None = None) -> dict:
    """Load the promptd config file if it exists."""
    path = path or _CONFIG_PATH
    try:
        if path.exists():
            data = json.loads(path.read_text())
            if isinstance(data, dict):
                return data
    except (json.JSONDecodeError, OSError):
        pass
    return {}


def _resolve(explicit: str | None, env_var: str, config_key: str, config: dict) -> str:
    if explicit and explicit.strip():
        return explicit.strip()
    val = os.environ.get(env_var, "")
    if _is_real_value(val):
        return val.strip()
    return str(config.get(config_key) or "").strip()


def resolve_promptd_settings(
    url: str | None = None,
    auth_token: str | None = None,
    config_path: Path | None = None,
) -> PromptdSettings:
    """Resolve the promptd URL and bearer token.

    Args:
        url: Explicit base URL, e.g. from a command-line flag.
        auth_token: Explicit bearer token.
        config_path: Override for ~/.promptd/config.json.

    Returns:
        Settings with trailing slashes removed from the URL.
    """
    config = _load_config(config_path)
    resolved_url = _resolve(url, "PROMPTD_URL", "url", config) or DEFAULT_URL
    token = _resolve(auth_token, "PROMPTD_AUTH_TOKEN", "authToken", config)
    return PromptdSettings(url=resolved_url.rstrip("/"), auth_token=token or None)
