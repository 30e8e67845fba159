"""Configuration for the trading journal.

Settings live in ``~/.config/tradejournal/config.toml``. A missing or
unreadable file means defaults; ``TRADEJOURNAL_API_URL`` overrides the
API root.
"""

import os
from pathlib import Path
from typing import Any, Optional

from tradejournal.remote import BaseJournalRemote, InMemoryJournalRemote, RestJournalRemote


CONFIG_DIR = Path.home() / ".config" / "tradejournal"
CONFIG_PATH = CONFIG_DIR / "config.toml"

API_URL_ENV = "TRADEJOURNAL_API_URL"

SERVER_MODES = ("rest", "memory")


def load_config(config_path: Optional[Path] = None) -> Optional[dict[str, Any]]:
    """Load the configuration file.

    Args:
        config_path: Path to read instead of the default location.

    Returns:
        Config dict or None if not configured.
    """
    import toml

    path = config_path or CONFIG_PATH
    if not path.exists():
        return None

    try:
        return toml.load(path)
    except (OSError, toml.TomlDecodeError):
        return None


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write a template configuration file.

    Args:
        config_path: Path to write instead of the default location.

    Returns:
        Path of the written file.
    """
    import toml

    path = config_path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    template = {
        "server": {
            "mode": "rest",  # rest or memory
            "api_url": RestJournalRemote.DEFAULT_BASE_URL,
            "timeout": RestJournalRemote.DEFAULT_TIMEOUT,
        },
        "display": {
            "currency": "$",
        },
    }

    with open(path, "w") as f:
        toml.dump(template, f)

    return path


def server_settings(config: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Resolve server settings with defaults and the env override.

    Args:
        config: Loaded configuration or None.

    Returns:
        Dict with ``mode``, ``api_url`` and ``timeout``.

    Raises:
        ValueError: If the configured mode is unknown.
    """
    server = (config or {}).get("server", {})

    mode = server.get("mode", "rest")
    if mode not in SERVER_MODES:
        raise ValueError(f"Unknown server mode {mode!r}, expected one of {SERVER_MODES}")

    api_url = os.environ.get(API_URL_ENV) or server.get("api_url") or RestJournalRemote.DEFAULT_BASE_URL
    timeout = float(server.get("timeout", RestJournalRemote.DEFAULT_TIMEOUT))

    return {"mode": mode, "api_url": api_url, "timeout": timeout}


def currency_symbol(config: Optional[dict[str, Any]]) -> str:
    """Currency symbol used when printing P&L."""
    return (config or {}).get("display", {}).get("currency", "$")


def build_remote(config: Optional[dict[str, Any]]) -> BaseJournalRemote:
    """Get the appropriate remote based on config.

    Args:
        config: Loaded configuration or None.

    Returns:
        REST remote, or an in-memory sandbox in ``memory`` mode.
    """
    settings = server_settings(config)
    if settings["mode"] == "memory":
        return InMemoryJournalRemote()
    return RestJournalRemote(base_url=settings["api_url"], timeout=settings["timeout"])
