"""Configuration file management for financeflow."""

import copy
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CONFIG: dict[str, Any] = {
    "database": {
        "backend": "sqlite",
        "path": "",
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8000,
    },
    "logging": {
        "level": "INFO",
    },
}


@dataclass(frozen=True)
class Settings:
    """Immutable view of the loaded configuration."""

    backend: str = "sqlite"
    db_path: Path | None = None
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Settings":
        database = config.get("database", {})
        server = config.get("server", {})
        logging_section = config.get("logging", {})

        raw_path = database.get("path") or ""
        return cls(
            backend=database.get("backend", "sqlite"),
            db_path=Path(raw_path).expanduser() if raw_path else None,
            host=server.get("host", "127.0.0.1"),
            port=int(server.get("port", 8000)),
            log_level=str(logging_section.get("level", "INFO")).upper(),
        )


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "financeflow" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(copy.deepcopy(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` onto a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, falling back to defaults for a missing file or keys.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings built from the merged configuration.
    """
    try:
        user_config = load_config(config_path)
    except FileNotFoundError:
        user_config = {}

    return Settings.from_config(merge_config(DEFAULT_CONFIG, user_config))
