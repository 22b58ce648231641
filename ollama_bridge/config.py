"""Configuration handling for ollama-bridge."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .util import deep_merge, env_first

CONFIG_FILENAME = ".ollama-bridge.yml"

DEFAULT_CONFIG: dict[str, Any] = {
    "host_url": "http://localhost:11434",
    "chat_model": "llama3.2",
    "embedding_model": "nomic-embed-text",
    "log_level": "INFO",
    "options": {},
}


class ConfigError(Exception):
    """Raised when configuration could not be loaded or parsed."""


@dataclass(frozen=True)
class BridgeConfig:
    host_url: str = DEFAULT_CONFIG["host_url"]
    chat_model: str = DEFAULT_CONFIG["chat_model"]
    embedding_model: str = DEFAULT_CONFIG["embedding_model"]
    log_level: str = DEFAULT_CONFIG["log_level"]
    options: dict[str, Any] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BridgeConfig":
        """Construct from a dictionary, applying defaults for missing keys."""
        merged = deep_merge(copy.deepcopy(DEFAULT_CONFIG), data)
        options = merged.get("options") or {}
        if not isinstance(options, dict):
            raise ConfigError("'options' must be a mapping.")
        return cls(
            host_url=str(merged.get("host_url")).rstrip("/"),
            chat_model=str(merged.get("chat_model")),
            embedding_model=str(merged.get("embedding_model")),
            log_level=str(merged.get("log_level", "INFO")),
            options=dict(options),
            raw=merged,
        )

    @property
    def effective_host_url(self) -> str:
        """Return the host URL, letting ``OLLAMA_HOST`` override the file."""
        return (env_first("OLLAMA_HOST", default=self.host_url) or self.host_url).rstrip("/")


def load_config(path: Path | None = None) -> BridgeConfig:
    """Load configuration from a file, applying defaults when missing."""
    config_path = path or Path(CONFIG_FILENAME)
    if not config_path.exists():
        return BridgeConfig.from_dict({})

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}") from exc

    if not isinstance(payload, dict):
        raise ConfigError("Configuration root must be a mapping.")

    return BridgeConfig.from_dict(payload)


def save_config(config: BridgeConfig, path: Path | None = None) -> None:
    """Write configuration back to disk."""
    config_path = path or Path(CONFIG_FILENAME)
    with config_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(config.raw or DEFAULT_CONFIG, handle, sort_keys=False)
