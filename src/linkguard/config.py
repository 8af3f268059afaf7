"""Configuration loader for LinkGuard."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

# Mapping of environment variable names to config api_keys entries.
# Later entries win, so GEMINI_API_KEY takes priority over API_KEY.
_ENV_KEY_MAP: list[tuple[str, str]] = [
    ("API_KEY", "gemini"),
    ("GEMINI_API_KEY", "gemini"),
]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default.yaml"

LOCAL_CONFIG_PATH = Path.cwd() / "config" / "local.yaml"


@dataclass(frozen=True)
class RuleTables:
    """Read-only lookup tables consumed by the heuristic rules.

    Order matters: TLD suffixes are matched first-hit in table order and
    matched obfuscation characters are reported in table order.
    """

    shorteners: tuple[str, ...]
    obfuscation_chars: tuple[str, ...]
    high_risk_tlds: tuple[str, ...]

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> RuleTables:
        """Build rule tables from the ``rules`` section of a config dict.

        Args:
            config: The loaded configuration dictionary.

        Returns:
            RuleTables with hostnames and suffixes lowercased.
        """
        rules = config.get("rules", {})
        return cls(
            shorteners=tuple(s.lower() for s in rules.get("url_shorteners", [])),
            obfuscation_chars=tuple(str(c) for c in rules.get("obfuscation_chars", [])),
            high_risk_tlds=tuple(t.lower() for t in rules.get("high_risk_tlds", [])),
        )


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override dict into base dict."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML files.

    Loads the bundled default config, then merges with a local override file
    (config/local.yaml in the working directory) and a user-specified path.

    Args:
        config_path: Optional path to a config YAML file. If provided,
            it is merged on top of the default config.

    Returns:
        Merged configuration dictionary.

    Raises:
        FileNotFoundError: If ``config_path`` is given but does not exist.
        yaml.YAMLError: If any config file is not valid YAML.
    """
    config = _read_yaml(DEFAULT_CONFIG_PATH)

    if LOCAL_CONFIG_PATH.exists():
        config = _deep_merge(config, _read_yaml(LOCAL_CONFIG_PATH))

    if config_path is not None:
        config = _deep_merge(config, _read_yaml(Path(config_path)))

    # Environment variables have the highest priority for API keys.
    api_keys = config.setdefault("api_keys", {})
    for env_var, key_name in _ENV_KEY_MAP:
        value = os.getenv(env_var, "")
        if value:
            api_keys[key_name] = value

    return config


def get_api_key(config: dict[str, Any], provider: str) -> str:
    """Retrieve an API key from config, returning empty string if missing.

    Args:
        config: The loaded configuration dictionary.
        provider: Name of the advisory provider (e.g., 'gemini').

    Returns:
        The API key string, or empty string if not configured.
    """
    return config.get("api_keys", {}).get(provider) or ""
