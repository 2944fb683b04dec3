"""Configuration loading for resume-studio."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .store.persistence import DEFAULT_STORAGE_KEY

STORAGE_PATH_ENV = "RESUME_STUDIO_STORAGE_PATH"

DEFAULT_CONFIG: Dict[str, Any] = {
    "storage": {
        "path": "~/.resume-studio/store.json",
        "key": DEFAULT_STORAGE_KEY,
    },
    "defaults": {
        "template_id": "minimalist",
    },
    "evaluation": {
        "disabled_rules": [],
    },
    "logging": {
        "level": "WARNING",
    },
}


@dataclass
class AppConfig:
    """Typed view of the merged configuration."""
    storage_path: Path
    storage_key: str = DEFAULT_STORAGE_KEY
    default_template_id: str = "minimalist"
    disabled_rules: List[str] = field(default_factory=list)
    log_level: str = "WARNING"


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path) as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must be a mapping: {path}")
        return data


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(base_value, value)
        else:
            merged[key] = value
    return merged


def load_raw_config(config_path: Optional[str] = None, config_dir: str = "config") -> dict:
    """Load raw configuration dictionary.

    Priority order (later wins):
    1. built-in defaults
    2. config/config.yaml (template/defaults)
    3. config/config.local.yaml (user's local overrides)

    An explicit *config_path* replaces both files and must exist.
    """
    merged = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        merged = _deep_merge(merged, _load_yaml(path))
    else:
        base_dir = Path(config_dir)
        merged = _deep_merge(merged, _load_yaml(base_dir / "config.yaml"))
        merged = _deep_merge(merged, _load_yaml(base_dir / "config.local.yaml"))

    env_path = os.environ.get(STORAGE_PATH_ENV, "")
    if env_path:
        merged = _deep_merge(merged, {"storage": {"path": env_path}})
    return merged


def load_config(raw: Optional[dict] = None) -> AppConfig:
    """Build an :class:`AppConfig` from a raw (already validated) mapping."""
    data = raw if raw is not None else load_raw_config()
    storage = data.get("storage", {}) or {}
    defaults = data.get("defaults", {}) or {}
    evaluation = data.get("evaluation", {}) or {}
    logging_cfg = data.get("logging", {}) or {}

    return AppConfig(
        storage_path=Path(str(storage.get("path", DEFAULT_CONFIG["storage"]["path"]))).expanduser(),
        storage_key=storage.get("key", DEFAULT_STORAGE_KEY),
        default_template_id=defaults.get("template_id", "minimalist"),
        disabled_rules=list(evaluation.get("disabled_rules", []) or []),
        log_level=str(logging_cfg.get("level", "WARNING")).upper(),
    )
