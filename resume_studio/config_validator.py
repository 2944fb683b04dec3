"""Configuration validator for resume-studio startup checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .domain.rules import DEFAULT_RULE_IDS
from .domain.templates import known_template_ids

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""
    field: str
    message: str
    severity: Severity


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Args:
        raw_config: Raw config dict from YAML

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []

    # --- Storage ---
    storage = raw_config.get("storage", {})
    if not isinstance(storage, dict):
        errors.append(ConfigError(
            field="storage",
            message="storage must be a mapping",
            severity=Severity.ERROR,
        ))
        storage = {}
    path = storage.get("path", "")
    if not path or not isinstance(path, str):
        errors.append(ConfigError(
            field="storage.path",
            message="storage.path must be a non-empty string",
            severity=Severity.ERROR,
        ))
    key = storage.get("key", "")
    if not key or not isinstance(key, str):
        errors.append(ConfigError(
            field="storage.key",
            message="storage.key must be a non-empty string",
            severity=Severity.ERROR,
        ))

    # --- Default template ---
    template_id = (raw_config.get("defaults", {}) or {}).get("template_id", "minimalist")
    if template_id not in known_template_ids():
        errors.append(ConfigError(
            field="defaults.template_id",
            message=f"Unknown template {template_id!r}; expected one of {', '.join(known_template_ids())}",
            severity=Severity.ERROR,
        ))

    # --- Disabled rules ---
    disabled = (raw_config.get("evaluation", {}) or {}).get("disabled_rules", [])
    if not isinstance(disabled, list):
        errors.append(ConfigError(
            field="evaluation.disabled_rules",
            message=f"evaluation.disabled_rules must be a list, got {type(disabled).__name__}",
            severity=Severity.ERROR,
        ))
    else:
        for rule_id in disabled:
            if rule_id not in DEFAULT_RULE_IDS:
                errors.append(ConfigError(
                    field="evaluation.disabled_rules",
                    message=f"Unknown rule id {rule_id!r} will be ignored",
                    severity=Severity.WARNING,
                ))

    # --- Log level ---
    level = (raw_config.get("logging", {}) or {}).get("level", "WARNING")
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        errors.append(ConfigError(
            field="logging.level",
            message=f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level!r}",
            severity=Severity.ERROR,
        ))

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)
