"""Rule-runner for the ATS evaluation battery."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from .document_view import DocumentView

RuleFn = Callable[[DocumentView, Dict[str, Any]], List["Issue"]]


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


PENALTIES: Dict[Severity, float] = {
    Severity.LOW: 1.5,
    Severity.MEDIUM: 3,
    Severity.HIGH: 7,
    Severity.CRITICAL: 15,
}

PARSEABILITY = "Parse-ability"
CONTENT_QUALITY = "Content Quality"
COMPLETENESS = "Completeness"
STYLE = "Style"

CATEGORY_ORDER = (PARSEABILITY, CONTENT_QUALITY, COMPLETENESS, STYLE)


@dataclass(frozen=True)
class Issue:
    """One flagged deficiency with a suggested remedy."""

    id: str
    severity: Severity
    category: str
    title: str
    explanation: str
    impacted_section: str
    suggested_fix: str

    @property
    def penalty(self) -> float:
        return PENALTIES[self.severity]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


class RuleRunner:
    """Config-driven registry runner.

    *rules* is an ordered list of ``{"id": ..., "enabled": ..., "params": ...}``
    entries; issue order is rule order, then the order each rule emits.
    """

    def __init__(self, rules: List[Dict[str, Any]], registry: Dict[str, RuleFn]):
        self.rules = rules
        self.registry = registry

    @property
    def rule_ids(self) -> List[str]:
        return [str(cfg.get("id", "")) for cfg in self.rules]

    def run(self, view: DocumentView) -> List[Issue]:
        issues: List[Issue] = []
        for cfg in self.rules:
            if not bool(cfg.get("enabled", True)):
                continue

            rule_id = str(cfg.get("id", "")).strip()
            if not rule_id:
                continue
            rule_fn = self.registry.get(rule_id)
            if rule_fn is None:
                continue

            params = cfg.get("params", {}) or {}
            issues.extend(rule_fn(view, params))
        return issues

    def without(self, disabled: Iterable[str]) -> "RuleRunner":
        """Copy of this runner with the rules in *disabled* switched off."""
        disabled_ids = set(disabled)
        rules = [
            {**cfg, "enabled": False} if cfg.get("id") in disabled_ids else dict(cfg)
            for cfg in self.rules
        ]
        return RuleRunner(rules=rules, registry=self.registry)


DEFAULT_RULE_IDS = (
    "contact_email",
    "contact_phone",
    "identity_name",
    "linkedin_profile",
    "template_risk",
    "secure_links",
    "experience_depth",
    "experience_bullets",
    "summary_depth",
    "skill_density",
    "education_history",
    "project_evidence",
    "first_person",
    "buzzwords",
)


def build_default_runner(disabled: Optional[Iterable[str]] = None) -> RuleRunner:
    """Return runner with the production rule battery in category order."""
    from .checks import RULE_REGISTRY

    runner = RuleRunner(
        rules=[{"id": rule_id, "enabled": True} for rule_id in DEFAULT_RULE_IDS],
        registry=dict(RULE_REGISTRY),
    )
    if disabled:
        runner = runner.without(disabled)
    return runner
