"""Internal rule battery for the ATS evaluator."""

from .document_view import DocumentView, build_view, document_text
from .rule_runner import (
    CATEGORY_ORDER,
    COMPLETENESS,
    CONTENT_QUALITY,
    DEFAULT_RULE_IDS,
    PARSEABILITY,
    PENALTIES,
    STYLE,
    Issue,
    RuleRunner,
    Severity,
    build_default_runner,
)

__all__ = [
    "DocumentView",
    "build_view",
    "document_text",
    "CATEGORY_ORDER",
    "COMPLETENESS",
    "CONTENT_QUALITY",
    "DEFAULT_RULE_IDS",
    "PARSEABILITY",
    "PENALTIES",
    "STYLE",
    "Issue",
    "RuleRunner",
    "Severity",
    "build_default_runner",
]
