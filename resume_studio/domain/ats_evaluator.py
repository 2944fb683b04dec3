"""Pure domain logic for ATS (Applicant Tracking System) evaluation.

``evaluate`` is a pure function of its inputs: no hidden state, no I/O, and
identical inputs give an identical report, issue order included.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .document import ResumeDocument, TemplateSettings
from .job_matcher import JobMatchResult, match_job
from .rules import (
    COMPLETENESS,
    CONTENT_QUALITY,
    PARSEABILITY,
    Issue,
    RuleRunner,
    build_default_runner,
    build_view,
)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

BASE_SCORE = 100

# category -> (ceiling, deduction per issue)
BREAKDOWN_WEIGHTS: Dict[str, tuple] = {
    PARSEABILITY: (40, 4),
    CONTENT_QUALITY: (30, 3.5),
    COMPLETENESS: (15, 2.5),
}


@dataclass(frozen=True)
class Breakdown:
    """Display sub-scores.

    Each value is derived from issue counts, not from the running score, so the
    four numbers need not add up to :attr:`ATSReport.score`.
    """

    parseability: int
    content: int
    completeness: int
    job_match: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "parseability": self.parseability,
            "content": self.content,
            "completeness": self.completeness,
            "job_match": self.job_match,
        }


@dataclass(frozen=True)
class ATSReport:
    """Structured result from ATS evaluation."""

    score: int
    issues: List[Issue] = field(default_factory=list)
    breakdown: Breakdown = field(default_factory=lambda: Breakdown(40, 30, 15, 12))
    job_match: Optional[JobMatchResult] = None

    def issues_in(self, category: str) -> List[Issue]:
        return [issue for issue in self.issues if issue.category == category]

    def issue_ids(self) -> List[str]:
        return [issue.id for issue in self.issues]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "issues": [issue.to_dict() for issue in self.issues],
            "breakdown": self.breakdown.to_dict(),
        }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def evaluate(
    document: ResumeDocument,
    settings: TemplateSettings,
    job_text: Optional[str] = None,
    runner: Optional[RuleRunner] = None,
) -> ATSReport:
    """Evaluate *document* rendered with *settings* against the rule battery.

    Returns an :class:`ATSReport` with a 0-100 score, the issues in rule order,
    and the category breakdown. Optionally accepts *job_text* for the job-match
    sub-score.
    """
    view = build_view(document, settings)
    issues = (runner or build_default_runner()).run(view)

    raw_score = BASE_SCORE - sum(issue.penalty for issue in issues)
    score = math.floor(max(0, min(BASE_SCORE, raw_score)))

    job_match = match_job(view.text, job_text)
    breakdown = Breakdown(
        parseability=_category_score(issues, PARSEABILITY),
        content=_category_score(issues, CONTENT_QUALITY),
        completeness=_category_score(issues, COMPLETENESS),
        job_match=job_match.score,
    )
    return ATSReport(score=int(score), issues=issues, breakdown=breakdown, job_match=job_match)


# ---------------------------------------------------------------------------
# Formatting report (pure string output)
# ---------------------------------------------------------------------------


def format_ats_report(report: ATSReport) -> str:
    """Render an :class:`ATSReport` as a human-readable Markdown report."""
    grade = _score_to_grade(report.score)
    bar = _score_bar(report.score)
    b = report.breakdown

    lines = [
        f"## ATS Score: {report.score}/100 {grade}",
        bar,
        "",
        "| Category      | Score |",
        "|---------------|-------|",
        f"| Parse-ability | {b.parseability:3d}/40 |",
        f"| Content       | {b.content:3d}/30 |",
        f"| Completeness  | {b.completeness:3d}/15 |",
        f"| Job Match     | {b.job_match:3d}/15 |",
    ]

    if report.issues:
        lines.append("")
        lines.append("### Issues")
        for i, issue in enumerate(report.issues, 1):
            lines.append(f"{i}. [{issue.severity.value}] {issue.id} {issue.title} ({issue.impacted_section})")
            lines.append(f"   - {issue.suggested_fix}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _category_score(issues: List[Issue], category: str) -> int:
    ceiling, per_issue = BREAKDOWN_WEIGHTS[category]
    count = sum(1 for issue in issues if issue.category == category)
    return math.floor(ceiling - per_issue * count)


def _score_to_grade(score: int) -> str:
    if score >= 90:
        return "Excellent"
    elif score >= 75:
        return "Good"
    elif score >= 60:
        return "Fair"
    else:
        return "Needs Work"


def _score_bar(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return f"[{'=' * filled}{' ' * (width - filled)}]"
