"""Job description keyword matching for the ATS job-match sub-score.

All functions operate on strings -- no file I/O.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import List, Optional

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MAX_JOB_MATCH = 15
NO_JOB_TEXT_CREDIT = 12
MIN_KEYWORD_LENGTH = 5
EXPECTED_MATCH_RATIO = 0.3

_SPLIT_RE = re.compile(r"\W+", re.ASCII)


@dataclass
class JobMatchResult:
    """Structured result from job matching."""

    score: int
    keywords: List[str] = field(default_factory=list)
    matched_keywords: List[str] = field(default_factory=list)
    job_text_supplied: bool = False

    @property
    def missing_keywords(self) -> List[str]:
        matched = set(self.matched_keywords)
        return [kw for kw in self.keywords if kw not in matched]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_job_keywords(job_text: str) -> List[str]:
    """Unique lower-cased tokens longer than four characters, in first-seen order."""
    seen: List[str] = []
    for token in _SPLIT_RE.split(job_text.lower()):
        if len(token) >= MIN_KEYWORD_LENGTH and token not in seen:
            seen.append(token)
    return seen


def match_job(document_text: str, job_text: Optional[str] = None) -> JobMatchResult:
    """Score how many job keywords appear in *document_text* (already lower-cased).

    Without job text the sub-score is a fixed baseline credit.  Job text with no
    usable keyword scores zero.
    """
    if job_text is None or not job_text.strip():
        return JobMatchResult(score=NO_JOB_TEXT_CREDIT)

    keywords = extract_job_keywords(job_text)
    if not keywords:
        return JobMatchResult(score=0, job_text_supplied=True)

    matched = [kw for kw in keywords if kw in document_text]
    raw = len(matched) / (len(keywords) * EXPECTED_MATCH_RATIO) * MAX_JOB_MATCH
    return JobMatchResult(
        score=min(MAX_JOB_MATCH, round_half_up(raw)),
        keywords=keywords,
        matched_keywords=matched,
        job_text_supplied=True,
    )


def format_match_report(result: JobMatchResult) -> str:
    """Render a :class:`JobMatchResult` as a short Markdown block."""
    lines = [f"## Job Match: {result.score}/{MAX_JOB_MATCH}", ""]
    if not result.job_text_supplied:
        lines.append("No job description supplied -- baseline credit applied.")
        return "\n".join(lines)

    lines.append(f"### Matching Keywords ({len(result.matched_keywords)}/{len(result.keywords)})")
    lines.append(", ".join(result.matched_keywords[:20]) or "(none)")
    missing = result.missing_keywords
    if missing:
        lines.append("")
        lines.append(f"### Missing Keywords ({len(missing)})")
        lines.append(", ".join(missing[:20]))
    return "\n".join(lines)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
