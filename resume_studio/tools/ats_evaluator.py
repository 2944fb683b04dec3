"""ATS (Applicant Tracking System) evaluation tool for the active resume."""

from __future__ import annotations

from typing import Iterable, Optional

from ..domain.ats_evaluator import evaluate, format_ats_report
from ..domain.job_matcher import format_match_report
from ..domain.rules import build_default_runner
from ..store.resume_store import ResumeStore
from .base import BaseTool, ToolResult


class ATSEvaluateTool(BaseTool):
    """Score the active resume version for ATS compatibility."""

    def __init__(
        self,
        store: ResumeStore,
        workspace_dir: str = ".",
        disabled_rules: Optional[Iterable[str]] = None,
    ):
        super().__init__(workspace_dir)
        self.store = store
        self.runner = build_default_runner(disabled_rules)

    async def execute(self, job_description: str = "", job_path: Optional[str] = None) -> ToolResult:
        """Evaluate the active version, optionally against job text or the file at *job_path*."""
        try:
            version = self.store.active_version
            if version is None:
                return ToolResult(success=False, output="", error="No active resume to evaluate")

            job_text: Optional[str] = job_description or None
            if job_path:
                file_path = self._resolve_path(job_path)
                if not file_path.exists():
                    return ToolResult(success=False, output="", error=f"File not found: {job_path}")
                job_text = file_path.read_text(encoding="utf-8")

            report = evaluate(version.document, version.settings, job_text=job_text, runner=self.runner)
            output = format_ats_report(report)

            data = report.to_dict()
            match = report.job_match
            if match is not None and match.job_text_supplied:
                output += "\n\n" + format_match_report(match)
                data["job_match"] = {
                    "keywords": match.keywords,
                    "matched": match.matched_keywords,
                    "missing": match.missing_keywords,
                }

            return ToolResult(success=True, output=output, data=data)
        except Exception as e:
            return ToolResult(success=False, output="", error=str(e))
