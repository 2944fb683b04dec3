"""Tools that wrap the domain and store for callers needing file I/O."""

from .ats_evaluator import ATSEvaluateTool
from .base import BaseTool, ToolResult
from .export_resume import ExportResumeTool

__all__ = ["ATSEvaluateTool", "BaseTool", "ExportResumeTool", "ToolResult"]
