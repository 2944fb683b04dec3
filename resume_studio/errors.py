"""Exception types shared across the store, tools, and CLI layers."""

from __future__ import annotations

from typing import Any, Dict, Optional


class ResumeStudioError(Exception):
    """Base error with a stable code for callers that map errors to output."""

    code = "RESUME_STUDIO_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class StaleReferenceError(ResumeStudioError):
    """A command referenced a resume, version, section, item, or field that no longer exists."""

    code = "STALE_REFERENCE"


class InvalidPatchError(ResumeStudioError):
    """A command patch did not validate against the document model."""

    code = "INVALID_PATCH"


class ExportError(ResumeStudioError):
    """An export collaborator could not produce its output."""

    code = "EXPORT_FAILED"
