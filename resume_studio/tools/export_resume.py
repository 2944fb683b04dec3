"""Export tool - write the active resume version to disk."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional

from ..domain.document import ResumeDocument
from ..domain.resume_writer import EXPORT_EXTENSIONS, export_file_name, render
from ..errors import ExportError
from ..store.resume_store import ResumeStore
from .base import BaseTool, ToolResult

logger = logging.getLogger(__name__)

Renderer = Callable[[ResumeDocument, str], str]


class ExportResumeTool(BaseTool):
    """Write the active resume document as plain text, Markdown, or JSON."""

    def __init__(self, store: ResumeStore, workspace_dir: str = ".", renderer: Renderer = render):
        super().__init__(workspace_dir)
        self.store = store
        self.renderer = renderer

    async def execute(self, path: Optional[str] = None, format: Optional[str] = None) -> ToolResult:
        """Render the active document to *path*; *format* wins over the suffix of *path*.

        Without *path* the file is named after the candidate, e.g. ``Jane_Doe_Resume.txt``.
        """
        try:
            document = self.store.active_document
            if document is None:
                raise ExportError("No active resume to export")

            fmt = (format or (Path(path).suffix if path else "") or "txt").lower().lstrip(".")
            if fmt not in EXPORT_EXTENSIONS:
                return ToolResult(
                    success=False,
                    output="",
                    error=f"Unsupported output format: {fmt}. Supported: .txt, .md, .json",
                )

            file_path = self._resolve_path(path or export_file_name(document, fmt))
            content = self.renderer(document, fmt)
            self._write_atomic(file_path, content)
            logger.info("Exported resume to %s (%s)", file_path, fmt)

            return ToolResult(
                success=True,
                output=f"Successfully exported resume to {file_path} ({len(content)} characters)",
                data={"path": str(file_path), "format": fmt, "size": len(content)},
            )

        except ExportError as e:
            return ToolResult(success=False, output="", error=e.message, data=e.to_dict())
        except Exception as e:
            logger.warning("Export failed: %s", e)
            return ToolResult(success=False, output="", error=str(e))

    @staticmethod
    def _write_atomic(file_path: Path, content: str) -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, file_path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
