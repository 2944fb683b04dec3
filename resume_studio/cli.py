"""CLI - Command line interface for resume-studio."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import AppConfig, load_config, load_raw_config
from .config_validator import Severity, has_errors, validate_config
from .domain.item_shapes import SectionType
from .domain.templates import TEMPLATE_REGISTRY
from .store import CommandResult, JsonFileStorage, ResumeStore
from .tools import ATSEvaluateTool, ExportResumeTool

console = Console()
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-studio",
        description="resume-studio - structured resume editing and ATS scoring",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to configuration file (default: config/config.yaml + config/config.local.yaml)",
    )
    parser.add_argument(
        "--workspace", "-w",
        default=".",
        help="Workspace directory for exported files and job descriptions (default: current directory)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create a resume seeded with the sample document")
    new.add_argument("title", nargs="?", default="", help="Resume title")
    new.add_argument("--template", "-t", default=None, help="Template id")

    sub.add_parser("list", help="List resumes")
    sub.add_parser("templates", help="List templates with their ATS risk level")

    select = sub.add_parser("select", help="Select the current resume")
    select.add_argument("resume_id")

    delete = sub.add_parser("delete", help="Delete a resume")
    delete.add_argument("resume_id")

    fork = sub.add_parser("fork", help="Copy the active version into a new version")
    fork.add_argument("--name", default=None, help="Version name (default: V<n>.0)")

    add_section = sub.add_parser("add-section", help="Append a section to the active version")
    add_section.add_argument("type", choices=[t.value for t in SectionType if t is not SectionType.BASICS])
    add_section.add_argument("--title", default=None)

    settings = sub.add_parser("settings", help="Update template settings, e.g. template_id=executive")
    settings.add_argument("assignments", nargs="+", metavar="KEY=VALUE")

    score = sub.add_parser("score", help="Score the active version for ATS compatibility")
    score.add_argument("--job", default=None, help="File holding a job description")

    export = sub.add_parser("export", help="Export the active version")
    export.add_argument("--format", "-f", choices=["txt", "md", "json"], default="txt")
    export.add_argument("--output", "-o", default=None, help="Output path (default: <Name>_Resume.<ext>)")

    sub.add_parser("reset", help="Delete every resume and clear stored state")
    return parser


def parse_assignments(assignments: List[str]) -> Dict[str, Any]:
    """Turn ``key=value`` pairs into a patch; values are read as YAML scalars."""
    patch: Dict[str, Any] = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {assignment!r}")
        parsed = yaml.safe_load(value) if value else ""
        # "#2563eb" parses as a YAML comment
        patch[key.strip()] = value if parsed is None else parsed
    return patch


def _report(result: CommandResult, success: str) -> int:
    if result is CommandResult.APPLIED:
        console.print(success, style="green")
        return 0
    if result is CommandResult.NOT_FOUND:
        console.print("Nothing changed: the referenced resume, version, or section no longer exists.", style="yellow")
    else:
        console.print("Nothing changed: the values did not validate.", style="red")
    return 1


def _print_resumes(store: ResumeStore) -> None:
    state = store.state
    if not state.resumes:
        console.print("No resumes yet. Create one with: resume-studio new \"My Resume\"", style="dim")
        return

    table = Table(title="Resumes")
    table.add_column("", width=1)
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Versions", justify="right")
    table.add_column("Template")
    for resume in state.resumes:
        version = resume.find_version(resume.current_version_id)
        table.add_row(
            "*" if resume.id == state.current_resume_id else "",
            resume.id,
            resume.title,
            str(len(resume.versions)),
            version.settings.template_id if version else "-",
        )
    console.print(table)


def _print_templates() -> None:
    table = Table(title="Templates")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("ATS Risk")
    styles = {"SAFE": "green", "MEDIUM": "yellow", "RISKY": "red"}
    for template in TEMPLATE_REGISTRY:
        level = template.ats_risk_level.value
        table.add_row(template.id, template.name, template.category, f"[{styles[level]}]{level}[/]")
    console.print(table)


def run_command(args: argparse.Namespace, store: ResumeStore, config: AppConfig) -> int:
    """Dispatch one parsed command against *store*; returns the exit code."""
    if args.command == "new":
        resume_id = store.add_resume(args.title, args.template)
        console.print(f"Created resume {resume_id}", style="green")
        return 0
    if args.command == "list":
        _print_resumes(store)
        return 0
    if args.command == "templates":
        _print_templates()
        return 0
    if args.command == "select":
        return _report(store.select_resume(args.resume_id), f"Selected {args.resume_id}")
    if args.command == "delete":
        return _report(store.delete_resume(args.resume_id), f"Deleted {args.resume_id}")
    if args.command == "fork":
        return _report(store.fork_version(args.name), "Forked the active version")
    if args.command == "add-section":
        return _report(store.add_section(SectionType(args.type), args.title), f"Added {args.type} section")
    if args.command == "settings":
        try:
            patch = parse_assignments(args.assignments)
        except ValueError as e:
            console.print(f"Error: {e}", style="red")
            return 2
        return _report(store.update_settings(patch), "Settings updated")
    if args.command == "score":
        tool = ATSEvaluateTool(store, workspace_dir=args.workspace, disabled_rules=config.disabled_rules)
        result = asyncio.run(tool.execute(job_path=args.job))
        if not result.success:
            console.print(f"Error: {result.error}", style="red")
            return 1
        console.print(Markdown(result.output))
        return 0
    if args.command == "export":
        tool = ExportResumeTool(store, workspace_dir=args.workspace)
        result = asyncio.run(tool.execute(path=args.output, format=args.format))
        if not result.success:
            console.print(Panel(str(result.error), title="Export failed", style="red"))
            return 1
        console.print(result.output, style="green")
        return 0
    if args.command == "reset":
        store.reset()
        console.print("All resumes deleted.", style="yellow")
        return 0

    console.print(f"Unknown command: {args.command}", style="red")
    return 2


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        raw_config = load_raw_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"Config error: {e}", style="red")
        return 2

    # Validate configuration at startup
    issues = validate_config(raw_config)
    if issues:
        for issue in issues:
            style = "red" if issue.severity == Severity.ERROR else "yellow"
            console.print(f"  [{issue.field}] {issue.message}", style=style, markup=False)
        if has_errors(issues):
            console.print("\nFix the errors above, then try again.", style="dim")
            return 2

    config = load_config(raw_config)
    logging.basicConfig(level=getattr(logging, config.log_level, logging.WARNING))

    store = ResumeStore(
        JsonFileStorage(config.storage_path, config.storage_key),
        default_template_id=config.default_template_id,
    )
    store.init()
    try:
        code = run_command(args, store, config)
        if store.state.is_saving:
            store.clear_saving()
        return code
    finally:
        store.teardown()


if __name__ == "__main__":
    raise SystemExit(main())
