"""Pure domain logic -- no I/O, no framework dependencies."""

from .ats_evaluator import ATSReport, Breakdown, evaluate, format_ats_report
from .defaults import default_document, default_section_title, default_settings
from .document import (
    Basics,
    Profile,
    Resume,
    ResumeDocument,
    ResumeVersion,
    Section,
    StoreState,
    TemplateSettings,
    merge_patch,
    serialize_document,
)
from .item_shapes import BaseItem, CustomField, SectionType, coerce_item, default_item
from .job_matcher import JobMatchResult, extract_job_keywords, match_job
from .resume_writer import (
    document_to_json,
    document_to_markdown,
    document_to_plain_text,
    export_file_name,
)
from .rules import Issue, RuleRunner, Severity, build_default_runner
from .templates import TEMPLATE_REGISTRY, get_template

__all__ = [
    "ATSReport",
    "Breakdown",
    "evaluate",
    "format_ats_report",
    "default_document",
    "default_section_title",
    "default_settings",
    "Basics",
    "Profile",
    "Resume",
    "ResumeDocument",
    "ResumeVersion",
    "Section",
    "StoreState",
    "TemplateSettings",
    "merge_patch",
    "serialize_document",
    "BaseItem",
    "CustomField",
    "SectionType",
    "coerce_item",
    "default_item",
    "JobMatchResult",
    "extract_job_keywords",
    "match_job",
    "document_to_json",
    "document_to_markdown",
    "document_to_plain_text",
    "export_file_name",
    "Issue",
    "RuleRunner",
    "Severity",
    "build_default_runner",
    "TEMPLATE_REGISTRY",
    "get_template",
]
