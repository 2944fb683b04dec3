"""Pure domain logic for resume export formats.

All functions accept a document and return strings -- no file I/O.
The tools layer is responsible for writing files.
"""

from __future__ import annotations

import json
import re
from typing import List

from .document import ResumeDocument, Section, serialize_document
from .item_shapes import (
    ENTRY_SECTION_TYPES,
    BaseItem,
    SectionType,
    display_heading,
    display_subheading,
    first_present,
    item_bullets,
    item_skills,
)

EXPORT_EXTENSIONS = ("txt", "md", "json")

_NAME_OR_TITLE = ("name", "title")
_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Document → Plain text
# ---------------------------------------------------------------------------


def document_to_plain_text(document: ResumeDocument) -> str:
    """Render *document* as plain text with underlined upper-case section titles."""
    basics = document.basics
    lines = [
        basics.name.upper(),
        basics.label,
        f"{basics.email} | {basics.phone} | {basics.location}",
        basics.url,
        "",
    ]

    if basics.summary:
        lines.extend(["SUMMARY", "-------", basics.summary, ""])

    for section in document.visible_sections():
        lines.append(section.title.upper())
        lines.append("-" * len(section.title))
        for item in section.items:
            lines.extend(_plain_item(section, item))
            lines.append("")
        lines.append("")

    return "\n".join(lines)


def _plain_item(section: Section, item: BaseItem) -> List[str]:
    if section.type in ENTRY_SECTION_TYPES:
        out = [
            display_heading(item),
            f"{display_subheading(item)} | {_dates(item)}",
        ]
        out.extend(f"• {bullet}" for bullet in item_bullets(item) if bullet)
        return out
    if section.type == SectionType.SKILLS:
        return [f"{getattr(item, 'name', None) or ''}: {', '.join(item_skills(item))}"]

    out = [first_present(item, _NAME_OR_TITLE)]
    description = getattr(item, "description", None)
    if description:
        out.append(description)
    return out


# ---------------------------------------------------------------------------
# Document → Markdown
# ---------------------------------------------------------------------------


def document_to_markdown(document: ResumeDocument) -> str:
    """Render *document* as Markdown: ``#`` name, ``##`` per visible section."""
    basics = document.basics
    lines = [f"# {basics.name}"]
    if basics.label:
        lines.append(f"**{basics.label}**")
    contact = " | ".join(part for part in (basics.email, basics.phone, basics.location, basics.url) if part)
    if contact:
        lines.append(contact)
    links = [f"[{p.network}]({p.url})" for p in basics.profiles if p.url]
    if links:
        lines.append(" | ".join(links))
    lines.append("")

    if basics.summary:
        lines.extend(["## Summary", "", basics.summary, ""])

    for section in document.visible_sections():
        lines.append(f"## {section.title}")
        lines.append("")
        for item in section.items:
            lines.extend(_markdown_item(section, item))
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def _markdown_item(section: Section, item: BaseItem) -> List[str]:
    if section.type in ENTRY_SECTION_TYPES:
        heading = display_heading(item)
        sub = display_subheading(item)
        out = [f"### {heading}" + (f" - {sub}" if sub else "")]
        dates = _dates(item)
        if dates.strip(" -"):
            out.append(f"*{dates}*")
        out.extend(f"- {bullet}" for bullet in item_bullets(item) if bullet)
        out.append("")
        return out
    if section.type == SectionType.SKILLS:
        name = getattr(item, "name", None) or ""
        skills = ", ".join(item_skills(item))
        return [f"- **{name}**: {skills}" if name else f"- {skills}"]
    if section.type == SectionType.CUSTOM:
        out = [f"### {getattr(item, 'title', None) or ''}"]
        for custom in getattr(item, "fields", None) or []:
            out.append(f"- **{custom.label}**: {custom.value}")
        out.append("")
        return out

    label = first_present(item, _NAME_OR_TITLE)
    description = getattr(item, "description", None)
    if description:
        return [f"- **{label}**: {description}" if label else f"- {description}"]
    return [f"- {label}"] if label else []


# ---------------------------------------------------------------------------
# Document → JSON
# ---------------------------------------------------------------------------


def document_to_json(document: ResumeDocument) -> str:
    return json.dumps(serialize_document(document), indent=2, ensure_ascii=False)


def export_file_name(document: ResumeDocument, ext: str) -> str:
    """Suggested download name, e.g. ``Jane_Doe_Resume.txt``."""
    stem = _WHITESPACE_RE.sub("_", document.basics.name)
    return f"{stem}_Resume.{ext}"


def render(document: ResumeDocument, fmt: str) -> str:
    """Dispatch to the renderer for *fmt* (``txt``, ``md`` or ``json``)."""
    if fmt == "txt":
        return document_to_plain_text(document)
    if fmt == "md":
        return document_to_markdown(document)
    if fmt == "json":
        return document_to_json(document)
    raise ValueError(f"Unsupported export format: {fmt}")


def _dates(item: BaseItem) -> str:
    start = getattr(item, "start_date", None) or ""
    end = getattr(item, "end_date", None) or ""
    return f"{start} - {end}"
