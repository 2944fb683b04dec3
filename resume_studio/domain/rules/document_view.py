"""Read-only view of a document snapshot used by evaluation rules."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List, Optional

from ..document import ResumeDocument, Section, TemplateSettings, serialize_document
from ..item_shapes import SectionType, item_bullets, item_skills


@dataclass(frozen=True)
class DocumentView:
    """Structured content plus the lower-cased serialization substring tests run against."""

    document: ResumeDocument
    settings: TemplateSettings
    text: str = field(repr=False)

    def visible_section(self, section_type: SectionType) -> Optional[Section]:
        return self.document.visible_section(section_type)

    @property
    def experience(self) -> Optional[Section]:
        return self.visible_section(SectionType.EXPERIENCE)

    def experience_bullets(self) -> List[str]:
        section = self.experience
        if section is None:
            return []
        bullets: List[str] = []
        for item in section.items:
            bullets.extend(item_bullets(item))
        return bullets

    def total_skills(self) -> int:
        section = self.visible_section(SectionType.SKILLS)
        if section is None:
            return 0
        return sum(len(item_skills(item)) for item in section.items)


def document_text(document: ResumeDocument) -> str:
    """Compact, lower-cased JSON of *document*; keys are included as parsers would see them."""
    return json.dumps(serialize_document(document), ensure_ascii=False, separators=(",", ":")).lower()


def build_view(document: ResumeDocument, settings: TemplateSettings) -> DocumentView:
    return DocumentView(document=document, settings=settings, text=document_text(document))
