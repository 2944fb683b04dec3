"""Template registry and section catalog handed to renderers.

Renderers are external; this module only describes what exists: each template
with its ATS risk level, and each section type with a default label and icon.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from .item_shapes import SectionType


class ATSLevel(str, Enum):
    SAFE = "SAFE"
    MEDIUM = "MEDIUM"
    RISKY = "RISKY"


@dataclass(frozen=True)
class TemplateInfo:
    id: str
    name: str
    category: str
    ats_risk_level: ATSLevel
    tags: List[str] = field(default_factory=list)
    is_active: bool = True


TEMPLATE_REGISTRY: List[TemplateInfo] = [
    TemplateInfo("minimalist", "Elite Minimalist", "ATS Safe", ATSLevel.SAFE, ["Clean", "Standard"]),
    TemplateInfo("tech-pro", "Tech Pro Sidebar", "Modern", ATSLevel.SAFE, ["Developer", "Compact"]),
    TemplateInfo("executive", "CEO Vision", "ATS Safe", ATSLevel.SAFE, ["Leadership", "Serif"]),
    TemplateInfo("director", "Director Suite", "ATS Safe", ATSLevel.SAFE, ["Impact", "Senior"]),
    TemplateInfo("grid-master", "Grid Master", "ATS Safe", ATSLevel.SAFE, ["Cards", "Density"]),
    TemplateInfo("refined", "Refined Classic", "Modern", ATSLevel.SAFE, ["Elegant", "Balanced"]),
    TemplateInfo("columnist", "Asymmetric Columnist", "Modern", ATSLevel.MEDIUM, ["Bold", "Unique"]),
    TemplateInfo("dark-console", "Dark Mode Console", "Creative", ATSLevel.RISKY, ["Terminal", "Tech"]),
    TemplateInfo("graphic", "Graphic Horizon", "Creative", ATSLevel.RISKY, ["Visual", "Designer"]),
    TemplateInfo("academic", "Scholar CV", "ATS Safe", ATSLevel.SAFE, ["Research", "Detailed"]),
]

HIGH_RISK_TEMPLATE_IDS: FrozenSet[str] = frozenset(
    t.id for t in TEMPLATE_REGISTRY if t.ats_risk_level is ATSLevel.RISKY
)


def get_template(template_id: str) -> Optional[TemplateInfo]:
    return next((t for t in TEMPLATE_REGISTRY if t.id == template_id), None)


def known_template_ids() -> List[str]:
    return [t.id for t in TEMPLATE_REGISTRY]


@dataclass(frozen=True)
class SectionCatalogEntry:
    label: str
    icon: str


SECTION_CATALOG: Dict[SectionType, SectionCatalogEntry] = {
    SectionType.BASICS: SectionCatalogEntry("Identity", "user"),
    SectionType.SUMMARY: SectionCatalogEntry("Summary", "file-text"),
    SectionType.OBJECTIVE: SectionCatalogEntry("Objective", "target"),
    SectionType.HIGHLIGHTS: SectionCatalogEntry("Highlights", "lightbulb"),
    SectionType.EXPERIENCE: SectionCatalogEntry("Experience", "briefcase"),
    SectionType.EDUCATION: SectionCatalogEntry("Education", "graduation-cap"),
    SectionType.SKILLS: SectionCatalogEntry("Skills", "code"),
    SectionType.PROJECTS: SectionCatalogEntry("Projects", "folder-kanban"),
    SectionType.CERTIFICATIONS: SectionCatalogEntry("Certs", "star"),
    SectionType.AWARDS: SectionCatalogEntry("Awards", "award"),
    SectionType.VOLUNTEERING: SectionCatalogEntry("Volunteering", "message-square"),
    SectionType.PUBLICATIONS: SectionCatalogEntry("Publications", "book"),
    SectionType.LANGUAGES: SectionCatalogEntry("Languages", "globe"),
    SectionType.CUSTOM: SectionCatalogEntry("Custom", "layers"),
    SectionType.LINKS: SectionCatalogEntry("Socials", "link"),
    SectionType.TRAINING: SectionCatalogEntry("Training", "layers"),
    SectionType.LEADERSHIP: SectionCatalogEntry("Leadership", "shield-check"),
    SectionType.PATENTS: SectionCatalogEntry("Patents", "hash"),
    SectionType.SPEAKING: SectionCatalogEntry("Speaking", "users"),
    SectionType.REFERENCES: SectionCatalogEntry("References", "users"),
    SectionType.INTERESTS: SectionCatalogEntry("Interests", "layers"),
    SectionType.ACHIEVEMENTS: SectionCatalogEntry("Achievements", "layers"),
    SectionType.RESEARCH: SectionCatalogEntry("Research", "microscope"),
}
