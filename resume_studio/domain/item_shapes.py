"""Item variants keyed by the owning section's type.

A section tags its items: the same raw record is read as an
:class:`ExperienceItem` inside an ``experience`` section and as a
:class:`GenericItem` inside ``objective``.  Every field is optional and unknown
keys are kept, so a record that was written for another shape still loads.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict


class SectionType(str, Enum):
    BASICS = "basics"
    SUMMARY = "summary"
    OBJECTIVE = "objective"
    HIGHLIGHTS = "highlights"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    AWARDS = "awards"
    VOLUNTEERING = "volunteering"
    PUBLICATIONS = "publications"
    LANGUAGES = "languages"
    CUSTOM = "custom"
    LINKS = "links"
    TRAINING = "training"
    LEADERSHIP = "leadership"
    PATENTS = "patents"
    SPEAKING = "speaking"
    REFERENCES = "references"
    INTERESTS = "interests"
    ACHIEVEMENTS = "achievements"
    RESEARCH = "research"


# ---------------------------------------------------------------------------
# Item variants
# ---------------------------------------------------------------------------


class BaseItem(BaseModel):
    """Common base: an id unique within the owning section."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str


class CustomField(BaseModel):
    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    label: str = ""
    value: str = ""


class ExperienceItem(BaseItem):
    organization: Optional[str] = None
    company: Optional[str] = None
    role: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    current: Optional[bool] = None
    bullets: Optional[List[str]] = None


class EducationItem(BaseItem):
    institution: Optional[str] = None
    degree: Optional[str] = None
    field: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class SkillsItem(BaseItem):
    name: Optional[str] = None
    skills: Optional[List[str]] = None


class ProjectItem(BaseItem):
    name: Optional[str] = None
    role: Optional[str] = None
    link: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    bullets: Optional[List[str]] = None


class LinkItem(BaseItem):
    label: Optional[str] = None
    url: Optional[str] = None


class CredentialItem(BaseItem):
    name: Optional[str] = None
    title: Optional[str] = None
    issuer: Optional[str] = None
    organization: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None


class LanguageItem(BaseItem):
    name: Optional[str] = None
    description: Optional[str] = None


class ReferenceItem(BaseItem):
    name: Optional[str] = None
    title: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class InterestItem(BaseItem):
    skills: Optional[List[str]] = None


class CustomItem(BaseItem):
    title: Optional[str] = None
    fields: Optional[List[CustomField]] = None


class GenericItem(BaseItem):
    title: Optional[str] = None
    description: Optional[str] = None
    bullets: Optional[List[str]] = None


# ---------------------------------------------------------------------------
# Type -> shape table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ItemShape:
    """Model class plus the field values a freshly added item starts with."""

    model: Type[BaseItem]
    defaults: Dict[str, Any] = field(default_factory=dict)


_EXPERIENCE_SHAPE = ItemShape(
    ExperienceItem,
    {
        "organization": "",
        "company": "",
        "role": "",
        "location": "",
        "start_date": "",
        "end_date": "",
        "current": False,
        "bullets": [""],
    },
)
_CREDENTIAL_SHAPE = ItemShape(
    CredentialItem,
    {"name": "", "title": "", "issuer": "", "organization": "", "date": "", "description": ""},
)

ITEM_SHAPES: Dict[SectionType, ItemShape] = {
    SectionType.EXPERIENCE: _EXPERIENCE_SHAPE,
    SectionType.VOLUNTEERING: _EXPERIENCE_SHAPE,
    SectionType.LEADERSHIP: _EXPERIENCE_SHAPE,
    SectionType.RESEARCH: _EXPERIENCE_SHAPE,
    SectionType.EDUCATION: ItemShape(
        EducationItem,
        {"institution": "", "degree": "", "field": "", "location": "", "end_date": ""},
    ),
    SectionType.SKILLS: ItemShape(SkillsItem, {"name": "", "skills": []}),
    SectionType.PROJECTS: ItemShape(ProjectItem, {"name": "", "role": "", "link": "", "bullets": [""]}),
    SectionType.LINKS: ItemShape(LinkItem, {"label": "", "url": ""}),
    SectionType.CERTIFICATIONS: _CREDENTIAL_SHAPE,
    SectionType.AWARDS: _CREDENTIAL_SHAPE,
    SectionType.PATENTS: _CREDENTIAL_SHAPE,
    SectionType.PUBLICATIONS: _CREDENTIAL_SHAPE,
    SectionType.LANGUAGES: ItemShape(LanguageItem, {"name": "", "description": ""}),
    SectionType.REFERENCES: ItemShape(
        ReferenceItem,
        {"name": "", "title": "", "company": "", "email": "", "phone": ""},
    ),
    SectionType.INTERESTS: ItemShape(InterestItem, {"skills": []}),
    SectionType.CUSTOM: ItemShape(CustomItem, {"title": "", "fields": []}),
}

GENERIC_SHAPE = ItemShape(GenericItem, {"title": "", "description": "", "bullets": []})


def shape_for(section_type: Any) -> ItemShape:
    """Return the shape for *section_type*; unmapped or unknown types get the generic shape."""
    try:
        key = SectionType(section_type)
    except ValueError:
        return GENERIC_SHAPE
    return ITEM_SHAPES.get(key, GENERIC_SHAPE)


def coerce_item(section_type: Any, raw: Any) -> Any:
    """Read a raw record as the item variant of *section_type*.

    Instances of another variant are re-read through their dumped fields so a
    section never holds an item of the wrong shape.
    """
    model = shape_for(section_type).model
    if isinstance(raw, model):
        return raw
    if isinstance(raw, BaseModel):
        raw = raw.model_dump()
    return model.model_validate(raw)


def default_item(section_type: Any, item_id: str) -> BaseItem:
    """Build the starting item for a section of *section_type*."""
    shape = shape_for(section_type)
    return shape.model.model_validate({"id": item_id, **copy.deepcopy(shape.defaults)})


# ---------------------------------------------------------------------------
# Display field precedence (shared by renderers and exporters)
# ---------------------------------------------------------------------------

HEADING_FIELDS: Tuple[str, ...] = ("role", "title", "name", "degree")
SUBHEADING_FIELDS: Tuple[str, ...] = ("company", "organization", "institution")

# Section types whose items render as a dated entry with bullets.
ENTRY_SECTION_TYPES = frozenset(
    {
        SectionType.EXPERIENCE,
        SectionType.PROJECTS,
        SectionType.EDUCATION,
        SectionType.VOLUNTEERING,
        SectionType.LEADERSHIP,
        SectionType.RESEARCH,
    }
)


def first_present(item: BaseModel, names: Tuple[str, ...]) -> str:
    """Return the first non-empty string attribute among *names*, else ``""``."""
    for name in names:
        value = getattr(item, name, None)
        if isinstance(value, str) and value:
            return value
    return ""


def display_heading(item: BaseModel) -> str:
    return first_present(item, HEADING_FIELDS)


def display_subheading(item: BaseModel) -> str:
    return first_present(item, SUBHEADING_FIELDS)


def item_bullets(item: BaseModel) -> List[str]:
    bullets = getattr(item, "bullets", None)
    return list(bullets) if bullets else []


def item_skills(item: BaseModel) -> List[str]:
    skills = getattr(item, "skills", None)
    return list(skills) if skills else []
