"""Resume document, version, and settings models.

Models are frozen: an edit always produces new instances along the edited
path and leaves every earlier snapshot untouched.
"""

from __future__ import annotations

from typing import Any, List, Literal, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, model_validator

from .item_shapes import BaseItem, SectionType, coerce_item

M = TypeVar("M", bound=BaseModel)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Profile(_Frozen):
    network: str = ""
    username: str = ""
    url: str = ""


class Basics(_Frozen):
    name: str = ""
    label: str = ""
    email: str = ""
    phone: str = ""
    url: str = ""
    summary: str = ""
    location: str = ""
    profiles: List[Profile] = Field(default_factory=list)


class Section(_Frozen):
    id: str
    type: SectionType
    title: str = ""
    is_visible: bool = True
    items: List[SerializeAsAny[BaseItem]] = Field(default_factory=list)
    variant: Optional[Literal["compact", "standard", "detailed"]] = None

    @model_validator(mode="before")
    @classmethod
    def _tag_items(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and data.get("items"):
            section_type = data.get("type")
            data = {**data, "items": [coerce_item(section_type, raw) for raw in data["items"]]}
        return data

    def find_item(self, item_id: str) -> Optional[BaseItem]:
        return next((item for item in self.items if item.id == item_id), None)


class ResumeDocument(_Frozen):
    basics: Basics = Field(default_factory=Basics)
    sections: List[Section] = Field(default_factory=list)

    def find_section(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)

    def visible_section(self, section_type: SectionType) -> Optional[Section]:
        """First visible section of *section_type*, as the evaluator and renderers see it."""
        return next((s for s in self.sections if s.type == section_type and s.is_visible), None)

    def visible_sections(self) -> List[Section]:
        return [s for s in self.sections if s.is_visible]


class TemplateSettings(_Frozen):
    template_id: str = "minimalist"
    font_family: Literal["sans", "serif", "mono", "montserrat", "open-sans", "merriweather"] = "sans"
    font_size: Literal["small", "medium", "large"] = "medium"
    line_spacing: Literal["tight", "normal", "relaxed"] = "normal"
    section_spacing: Literal["compact", "normal", "spacious"] = "normal"
    accent_color: str = "#2563eb"
    margins: Literal["standard", "compact", "wide"] = "standard"
    page_size: Literal["A4", "Letter"] = "A4"
    header_layout: Literal["centered", "left", "split"] = "left"
    section_style: Literal["standard", "underlined", "minimalist", "caps"] = "standard"
    ats_safe_lock: bool = True
    variant: Literal["compact", "standard", "detailed"] = "standard"
    bullet_style: Literal["dot", "dash", "square"] = "dot"
    border_radius: Literal["none", "small", "full"] = "small"


class ResumeVersion(_Frozen):
    id: str
    name: str
    document: ResumeDocument
    settings: TemplateSettings = Field(default_factory=TemplateSettings)
    created_at: int
    updated_at: int


class Resume(_Frozen):
    id: str
    title: str
    user_id: str = "user-1"
    versions: List[ResumeVersion]
    current_version_id: str
    is_archived: bool = False
    created_at: int

    def find_version(self, version_id: Optional[str]) -> Optional[ResumeVersion]:
        return next((v for v in self.versions if v.id == version_id), None)


class StoreState(_Frozen):
    """The whole resume collection plus selection pointers."""

    resumes: List[Resume] = Field(default_factory=list)
    current_resume_id: Optional[str] = None
    active_version_id: Optional[str] = None
    is_saving: bool = False

    def find_resume(self, resume_id: Optional[str]) -> Optional[Resume]:
        return next((r for r in self.resumes if r.id == resume_id), None)


def merge_patch(model: M, patch: Mapping[str, Any], protected: tuple = ("id",)) -> M:
    """Shallow-merge *patch* into *model* and re-validate.

    Keys in *protected* are ignored so ids stay immutable.  Raises
    ``pydantic.ValidationError`` when the merged record does not validate.
    """
    changes = {key: value for key, value in patch.items() if key not in protected}
    return type(model).model_validate({**model.model_dump(), **changes})


def serialize_document(document: ResumeDocument) -> dict:
    """JSON-ready form of *document* with absent fields dropped."""
    return document.model_dump(mode="json", exclude_none=True)
