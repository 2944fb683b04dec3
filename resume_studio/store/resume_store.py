"""Authoritative resume collection with a closed command set.

Every command is an atomic read-modify-write of an immutable
:class:`StoreState`: the edited path is rebuilt, the rest of the tree is
shared, and the previous snapshot is never touched.  Commands return a
:class:`CommandResult` instead of raising on stale ids or invalid patches.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from pydantic import ValidationError

from ..domain.defaults import (
    DEFAULT_FIELD_LABEL,
    DEFAULT_RESUME_TITLE,
    DEFAULT_VERSION_NAME,
    default_document,
    default_section_title,
    default_settings,
)
from ..domain.document import (
    Resume,
    ResumeDocument,
    ResumeVersion,
    Section,
    StoreState,
    TemplateSettings,
    merge_patch,
)
from ..domain.item_shapes import BaseItem, CustomField, SectionType, default_item
from .persistence import StorageBackend
from .results import CommandResult

logger = logging.getLogger(__name__)

T = TypeVar("T")
Listener = Callable[[StoreState], None]


def make_id(prefix: str) -> str:
    """Create opaque id matching the documented prefix style."""
    return f"{prefix}_{uuid.uuid4().hex[:10]}"


def now_ms() -> int:
    """Current time as integer epoch milliseconds."""
    return int(time.time() * 1000)


class _Missing(Exception):
    """Internal signal: a referenced id or index does not exist."""


def splice_move(seq: Sequence[T], start: int, end: int) -> List[T]:
    """Return a copy of *seq* with the element at *start* moved to *end*.

    *end* indexes the list after removal; an *end* past the tail appends.
    """
    if not 0 <= start < len(seq):
        raise _Missing(f"index {start} out of range for {len(seq)} entries")
    moved = list(seq)
    entry = moved.pop(start)
    moved.insert(end, entry)
    return moved


def _index_of(entries: Sequence[Any], entry_id: str, kind: str) -> int:
    for idx, entry in enumerate(entries):
        if entry.id == entry_id:
            return idx
    raise _Missing(f"{kind} {entry_id!r} not found")


def _replace_at(entries: Sequence[T], idx: int, entry: T) -> List[T]:
    updated = list(entries)
    updated[idx] = entry
    return updated


def _bullets_of(item: BaseItem) -> List[str]:
    bullets = getattr(item, "bullets", None)
    if not bullets:
        raise _Missing(f"item {item.id!r} has no bullets")
    return list(bullets)


def _custom_fields_of(item: BaseItem) -> List[CustomField]:
    return [CustomField.model_validate(raw) for raw in getattr(item, "fields", None) or []]


def _with_fields(item: BaseItem, fields: List[CustomField]) -> BaseItem:
    return merge_patch(item, {"fields": [f.model_dump() for f in fields]})


class ResumeStore:
    """Single source of truth for resumes, versions, and the selection pointers.

    *storage* receives every new snapshot; *id_factory* and *clock* are
    injectable so tests can pin ids and timestamps.
    """

    def __init__(
        self,
        storage: Optional[StorageBackend] = None,
        *,
        id_factory: Callable[[str], str] = make_id,
        clock: Callable[[], int] = now_ms,
        default_template_id: Optional[str] = None,
    ) -> None:
        self._state = StoreState()
        self._storage = storage
        self._listeners: List[Listener] = []
        self._new_id = id_factory
        self._clock = clock
        self.default_template_id = default_template_id

    # -- Lifecycle -----------------------------------------------------------

    def init(self) -> StoreState:
        """Load the persisted snapshot, if any, and make it current."""
        if self._storage is not None:
            loaded = self._storage.load()
            if loaded is not None:
                self._state = loaded
                logger.info("Loaded %d resume(s) from storage", len(loaded.resumes))
        return self._state

    def teardown(self) -> None:
        """Flush the current snapshot and drop all listeners."""
        if self._storage is not None:
            self._storage.save(self._state)
        self._listeners.clear()
        logger.info("Store torn down")

    @property
    def state(self) -> StoreState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for every new snapshot; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # -- Selectors -----------------------------------------------------------

    @property
    def current_resume(self) -> Optional[Resume]:
        return self._state.find_resume(self._state.current_resume_id)

    @property
    def active_version(self) -> Optional[ResumeVersion]:
        resume = self.current_resume
        return resume.find_version(self._state.active_version_id) if resume else None

    @property
    def active_document(self) -> Optional[ResumeDocument]:
        version = self.active_version
        return version.document if version else None

    @property
    def active_settings(self) -> Optional[TemplateSettings]:
        version = self.active_version
        return version.settings if version else None

    # -- Resume commands -----------------------------------------------------

    def add_resume(self, title: str = "", template_id: Optional[str] = None) -> str:
        """Prepend a resume seeded with one version and select it; returns the new id."""
        now = self._clock()
        version = ResumeVersion(
            id=self._new_id("ver"),
            name=DEFAULT_VERSION_NAME,
            document=default_document(self._new_id),
            settings=default_settings(template_id or self.default_template_id),
            created_at=now,
            updated_at=now,
        )
        resume = Resume(
            id=self._new_id("res"),
            title=title or DEFAULT_RESUME_TITLE,
            versions=[version],
            current_version_id=version.id,
            created_at=now,
        )
        self._commit(
            self._state.model_copy(
                update={
                    "resumes": [resume, *self._state.resumes],
                    "current_resume_id": resume.id,
                    "active_version_id": version.id,
                }
            )
        )
        logger.info("Created resume %s (%s)", resume.id, resume.title)
        return resume.id

    def select_resume(self, resume_id: str) -> CommandResult:
        resume = self._state.find_resume(resume_id)
        if resume is None:
            logger.debug("select_resume ignored: resume %r not found", resume_id)
            return CommandResult.NOT_FOUND
        self._commit(
            self._state.model_copy(
                update={"current_resume_id": resume.id, "active_version_id": resume.current_version_id}
            )
        )
        return CommandResult.APPLIED

    def delete_resume(self, resume_id: str) -> CommandResult:
        """Remove a resume.  Selection pointers are left as they are."""
        if self._state.find_resume(resume_id) is None:
            logger.debug("delete_resume ignored: resume %r not found", resume_id)
            return CommandResult.NOT_FOUND
        resumes = [r for r in self._state.resumes if r.id != resume_id]
        self._commit(self._state.model_copy(update={"resumes": resumes}))
        logger.info("Deleted resume %s", resume_id)
        return CommandResult.APPLIED

    def reset(self) -> CommandResult:
        """Empty the collection, clear selection, and clear persisted state."""
        self._state = StoreState()
        if self._storage is not None:
            self._storage.clear()
        self._notify()
        logger.info("Store reset")
        return CommandResult.APPLIED

    def clear_saving(self) -> CommandResult:
        self._commit(self._state.model_copy(update={"is_saving": False}))
        return CommandResult.APPLIED

    # -- Version commands ----------------------------------------------------

    def fork_version(self, name: Optional[str] = None) -> CommandResult:
        """Copy the active version into a new version and make it active."""
        resume = self.current_resume
        version = self.active_version
        if resume is None or version is None:
            logger.debug("fork_version ignored: no active version")
            return CommandResult.NOT_FOUND

        now = self._clock()
        fork = version.model_copy(
            update={
                "id": self._new_id("ver"),
                "name": name or f"V{len(resume.versions) + 1}.0",
                "created_at": now,
                "updated_at": now,
            },
            deep=True,
        )
        updated = resume.model_copy(
            update={"versions": [*resume.versions, fork], "current_version_id": fork.id}
        )
        self._commit(
            self._state.model_copy(
                update={
                    "resumes": self._replace_resume(updated),
                    "active_version_id": fork.id,
                    "is_saving": True,
                }
            )
        )
        logger.info("Forked version %s -> %s (%s)", version.id, fork.id, fork.name)
        return CommandResult.APPLIED

    def select_version(self, version_id: str) -> CommandResult:
        resume = self.current_resume
        if resume is None or resume.find_version(version_id) is None:
            logger.debug("select_version ignored: version %r not found", version_id)
            return CommandResult.NOT_FOUND
        updated = resume.model_copy(update={"current_version_id": version_id})
        self._commit(
            self._state.model_copy(
                update={"resumes": self._replace_resume(updated), "active_version_id": version_id}
            )
        )
        return CommandResult.APPLIED

    # -- Document commands ---------------------------------------------------

    def update_document_basics(self, patch: Mapping[str, Any]) -> CommandResult:
        return self._edit_document(
            lambda doc: doc.model_copy(update={"basics": merge_patch(doc.basics, patch, protected=())}),
            action="update_document_basics",
            content=True,
        )

    def update_settings(self, patch: Mapping[str, Any]) -> CommandResult:
        return self._edit_version(
            lambda v: v.model_copy(update={"settings": merge_patch(v.settings, patch, protected=())}),
            action="update_settings",
            content=True,
        )

    # -- Section commands ----------------------------------------------------

    def add_section(self, section_type: SectionType, title: Optional[str] = None) -> CommandResult:
        try:
            section_type = SectionType(section_type)
        except ValueError:
            logger.warning("add_section rejected: unknown section type %r", section_type)
            return CommandResult.REJECTED
        if section_type is SectionType.BASICS:
            logger.warning("add_section rejected: basics lives outside the section list")
            return CommandResult.REJECTED

        def append(doc: ResumeDocument) -> ResumeDocument:
            section = Section(
                id=self._new_id("sec"),
                type=section_type,
                title=title or default_section_title(section_type),
                is_visible=True,
                items=[],
            )
            return doc.model_copy(update={"sections": [*doc.sections, section]})

        return self._edit_document(append, action="add_section", content=True)

    def update_section_title(self, section_id: str, title: str) -> CommandResult:
        return self._edit_section(
            section_id,
            lambda s: s.model_copy(update={"title": title}),
            action="update_section_title",
            content=True,
        )

    def remove_section(self, section_id: str) -> CommandResult:
        def remove(doc: ResumeDocument) -> ResumeDocument:
            _index_of(doc.sections, section_id, "section")
            return doc.model_copy(update={"sections": [s for s in doc.sections if s.id != section_id]})

        return self._edit_document(remove, action="remove_section")

    def toggle_section_visibility(self, section_id: str) -> CommandResult:
        return self._edit_section(
            section_id,
            lambda s: s.model_copy(update={"is_visible": not s.is_visible}),
            action="toggle_section_visibility",
        )

    def reorder_sections(self, start: int, end: int) -> CommandResult:
        return self._edit_document(
            lambda doc: doc.model_copy(update={"sections": splice_move(doc.sections, start, end)}),
            action="reorder_sections",
        )

    def duplicate_section(self, section_id: str) -> CommandResult:
        def duplicate(doc: ResumeDocument) -> ResumeDocument:
            idx = _index_of(doc.sections, section_id, "section")
            copy = doc.sections[idx].model_copy(update={"id": self._new_id("sec")}, deep=True)
            sections = list(doc.sections)
            sections.insert(idx + 1, copy)
            return doc.model_copy(update={"sections": sections})

        return self._edit_document(duplicate, action="duplicate_section")

    # -- Item commands -------------------------------------------------------

    def add_item(self, section_id: str) -> CommandResult:
        def append(section: Section) -> Section:
            item = default_item(section.type, self._new_id("item"))
            return section.model_copy(update={"items": [*section.items, item]})

        return self._edit_section(section_id, append, action="add_item", content=True)

    def remove_item(self, section_id: str, item_id: str) -> CommandResult:
        def remove(section: Section) -> Section:
            _index_of(section.items, item_id, "item")
            return section.model_copy(update={"items": [i for i in section.items if i.id != item_id]})

        return self._edit_section(section_id, remove, action="remove_item")

    def duplicate_item(self, section_id: str, item_id: str) -> CommandResult:
        def duplicate(section: Section) -> Section:
            idx = _index_of(section.items, item_id, "item")
            copy = merge_patch(section.items[idx], {"id": self._new_id("item")}, protected=())
            items = list(section.items)
            items.insert(idx + 1, copy)
            return section.model_copy(update={"items": items})

        return self._edit_section(section_id, duplicate, action="duplicate_item")

    def update_item(self, section_id: str, item_id: str, patch: Mapping[str, Any]) -> CommandResult:
        """Shallow-merge *patch* into the item; an ``id`` key in *patch* is ignored."""
        return self._edit_item(
            section_id, item_id, lambda item: merge_patch(item, patch), action="update_item", content=True
        )

    def reorder_items(self, section_id: str, start: int, end: int) -> CommandResult:
        return self._edit_section(
            section_id,
            lambda s: s.model_copy(update={"items": splice_move(s.items, start, end)}),
            action="reorder_items",
        )

    # -- Bullet commands -----------------------------------------------------

    def add_bullet(self, section_id: str, item_id: str, text: str = "") -> CommandResult:
        def append(item: BaseItem) -> BaseItem:
            bullets = list(getattr(item, "bullets", None) or [])
            return merge_patch(item, {"bullets": [*bullets, text]})

        return self._edit_item(section_id, item_id, append, action="add_bullet", content=True)

    def remove_bullet(self, section_id: str, item_id: str, index: int) -> CommandResult:
        def remove(item: BaseItem) -> BaseItem:
            bullets = _bullets_of(item)
            if not 0 <= index < len(bullets):
                raise _Missing(f"bullet {index} out of range")
            del bullets[index]
            return merge_patch(item, {"bullets": bullets})

        return self._edit_item(section_id, item_id, remove, action="remove_bullet")

    def update_bullet(self, section_id: str, item_id: str, index: int, text: str) -> CommandResult:
        def update(item: BaseItem) -> BaseItem:
            bullets = _bullets_of(item)
            if not 0 <= index < len(bullets):
                raise _Missing(f"bullet {index} out of range")
            bullets[index] = text
            return merge_patch(item, {"bullets": bullets})

        return self._edit_item(section_id, item_id, update, action="update_bullet", content=True)

    def reorder_bullets(self, section_id: str, item_id: str, start: int, end: int) -> CommandResult:
        return self._edit_item(
            section_id,
            item_id,
            lambda item: merge_patch(item, {"bullets": splice_move(_bullets_of(item), start, end)}),
            action="reorder_bullets",
        )

    # -- Custom field commands -----------------------------------------------

    def add_custom_field(self, section_id: str, item_id: str) -> CommandResult:
        def append(item: BaseItem) -> BaseItem:
            new_field = CustomField(id=self._new_id("fld"), label=DEFAULT_FIELD_LABEL, value="")
            return _with_fields(item, [*_custom_fields_of(item), new_field])

        return self._edit_item(section_id, item_id, append, action="add_custom_field", content=True)

    def remove_custom_field(self, section_id: str, item_id: str, field_id: str) -> CommandResult:
        def remove(item: BaseItem) -> BaseItem:
            fields = _custom_fields_of(item)
            _index_of(fields, field_id, "field")
            return _with_fields(item, [f for f in fields if f.id != field_id])

        return self._edit_item(section_id, item_id, remove, action="remove_custom_field", content=True)

    def update_custom_field(
        self, section_id: str, item_id: str, field_id: str, patch: Mapping[str, Any]
    ) -> CommandResult:
        def update(item: BaseItem) -> BaseItem:
            fields = _custom_fields_of(item)
            idx = _index_of(fields, field_id, "field")
            return _with_fields(item, _replace_at(fields, idx, merge_patch(fields[idx], patch)))

        return self._edit_item(section_id, item_id, update, action="update_custom_field", content=True)

    # -- Internals -----------------------------------------------------------

    def _edit_version(
        self,
        edit: Callable[[ResumeVersion], ResumeVersion],
        *,
        action: str,
        content: bool = False,
    ) -> CommandResult:
        resume = self.current_resume
        version = self.active_version
        if resume is None or version is None:
            logger.debug("%s ignored: no active version", action)
            return CommandResult.NOT_FOUND

        try:
            edited = edit(version)
        except _Missing as exc:
            logger.debug("%s ignored: %s", action, exc)
            return CommandResult.NOT_FOUND
        except ValidationError as exc:
            logger.warning("%s rejected: %d validation error(s): %s", action, exc.error_count(), exc)
            return CommandResult.REJECTED

        update: Dict[str, Any] = {}
        if content:
            edited = edited.model_copy(update={"updated_at": self._clock()})
            update["is_saving"] = True
        versions = _replace_at(resume.versions, _index_of(resume.versions, version.id, "version"), edited)
        update["resumes"] = self._replace_resume(resume.model_copy(update={"versions": versions}))
        self._commit(self._state.model_copy(update=update))
        return CommandResult.APPLIED

    def _edit_document(
        self,
        edit: Callable[[ResumeDocument], ResumeDocument],
        *,
        action: str,
        content: bool = False,
    ) -> CommandResult:
        return self._edit_version(
            lambda v: v.model_copy(update={"document": edit(v.document)}),
            action=action,
            content=content,
        )

    def _edit_section(
        self,
        section_id: str,
        edit: Callable[[Section], Section],
        *,
        action: str,
        content: bool = False,
    ) -> CommandResult:
        def apply(doc: ResumeDocument) -> ResumeDocument:
            idx = _index_of(doc.sections, section_id, "section")
            return doc.model_copy(update={"sections": _replace_at(doc.sections, idx, edit(doc.sections[idx]))})

        return self._edit_document(apply, action=action, content=content)

    def _edit_item(
        self,
        section_id: str,
        item_id: str,
        edit: Callable[[BaseItem], BaseItem],
        *,
        action: str,
        content: bool = False,
    ) -> CommandResult:
        def apply(section: Section) -> Section:
            idx = _index_of(section.items, item_id, "item")
            return section.model_copy(update={"items": _replace_at(section.items, idx, edit(section.items[idx]))})

        return self._edit_section(section_id, apply, action=action, content=content)

    def _replace_resume(self, resume: Resume) -> List[Resume]:
        return [resume if r.id == resume.id else r for r in self._state.resumes]

    def _commit(self, state: StoreState) -> None:
        self._state = state
        if self._storage is not None:
            self._storage.save(state)
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)
