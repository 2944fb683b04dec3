"""Tests for the resume mutation store."""

from __future__ import annotations

import logging

import pytest

from resume_studio.domain.item_shapes import SectionType
from resume_studio.errors import InvalidPatchError, StaleReferenceError
from resume_studio.store import CommandResult, MemoryStorage, ResumeStore, splice_move


class FakeClock:
    def __init__(self, start: int = 1_000):
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


def _sequential_ids():
    counter = {"n": 0}

    def new_id(prefix: str) -> str:
        counter["n"] += 1
        return f"{prefix}_{counter['n']}"

    return new_id


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    s = ResumeStore(storage, id_factory=_sequential_ids(), clock=FakeClock())
    s.init()
    return s


@pytest.fixture
def seeded(store):
    store.add_resume("Backend Roles")
    store.clear_saving()
    return store


def _sections(store):
    return store.active_document.sections


def _section_titles(store):
    return [s.title for s in _sections(store)]


class TestResumes:
    def test_add_resume_selects_and_seeds(self, store):
        resume_id = store.add_resume("My CV")
        resume = store.current_resume
        assert resume.id == resume_id
        assert resume.title == "My CV"
        assert resume.user_id == "user-1"
        assert len(resume.versions) == 1
        assert resume.versions[0].name == "V1.0"
        assert store.state.active_version_id == resume.current_version_id
        assert store.active_settings.template_id == "minimalist"
        assert len(_sections(store)) == 3

    def test_add_resume_prepends_and_defaults_title(self, store):
        first = store.add_resume("First")
        second = store.add_resume("")
        assert [r.id for r in store.state.resumes] == [second, first]
        assert store.current_resume.title == "New Resume"

    def test_add_resume_template_override(self, store):
        store.add_resume("x", template_id="executive")
        assert store.active_settings.template_id == "executive"

    def test_store_default_template(self):
        store = ResumeStore(default_template_id="academic")
        store.add_resume("x")
        assert store.active_settings.template_id == "academic"

    def test_select_resume(self, store):
        first = store.add_resume("First")
        store.add_resume("Second")
        assert store.select_resume(first) is CommandResult.APPLIED
        assert store.state.current_resume_id == first
        assert store.state.active_version_id == store.current_resume.current_version_id

    def test_select_unknown_resume_is_noop(self, seeded):
        before = seeded.state
        assert seeded.select_resume("missing") is CommandResult.NOT_FOUND
        assert seeded.state is before

    def test_delete_resume_keeps_selection(self, seeded):
        resume_id = seeded.state.current_resume_id
        assert seeded.delete_resume(resume_id) is CommandResult.APPLIED
        assert seeded.state.resumes == []
        assert seeded.state.current_resume_id == resume_id
        assert seeded.active_document is None

    def test_reset_clears_everything(self, seeded, storage):
        assert seeded.reset() is CommandResult.APPLIED
        assert seeded.state.resumes == []
        assert seeded.state.current_resume_id is None
        assert storage.state is None


class TestSections:
    def test_add_custom_section_defaults(self, seeded):
        seeded.remove_section(_sections(seeded)[2].id)
        assert len(_sections(seeded)) == 2
        assert seeded.add_section(SectionType.CUSTOM) is CommandResult.APPLIED
        added = _sections(seeded)[-1]
        assert len(_sections(seeded)) == 3
        assert added.title == "Custom"
        assert added.is_visible is True
        assert added.items == []

    def test_add_section_with_title(self, seeded):
        seeded.add_section(SectionType.PROJECTS, "Side Projects")
        assert _sections(seeded)[-1].title == "Side Projects"

    def test_add_section_unknown_type_rejected(self, seeded):
        assert seeded.add_section("hobbies") is CommandResult.REJECTED

    def test_add_basics_section_rejected(self, seeded):
        before = _section_titles(seeded)
        assert seeded.add_section(SectionType.BASICS) is CommandResult.REJECTED
        assert _section_titles(seeded) == before

    def test_update_section_title(self, seeded):
        section_id = _sections(seeded)[0].id
        seeded.update_section_title(section_id, "Work")
        assert _sections(seeded)[0].title == "Work"

    def test_toggle_visibility(self, seeded):
        section_id = _sections(seeded)[1].id
        seeded.toggle_section_visibility(section_id)
        assert _sections(seeded)[1].is_visible is False
        seeded.toggle_section_visibility(section_id)
        assert _sections(seeded)[1].is_visible is True

    def test_duplicate_section_inserted_after(self, seeded):
        original = _sections(seeded)[0]
        seeded.duplicate_section(original.id)
        sections = _sections(seeded)
        assert len(sections) == 4
        assert sections[1].id != original.id
        assert sections[1].title == original.title
        assert sections[1].items == original.items

    def test_no_active_version_is_not_found(self, store):
        assert store.add_section(SectionType.SKILLS) is CommandResult.NOT_FOUND
        assert store.update_document_basics({"name": "x"}) is CommandResult.NOT_FOUND


class TestReorder:
    def test_reorder_same_index_is_identity(self, seeded):
        before = _section_titles(seeded)
        seeded.reorder_sections(1, 1)
        assert _section_titles(seeded) == before

    @pytest.mark.parametrize("i,j", [(0, 2), (2, 0), (0, 1), (1, 2)])
    def test_inverse_move_restores_order(self, seeded, i, j):
        before = _section_titles(seeded)
        seeded.reorder_sections(i, j)
        assert _section_titles(seeded) != before
        seeded.reorder_sections(j, i)
        assert _section_titles(seeded) == before

    def test_move_first_to_last(self, seeded):
        titles = _section_titles(seeded)
        seeded.reorder_sections(0, 2)
        assert _section_titles(seeded) == [titles[1], titles[2], titles[0]]

    def test_out_of_range_source_is_not_found(self, seeded):
        before = seeded.state
        assert seeded.reorder_sections(7, 0) is CommandResult.NOT_FOUND
        assert seeded.reorder_sections(-1, 0) is CommandResult.NOT_FOUND
        assert seeded.state is before

    def test_target_past_end_appends(self):
        assert splice_move(["a", "b", "c"], 0, 10) == ["b", "c", "a"]


class TestItems:
    def test_add_item_uses_type_shape(self, seeded):
        section = _sections(seeded)[0]
        seeded.add_item(section.id)
        item = _sections(seeded)[0].items[-1]
        assert item.bullets == [""]
        assert item.current is False

    def test_update_item_shallow_merge(self, seeded):
        section = _sections(seeded)[0]
        item = section.items[0]
        assert seeded.update_item(section.id, item.id, {"role": "CTO", "id": "hijack"}) is CommandResult.APPLIED
        updated = _sections(seeded)[0].items[0]
        assert updated.id == item.id
        assert updated.role == "CTO"
        assert updated.company == item.company

    def test_invalid_patch_rejected(self, seeded, caplog):
        section = _sections(seeded)[0]
        item = section.items[0]
        before = seeded.state
        with caplog.at_level(logging.WARNING, logger="resume_studio.store.resume_store"):
            result = seeded.update_item(section.id, item.id, {"bullets": 42})
        assert result is CommandResult.REJECTED
        assert seeded.state is before
        assert "update_item rejected" in caplog.text

    def test_duplicate_then_remove_round_trip(self, seeded):
        section = _sections(seeded)[0]
        before = [i.model_dump(exclude={"id"}) for i in section.items]
        seeded.duplicate_item(section.id, section.items[0].id)
        items = _sections(seeded)[0].items
        assert len(items) == 2
        copy_id = items[1].id
        assert copy_id != items[0].id
        seeded.remove_item(section.id, copy_id)
        after = [i.model_dump(exclude={"id"}) for i in _sections(seeded)[0].items]
        assert after == before

    def test_reorder_items(self, seeded):
        section = _sections(seeded)[0]
        seeded.add_item(section.id)
        ids = [i.id for i in _sections(seeded)[0].items]
        seeded.reorder_items(section.id, 1, 0)
        assert [i.id for i in _sections(seeded)[0].items] == [ids[1], ids[0]]

    def test_stale_item_is_not_found(self, seeded):
        section = _sections(seeded)[0]
        assert seeded.remove_item(section.id, "gone") is CommandResult.NOT_FOUND
        assert seeded.update_item("gone", "gone", {"role": "x"}) is CommandResult.NOT_FOUND


class TestBullets:
    def _exp(self, store):
        section = _sections(store)[0]
        return section.id, section.items[0].id

    def test_add_bullet(self, seeded):
        sid, iid = self._exp(seeded)
        seeded.add_bullet(sid, iid, "Cut costs 20%")
        assert _sections(seeded)[0].items[0].bullets[-1] == "Cut costs 20%"

    def test_add_bullet_creates_list(self, seeded):
        skills = _sections(seeded)[2]
        item = skills.items[0]
        seeded.add_bullet(skills.id, item.id)
        assert getattr(_sections(seeded)[2].items[0], "bullets") == [""]

    def test_update_and_remove_bullet(self, seeded):
        sid, iid = self._exp(seeded)
        seeded.update_bullet(sid, iid, 0, "Rewritten")
        assert _sections(seeded)[0].items[0].bullets[0] == "Rewritten"
        seeded.remove_bullet(sid, iid, 0)
        bullets = _sections(seeded)[0].items[0].bullets
        assert len(bullets) == 3
        assert "Rewritten" not in bullets

    def test_bullet_index_out_of_range(self, seeded):
        sid, iid = self._exp(seeded)
        assert seeded.update_bullet(sid, iid, 10, "x") is CommandResult.NOT_FOUND
        assert seeded.remove_bullet(sid, iid, -1) is CommandResult.NOT_FOUND

    def test_reorder_bullets(self, seeded):
        sid, iid = self._exp(seeded)
        bullets = list(_sections(seeded)[0].items[0].bullets)
        seeded.reorder_bullets(sid, iid, 3, 0)
        assert _sections(seeded)[0].items[0].bullets == [bullets[3], *bullets[:3]]


class TestCustomFields:
    @pytest.fixture
    def custom(self, seeded):
        seeded.add_section(SectionType.CUSTOM)
        section_id = _sections(seeded)[-1].id
        seeded.add_item(section_id)
        item_id = _sections(seeded)[-1].items[0].id
        return seeded, section_id, item_id

    def test_add_update_remove(self, custom):
        store, sid, iid = custom
        store.add_custom_field(sid, iid)
        field = _sections(store)[-1].items[0].fields[0]
        assert field.label == "New Field"
        assert field.value == ""

        store.update_custom_field(sid, iid, field.id, {"value": "Remote", "id": "x"})
        updated = _sections(store)[-1].items[0].fields[0]
        assert updated.id == field.id
        assert updated.value == "Remote"

        store.remove_custom_field(sid, iid, field.id)
        assert _sections(store)[-1].items[0].fields == []

    def test_unknown_field_is_not_found(self, custom):
        store, sid, iid = custom
        assert store.update_custom_field(sid, iid, "nope", {"label": "x"}) is CommandResult.NOT_FOUND


class TestVersionsAndSettings:
    def test_update_settings(self, seeded):
        assert seeded.update_settings({"template_id": "graphic", "font_size": "large"}) is CommandResult.APPLIED
        assert seeded.active_settings.template_id == "graphic"
        assert seeded.active_settings.font_size == "large"

    def test_update_settings_rejects_bad_enum(self, seeded):
        assert seeded.update_settings({"page_size": "A3"}) is CommandResult.REJECTED

    def test_update_basics(self, seeded):
        seeded.update_document_basics({"name": "Jane Doe"})
        assert seeded.active_document.basics.name == "Jane Doe"
        assert seeded.active_document.basics.email == "j.sterling@enterprise-elite.pro"

    def test_fork_version(self, seeded):
        original = seeded.active_version
        assert seeded.fork_version() is CommandResult.APPLIED
        resume = seeded.current_resume
        assert len(resume.versions) == 2
        fork = seeded.active_version
        assert fork.id != original.id
        assert fork.name == "V2.0"
        assert resume.current_version_id == fork.id
        assert fork.document == original.document

    def test_fork_edits_do_not_leak(self, seeded):
        original_id = seeded.state.active_version_id
        seeded.fork_version("Tailored")
        seeded.update_document_basics({"name": "Changed"})
        assert seeded.select_version(original_id) is CommandResult.APPLIED
        assert seeded.active_document.basics.name == "Dr. Jonathan J. Sterling"

    def test_select_version_moves_current_version(self, seeded):
        original_id = seeded.state.active_version_id
        seeded.fork_version()
        seeded.select_version(original_id)
        resume_id = seeded.state.current_resume_id
        assert seeded.current_resume.current_version_id == original_id
        seeded.select_resume(resume_id)
        assert seeded.state.active_version_id == original_id

    def test_select_unknown_version(self, seeded):
        active = seeded.state.active_version_id
        assert seeded.select_version("ver_missing") is CommandResult.NOT_FOUND
        assert seeded.state.active_version_id == active


class TestSideEffects:
    def test_clear_saving(self, seeded):
        seeded.update_settings({"font_size": "small"})
        assert seeded.state.is_saving is True
        assert seeded.clear_saving() is CommandResult.APPLIED
        assert seeded.state.is_saving is False

    def test_content_command_sets_saving_and_stamps(self, seeded):
        before = seeded.active_version.updated_at
        seeded.update_document_basics({"label": "Architect"})
        assert seeded.state.is_saving is True
        assert seeded.active_version.updated_at > before

    def test_structural_command_leaves_flag_and_stamp(self, seeded):
        before = seeded.active_version.updated_at
        seeded.toggle_section_visibility(_sections(seeded)[0].id)
        assert seeded.state.is_saving is False
        assert seeded.active_version.updated_at == before

    def test_not_found_changes_nothing(self, seeded):
        seeded.update_bullet("gone", "gone", 0, "x")
        assert seeded.state.is_saving is False

    def test_snapshots_are_immutable(self, seeded):
        snapshot = seeded.state
        document = seeded.active_document
        seeded.update_document_basics({"name": "Someone Else"})
        assert document.basics.name == "Dr. Jonathan J. Sterling"
        assert snapshot.resumes[0].versions[0].document.basics.name == "Dr. Jonathan J. Sterling"

    def test_untouched_branches_are_shared(self, seeded):
        before = seeded.active_document
        seeded.update_section_title(before.sections[0].id, "Work")
        after = seeded.active_document
        assert after.sections[1] is before.sections[1]

    def test_subscribers_receive_states(self, seeded):
        received = []
        unsubscribe = seeded.subscribe(received.append)
        seeded.update_settings({"font_size": "small"})
        unsubscribe()
        seeded.update_settings({"font_size": "large"})
        assert len(received) == 1
        assert received[0].resumes[0].versions[0].settings.font_size == "small"

    def test_applied_commands_persist(self, seeded, storage):
        saves = storage.saves
        seeded.update_settings({"font_size": "small"})
        assert storage.saves == saves + 1
        assert storage.state is seeded.state


class TestRaiseForStatus:
    def test_not_found_raises_stale_reference(self, seeded):
        with pytest.raises(StaleReferenceError):
            seeded.remove_section("gone").raise_for_status()

    def test_rejected_raises_invalid_patch(self, seeded):
        with pytest.raises(InvalidPatchError):
            seeded.update_settings({"font_size": "enormous"}).raise_for_status()

    def test_applied_returns_self(self, seeded):
        assert seeded.update_settings({}).raise_for_status() is CommandResult.APPLIED


class TestLifecycle:
    def test_init_loads_persisted_state(self, seeded, storage):
        restored = ResumeStore(storage)
        restored.init()
        assert restored.state == seeded.state

    def test_teardown_flushes_and_drops_listeners(self, seeded, storage):
        received = []
        seeded.subscribe(received.append)
        seeded.teardown()
        assert storage.state is seeded.state
        seeded.update_settings({"font_size": "small"})
        assert received == []
