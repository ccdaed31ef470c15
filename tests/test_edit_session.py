"""Tests for the edit session state machine and autosave-on-switch."""
import pytest

from milavault.core.draft_store import EDITS, NOTES, DraftStore
from milavault.core.errors import SessionStateError
from milavault.models.results import Outcome

from tests.conftest import OWNER, seed


def _updates(store):
    return [c for c in store.calls if c[0] == "update"]


class TestStartEditing:
    def test_seeds_from_record(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        result = vault.start_editing(ids["Ann"])
        assert result.outcome is Outcome.OK
        assert vault.status == "Editing person..."
        assert vault.edit.active_id == ids["Ann"]
        assert vault.edit.active_data["name"] == "Ann"
        assert vault.edit.active_data["contact"] == ""
        assert drafts.get(EDITS, ids["Ann"])["name"] == "Ann"

    def test_seeds_from_existing_draft(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        drafts.set(EDITS, ids["Ann"], {"name": "Annie", "contact": "555"})
        vault.start_editing(ids["Ann"])
        assert vault.edit.active_data["name"] == "Annie"
        assert vault.edit.active_data["contact"] == "555"
        assert vault.edit.active_data["email"] == ""

    def test_notes_read_from_notes_draft_only(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        drafts.set(NOTES, ids["Ann"], "unsaved note")
        vault.start_editing(ids["Ann"])
        assert vault.edit.active_data["notes"] == "unsaved note"
        assert "notes" not in drafts.get(EDITS, ids["Ann"])
        assert drafts.load_all(NOTES) == {ids["Ann"]: "unsaved note"}

    def test_restarting_same_person_keeps_changes(self, vault, store):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.edit_field("contact", "555")
        vault.start_editing(ids["Ann"])
        assert vault.edit.active_data["contact"] == "555"
        assert _updates(store) == []


class TestEditAndCommit:
    def test_edit_writes_through_to_draft(self, vault, store, storage):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.edit_field("contact", "555")
        reloaded = DraftStore(storage)
        assert reloaded.get(EDITS, ids["Ann"])["contact"] == "555"

    def test_edit_requires_session(self, vault):
        with pytest.raises(SessionStateError):
            vault.edit_field("name", "x")
        with pytest.raises(SessionStateError):
            vault.save_edit()
        with pytest.raises(SessionStateError):
            vault.cancel_editing()

    def test_unknown_field(self, vault, store):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        with pytest.raises(ValueError):
            vault.edit_field("password", "x")

    def test_commit_success(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.edit_field("email", "ann@x.com")
        vault.edit_field("notes", "likes tea")
        result = vault.save_edit()
        assert result.outcome is Outcome.OK
        assert vault.status == "Person updated!"
        assert not vault.edit.editing
        assert drafts.load_all(EDITS) == {}
        assert drafts.load_all(NOTES) == {}
        person = vault.find(ids["Ann"])
        assert person.email == "ann@x.com"
        assert person.notes == "likes tea"

    def test_commit_blank_name(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.edit_field("name", "  ")
        result = vault.save_edit()
        assert result.outcome is Outcome.VALIDATION_FAILED
        assert vault.status == "Name is required."
        assert vault.edit.active_id == ids["Ann"]
        assert drafts.get(EDITS, ids["Ann"])["name"] == "  "
        assert _updates(store) == []

    def test_commit_remote_failure(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.edit_field("contact", "555")
        store.fail_writes = "connection reset"
        result = vault.save_edit()
        assert result.outcome is Outcome.REMOTE_FAILED
        assert vault.status == "connection reset"
        assert vault.edit.active_id == ids["Ann"]
        assert drafts.get(EDITS, ids["Ann"])["contact"] == "555"
        assert vault.find(ids["Ann"]).contact is None

        store.fail_writes = None
        assert vault.save_edit().outcome is Outcome.OK
        assert vault.find(ids["Ann"]).contact == "555"

    def test_commit_with_stale_list_still_clears_draft(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.edit_field("contact", "555")
        store.fail_lists = "timeout"
        result = vault.save_edit()
        assert result.outcome is Outcome.STALE
        assert vault.status == "Updated, but list did not refresh. Reload the page."
        assert not vault.edit.editing
        assert drafts.load_all(EDITS) == {}

    def test_cancel_discards_notes_typed_in_form(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.edit_field("notes", "typed in edit form")
        vault.cancel_editing()
        assert drafts.get(NOTES, ids["Ann"]) is None
        assert drafts.get(EDITS, ids["Ann"]) is None
        assert vault.visible("typed") == []
        store.calls.clear()
        assert vault.save_note(ids["Ann"]).outcome is Outcome.OK
        assert _updates(store) == []

    def test_cancel_keeps_notes_panel_draft(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        vault.toggle_notes(ids["Ann"])
        vault.change_note(ids["Ann"], "from panel")
        vault.start_editing(ids["Ann"])
        vault.edit_field("notes", "from form")
        vault.cancel_editing()
        assert drafts.get(NOTES, ids["Ann"]) == "from panel"

    def test_notes_typed_in_form_survive_reload(self, vault, store, drafts, storage):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.edit_field("notes", "typed")
        vault.edit_field("contact", "555")
        assert DraftStore(storage).get(EDITS, ids["Ann"])["notes"] == "typed"
        vault.save_edit()
        assert vault.find(ids["Ann"]).notes == "typed"

    def test_cancel(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.edit_field("contact", "555")
        vault.cancel_editing()
        assert not vault.edit.editing
        assert vault.edit.active_data == {}
        assert drafts.get(EDITS, ids["Ann"]) is None
        assert store.writes() == []


class TestSwitching:
    def test_autosave_before_switch(self, vault, store, drafts):
        ids = seed(vault, store, "Ann", "Bob")
        vault.start_editing(ids["Ann"])
        vault.edit_field("contact", "555")
        result = vault.start_editing(ids["Bob"])
        assert result.outcome is Outcome.OK
        assert vault.edit.active_id == ids["Bob"]
        (update,) = _updates(store)
        assert update[1] == ids["Ann"]
        assert update[3]["contact"] == "555"
        assert vault.find(ids["Ann"]).contact == "555"
        assert drafts.get(EDITS, ids["Ann"]) is None

    def test_blank_name_blocks_switch(self, vault, store, drafts):
        ids = seed(vault, store, "Ann", "Bob")
        vault.start_editing(ids["Ann"])
        vault.edit_field("name", "")
        result = vault.start_editing(ids["Bob"])
        assert result.outcome is Outcome.VALIDATION_FAILED
        assert vault.status == "Name is required before autosaving. Draft kept locally."
        assert vault.edit.active_id == ids["Ann"]
        assert drafts.get(EDITS, ids["Bob"]) is None
        assert _updates(store) == []

    def test_remote_failure_blocks_switch(self, vault, store, drafts):
        ids = seed(vault, store, "Ann", "Bob")
        vault.start_editing(ids["Ann"])
        vault.edit_field("contact", "555")
        store.fail_writes = "server error"
        result = vault.start_editing(ids["Bob"])
        assert result.outcome is Outcome.REMOTE_FAILED
        assert vault.status == "server error"
        assert vault.edit.active_id == ids["Ann"]
        assert drafts.get(EDITS, ids["Ann"])["contact"] == "555"

    def test_draft_survives_reload_then_autosaves(self, vault, store, storage):
        vault.add_person({"name": "Ann"})
        assert [p.name for p in vault.people] == ["Ann"]
        ann = vault.people[0].id
        vault.start_editing(ann)
        vault.edit_field("contact", "555")

        assert DraftStore(storage).get(EDITS, ann)["contact"] == "555"

        bob = store.insert(OWNER, {"name": "Bob"})
        vault.load()
        vault.start_editing(bob)
        assert _updates(store)[-1][3]["contact"] == "555"
        assert vault.edit.active_id == bob
        assert vault.find(ann).contact == "555"
        assert vault.status == "Editing person..."


class TestDeleteWhileEditing:
    def test_delete_active_target(self, vault, store, drafts):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.edit_field("contact", "555")
        vault.edit_field("notes", "draft note")
        result = vault.delete_person(ids["Ann"], confirm=lambda: True)
        assert result.outcome is Outcome.OK
        assert not vault.edit.editing
        assert drafts.get(EDITS, ids["Ann"]) is None
        assert drafts.get(NOTES, ids["Ann"]) is None
        assert _updates(store) == []

    def test_delete_other_person_keeps_session(self, vault, store):
        ids = seed(vault, store, "Ann", "Bob")
        vault.start_editing(ids["Ann"])
        vault.delete_person(ids["Bob"])
        assert vault.edit.active_id == ids["Ann"]


class TestNotesIndependence:
    def test_saved_note_not_overwritten_by_commit(self, vault, store):
        ids = seed(vault, store, "Ann")
        vault.start_editing(ids["Ann"])
        vault.toggle_notes(ids["Ann"])
        vault.change_note(ids["Ann"], "from panel")
        assert vault.save_note(ids["Ann"]).outcome is Outcome.OK
        vault.edit_field("contact", "555")
        vault.save_edit()
        person = vault.find(ids["Ann"])
        assert person.notes == "from panel"
        assert person.contact == "555"
