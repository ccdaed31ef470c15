"""Structured-field edit session: at most one person is being edited at a time."""
import logging
from typing import Dict, Optional

from milavault.core.draft_store import EDITS, NOTES, DraftStore
from milavault.core.errors import SessionStateError, ValidationError
from milavault.core.sync_controller import NAME_REQUIRED, SyncController
from milavault.models.person import EDIT_FIELDS, NOTES_FIELD, TEXT_FIELDS, Person
from milavault.models.results import Outcome, SyncResult

logger = logging.getLogger(__name__)

AUTOSAVE_NAME_REQUIRED = "Name is required before autosaving. Draft kept locally."
EDITING = "Editing person..."


class EditSession:
    """Idle, or Editing(active_id).

    While editing, active_data mirrors the edit draft for active_id and the
    draft always exists. Switching to another person first commits the
    current one; if that commit fails the switch does not happen.
    """

    def __init__(self, sync: SyncController, drafts: DraftStore) -> None:
        self._sync = sync
        self._drafts = drafts
        self.active_id: Optional[str] = None
        self.active_data: Dict[str, str] = {}

    @property
    def editing(self) -> bool:
        return self.active_id is not None

    def _require_editing(self) -> str:
        if self.active_id is None:
            raise SessionStateError("No person is being edited.")
        return self.active_id

    def reset(self) -> None:
        """Back to Idle without touching drafts."""
        self.active_id = None
        self.active_data = {}

    def _seed(self, person: Person) -> Dict[str, str]:
        draft = self._drafts.get(EDITS, person.id) or {}
        data = {f: draft.get(f, getattr(person, f) or "") for f in EDIT_FIELDS}
        notes = self._drafts.get(NOTES, person.id)
        if NOTES_FIELD in draft:
            data[NOTES_FIELD] = draft[NOTES_FIELD]
        elif notes is not None:
            data[NOTES_FIELD] = notes
        else:
            data[NOTES_FIELD] = person.notes or ""
        return data

    def _write_draft(self, record_id: str, with_notes: bool) -> None:
        snapshot = {f: self.active_data[f] for f in EDIT_FIELDS}
        if with_notes:
            snapshot[NOTES_FIELD] = self.active_data[NOTES_FIELD]
        self._drafts.set(EDITS, record_id, snapshot)

    def start(self, person: Person) -> SyncResult:
        if self.active_id is not None and self.active_id != person.id:
            result = self.auto_commit(self.active_id)
            if not result.ok:
                logger.info("Not switching to %s: autosave of %s failed", person.id, self.active_id)
                return result
        if self.active_id != person.id:
            self.active_id = person.id
            self.active_data = self._seed(person)
            if not self._drafts.has(EDITS, person.id):
                self._write_draft(person.id, with_notes=False)
        self._sync.status = EDITING
        return SyncResult(Outcome.OK, EDITING, person.id)

    def edit(self, field: str, value: str) -> None:
        record_id = self._require_editing()
        if field not in TEXT_FIELDS:
            raise ValueError(f"Unknown field: {field}")
        self.active_data[field] = value
        # notes typed here stay in the edit draft until commit; the notes panel draft is left alone
        drafted_notes = NOTES_FIELD in (self._drafts.get(EDITS, record_id) or {})
        self._write_draft(record_id, with_notes=drafted_notes or field == NOTES_FIELD)

    def _payload(self, record_id: str) -> Dict[str, str]:
        """Draft values win over the in-memory snapshot.

        Notes are sent only when drafted: typed in this edit, else from the notes panel.
        """
        payload = {f: self.active_data.get(f, "") for f in EDIT_FIELDS} if record_id == self.active_id else {}
        draft = self._drafts.get(EDITS, record_id) or {}
        payload.update(draft)
        notes = self._drafts.get(NOTES, record_id)
        if NOTES_FIELD not in draft and notes is not None:
            payload[NOTES_FIELD] = notes
        return payload

    def _commit(self, record_id: str, action: str, name_required: str) -> SyncResult:
        payload = self._payload(record_id)
        if not (payload.get("name") or "").strip():
            self._sync.status = name_required
            return SyncResult(
                Outcome.VALIDATION_FAILED, name_required, record_id, ValidationError(name_required)
            )
        result = self._sync.update(record_id, payload, action=action)
        if result.ok:
            self._drafts.delete(EDITS, record_id)
            self._drafts.delete(NOTES, record_id)
            if self.active_id == record_id:
                self.reset()
        return result

    def commit(self) -> SyncResult:
        return self._commit(self._require_editing(), "update", NAME_REQUIRED)

    def auto_commit(self, record_id: str) -> SyncResult:
        return self._commit(record_id, "autosave", AUTOSAVE_NAME_REQUIRED)

    def cancel(self) -> None:
        record_id = self._require_editing()
        self._drafts.delete(EDITS, record_id)
        self.reset()
        self._sync.status = ""
        logger.debug("Cancelled edit of %s", record_id)
