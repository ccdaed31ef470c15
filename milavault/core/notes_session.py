"""Notes panel: one person's notes open at a time, independent of the edit session."""
import logging
from typing import Optional

from milavault.core.draft_store import NOTES, DraftStore
from milavault.core.sync_controller import SyncController
from milavault.models.person import Person
from milavault.models.results import Outcome, SyncResult

logger = logging.getLogger(__name__)

NOTHING_TO_SAVE = "No unsaved note changes."


class NotesSession:
    """A notes draft existing for a person is what marks its notes as unsaved."""

    def __init__(self, sync: SyncController, drafts: DraftStore) -> None:
        self._sync = sync
        self._drafts = drafts
        self.expanded_id: Optional[str] = None

    def toggle(self, person: Person) -> None:
        if self.expanded_id == person.id:
            self.expanded_id = None
            return
        if not self._drafts.has(NOTES, person.id):
            self._drafts.set(NOTES, person.id, person.notes or "")
        self.expanded_id = person.id

    def close(self) -> None:
        self.expanded_id = None

    def change(self, record_id: str, value: str) -> None:
        self._drafts.set(NOTES, record_id, value)

    def value(self, person: Person) -> str:
        draft = self._drafts.get(NOTES, person.id)
        return draft if draft is not None else (person.notes or "")

    def save(self, person: Person) -> SyncResult:
        draft = self._drafts.get(NOTES, person.id)
        if draft is None:
            if self.expanded_id == person.id:
                self.expanded_id = None
            return SyncResult(Outcome.OK, NOTHING_TO_SAVE, person.id)
        result = self._sync.update(person.id, {"notes": draft}, action="note")
        if result.ok:
            self._drafts.delete(NOTES, person.id)
            if self.expanded_id == person.id:
                self.expanded_id = None
        return result

    def forget(self, record_id: str) -> None:
        if self.expanded_id == record_id:
            self.expanded_id = None
