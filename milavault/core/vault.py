"""The vault: one controller owning the list, both sessions and the drafts."""
import functools
import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from milavault.core.auth import AuthProvider
from milavault.core.draft_store import NOTES, DraftStore
from milavault.core.edit_session import EditSession
from milavault.core.errors import PersonNotFoundError
from milavault.core.notes_session import NotesSession
from milavault.core.record_store import RecordStore
from milavault.core.search import filter_people
from milavault.core.sync_controller import SyncController
from milavault.models.person import Person
from milavault.models.results import Outcome, SyncResult

logger = logging.getLogger(__name__)


@dataclass
class VaultView:
    """Consistent copy of what the UI shows, taken under the vault lock."""
    people: List[Person]
    notes_drafts: Dict[str, str]
    status: str
    loading: bool
    editing_id: Optional[str]
    editing_data: Dict[str, str] = field(default_factory=dict)
    expanded_notes_id: Optional[str] = None


def _serialized(method):
    """Run one user action at a time; a pending remote call blocks the next action."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


class Vault:
    """Entry point for every user action against the people list."""

    def __init__(self, store: RecordStore, auth: AuthProvider, drafts: DraftStore) -> None:
        self._lock = threading.RLock()
        self._auth = auth
        self.drafts = drafts
        self.sync = SyncController(store, auth, drafts)
        self.edit = EditSession(self.sync, drafts)
        self.notes = NotesSession(self.sync, drafts)

    @property
    def people(self) -> List[Person]:
        return self.sync.people

    @property
    def status(self) -> str:
        return self.sync.status

    def find(self, record_id: str) -> Person:
        for p in self.sync.people:
            if p.id == record_id:
                return p
        raise PersonNotFoundError(f"Person not found: {record_id}")

    @_serialized
    def visible(self, query: str = "") -> Sequence[Person]:
        """The list filtered by query, searching unsaved notes drafts too."""
        return filter_people(self.sync.people, query, self.drafts.load_all(NOTES))

    @_serialized
    def snapshot(self, query: str = "") -> VaultView:
        notes_drafts = self.drafts.load_all(NOTES)
        return VaultView(
            people=list(filter_people(self.sync.people, query, notes_drafts)),
            notes_drafts=notes_drafts,
            status=self.sync.status,
            loading=self.sync.loading,
            editing_id=self.edit.active_id,
            editing_data=dict(self.edit.active_data),
            expanded_notes_id=self.notes.expanded_id,
        )

    @_serialized
    def load(self) -> SyncResult:
        return self.sync.refresh()

    @_serialized
    def add_person(self, attributes: Dict[str, str]) -> SyncResult:
        return self.sync.create(attributes)

    @_serialized
    def start_editing(self, record_id: str) -> SyncResult:
        return self.edit.start(self.find(record_id))

    @_serialized
    def edit_field(self, field: str, value: str) -> None:
        self.edit.edit(field, value)

    @_serialized
    def save_edit(self) -> SyncResult:
        return self.edit.commit()

    @_serialized
    def cancel_editing(self) -> None:
        self.edit.cancel()

    @_serialized
    def delete_person(self, record_id: str, confirm: Optional[Callable[[], bool]] = None) -> SyncResult:
        if confirm is not None and not confirm():
            return SyncResult(Outcome.CANCELLED, self.sync.status, record_id)
        if self.edit.active_id == record_id and self.sync.is_authenticated():
            self.edit.cancel()
        result = self.sync.delete(record_id)
        if result.ok:
            self.notes.forget(record_id)
        return result

    @_serialized
    def toggle_notes(self, record_id: str) -> str:
        """Open or close the panel; returns the text the panel shows."""
        person = self.find(record_id)
        self.notes.toggle(person)
        return self.notes.value(person)

    @_serialized
    def change_note(self, record_id: str, value: str) -> None:
        self.find(record_id)
        self.notes.change(record_id, value)

    @_serialized
    def close_notes(self) -> None:
        self.notes.close()

    @_serialized
    def save_note(self, record_id: str) -> SyncResult:
        return self.notes.save(self.find(record_id))

    @_serialized
    def lock(self) -> None:
        """Sign out and drop the list; drafts stay on disk for the next sign-in."""
        self._auth.sign_out()
        self.edit.reset()
        self.notes.close()
        self.sync.clear()
        logger.info("Vault locked")
