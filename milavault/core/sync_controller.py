"""Remote mutations, list refresh after every successful write, and status lines."""
import logging
from typing import Callable, Dict, List, Optional

from milavault.core.draft_store import EDITS, NOTES, DraftStore
from milavault.core.auth import AuthProvider
from milavault.core.errors import (
    NotAuthenticatedError,
    RecordStoreError,
    RefreshError,
    RemoteWriteError,
    ValidationError,
)
from milavault.core.record_store import RecordStore
from milavault.models.person import Person
from milavault.models.results import Outcome, SyncResult

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "Not authenticated. Please log in again."
NAME_REQUIRED = "Name is required."
LOAD_FAILED = "Could not load people. Please retry."

# action -> (pending, success, stale list, fallback failure)
_MESSAGES = {
    "create": (
        "Saving...",
        "Person added!",
        "Saved, but list did not refresh. Reload the page.",
        "Could not add person. Please try again.",
    ),
    "update": (
        "Saving changes...",
        "Person updated!",
        "Updated, but list did not refresh. Reload the page.",
        "Could not update. Please try again.",
    ),
    "autosave": (
        "Autosaving...",
        "Changes autosaved.",
        "Autosaved, but list did not refresh. Reload the page.",
        "Could not autosave. Please retry.",
    ),
    "note": (
        "Saving note...",
        "Note saved!",
        "Saved, but list did not refresh. Reload the page.",
        "Could not save note. Please try again.",
    ),
    "delete": (
        "Deleting...",
        "Person deleted.",
        "Deleted, but list did not refresh. Reload the page.",
        "Could not delete. Please try again.",
    ),
}


def validate_name(attributes: Dict[str, str]) -> None:
    """Raise ValidationError when a name is being written and it is blank."""
    if "name" in attributes and not (attributes.get("name") or "").strip():
        raise ValidationError(NAME_REQUIRED)


class SyncController:
    """Owns the people list. The list is only ever replaced wholesale by a fetch."""

    def __init__(self, store: RecordStore, auth: AuthProvider, drafts: DraftStore) -> None:
        self._store = store
        self._auth = auth
        self._drafts = drafts
        self._people: List[Person] = []
        self.status = ""
        self.loading = False

    @property
    def people(self) -> List[Person]:
        return self._people

    def owner(self) -> str:
        owner_id = self._auth.get_current_user()
        if not owner_id:
            raise NotAuthenticatedError(NOT_AUTHENTICATED)
        return owner_id

    def is_authenticated(self) -> bool:
        return bool(self._auth.get_current_user())

    def _refetch(self, owner_id: str) -> None:
        self.loading = True
        try:
            people = self._store.list(owner_id)
        except RecordStoreError as e:
            logger.warning("List fetch failed: %s", e)
            raise RefreshError(str(e)) from e
        finally:
            self.loading = False
        self._people = list(people)
        logger.debug("Loaded %d people", len(self._people))

    def _not_authenticated(self, e: NotAuthenticatedError, record_id: Optional[str]) -> SyncResult:
        self.status = str(e)
        return SyncResult(Outcome.NOT_AUTHENTICATED, self.status, record_id, e)

    def _mutate(
        self,
        action: str,
        record_id: Optional[str],
        write: Callable[[str], Optional[str]],
    ) -> SyncResult:
        """Run one write, then refresh. The refresh is never skipped after a successful write."""
        pending, success, stale, failure = _MESSAGES[action]
        try:
            owner_id = self.owner()
        except NotAuthenticatedError as e:
            return self._not_authenticated(e, record_id)
        self.status = pending
        try:
            record_id = write(owner_id) or record_id
        except RecordStoreError as e:
            logger.warning("%s failed for %s: %s", action, record_id, e)
            self.status = str(e) or failure
            return SyncResult(Outcome.REMOTE_FAILED, self.status, record_id, RemoteWriteError(self.status))
        logger.info("%s ok for %s", action, record_id)
        try:
            self._refetch(owner_id)
        except RefreshError as e:
            self.status = stale
            return SyncResult(Outcome.STALE, self.status, record_id, e)
        self.status = success
        return SyncResult(Outcome.OK, self.status, record_id)

    def create(self, attributes: Dict[str, str]) -> SyncResult:
        try:
            validate_name({**attributes, "name": attributes.get("name") or ""})
        except ValidationError as e:
            self.status = str(e)
            return SyncResult(Outcome.VALIDATION_FAILED, self.status, None, e)
        return self._mutate("create", None, lambda owner: self._store.insert(owner, dict(attributes)))

    def update(self, record_id: str, attributes: Dict[str, str], action: str = "update") -> SyncResult:
        """Scoped update. On failure nothing local changes, so the caller can retry."""
        try:
            validate_name(attributes)
        except ValidationError as e:
            self.status = str(e)
            return SyncResult(Outcome.VALIDATION_FAILED, self.status, record_id, e)

        def write(owner_id: str) -> None:
            self._store.update(record_id, owner_id, dict(attributes))

        return self._mutate(action, record_id, write)

    def delete(self, record_id: str, confirm: Optional[Callable[[], bool]] = None) -> SyncResult:
        """Scoped delete; on success both drafts for record_id are dropped."""
        if confirm is not None and not confirm():
            return SyncResult(Outcome.CANCELLED, self.status, record_id)

        def write(owner_id: str) -> None:
            self._store.delete(record_id, owner_id)
            self._drafts.delete(EDITS, record_id)
            self._drafts.delete(NOTES, record_id)

        return self._mutate("delete", record_id, write)

    def refresh(self) -> SyncResult:
        """Re-fetch the owner's people, replacing the list on success."""
        try:
            owner_id = self.owner()
        except NotAuthenticatedError as e:
            return self._not_authenticated(e, None)
        try:
            self._refetch(owner_id)
        except RefreshError as e:
            self.status = LOAD_FAILED
            return SyncResult(Outcome.REMOTE_FAILED, self.status, None, e)
        self.status = ""
        return SyncResult(Outcome.OK, self.status)

    def clear(self) -> None:
        """Forget the list (sign-out)."""
        self._people = []
        self.status = ""
