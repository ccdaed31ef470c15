"""Shared fixtures: a record store that can be told to fail, file-backed drafts, a vault."""
from typing import Dict, List

import pytest

from milavault.core.auth import StaticAuthProvider
from milavault.core.draft_store import DraftStore
from milavault.core.errors import RecordStoreError
from milavault.core.local_storage import FileStorage
from milavault.core.record_store import LocalRecordStore
from milavault.core.vault import Vault
from milavault.models.person import Person

OWNER = "owner-1"


class FlakyStore(LocalRecordStore):
    """In-memory store that logs calls and fails on demand."""

    def __init__(self) -> None:
        super().__init__(path=None)
        self.calls: List[tuple] = []
        self.fail_writes: str | None = None
        self.fail_lists: str | None = None

    def _maybe_fail_write(self) -> None:
        if self.fail_writes is not None:
            raise RecordStoreError(self.fail_writes)

    def insert(self, owner_id: str, attributes: Dict[str, str]) -> str:
        self.calls.append(("insert", owner_id, dict(attributes)))
        self._maybe_fail_write()
        return super().insert(owner_id, attributes)

    def update(self, record_id: str, owner_id: str, attributes: Dict[str, str]) -> None:
        self.calls.append(("update", record_id, owner_id, dict(attributes)))
        self._maybe_fail_write()
        super().update(record_id, owner_id, attributes)

    def delete(self, record_id: str, owner_id: str) -> None:
        self.calls.append(("delete", record_id, owner_id))
        self._maybe_fail_write()
        super().delete(record_id, owner_id)

    def list(self, owner_id: str) -> List[Person]:
        self.calls.append(("list", owner_id))
        if self.fail_lists is not None:
            raise RecordStoreError(self.fail_lists)
        return super().list(owner_id)

    def writes(self) -> List[tuple]:
        return [c for c in self.calls if c[0] != "list"]


@pytest.fixture
def store() -> FlakyStore:
    return FlakyStore()


@pytest.fixture
def auth() -> StaticAuthProvider:
    return StaticAuthProvider(OWNER)


@pytest.fixture
def storage(tmp_path) -> FileStorage:
    return FileStorage(tmp_path / "drafts")


@pytest.fixture
def drafts(storage) -> DraftStore:
    return DraftStore(storage)


@pytest.fixture
def vault(store, auth, drafts) -> Vault:
    v = Vault(store, auth, drafts)
    v.load()
    return v


def seed(vault: Vault, store: FlakyStore, *names: str) -> Dict[str, str]:
    """Insert people directly into the store and refresh; returns name -> id."""
    ids = {n: store.insert(OWNER, {"name": n}) for n in names}
    vault.load()
    store.calls.clear()
    return ids
