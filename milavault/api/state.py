"""Shared application state (injected into routes)."""
from milavault.config import (
    DRAFTS_DIR,
    LOCAL_OWNER_ID,
    PEOPLE_PATH,
    RECORD_BACKEND,
    SUPABASE_ACCESS_TOKEN,
    SUPABASE_ANON_KEY,
    SUPABASE_URL,
)
from milavault.core.auth import AuthProvider, StaticAuthProvider, SupabaseAuthProvider
from milavault.core.draft_store import DraftStore
from milavault.core.local_storage import FileStorage
from milavault.core.record_store import LocalRecordStore, RecordStore
from milavault.core.supabase_store import SupabaseRecordStore
from milavault.core.vault import Vault


def _default_backend() -> tuple[RecordStore, AuthProvider]:
    if RECORD_BACKEND == "supabase":
        store = SupabaseRecordStore(SUPABASE_URL, SUPABASE_ANON_KEY, SUPABASE_ACCESS_TOKEN)
        auth = SupabaseAuthProvider(SUPABASE_URL, SUPABASE_ANON_KEY, SUPABASE_ACCESS_TOKEN)
        return store, auth
    return LocalRecordStore(PEOPLE_PATH), StaticAuthProvider(LOCAL_OWNER_ID)


class AppState:
    def __init__(
        self,
        store: RecordStore | None = None,
        auth: AuthProvider | None = None,
        drafts: DraftStore | None = None,
    ) -> None:
        if store is None or auth is None:
            default_store, default_auth = _default_backend()
            store = store or default_store
            auth = auth or default_auth
        self._store = store
        self._auth = auth
        self._drafts = drafts
        self._vault: Vault | None = None

    @property
    def vault(self) -> Vault:
        if self._vault is None:
            drafts = self._drafts or DraftStore(FileStorage(DRAFTS_DIR))
            self._vault = Vault(self._store, self._auth, drafts)
        return self._vault


_state: AppState | None = None


def get_state() -> AppState:
    global _state
    if _state is None:
        _state = AppState()
    return _state


def set_state(state: AppState) -> None:
    """Swap the shared state (tests, alternative backends)."""
    global _state
    _state = state
