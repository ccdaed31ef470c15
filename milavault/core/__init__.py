"""Core services: drafts, record stores, sessions and sync."""
from milavault.core.draft_store import DraftStore
from milavault.core.record_store import LocalRecordStore, RecordStore
from milavault.core.vault import Vault

__all__ = ["DraftStore", "LocalRecordStore", "RecordStore", "Vault"]
