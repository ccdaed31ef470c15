"""Write-through cache of unsaved per-person drafts, one mapping per namespace."""
import copy
import json
import logging
import warnings
from typing import Any, Dict, Iterable, Optional

from milavault.config import EDIT_DRAFTS_KEY, NOTES_DRAFTS_KEY
from milavault.core.errors import PersistenceWarning
from milavault.core.local_storage import LocalStorage

logger = logging.getLogger(__name__)

NOTES = NOTES_DRAFTS_KEY
EDITS = EDIT_DRAFTS_KEY
NAMESPACES = (NOTES, EDITS)


def _decode(raw: Optional[bytes]) -> Dict[str, Any]:
    """Parse a stored payload; anything that is not a JSON object counts as empty."""
    if raw is None:
        return {}
    data = json.loads(raw.decode("utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return {str(k): v for k, v in data.items()}


class DraftStore:
    """Per-record drafts keyed by person id.

    Every mutation updates the in-memory mapping first, then writes the whole
    namespace to storage before returning. A failed write is logged and the
    in-memory value is kept: the cache, not the record store, is what holds
    unsaved work.
    """

    def __init__(self, storage: LocalStorage, namespaces: Iterable[str] = NAMESPACES) -> None:
        self._storage = storage
        self._drafts: Dict[str, Dict[str, Any]] = {}
        for ns in namespaces:
            self._drafts[ns] = self._hydrate(ns)

    def _hydrate(self, namespace: str) -> Dict[str, Any]:
        try:
            drafts = _decode(self._storage.read(namespace))
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Failed to load drafts %s: %s", namespace, e)
            warnings.warn(f"drafts {namespace} unreadable, starting empty", PersistenceWarning)
            return {}
        logger.debug("Loaded %d drafts from %s", len(drafts), namespace)
        return drafts

    def _persist(self, namespace: str) -> None:
        payload = json.dumps(self._drafts[namespace]).encode("utf-8")
        try:
            self._storage.write(namespace, payload)
        except OSError as e:
            logger.warning("Failed to persist drafts %s: %s", namespace, e)
            warnings.warn(f"drafts {namespace} not persisted", PersistenceWarning)

    def _namespace(self, namespace: str) -> Dict[str, Any]:
        if namespace not in self._drafts:
            raise KeyError(f"Unknown draft namespace: {namespace}")
        return self._drafts[namespace]

    def get(self, namespace: str, record_id: str) -> Optional[Any]:
        """Return a copy of the draft for record_id, or None."""
        value = self._namespace(namespace).get(record_id)
        return copy.deepcopy(value)

    def has(self, namespace: str, record_id: str) -> bool:
        return record_id in self._namespace(namespace)

    def set(self, namespace: str, record_id: str, value: Any) -> None:
        self._namespace(namespace)[record_id] = copy.deepcopy(value)
        self._persist(namespace)

    def delete(self, namespace: str, record_id: str) -> bool:
        """Drop the draft; returns False (and writes nothing) if there was none."""
        drafts = self._namespace(namespace)
        if record_id not in drafts:
            return False
        del drafts[record_id]
        self._persist(namespace)
        return True

    def load_all(self, namespace: str) -> Dict[str, Any]:
        return copy.deepcopy(self._namespace(namespace))
