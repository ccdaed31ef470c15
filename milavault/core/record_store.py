"""Record store contract and the local JSON-file backend."""
import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Dict, List, Optional

from milavault.core.errors import RecordStoreError
from milavault.models.person import TEXT_FIELDS, Person

logger = logging.getLogger(__name__)


class RecordStore:
    """Owner-scoped CRUD over people. Every call names the owner; there is no unscoped query.

    Implementations raise RecordStoreError with a user-presentable message.
    """

    def insert(self, owner_id: str, attributes: Dict[str, str]) -> str:
        raise NotImplementedError

    def update(self, record_id: str, owner_id: str, attributes: Dict[str, str]) -> None:
        raise NotImplementedError

    def delete(self, record_id: str, owner_id: str) -> None:
        raise NotImplementedError

    def list(self, owner_id: str) -> List[Person]:
        """All of the owner's people ordered by name ascending."""
        raise NotImplementedError


def _clean(attributes: Dict[str, str]) -> Dict[str, Optional[str]]:
    return {k: v for k, v in attributes.items() if k in TEXT_FIELDS}


class LocalRecordStore(RecordStore):
    """People kept in a JSON file (or only in memory when path is None)."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._people: List[Person] = self._load()

    def _load(self) -> List[Person]:
        if self._path is None or not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read %s: %s", self._path, e)
            return []
        out = []
        for item in data.get("people", []):
            try:
                out.append(Person.from_dict(item))
            except (KeyError, TypeError):
                continue
        return out

    def _commit(self, people: List[Person]) -> None:
        """Write people to disk, then make them current; a failed write changes nothing."""
        if self._path is not None:
            self._save(people)
        self._people = people

    def _save(self, people: List[Person]) -> None:
        data = {"people": [p.to_dict() for p in people]}
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            raise RecordStoreError(f"Could not write {self._path.name}: {e}") from e

    def _find(self, record_id: str, owner_id: str) -> int:
        for i, p in enumerate(self._people):
            if p.id == record_id and p.user_id == owner_id:
                return i
        raise RecordStoreError("Person not found.")

    def insert(self, owner_id: str, attributes: Dict[str, str]) -> str:
        record_id = str(uuid.uuid4())
        person = Person.from_dict({**_clean(attributes), "id": record_id, "user_id": owner_id})
        with self._lock:
            self._commit(self._people + [person])
        return record_id

    def update(self, record_id: str, owner_id: str, attributes: Dict[str, str]) -> None:
        with self._lock:
            i = self._find(record_id, owner_id)
            merged = {**self._people[i].to_dict(), **_clean(attributes)}
            people = list(self._people)
            people[i] = Person.from_dict(merged)
            self._commit(people)

    def delete(self, record_id: str, owner_id: str) -> None:
        with self._lock:
            i = self._find(record_id, owner_id)
            self._commit(self._people[:i] + self._people[i + 1:])

    def list(self, owner_id: str) -> List[Person]:
        with self._lock:
            mine = [Person.from_dict(p.to_dict()) for p in self._people if p.user_id == owner_id]
        return sorted(mine, key=lambda p: p.name)
