"""Supabase (PostgREST) record store over HTTP."""
import logging
from typing import Dict, List, Optional

import httpx

from milavault.config import HTTP_TIMEOUT_SEC, PEOPLE_TABLE
from milavault.core.errors import RecordStoreError
from milavault.core.record_store import RecordStore
from milavault.models.person import TEXT_FIELDS, Person

logger = logging.getLogger(__name__)


def _error_message(resp: httpx.Response) -> str:
    """PostgREST puts a human message under "message"; fall back to the status line."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {resp.status_code}"


class SupabaseRecordStore(RecordStore):
    """RecordStore backed by a Supabase table; every request filters on user_id."""

    def __init__(
        self,
        url: str,
        api_key: str,
        access_token: Optional[str] = None,
        table: str = PEOPLE_TABLE,
        client: Optional[httpx.Client] = None,
    ) -> None:
        headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {access_token or api_key}",
            "Content-Type": "application/json",
        }
        self._table = table
        self._client = client or httpx.Client(
            base_url=f"{url.rstrip('/')}/rest/v1",
            headers=headers,
            timeout=HTTP_TIMEOUT_SEC,
        )

    def _request(self, method: str, params: Dict[str, str], **kwargs) -> httpx.Response:
        try:
            resp = self._client.request(method, f"/{self._table}", params=params, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Supabase %s failed: %s", method, e)
            raise RecordStoreError(str(e) or "Network error.") from e
        if resp.status_code >= 400:
            msg = _error_message(resp)
            logger.warning("Supabase %s rejected (%s): %s", method, resp.status_code, msg)
            raise RecordStoreError(msg)
        return resp

    def _rows(self, resp: httpx.Response) -> List[dict]:
        try:
            rows = resp.json() or []
        except ValueError as e:
            logger.warning("Supabase returned a non-JSON body: %s", e)
            raise RecordStoreError("Unexpected response from the record store.") from e
        if not isinstance(rows, list):
            raise RecordStoreError("Unexpected response from the record store.")
        return rows

    def insert(self, owner_id: str, attributes: Dict[str, str]) -> str:
        row = {k: v for k, v in attributes.items() if k in TEXT_FIELDS}
        row["user_id"] = owner_id
        resp = self._request(
            "POST",
            {"select": "id"},
            json=[row],
            headers={"Prefer": "return=representation"},
        )
        rows = self._rows(resp)
        if not rows:
            raise RecordStoreError("Insert returned no row.")
        try:
            return str(rows[0]["id"])
        except (KeyError, TypeError) as e:
            raise RecordStoreError("Insert returned a row without an id.") from e

    def update(self, record_id: str, owner_id: str, attributes: Dict[str, str]) -> None:
        row = {k: v for k, v in attributes.items() if k in TEXT_FIELDS}
        self._request(
            "PATCH",
            {"id": f"eq.{record_id}", "user_id": f"eq.{owner_id}"},
            json=row,
        )

    def delete(self, record_id: str, owner_id: str) -> None:
        self._request("DELETE", {"id": f"eq.{record_id}", "user_id": f"eq.{owner_id}"})

    def list(self, owner_id: str) -> List[Person]:
        resp = self._request(
            "GET",
            {"select": "*", "user_id": f"eq.{owner_id}", "order": "name.asc"},
        )
        try:
            return [Person.from_dict(row) for row in self._rows(resp)]
        except (KeyError, TypeError) as e:
            logger.warning("Supabase returned a malformed row: %s", e)
            raise RecordStoreError("Unexpected response from the record store.") from e

    def close(self) -> None:
        self._client.close()
