"""Shared response shaping for the routers."""
from fastapi import HTTPException

from milavault.core.search import highlight
from milavault.models.person import NOTES_FIELD, TEXT_FIELDS, Person
from milavault.models.results import Outcome, SyncResult

_FAILURE_CODES = {
    Outcome.VALIDATION_FAILED: 422,
    Outcome.NOT_AUTHENTICATED: 401,
    Outcome.REMOTE_FAILED: 502,
}


def person_to_dict(p: Person, query: str = "", notes: str | None = None) -> dict:
    data = p.to_dict()
    if notes is not None:
        data["notes_draft"] = notes
    if query.strip():
        shown = {f: getattr(p, f) for f in TEXT_FIELDS}
        if notes is not None:
            shown[NOTES_FIELD] = notes
        data["highlights"] = {
            f: [{"text": s.text, "match": s.match} for s in highlight(text, query)]
            for f, text in shown.items()
        }
    return data


def result_to_dict(result: SyncResult) -> dict:
    """Success (including a stale list) as a body; failures as HTTP errors."""
    code = _FAILURE_CODES.get(result.outcome)
    if code is not None:
        raise HTTPException(status_code=code, detail=result.status)
    return {"outcome": result.outcome.value, "status": result.status, "id": result.record_id}
