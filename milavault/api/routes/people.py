"""People list, search, create and delete; vault lock."""
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from milavault.api.responses import person_to_dict, result_to_dict
from milavault.api.state import AppState, get_state

router = APIRouter()
lock_router = APIRouter()


class CreatePersonBody(BaseModel):
    name: str = ""
    contact: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    social_facebook: Optional[str] = None
    social_instagram: Optional[str] = None
    notes: Optional[str] = None


@router.get("/")
def list_people(q: str = "", state: AppState = Depends(get_state)):
    """Visible people for the search query, plus session state."""
    view = state.vault.snapshot(q)
    return {
        "people": [person_to_dict(p, q, view.notes_drafts.get(p.id)) for p in view.people],
        "status": view.status,
        "loading": view.loading,
        "editing_id": view.editing_id,
        "expanded_notes_id": view.expanded_notes_id,
    }


@router.post("/refresh")
def refresh_people(state: AppState = Depends(get_state)):
    """Re-fetch the list from the record store."""
    return result_to_dict(state.vault.load())


@router.post("/")
def create_person(body: CreatePersonBody, state: AppState = Depends(get_state)):
    """Add a person. Name is required."""
    attributes = {k: v for k, v in body.model_dump().items() if v is not None}
    return result_to_dict(state.vault.add_person(attributes))


@router.delete("/{record_id}")
def delete_person(record_id: str, confirm: bool = False, state: AppState = Depends(get_state)):
    """Delete a person; without confirm=true nothing is deleted."""
    return result_to_dict(state.vault.delete_person(record_id, confirm=lambda: confirm))


@lock_router.post("/lock")
def lock_vault(state: AppState = Depends(get_state)):
    """Sign out and clear the in-memory list."""
    state.vault.lock()
    return {"ok": True}
