"""Notes panel endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from milavault.api.responses import result_to_dict
from milavault.api.state import AppState, get_state
from milavault.core.errors import PersonNotFoundError

router = APIRouter()


class NoteBody(BaseModel):
    value: str


@router.post("/close")
def close_notes(state: AppState = Depends(get_state)):
    """Close the open notes panel; its draft is kept."""
    state.vault.close_notes()
    return {"expanded_notes_id": None}


@router.post("/{record_id}/toggle")
def toggle_notes(record_id: str, state: AppState = Depends(get_state)):
    """Open or close a person's notes panel."""
    try:
        value = state.vault.toggle_notes(record_id)
    except PersonNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {
        "expanded_notes_id": state.vault.snapshot().expanded_notes_id,
        "value": value,
    }


@router.put("/{record_id}")
def change_note(record_id: str, body: NoteBody, state: AppState = Depends(get_state)):
    """Store the notes textarea content as a draft."""
    try:
        state.vault.change_note(record_id, body.value)
    except PersonNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"ok": True}


@router.post("/{record_id}/save")
def save_note(record_id: str, state: AppState = Depends(get_state)):
    """Write the notes draft to the record store."""
    try:
        result = state.vault.save_note(record_id)
    except PersonNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return result_to_dict(result)
