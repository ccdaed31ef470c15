"""Structured-field edit session endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from milavault.api.responses import result_to_dict
from milavault.api.state import AppState, get_state
from milavault.core.errors import PersonNotFoundError, SessionStateError

router = APIRouter()


class EditFieldBody(BaseModel):
    field: str
    value: str


@router.get("")
def get_edit(state: AppState = Depends(get_state)):
    """Return the active edit target and its data."""
    view = state.vault.snapshot()
    return {"editing_id": view.editing_id, "data": view.editing_data}


@router.post("/commit")
def commit_edit(state: AppState = Depends(get_state)):
    """Save the active edit."""
    try:
        result = state.vault.save_edit()
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return result_to_dict(result)


@router.post("/cancel")
def cancel_edit(state: AppState = Depends(get_state)):
    """Discard the active edit and its draft."""
    try:
        state.vault.cancel_editing()
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"ok": True}


@router.patch("")
def edit_field(body: EditFieldBody, state: AppState = Depends(get_state)):
    """Update one field of the active edit (persisted as a draft)."""
    try:
        state.vault.edit_field(body.field, body.value)
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    view = state.vault.snapshot()
    return {"editing_id": view.editing_id, "data": view.editing_data}


@router.post("/{record_id}")
def start_edit(record_id: str, state: AppState = Depends(get_state)):
    """Start editing a person; autosaves the current edit first."""
    try:
        result = state.vault.start_editing(record_id)
    except PersonNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    body = result_to_dict(result)
    body["editing_id"] = state.vault.snapshot().editing_id
    return body
