from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from noteful.api.v1.schemas.note import NoteCreate, NoteRead, NoteUpdate
from noteful.core.schemas.auth import AuthUser
from noteful.core.services.note_service import NoteService
from noteful.dependencies import get_current_user, get_note_service

router = APIRouter()


@router.get("", response_model=list[NoteRead])
async def list_notes(
    search_term: str | None = Query(default=None, alias="searchTerm"),
    folder_id: str | None = Query(default=None, alias="folderId"),
    tag_id: str | None = Query(default=None, alias="tagId"),
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    """List the caller's notes, most recently updated first."""
    notes = await service.list_notes(
        current_user.id,
        search_term=search_term,
        folder_id=folder_id,
        tag_id=tag_id,
    )
    return [NoteRead.model_validate(n) for n in notes]


@router.get("/{note_id}", response_model=NoteRead)
async def get_note(
    note_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    note = await service.get_note(note_id, user_id=current_user.id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteRead.model_validate(note)


@router.post("", response_model=NoteRead, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate,
    request: Request,
    response: Response,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    note = await service.create_note(payload, user_id=current_user.id)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{note.id}"
    return NoteRead.model_validate(note)


@router.put("/{note_id}", response_model=NoteRead)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    note = await service.update_note(note_id, payload, user_id=current_user.id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    return NoteRead.model_validate(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    """Delete a note. Missing notes are not an error."""
    await service.delete_note(note_id, user_id=current_user.id)
    return None
