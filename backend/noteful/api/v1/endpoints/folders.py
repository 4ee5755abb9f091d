from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from noteful.api.v1.schemas.folder import FolderRead, FolderWrite
from noteful.core.schemas.auth import AuthUser
from noteful.core.services.folder_service import FolderService
from noteful.dependencies import get_current_user, get_folder_service

router = APIRouter()


@router.get("", response_model=list[FolderRead])
async def list_folders(
    current_user: AuthUser = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service),
):
    folders = await service.list_all(current_user.id)
    return [FolderRead.model_validate(f) for f in folders]


@router.get("/{folder_id}", response_model=FolderRead)
async def get_folder(
    folder_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service),
):
    folder = await service.get(folder_id, current_user.id)
    if not folder:
        raise HTTPException(status_code=404, detail="Folder not found")
    return FolderRead.model_validate(folder)


@router.post("", response_model=FolderRead, status_code=status.HTTP_201_CREATED)
async def create_folder(
    payload: FolderWrite,
    request: Request,
    response: Response,
    current_user: AuthUser = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service),
):
    folder = await service.create(payload.name, current_user.id)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{folder.id}"
    return FolderRead.model_validate(folder)


@router.put("/{folder_id}", response_model=FolderRead)
async def update_folder(
    folder_id: str,
    payload: FolderWrite,
    current_user: AuthUser = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service),
):
    folder = await service.update(folder_id, payload.name, current_user.id)
    if not folder:
        raise HTTPException(status_code=404, detail="Folder not found")
    return FolderRead.model_validate(folder)


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(
    folder_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service),
):
    """Delete a folder; its notes stay, without a folder."""
    await service.delete(folder_id, current_user.id)
    return None
