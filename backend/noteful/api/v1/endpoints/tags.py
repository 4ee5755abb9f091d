from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from noteful.api.v1.schemas.tag import TagRead, TagWrite
from noteful.core.schemas.auth import AuthUser
from noteful.core.services.tag_service import TagService
from noteful.dependencies import get_current_user, get_tag_service

router = APIRouter()


@router.get("", response_model=list[TagRead])
async def list_tags(
    current_user: AuthUser = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    tags = await service.list_all(current_user.id)
    return [TagRead.model_validate(t) for t in tags]


@router.get("/{tag_id}", response_model=TagRead)
async def get_tag(
    tag_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    tag = await service.get(tag_id, current_user.id)
    if not tag:
        raise HTTPException(status_code=404, detail="Tag not found")
    return TagRead.model_validate(tag)


@router.post("", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(
    payload: TagWrite,
    request: Request,
    response: Response,
    current_user: AuthUser = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    tag = await service.create(payload.name, current_user.id)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{tag.id}"
    return TagRead.model_validate(tag)


@router.put("/{tag_id}", response_model=TagRead)
async def update_tag(
    tag_id: str,
    payload: TagWrite,
    current_user: AuthUser = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    tag = await service.update(tag_id, payload.name, current_user.id)
    if not tag:
        raise HTTPException(status_code=404, detail="Tag not found")
    return TagRead.model_validate(tag)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: TagService = Depends(get_tag_service),
):
    """Delete a tag and pull it out of every note that carries it."""
    await service.delete(tag_id, current_user.id)
    return None
