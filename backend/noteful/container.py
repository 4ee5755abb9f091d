from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from noteful.core.repositories.implementations.supabase.named_repository import (
    SupabaseFolderRepository,
    SupabaseTagRepository,
)
from noteful.core.repositories.implementations.supabase.note_repository import (
    SupabaseNoteRepository,
)
from noteful.core.repositories.implementations.supabase.user_repository import (
    SupabaseUserRepository,
)
from noteful.core.services.auth_service import AuthService
from noteful.core.services.folder_service import FolderService
from noteful.core.services.note_service import NoteService
from noteful.core.services.reference_validator import ReferenceValidator
from noteful.core.services.tag_service import TagService
from noteful.core.services.user_service import UserService

if TYPE_CHECKING:
    from supabase import Client

    from noteful.config import Settings
    from noteful.core.repositories.folder_repository import FolderRepository
    from noteful.core.repositories.note_repository import NoteRepository
    from noteful.core.repositories.tag_repository import TagRepository
    from noteful.core.repositories.user_repository import UserRepository


@dataclass(frozen=True)
class ServiceContainer:
    """Services wired once at startup and shared by every request."""

    notes: NoteService
    folders: FolderService
    tags: TagService
    users: UserService
    auth: AuthService


def build_services(
    *,
    settings: Settings,
    users: UserRepository,
    folders: FolderRepository,
    tags: TagRepository,
    notes: NoteRepository,
) -> ServiceContainer:
    """Wire services over the given repositories."""
    validator = ReferenceValidator(folders, tags)
    return ServiceContainer(
        notes=NoteService(notes, tags, validator),
        folders=FolderService(folders, notes),
        tags=TagService(tags, notes),
        users=UserService(users),
        auth=AuthService(
            users,
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiry_seconds=settings.jwt_expiry_seconds,
        ),
    )


def build_supabase_services(client: Client, settings: Settings) -> ServiceContainer:
    return build_services(
        settings=settings,
        users=SupabaseUserRepository(client),
        folders=SupabaseFolderRepository(client),
        tags=SupabaseTagRepository(client),
        notes=SupabaseNoteRepository(client),
    )
