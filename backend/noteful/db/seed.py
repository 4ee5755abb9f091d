#!/usr/bin/env python
"""Seed a development database with users, folders, tags and notes.

Every record goes through the services, so passwords are hashed and note
references are validated exactly as for API writes. Users that already exist
are skipped together with their data, so the script can be re-run.

Usage:
    python -m noteful.db.seed
    python -m noteful.db.seed --file backend/supabase/seed.json
"""
from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import Any

from noteful.api.v1.schemas.note import NoteCreate
from noteful.api.v1.schemas.user import UserCreate
from noteful.config import settings
from noteful.container import ServiceContainer, build_supabase_services
from noteful.core.errors import DuplicateKeyError
from noteful.db.base import create_store_client
from noteful.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

DEFAULT_SEED_FILE = Path(__file__).resolve().parents[2] / "supabase" / "seed.json"


async def seed_user(services: ServiceContainer, entry: dict[str, Any]) -> bool:
    """Create one user and everything it owns. Returns False if the user existed."""
    try:
        user = await services.users.create_user(
            UserCreate(
                username=entry["username"],
                password=entry["password"],
                fullname=entry.get("fullname"),
            )
        )
    except DuplicateKeyError:
        logger.info("Seed user exists, skipping", extra={"username": entry["username"]})
        return False

    folders = {name: await services.folders.create(name, user.id) for name in entry.get("folders", [])}
    tags = {name: await services.tags.create(name, user.id) for name in entry.get("tags", [])}

    for note in entry.get("notes", []):
        folder = folders.get(note["folder"]) if note.get("folder") else None
        await services.notes.create_note(
            NoteCreate(
                title=note["title"],
                content=note.get("content"),
                folder_id=str(folder.id) if folder else None,
                tags=[str(tags[name].id) for name in note.get("tags", [])],
            ),
            user.id,
        )

    logger.info(
        "Seeded user",
        extra={
            "username": user.username,
            "folders": len(folders),
            "tags": len(tags),
            "notes": len(entry.get("notes", [])),
        },
    )
    return True


async def seed_database(services: ServiceContainer, data: dict[str, Any]) -> int:
    """Seed every user in ``data``; returns how many were created."""
    created = 0
    for entry in data.get("users", []):
        if await seed_user(services, entry):
            created += 1
    return created


def main():
    parser = argparse.ArgumentParser(description="Seed the Noteful database")
    parser.add_argument("--file", default=str(DEFAULT_SEED_FILE), help="Seed data JSON file")
    args = parser.parse_args()

    setup_logging()
    data = json.loads(Path(args.file).read_text(encoding="utf-8"))
    services = build_supabase_services(create_store_client(settings), settings)

    created = asyncio.run(seed_database(services, data))
    print(f"Seeded {created} of {len(data.get('users', []))} users from {args.file}")


if __name__ == "__main__":
    main()
