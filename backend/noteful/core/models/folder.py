from __future__ import annotations

from .base import OwnedNamedModel


class Folder(OwnedNamedModel):
    """A named grouping of notes; each note sits in at most one folder."""
