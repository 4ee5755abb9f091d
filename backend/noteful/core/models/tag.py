from __future__ import annotations

from .base import OwnedNamedModel


class Tag(OwnedNamedModel):
    """A named label; a note references any number of tags."""
