"""Internal/external identity pair shared by every plan entity."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class EntityKey:
    internal: int  # primary key, used for foreign keys only
    external: int  # canonical id, the only id clients ever see

    @classmethod
    def of(cls, entity: Any) -> "EntityKey":
        return cls(internal=entity.id, external=entity.canonical_id)
