from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ClassRef:
    """
    A class object found in a heap snapshot, known by its name, its object id,
    or both. Queries prefer the name.
    """

    name: Optional[str] = None
    object_id: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.name and self.object_id is None:
            raise ValueError("ClassRef needs a name or an object_id")

    @property
    def oql_token(self) -> str:
        return self.name if self.name else str(int(self.object_id))

    def __str__(self) -> str:
        return self.oql_token
