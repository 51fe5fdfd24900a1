from __future__ import annotations

import re
from typing import Optional, Protocol, Sequence, Union

from heapoql.config import get_settings
from heapoql.oql.model import ClassRef

_ADDRESS_MASK = (1 << 64) - 1


class HasName(Protocol):
    name: str


PatternLike = Union[re.Pattern, str]


def for_address(address: int) -> str:
    """Select object by its address."""
    # 64-bit two's complement, like a heap dump address
    return f"SELECT * FROM OBJECTS 0x{address & _ADDRESS_MASK:x}"


def for_object_id(object_id: int) -> str:
    """Select object by its object id."""
    return f"SELECT * FROM OBJECTS {int(object_id)}"


def for_object_ids(object_ids: Sequence[int]) -> Optional[str]:
    """Select objects by their ids. Returns None for an empty id list."""
    if not object_ids:
        return None
    return "SELECT * FROM OBJECTS " + ",".join(str(int(i)) for i in object_ids)


def retained_by(query: str) -> str:
    """Select the retained set of a given OQL query."""
    return f"SELECT AS RETAINED SET * FROM OBJECTS ({query})"


def retained_by_object(object_id: int) -> str:
    """Select the retained set of a given object."""
    return f"SELECT AS RETAINED SET * FROM OBJECTS {int(object_id)}"


def for_objects_of_class(cls: Union[ClassRef, HasName, int]) -> str:
    """All objects of a class, given as a class reference or its object id."""
    if isinstance(cls, int):
        return f"SELECT * FROM {cls}"
    if isinstance(cls, ClassRef):
        return f"SELECT * FROM {cls.oql_token}"
    return f"SELECT * FROM {cls.name}"


def _pattern_text(pattern: PatternLike) -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else str(pattern)


def _quoted_class_pattern(pattern: PatternLike, include_subclasses: bool) -> str:
    prefix = "INSTANCEOF " if include_subclasses else ""
    return f'"{prefix}{_pattern_text(pattern)}"'


def instances_by_pattern(pattern: PatternLike, include_subclasses: bool = False) -> str:
    """All instances of classes matching a regular expression."""
    return "SELECT * FROM " + _quoted_class_pattern(pattern, include_subclasses)


def classes_by_pattern(pattern: PatternLike, include_subclasses: bool = False) -> str:
    """All classes matching a regular expression."""
    return "SELECT * FROM OBJECTS " + _quoted_class_pattern(pattern, include_subclasses)


def classes_by_class_loader_id(class_loader_id: int, class_interface: Optional[str] = None) -> str:
    """
    All classes loaded by the given class loader:

        SELECT * FROM java.lang.Class c
        WHERE c implements org.eclipse.mat.snapshot.model.IClass
          and c.@classLoaderId = <id>
    """
    iface = class_interface or get_settings().class_interface
    return (
        f"SELECT * FROM java.lang.Class c WHERE c implements {iface}"
        f" and c.@classLoaderId = {int(class_loader_id)}"
    )


def instances_by_class_loader_id(class_loader_id: int, class_interface: Optional[str] = None) -> str:
    """All objects whose class was loaded by the given class loader."""
    return f"SELECT * FROM ({classes_by_class_loader_id(class_loader_id, class_interface)})"
