from __future__ import annotations

import re
from typing import Iterable, Optional, Union

from heapoql.config import merge_unions_enabled
from heapoql.observability.logging import get_logger

logger = get_logger(__name__)

# Trailing "number,number identifier". The id list must not be glued to a preceding
# word character, and the identifier must be separated from it, so hex literals
# such as 0x1f never look like an id list.
_ID_LIST_RE = re.compile(
    r"\s*(?<!\w)((?:\d+\s*,\s*)*\d+)(?:\s+([A-Za-z_][A-Za-z_0-9]*))?\s*$",
    flags=re.ASCII,
)


class QueryBuffer:
    """
    Growable query text owned by a single caller.
    union() edits it in place; read the final statement with str(buffer).
    """

    def __init__(self, text: str = ""):
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def append(self, text: str) -> "QueryBuffer":
        self._text += text
        return self

    def insert(self, index: int, text: str) -> "QueryBuffer":
        self._text = self._text[:index] + text + self._text[index:]
        return self

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"QueryBuffer({self._text!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryBuffer):
            return self._text == other._text
        if isinstance(other, str):
            return self._text == other
        return NotImplemented

    __hash__ = None  # mutable


def _try_merge(buffer: QueryBuffer, addition: str) -> bool:
    m1 = _ID_LIST_RE.search(buffer.text)
    m2 = _ID_LIST_RE.search(addition)
    if not (m1 and m2):
        return False
    # same prefix and identifier
    if buffer.text[: m1.start()] != addition[: m2.start()]:
        return False
    if m1.group(2) != m2.group(2):
        return False
    buffer.insert(m1.end(1), "," + m2.group(1))
    return True


def union(buffer: QueryBuffer, addition: str, *, merge: Optional[bool] = None) -> None:
    """
    Append an OQL union of `addition` to the query in `buffer`.

    When both texts end in an id list with the same prefix and alias, e.g.
        SELECT s.a,s.b,s.c FROM OBJECTS 1,173 s
        SELECT s.a,s.b,s.c FROM OBJECTS 123 s
    the ids are combined into one selection:
        SELECT s.a,s.b,s.c FROM OBJECTS 1,173,123 s
    Anything else is appended as ' UNION (<addition>)'.
    """
    if not len(buffer):
        buffer.append(addition)
        return
    if merge is None:
        merge = merge_unions_enabled()
    if merge and _try_merge(buffer, addition):
        logger.debug("merged id list into query: %s", addition)
        return
    logger.debug("appending UNION clause: %s", addition)
    buffer.append(" UNION (").append(addition).append(")")


def union_text(query: str, addition: str, *, merge: Optional[bool] = None) -> str:
    """Same as union() for immutable strings: returns the combined query."""
    buf = QueryBuffer(query)
    union(buf, addition, merge=merge)
    return str(buf)


def union_all(fragments: Iterable[Optional[Union[str, QueryBuffer]]], *, merge: Optional[bool] = None) -> Optional[str]:
    """
    Fold union() over fragments in order. None entries (e.g. from an empty
    for_object_ids()) are skipped; returns None when nothing was added.
    """
    buf = QueryBuffer()
    for fragment in fragments:
        if fragment is None:
            continue
        union(buf, str(fragment), merge=merge)
    return str(buf) if len(buf) else None
