# telemplot/core/sync.py
from __future__ import annotations

import logging
from typing import Any, Hashable, Iterator, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class CursorMirror(Protocol):
    """Anything that can display a cursor position pushed from another chart."""

    def mirror_cursor(self, x: float | None) -> None: ...


class SyncGroup:
    """Set of charts sharing one cursor key; a move on one is shown on all others."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        self._members: list[CursorMirror] = []

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[CursorMirror]:
        return iter(self._members)

    def __contains__(self, member: object) -> bool:
        return any(m is member for m in self._members)

    def join(self, member: CursorMirror) -> None:
        if member not in self:
            self._members.append(member)

    def leave(self, member: CursorMirror) -> None:
        self._members = [m for m in self._members if m is not member]

    def publish(self, source: Any, x: float | None) -> None:
        """Mirror `x` on every member except `source`, synchronously."""
        for member in list(self._members):
            if member is not source:
                member.mirror_cursor(x)


class SyncHub:
    """
    Key -> SyncGroup registry for one render generation.

    Groups are created on first use. A new hub per generation means
    membership never leaks from disposed charts into new ones.
    """

    def __init__(self) -> None:
        self._groups: dict[Hashable, SyncGroup] = {}

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, key: object) -> bool:
        return key in self._groups

    def group(self, key: Any) -> SyncGroup:
        hkey = _hashable(key)
        if hkey not in self._groups:
            logger.debug("creating cursor sync group %r", key)
            self._groups[hkey] = SyncGroup(key)
        return self._groups[hkey]

    def groups(self) -> list[SyncGroup]:
        return list(self._groups.values())


def _hashable(key: Any) -> Hashable:
    # keys come from JSON; lists/objects are unusual but must not crash
    if isinstance(key, list):
        return ("list",) + tuple(_hashable(k) for k in key)
    if isinstance(key, dict):
        return ("dict",) + tuple(sorted((str(k), _hashable(v)) for k, v in key.items()))
    return key
