"""Log Stream: the ordered console a lesson run writes into."""

from __future__ import annotations

import logging
from typing import Iterator, List

from academy.models import LogEntry, LogKind

logger = logging.getLogger(__name__)


class LogStream:
    """Append-only sequence of LogEntry, replaced wholesale on clear()."""

    def __init__(self) -> None:
        self._entries: List[LogEntry] = []

    def append(self, message: str, kind: LogKind = LogKind.INFO) -> LogEntry:
        """Append an entry stamped with the current time."""
        entry = LogEntry(kind=LogKind(kind), message=message)
        self._entries.append(entry)
        logger.debug("[%s] %s", entry.kind.value, message)
        return entry

    def clear(self) -> None:
        self._entries = []

    def entries(self) -> List[LogEntry]:
        """Return a copy of the entries in call order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(list(self._entries))
