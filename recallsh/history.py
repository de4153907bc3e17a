"""
Bounded command history.

Entries live in a fixed ring of slots; ordinal n is always stored in slot
(n - 1) % capacity, so recording over a full ring overwrites the oldest
entry instead of shifting the rest. dump() is called from the interrupt
handler, so every entry carries its pre-rendered "<ordinal>\\t<text>\\n"
bytes and dump() does nothing but os.write() them.
"""

import logging
import os
from typing import NamedTuple

from recallsh.config import HISTORY_DEPTH

logger = logging.getLogger(__name__)


class HistoryEntry(NamedTuple):
    ordinal: int
    text: str
    rendered: bytes


class HistoryLog:
    def __init__(self, capacity=HISTORY_DEPTH):
        if capacity < 1:
            raise ValueError("history capacity must be positive")
        self.capacity = capacity
        self._slots = [None] * capacity
        self._total = 0

    @property
    def total(self):
        """Number of entries recorded since the log was created"""
        return self._total

    @property
    def oldest_ordinal(self):
        """Smallest ordinal still retained, or 0 when the log is empty"""
        if self._total == 0:
            return 0
        return self._total - len(self) + 1

    def __len__(self):
        return min(self._total, self.capacity)

    def _slot(self, ordinal):
        return (ordinal - 1) % self.capacity

    def record(self, text):
        """
        Append text as a new entry with the next ordinal.
        Returns: the new HistoryEntry, or None if text is empty
        """
        if not text:
            return None

        ordinal = self._total + 1
        entry = HistoryEntry(ordinal, text, f"{ordinal}\t{text}\n".encode(errors="surrogateescape"))
        slot = self._slot(ordinal)
        if self._slots[slot] is not None:
            logger.debug("evicting history entry %d", self._slots[slot].ordinal)

        # The entry is complete before it is published, and the counter only
        # moves after the slot holds it.
        self._slots[slot] = entry
        self._total = ordinal
        return entry

    def lookup(self, ordinal):
        """Return the entry with this ordinal, or None if it is not retained"""
        if not self.oldest_ordinal <= ordinal <= self._total:
            return None
        return self._slots[self._slot(ordinal)]

    def last(self):
        if self._total == 0:
            return None
        return self._slots[self._slot(self._total)]

    def entries(self):
        """Snapshot of the retained entries, oldest first"""
        if self._total == 0:
            return []
        return [self._slots[self._slot(n)] for n in range(self.oldest_ordinal, self._total + 1)]

    def dump(self, fd):
        """Write every retained entry to a raw file descriptor, oldest first"""
        total = self._total
        first = total - min(total, self.capacity) + 1
        for ordinal in range(first, total + 1):
            data = self._slots[(ordinal - 1) % self.capacity].rendered
            while data:
                data = data[os.write(fd, data):]
