from __future__ import annotations

import itertools
import random
import string
import time
from typing import Callable, Collection, Optional

from .models import SectionType


SEAT_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
SEAT_SUFFIX_LENGTH = 3


def _millis() -> int:
    return int(time.time() * 1000)


class IdAllocator:
    """
    Hands out section and seat ids. Every id is checked against the ``taken``
    set the caller passes in (normally ``Layout.all_ids()``). Section ids also
    carry a per-allocator sequence number, so one allocator never repeats a
    section id. Seat ids have no such memory: two calls with the same
    ``taken`` set can return the same id, so callers add each new id to
    ``taken`` before asking for the next.
    """

    def __init__(self, rng: Optional[random.Random] = None, clock: Callable[[], int] = _millis):
        self._rng = rng or random.Random()
        self._clock = clock
        self._seq = itertools.count(1)

    def section_id(self, kind: SectionType = SectionType.section, taken: Collection[str] = ()) -> str:
        prefix = "label" if kind == SectionType.label else "section"
        while True:
            candidate = f"{prefix}-{self._clock()}-{next(self._seq)}"
            if candidate not in taken:
                return candidate

    def seat_id(self, section_name: str, taken: Collection[str] = ()) -> str:
        length = SEAT_SUFFIX_LENGTH
        attempts = 0
        while True:
            suffix = "".join(self._rng.choice(SEAT_SUFFIX_ALPHABET) for _ in range(length))
            candidate = f"{section_name}-{suffix}"
            if candidate not in taken:
                return candidate
            attempts += 1
            if attempts % 200 == 0:
                # 36**3 suffixes per name; grow rather than spin on a crowded section
                length += 1

    def unique(self, preferred: str, section_name: str, taken: Collection[str] = ()) -> str:
        if preferred not in taken:
            return preferred
        return self.seat_id(section_name, taken)

    @staticmethod
    def grid_seat_id(section_name: str, row: str, number: int) -> str:
        return f"{section_name}-{row}-{number}"
