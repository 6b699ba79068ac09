"""
Time windows and overlap detection.

A window is the half-open interval ``[start, start + duration)``.  Two
windows overlap iff each one starts before the other ends, so windows that
only share a boundary do not conflict.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional, TypeVar

from core.exceptions import InvalidWindow


class Conflict(enum.Enum):
    CONFLICT = 'conflict'
    NO_CONFLICT = 'no_conflict'


@dataclass(frozen=True)
class TimeWindow:
    start: datetime
    duration_minutes: int

    @classmethod
    def of(cls, start: Optional[datetime], duration_minutes) -> 'TimeWindow':
        """Build a window, rejecting a missing start or a non-positive duration."""
        if start is None:
            raise InvalidWindow()
        try:
            minutes = int(duration_minutes)
        except (TypeError, ValueError):
            raise InvalidWindow() from None
        if minutes <= 0:
            raise InvalidWindow('Duration must be a positive number of minutes')
        return cls(start=start, duration_minutes=minutes)

    @property
    def end(self) -> datetime:
        return self.start + timedelta(minutes=self.duration_minutes)

    def overlaps(self, other: 'TimeWindow') -> bool:
        return self.start < other.end and other.start < self.end


T = TypeVar('T')


def first_overlap(window: TimeWindow, booked: Iterable[tuple[T, TimeWindow]]) -> Optional[T]:
    """Return the first booked item whose window overlaps ``window``."""
    for item, other in booked:
        if window.overlaps(other):
            return item
    return None
