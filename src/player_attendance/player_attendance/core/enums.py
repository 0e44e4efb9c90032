from __future__ import annotations

from enum import Enum


class PlayerStatus(str, Enum):
    """Roster status of a player."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class AttendanceStatus(str, Enum):
    """Status stored on a daily attendance record."""

    PRESENT = "present"
    PARTIAL = "partial"
    ABSENT = "absent"

    def next(self) -> "AttendanceStatus":
        """present -> partial -> absent -> present."""
        order = [AttendanceStatus.PRESENT, AttendanceStatus.PARTIAL, AttendanceStatus.ABSENT]
        return order[(order.index(self) + 1) % len(order)]
