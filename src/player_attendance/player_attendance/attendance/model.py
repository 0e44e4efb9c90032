from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from ..common.validators import optional_timestamp
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidTimeSequenceError, ValidationError


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one player's attendance for one business day.

    ``player_name`` is a snapshot taken at time-in and is not re-synced when
    the player is renamed. Timestamps are epoch milliseconds.
    """

    id: int
    player_id: str
    player_name: str
    date: str
    time_in: Optional[int]
    time_out: Optional[int]
    status: AttendanceStatus

    @property
    def is_open(self) -> bool:
        return self.time_in is not None and self.time_out is None

    def worked_ms(self, now_ms: int) -> Optional[int]:
        """Elapsed time from time_in to time_out, or to ``now_ms`` while open."""
        if self.time_in is None:
            return None
        end = self.time_out if self.time_out is not None else now_ms
        return max(0, end - self.time_in)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "playerId": self.player_id,
            "playerName": self.player_name,
            "date": self.date,
            "timeIn": self.time_in,
            "timeOut": self.time_out,
            "status": self.status.value,
        }


def validate_time_order(time_in: Optional[int], time_out: Optional[int]) -> None:
    if time_out is None:
        return
    if time_in is None:
        raise InvalidTimeSequenceError("timeOut cannot be set without timeIn")
    if time_out < time_in:
        raise InvalidTimeSequenceError("timeOut must be >= timeIn")


def parse_attendance_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError("status must be one of: present, partial, absent") from None


@dataclass(frozen=True)
class AttendanceUpdate:
    """Administrative patch. ``None`` means "leave this field alone"."""

    status: Optional[AttendanceStatus] = None
    time_in: Optional[int] = None
    time_out: Optional[int] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "AttendanceUpdate":
        status = data.get("status")
        return cls(
            status=parse_attendance_status(status) if status is not None else None,
            time_in=optional_timestamp(data.get("timeIn"), "timeIn"),
            time_out=optional_timestamp(data.get("timeOut"), "timeOut"),
        )

    def is_empty(self) -> bool:
        return self.status is None and self.time_in is None and self.time_out is None

    def apply_to(self, record: AttendanceRecord) -> AttendanceRecord:
        changes: dict[str, Any] = {}
        if self.status is not None:
            changes["status"] = self.status
        if self.time_in is not None:
            changes["time_in"] = self.time_in
        if self.time_out is not None:
            changes["time_out"] = self.time_out
        return replace(record, **changes)
