from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import business_today, business_yesterday, now_ms as current_ms, require_iso_date
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_UTC_OFFSET_HOURS
from ..core.exceptions import (
    AlreadyTimedInError,
    AlreadyTimedOutError,
    InvalidTimeSequenceError,
    MustTimeInFirstError,
    NoRecordFoundError,
    NotFoundError,
    NothingToUpdateError,
    ValidationError,
)
from .model import AttendanceRecord, AttendanceUpdate, validate_time_order
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily check-in/check-out state machine.

    Every "today"/"yesterday" is computed in the fixed business offset
    (UTC+8 by default). Transitions accept an explicit ``now_ms`` so callers
    and tests can pin the clock.
    """

    def __init__(self, attendance: AttendanceRepository, *, utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS):
        self._attendance = attendance
        self._offset = int(utc_offset_hours)

    @property
    def utc_offset_hours(self) -> int:
        return self._offset

    def today(self, now_ms: Optional[int] = None) -> str:
        return business_today(now_ms, self._offset)

    def yesterday(self, now_ms: Optional[int] = None) -> str:
        return business_yesterday(now_ms, self._offset)

    # Read side

    def get_today_attendance(self, *, now_ms: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_date(self.today(now_ms))

    def get_attendance_by_date(self, work_date: str) -> Sequence[AttendanceRecord]:
        return self._attendance.list_by_date(require_iso_date(work_date))

    def get_attendance_by_date_range(self, start: str, end: str) -> Sequence[AttendanceRecord]:
        start = require_iso_date(start, "start")
        end = require_iso_date(end, "end")
        if start > end:
            raise ValidationError("start must not be after end")
        return self._attendance.list_by_date_range(start, end)

    def list_attendance_dates(self) -> Sequence[str]:
        return self._attendance.list_dates()

    def get_player_attendance_today(self, player_id: str, *, now_ms: Optional[int] = None) -> Optional[AttendanceRecord]:
        player_id = require_non_empty(player_id, "playerId")
        return self._attendance.get_for_player_and_date(player_id, self.today(now_ms))

    def get_player_attendance_yesterday(self, player_id: str, *, now_ms: Optional[int] = None) -> Optional[AttendanceRecord]:
        player_id = require_non_empty(player_id, "playerId")
        return self._attendance.get_for_player_and_date(player_id, self.yesterday(now_ms))

    # Transitions

    def time_in(self, player_id: str, player_name: str, *, now_ms: Optional[int] = None) -> AttendanceRecord:
        player_id = require_non_empty(player_id, "playerId")
        player_name = require_non_empty(player_name, "playerName")
        now = current_ms() if now_ms is None else int(now_ms)
        today = self.today(now)

        existing = self._attendance.get_for_player_and_date(player_id, today)
        if existing and existing.time_in is not None:
            raise AlreadyTimedInError("Already timed in today")

        record = self._attendance.record_time_in(
            player_id=player_id,
            player_name=player_name,
            work_date=today,
            time_in=now,
        )
        if record is None:
            # Another request timed this player in between the read and the write.
            raise AlreadyTimedInError("Already timed in today")

        logger.info("time-in player=%s date=%s id=%s", player_id, today, record.id)
        return record

    def time_out(self, player_id: str, *, now_ms: Optional[int] = None) -> AttendanceRecord:
        player_id = require_non_empty(player_id, "playerId")
        now = current_ms() if now_ms is None else int(now_ms)

        record = self._attendance.get_for_player_and_date(player_id, self.today(now))
        if record is None:
            # Night shift: a shift opened before the day boundary closes on
            # yesterday's record. Never looks further back than one day.
            record = self._attendance.get_for_player_and_date(player_id, self.yesterday(now))
        if record is None:
            raise NoRecordFoundError("No attendance record found for today")
        if record.time_in is None:
            raise MustTimeInFirstError("Must time in first")
        if record.time_out is not None:
            raise AlreadyTimedOutError("Already timed out today")
        if now < record.time_in:
            raise InvalidTimeSequenceError("timeOut must be >= timeIn")

        updated = self._attendance.record_time_out(attendance_id=record.id, time_out=now)
        if updated is None:
            raise AlreadyTimedOutError("Already timed out today")

        logger.info("time-out player=%s date=%s id=%s", player_id, updated.date, updated.id)
        return updated

    # Administrative operations

    def _resolve_date(self, work_date: Optional[str]) -> str:
        if work_date is None or not str(work_date).strip():
            return self.today()
        return require_iso_date(work_date)

    def update_attendance(self, player_id: str, work_date: Optional[str], update: AttendanceUpdate) -> AttendanceRecord:
        """Apply a partial patch to one (player, date) record.

        The merged record must still satisfy timeOut >= timeIn.
        """
        player_id = require_non_empty(player_id, "playerId")
        work_date = self._resolve_date(work_date)
        if update.is_empty():
            raise NothingToUpdateError("Nothing to update")

        existing = self._attendance.get_for_player_and_date(player_id, work_date)
        if existing is None:
            raise NotFoundError("Attendance not found")

        merged = update.apply_to(existing)
        validate_time_order(merged.time_in, merged.time_out)

        updated = self._attendance.apply_update(player_id=player_id, work_date=work_date, update=update)
        if updated is None:
            raise NotFoundError("Attendance not found")

        logger.info("attendance patched player=%s date=%s", player_id, work_date)
        return updated

    def cycle_status(self, player_id: str, work_date: Optional[str] = None) -> AttendanceRecord:
        player_id = require_non_empty(player_id, "playerId")
        work_date = self._resolve_date(work_date)

        existing = self._attendance.get_for_player_and_date(player_id, work_date)
        if existing is None:
            raise NotFoundError("Attendance not found")
        return self.update_attendance(player_id, work_date, AttendanceUpdate(status=existing.status.next()))

    def delete_attendance(self, player_id: str, work_date: Optional[str] = None) -> None:
        player_id = require_non_empty(player_id, "playerId")
        work_date = self._resolve_date(work_date)
        if not self._attendance.delete_for_player_and_date(player_id, work_date):
            raise NotFoundError("Attendance not found")
        logger.info("attendance deleted player=%s date=%s", player_id, work_date)

    def delete_all_attendance_by_date(self, work_date: str) -> int:
        work_date = require_iso_date(work_date)
        deleted = self._attendance.delete_by_date(work_date)
        logger.warning("bulk delete date=%s removed=%d", work_date, deleted)
        return deleted
