from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceUpdate


class AttendanceRepository(Protocol):
    """Storage for attendance records, unique on (player_id, date)."""

    def list_by_date(self, work_date: str) -> Sequence[AttendanceRecord]:
        """Records for one day ordered by player name."""
        raise NotImplementedError

    def list_by_date_range(self, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        """Inclusive range ordered by date, then player name."""
        raise NotImplementedError

    def list_dates(self) -> Sequence[str]:
        """Distinct dates having records, newest first."""
        raise NotImplementedError

    def get_for_player_and_date(self, player_id: str, work_date: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def record_time_in(
        self,
        *,
        player_id: str,
        player_name: str,
        work_date: str,
        time_in: int,
    ) -> Optional[AttendanceRecord]:
        """Insert-or-update guarded by an empty time_in.

        Creates the (player_id, work_date) row, or fills time_in on an existing
        row that has none. Returns None when the row already carries a time_in,
        which is how a lost race between two time-ins shows up.
        """
        raise NotImplementedError

    def record_time_out(self, *, attendance_id: int, time_out: int) -> Optional[AttendanceRecord]:
        """Set time_out on an open record. None when the record is not open any more."""
        raise NotImplementedError

    def apply_update(
        self,
        *,
        player_id: str,
        work_date: str,
        update: AttendanceUpdate,
    ) -> Optional[AttendanceRecord]:
        """Apply only the fields present in ``update``. None when no row matched."""
        raise NotImplementedError

    def delete_for_player_and_date(self, player_id: str, work_date: str) -> bool:
        raise NotImplementedError

    def delete_by_date(self, work_date: str) -> int:
        """Delete every record for a day, returning how many were removed."""
        raise NotImplementedError
