from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidTimeSequenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_check_violation, is_duplicate_key, optional_int
from .model import AttendanceRecord, AttendanceUpdate
from .repository import AttendanceRepository

_COLUMNS = "id, player_id, player_name, work_date, time_in, time_out, status"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        player_id=r["player_id"],
        player_name=r["player_name"],
        date=str(r["work_date"]),
        time_in=optional_int(r.get("time_in")),
        time_out=optional_int(r.get("time_out")),
        status=AttendanceStatus(r["status"]),
    )


def _select_one(cur, player_id: str, work_date: str) -> Optional[AttendanceRecord]:
    cur.execute(
        f"SELECT {_COLUMNS} FROM attendance WHERE player_id=%s AND work_date=%s",
        (player_id, work_date),
    )
    r = fetchone(cur)
    return _to_record(r) if r else None


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_date(self, work_date: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE work_date=%s
                ORDER BY player_name ASC
                """,
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_by_date_range(self, start_date: str, end_date: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE work_date BETWEEN %s AND %s
                ORDER BY work_date ASC, player_name ASC
                """,
                (start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_dates(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT work_date FROM attendance ORDER BY work_date DESC")
            return [str(r["work_date"]) for r in fetchall(cur)]

    def get_for_player_and_date(self, player_id: str, work_date: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return _select_one(cur, player_id, work_date)

    def record_time_in(
        self,
        *,
        player_id: str,
        player_name: str,
        work_date: str,
        time_in: int,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance(player_id, player_name, work_date, time_in, status)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (player_id, player_name, work_date, time_in, AttendanceStatus.PRESENT.value),
                )
            except mysql.connector.IntegrityError as e:
                if not is_duplicate_key(e):
                    raise
                # Row exists: only a row without time_in may be claimed.
                cur.execute(
                    """
                    UPDATE attendance
                    SET time_in=%s, status=%s
                    WHERE player_id=%s AND work_date=%s AND time_in IS NULL
                    """,
                    (time_in, AttendanceStatus.PRESENT.value, player_id, work_date),
                )
                if cur.rowcount == 0:
                    return None
            return _select_one(cur, player_id, work_date)

    def record_time_out(self, *, attendance_id: int, time_out: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    UPDATE attendance
                    SET time_out=%s
                    WHERE id=%s AND time_in IS NOT NULL AND time_out IS NULL
                    """,
                    (time_out, int(attendance_id)),
                )
            except mysql.connector.Error as e:
                if is_check_violation(e):
                    raise InvalidTimeSequenceError("timeOut must be >= timeIn") from e
                raise
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def apply_update(
        self,
        *,
        player_id: str,
        work_date: str,
        update: AttendanceUpdate,
    ) -> Optional[AttendanceRecord]:
        # Column names come from this fixed list only; values are parameters.
        sets: list[str] = []
        params: list[object] = []
        if update.status is not None:
            sets.append("status=%s")
            params.append(update.status.value)
        if update.time_in is not None:
            sets.append("time_in=%s")
            params.append(int(update.time_in))
        if update.time_out is not None:
            sets.append("time_out=%s")
            params.append(int(update.time_out))
        if not sets:
            return self.get_for_player_and_date(player_id, work_date)

        params.extend([player_id, work_date])
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    f"UPDATE attendance SET {', '.join(sets)} WHERE player_id=%s AND work_date=%s",
                    tuple(params),
                )
            except mysql.connector.Error as e:
                if is_check_violation(e):
                    raise InvalidTimeSequenceError("timeOut must be >= timeIn") from e
                raise
            return _select_one(cur, player_id, work_date)

    def delete_for_player_and_date(self, player_id: str, work_date: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE player_id=%s AND work_date=%s",
                (player_id, work_date),
            )
            return cur.rowcount > 0

    def delete_by_date(self, work_date: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE work_date=%s", (work_date,))
            return int(cur.rowcount)
