from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_UTC_OFFSET_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .players.mysql_player_repository import MySQLPlayerRepository
from .players.repository import PlayerRepository
from .players.service import PlayerService


@dataclass(frozen=True)
class Container:
    players_repo: PlayerRepository
    attendance_repo: AttendanceRepository

    player_service: PlayerService
    attendance_service: AttendanceService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    players_repo: PlayerRepository,
    attendance_repo: AttendanceRepository,
    utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    return Container(
        players_repo=players_repo,
        attendance_repo=attendance_repo,
        player_service=PlayerService(players_repo),
        attendance_service=AttendanceService(attendance_repo, utc_offset_hours=utc_offset_hours),
        conn=conn,
    )


def build_container(*, db_config: dict, utc_offset_hours: int = DEFAULT_UTC_OFFSET_HOURS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        players_repo=MySQLPlayerRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        utc_offset_hours=utc_offset_hours,
        conn=conn,
    )
