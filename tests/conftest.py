from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Optional

import pytest

from player_attendance import create_app
from player_attendance.attendance.model import AttendanceRecord, AttendanceUpdate, validate_time_order
from player_attendance.attendance.service import AttendanceService
from player_attendance.container import build_services
from player_attendance.core.enums import AttendanceStatus
from player_attendance.core.exceptions import DuplicateKeyError
from player_attendance.players.model import Player
from player_attendance.players.service import PlayerService

UTC8 = timezone(timedelta(hours=8))


def _ms_at(year, month, day, hour=0, minute=0, second=0, tz=UTC8) -> int:
    return int(datetime(year, month, day, hour, minute, second, tzinfo=tz).timestamp() * 1000)


class InMemoryAttendance:
    """Dict-backed attendance store keyed by (player_id, date)."""

    def __init__(self):
        self._by_player_date: dict[tuple[str, str], AttendanceRecord] = {}
        self._id = 0

    def add(self, *, player_id, player_name, date, time_in=None, time_out=None, status=AttendanceStatus.PRESENT):
        self._id += 1
        rec = AttendanceRecord(
            id=self._id,
            player_id=player_id,
            player_name=player_name,
            date=date,
            time_in=time_in,
            time_out=time_out,
            status=status,
        )
        self._by_player_date[(player_id, date)] = rec
        return rec

    def all(self):
        return list(self._by_player_date.values())

    def list_by_date(self, work_date):
        items = [r for r in self._by_player_date.values() if r.date == work_date]
        return sorted(items, key=lambda r: r.player_name)

    def list_by_date_range(self, start_date, end_date):
        items = [r for r in self._by_player_date.values() if start_date <= r.date <= end_date]
        return sorted(items, key=lambda r: (r.date, r.player_name))

    def list_dates(self):
        return sorted({r.date for r in self._by_player_date.values()}, reverse=True)

    def get_for_player_and_date(self, player_id, work_date) -> Optional[AttendanceRecord]:
        return self._by_player_date.get((player_id, work_date))

    def record_time_in(self, *, player_id, player_name, work_date, time_in):
        existing = self._by_player_date.get((player_id, work_date))
        if existing is None:
            return self.add(player_id=player_id, player_name=player_name, date=work_date, time_in=time_in)
        if existing.time_in is not None:
            return None
        updated = replace(existing, time_in=time_in, status=AttendanceStatus.PRESENT)
        self._by_player_date[(player_id, work_date)] = updated
        return updated

    def record_time_out(self, *, attendance_id, time_out):
        for key, rec in self._by_player_date.items():
            if rec.id == attendance_id:
                if rec.time_in is None or rec.time_out is not None:
                    return None
                validate_time_order(rec.time_in, time_out)
                updated = replace(rec, time_out=time_out)
                self._by_player_date[key] = updated
                return updated
        return None

    def apply_update(self, *, player_id, work_date, update: AttendanceUpdate):
        existing = self._by_player_date.get((player_id, work_date))
        if existing is None:
            return None
        updated = update.apply_to(existing)
        # Same rule the CHECK constraint enforces in MySQL.
        validate_time_order(updated.time_in, updated.time_out)
        self._by_player_date[(player_id, work_date)] = updated
        return updated

    def delete_for_player_and_date(self, player_id, work_date):
        return self._by_player_date.pop((player_id, work_date), None) is not None

    def delete_by_date(self, work_date):
        keys = [k for k, r in self._by_player_date.items() if r.date == work_date]
        for k in keys:
            del self._by_player_date[k]
        return len(keys)

    def delete_for_player(self, player_id):
        keys = [k for k in self._by_player_date if k[0] == player_id]
        for k in keys:
            del self._by_player_date[k]


class InMemoryPlayers:
    def __init__(self, attendance: InMemoryAttendance):
        self._players: dict[str, Player] = {}
        self._attendance = attendance

    def list_all(self):
        return sorted(self._players.values(), key=lambda p: p.full_name)

    def get_by_id(self, player_id):
        return self._players.get(player_id)

    def create(self, player: Player):
        if player.player_id in self._players:
            raise DuplicateKeyError("Player ID already exists")
        self._players[player.player_id] = player
        return player

    def update(self, player: Player):
        if player.player_id not in self._players:
            return False
        self._players[player.player_id] = player
        return True

    def delete_with_attendance(self, player_id):
        self._attendance.delete_for_player(player_id)
        return self._players.pop(player_id, None) is not None


@pytest.fixture
def ms_at():
    """Epoch ms for a wall-clock time in UTC+8 (or the given tz)."""
    return _ms_at


@pytest.fixture
def fixed_now() -> int:
    # 2026-02-01 10:00 in UTC+8
    return _ms_at(2026, 2, 1, 10, 0)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def players_repo(attendance_repo) -> InMemoryPlayers:
    return InMemoryPlayers(attendance_repo)


@pytest.fixture
def attendance_service(attendance_repo) -> AttendanceService:
    return AttendanceService(attendance_repo, utc_offset_hours=8)


@pytest.fixture
def player_service(players_repo) -> PlayerService:
    return PlayerService(players_repo)


@pytest.fixture
def test_settings():
    return SimpleNamespace(
        ADMIN_PIN="1234",
        BUSINESS_UTC_OFFSET_HOURS=8,
        CORS_ORIGIN="*",
        DEBUG=False,
        TESTING=True,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(players_repo, attendance_repo, test_settings):
    container = build_services(players_repo=players_repo, attendance_repo=attendance_repo, utc_offset_hours=8)
    return create_app(container=container, settings=test_settings)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_headers():
    return {"x-admin-pin": "1234"}
