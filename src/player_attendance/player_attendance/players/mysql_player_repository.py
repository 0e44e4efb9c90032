from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import PlayerStatus
from ..core.exceptions import DuplicateKeyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import Player
from .repository import PlayerRepository

_COLUMNS = "player_id, full_name, age, email, phone, position, team, status"


def _to_player(r: dict) -> Player:
    return Player(
        player_id=r["player_id"],
        full_name=r["full_name"],
        age=int(r["age"]),
        email=r["email"],
        phone=r.get("phone"),
        position=r.get("position"),
        team=r.get("team"),
        status=PlayerStatus(r.get("status") or PlayerStatus.ACTIVE.value),
    )


class MySQLPlayerRepository(PlayerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Player]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM players ORDER BY full_name ASC")
            return [_to_player(r) for r in fetchall(cur)]

    def get_by_id(self, player_id: str) -> Optional[Player]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM players WHERE player_id=%s", (player_id,))
            r = fetchone(cur)
            return _to_player(r) if r else None

    def create(self, player: Player) -> Player:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO players(player_id, full_name, age, email, phone, position, team, status)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        player.player_id,
                        player.full_name,
                        player.age,
                        player.email,
                        player.phone,
                        player.position,
                        player.team,
                        player.status.value,
                    ),
                )
            except mysql.connector.IntegrityError as e:
                if is_duplicate_key(e):
                    raise DuplicateKeyError("Player ID already exists") from e
                raise
        return player

    def update(self, player: Player) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE players
                SET full_name=%s, age=%s, email=%s, phone=%s, position=%s, team=%s, status=%s
                WHERE player_id=%s
                """,
                (
                    player.full_name,
                    player.age,
                    player.email,
                    player.phone,
                    player.position,
                    player.team,
                    player.status.value,
                    player.player_id,
                ),
            )
            # rowcount is 0 for an unchanged row unless FOUND_ROWS is set, so
            # existence is checked separately.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM players WHERE player_id=%s", (player.player_id,))
            return fetchone(cur) is not None

    def delete_with_attendance(self, player_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE player_id=%s", (player_id,))
            cur.execute("DELETE FROM players WHERE player_id=%s", (player_id,))
            return cur.rowcount > 0
