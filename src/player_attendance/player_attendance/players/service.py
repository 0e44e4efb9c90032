from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_text, require_int, require_non_empty
from ..core.enums import PlayerStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Player
from .repository import PlayerRepository

logger = logging.getLogger(__name__)


def _parse_status(value: Any) -> PlayerStatus:
    if value is None or value == "":
        return PlayerStatus.ACTIVE
    try:
        return PlayerStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError("status must be 'active' or 'inactive'") from None


class PlayerService:
    """Use case: manage the player roster."""

    def __init__(self, players: PlayerRepository):
        self._players = players

    def get_players(self) -> Sequence[Player]:
        return self._players.list_all()

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._players.get_by_id(player_id)

    def _build(self, player_id: Any, data: Mapping[str, Any]) -> Player:
        return Player(
            player_id=require_non_empty(player_id, "playerId"),
            full_name=require_non_empty(data.get("fullName"), "fullName"),
            age=require_int(data.get("age"), "age", min_value=0),
            email=require_non_empty(data.get("email"), "email"),
            phone=optional_text(data.get("phone"), "phone"),
            position=optional_text(data.get("position"), "position"),
            team=optional_text(data.get("team"), "team"),
            status=_parse_status(data.get("status")),
        )

    def create_player(self, data: Mapping[str, Any]) -> Player:
        player = self._build(data.get("playerId"), data)
        created = self._players.create(player)
        logger.info("player %s created", created.player_id)
        return created

    def update_player(self, player_id: str, data: Mapping[str, Any]) -> Player:
        """Full replace of the mutable fields; playerId in ``data`` is ignored."""
        player = self._build(player_id, data)
        if not self._players.update(player):
            raise NotFoundError("Player not found")
        logger.info("player %s updated", player.player_id)
        return player

    def delete_player(self, player_id: str) -> None:
        """Delete the player and all of their attendance.

        A missing player is reported as NotFoundError; stray attendance rows for
        that id are removed regardless.
        """
        player_id = require_non_empty(player_id, "playerId")
        if not self._players.delete_with_attendance(player_id):
            raise NotFoundError("Player not found")
        logger.info("player %s deleted with attendance", player_id)
