from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from ..core.enums import PlayerStatus


@dataclass(frozen=True)
class Player:
    """Domain entity: a registered player.

    ``player_id`` is the stable external identifier and never changes after
    creation; every other field is replaced wholesale on update.
    """

    player_id: str
    full_name: str
    age: int
    email: str
    phone: Optional[str] = None
    position: Optional[str] = None
    team: Optional[str] = None
    status: PlayerStatus = PlayerStatus.ACTIVE

    def to_dict(self) -> dict:
        data = asdict(self)
        return {
            "playerId": data["player_id"],
            "fullName": data["full_name"],
            "age": data["age"],
            "email": data["email"],
            "phone": data["phone"],
            "position": data["position"],
            "team": data["team"],
            "status": self.status.value,
        }
