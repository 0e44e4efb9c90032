from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Player


class PlayerRepository(Protocol):
    """Repository interface for players.

    Services depend on this protocol, never on a concrete database.
    """

    def list_all(self) -> Sequence[Player]:
        """All players ordered by full name ascending."""
        raise NotImplementedError

    def get_by_id(self, player_id: str) -> Optional[Player]:
        raise NotImplementedError

    def create(self, player: Player) -> Player:
        """Insert; raises DuplicateKeyError when player_id exists."""
        raise NotImplementedError

    def update(self, player: Player) -> bool:
        """Replace mutable fields keyed by player_id. False when no row matched."""
        raise NotImplementedError

    def delete_with_attendance(self, player_id: str) -> bool:
        """Delete the player's attendance rows, then the player row.

        Returns False when no player row existed.
        """
        raise NotImplementedError
