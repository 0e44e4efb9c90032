"""Register a few demo players for local development.

Existing player IDs are left untouched, so the script can be re-run.
"""
from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from player_attendance.container import build_container
from player_attendance.core.exceptions import DuplicateKeyError

DEMO_PLAYERS = [
    {"playerId": "P001", "fullName": "Ana Cruz", "age": 24, "email": "ana.cruz@example.com", "position": "Setter", "team": "Blue"},
    {"playerId": "P002", "fullName": "Ben Santos", "age": 27, "email": "ben.santos@example.com", "position": "Libero", "team": "Blue"},
    {"playerId": "P003", "fullName": "Carla Reyes", "age": 22, "email": "carla.reyes@example.com", "position": "Spiker", "team": "Red"},
]


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        utc_offset_hours=int(getattr(settings, "BUSINESS_UTC_OFFSET_HOURS", 8)),
    )

    created = 0
    for data in DEMO_PLAYERS:
        try:
            container.player_service.create_player(data)
            created += 1
        except DuplicateKeyError:
            continue

    print(f"OK: Seeded {created} new player(s) ({len(DEMO_PLAYERS) - created} already present)")


if __name__ == "__main__":
    main()
