"""Startup wiring: build the one GameDatabase the app shares between screens."""

from __future__ import annotations

import structlog

from rounds.database import GameDatabase
from rounds.logging import setup_logging
from rounds.settings import RoundsSettings

logger = structlog.get_logger()


def open_database(settings: RoundsSettings | None = None) -> GameDatabase:
    """Configure logging and open the game database described by ``settings``.

    Call once at startup and pass the returned object to every consumer.
    """
    if settings is None:
        settings = RoundsSettings()
    setup_logging(settings)

    db = GameDatabase.from_settings(settings)
    logger.info("opened game database", data_dir=str(db.game_dir))
    return db
