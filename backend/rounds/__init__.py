"""Local persistence for recorded games and the player statistics derived from them."""

from rounds.app import open_database
from rounds.database import GameDatabase
from rounds.game_repository import GameFileError, GameRepository, game_id_for
from rounds.models import Game, InvalidGameError, PlayerSlot, PlayerStats
from rounds.player_index import PlayerIndex
from rounds.settings import RoundsSettings
from rounds.storage import AtomicFileWriter
from rounds.suggestions import suggest

__all__ = [
    "AtomicFileWriter",
    "Game",
    "GameDatabase",
    "GameFileError",
    "GameRepository",
    "InvalidGameError",
    "PlayerIndex",
    "PlayerSlot",
    "PlayerStats",
    "RoundsSettings",
    "game_id_for",
    "open_database",
    "suggest",
]
