"""Shared fixtures: a throwaway game directory, a database over it, and a game factory."""

from collections.abc import Callable

import pytest
import structlog

from rounds.database import GameDatabase
from rounds.models import Game

# Hand events to stdlib logging as rendered key=value text so caplog can match on them.
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.KeyValueRenderer(key_order=["event"]),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)

MakeGame = Callable[..., Game]


@pytest.fixture
def game_dir(tmp_path):
    return tmp_path / "gameData"


@pytest.fixture
def db(game_dir) -> GameDatabase:
    return GameDatabase(game_dir)


@pytest.fixture
def make_game() -> MakeGame:
    """Build an unsaved game: ``make_game(100, ("Amy", 1), ("Bob", 2))``."""

    def _make(date_started: int, *players: tuple[str, int]) -> Game:
        game = Game(date_started=date_started)
        for name, color in players:
            game.add_player(name, color)
        return game

    return _make
