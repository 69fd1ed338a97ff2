"""Game data access for the app. Most operations are blocking."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TYPE_CHECKING

from rounds.game_repository import GameRepository
from rounds.player_index import PLAYERS_FILE_NAME, PlayerIndex
from rounds.storage import AtomicFileWriter
from rounds.suggestions import RECENT_GAME_THRESHOLD, suggest

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rounds.models import Game, PlayerStats
    from rounds.settings import RoundsSettings


class GameDatabase:
    """Saved games plus the player statistics derived from them.

    Construct one per data directory at startup and share it; it may be used
    by multiple threads concurrently. Anything that reads or mutates the
    cached player index runs entirely under a single lock. Game reads and
    deletes go straight to the file system.
    """

    def __init__(self, game_dir: str | Path, *, recent_game_threshold: int = RECENT_GAME_THRESHOLD) -> None:
        game_dir = Path(game_dir)
        writer = AtomicFileWriter()
        self._games = GameRepository(game_dir, writer)
        self._players = PlayerIndex(game_dir / PLAYERS_FILE_NAME, writer)
        self._recent_game_threshold = recent_game_threshold
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: RoundsSettings) -> GameDatabase:
        return cls(settings.data_dir, recent_game_threshold=settings.recent_game_threshold)

    @property
    def game_dir(self) -> Path:
        return self._games.game_dir

    def save(self, game: Game) -> bool:
        """Write ``game`` to storage, updating a saved copy if it already exists.

        The first save assigns ``game.id`` and folds the game into the player
        statistics. Later saves only overwrite the game file. Returns True for
        a first save.

        If the statistics cannot be written, the cached index is reloaded
        from disk and ``game.id`` is cleared, so a retry counts the game once.
        """
        with self._lock:
            is_new_game = self._games.save(game)
            if is_new_game:
                try:
                    self._players.record_game(game)
                    self._players.persist()
                except BaseException:
                    self._players.invalidate()
                    game.id = None
                    raise
            return is_new_game

    def all_games(self) -> list[Game]:
        """Return all games ordered from newest to oldest."""
        return self._games.all_games()

    def most_recent_game(self) -> Game | None:
        return self._games.most_recent_game()

    def delete_games(self, game_ids: Iterable[str]) -> None:
        """Remove games from storage. Player statistics are not modified."""
        self._games.delete_games(game_ids)

    def suggested_player_names(self) -> list[str]:
        """Player names ordered by best suggestion.

        Players from the most recent games come first, followed by all other
        players ordered by play count.
        """
        with self._lock:
            return suggest(self._players.get(), self._recent_game_threshold)

    def player_stats(self, name: str) -> PlayerStats | None:
        """Return a copy of the statistics for ``name``, or None for an unknown player."""
        with self._lock:
            stats = self._players.stats_for(name)
            return None if stats is None else stats.model_copy()

    def remove_stale_scratch_files(self) -> int:
        """Clear leftovers of interrupted writes. Returns the number of files removed."""
        with self._lock:
            return self._games.remove_stale_scratch_files()
