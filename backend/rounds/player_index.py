"""Per-player statistics persisted as a single JSON file."""

from pathlib import Path

import structlog
from pydantic import ValidationError

from rounds.models import Game, PlayersMap, PlayerStats, json_to_players, players_to_json
from rounds.storage import AtomicFileWriter

logger = structlog.get_logger()

PLAYERS_FILE_NAME = "players.json"


class PlayerIndex:
    """Lazily loaded name -> PlayerStats mapping.

    Loaded on first access and cached for the lifetime of the owner; this
    process is assumed to be the only writer of the file. Holds no lock of its
    own: the owning GameDatabase serializes every call.
    """

    def __init__(self, file_path: str | Path, writer: AtomicFileWriter | None = None) -> None:
        self._file_path = Path(file_path)
        self._writer = writer or AtomicFileWriter()
        self._players: PlayersMap | None = None

    def _load_from_file(self) -> PlayersMap:
        """Read the players file.

        A missing or unreadable file yields an empty index: the store cannot
        tell "never written" from "corrupted", and starting fresh is the
        non-fatal interpretation.
        """
        try:
            data = self._file_path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError:
            logger.warning("failed to read players file, starting empty", path=str(self._file_path), exc_info=True)
            return {}

        try:
            return json_to_players(data)
        except ValidationError:
            logger.warning("failed to parse players file, starting empty", path=str(self._file_path), exc_info=True)
            return {}

    def get(self) -> PlayersMap:
        if self._players is None:
            self._players = self._load_from_file()
            logger.debug("loaded player index", players=len(self._players))
        return self._players

    def invalidate(self) -> None:
        """Drop the cached mapping so the next access rereads the file."""
        self._players = None

    def stats_for(self, name: str) -> PlayerStats | None:
        return self.get().get(name)

    def record_game(self, game: Game) -> None:
        """Fold a newly saved game into the statistics.

        Must only be called once per game, on its first save; re-saves would
        double count. The most recent game and color only move forward in
        time, so a late save of an older game does not override them.
        """
        players = self.get()
        for slot in game.players:
            stats = players.get(slot.name)
            if stats is None:
                stats = PlayerStats()
                players[slot.name] = stats
            if game.date_started >= stats.most_recent_game:
                stats.most_recent_color = slot.color
                stats.most_recent_game = game.date_started
            stats.total_games += 1

    def persist(self) -> None:
        """Atomically rewrite the whole players file."""
        self._writer.write(self._file_path, players_to_json(self.get()))
