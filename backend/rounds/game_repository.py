"""File-backed game repository: one JSON file per saved game."""

from collections.abc import Iterable
from pathlib import Path

import structlog
from pydantic import ValidationError

from rounds.models import Game, InvalidGameError, game_to_json, json_to_game
from rounds.storage import SCRATCH_SUFFIX, AtomicFileWriter

logger = structlog.get_logger()

GAME_SUFFIX = ".game"


class GameFileError(OSError):
    """A game file exists but could not be decoded."""


def game_id_for(game: Game) -> str:
    """Derive a game id from its start time.

    Ids are the start date as 16 zero-padded hex digits, so an alphabetical
    sort of ids (and of game file names) is a chronological sort.
    """
    if game.date_started == 0:
        raise InvalidGameError("Game must have a nonzero date_started before it is saved")
    return format(game.date_started, "016x")


class GameRepository:
    """Stores each game as ``<id>.game`` inside ``game_dir``.

    Reads and deletes touch only the file system and rely on the atomic
    rename in AtomicFileWriter to never observe a half-written game.
    """

    def __init__(self, game_dir: str | Path, writer: AtomicFileWriter | None = None) -> None:
        self._game_dir = Path(game_dir)
        self._writer = writer or AtomicFileWriter()

    @property
    def game_dir(self) -> Path:
        return self._game_dir

    def _game_file(self, game_id: str) -> Path:
        return self._game_dir / f"{game_id}{GAME_SUFFIX}"

    def save(self, game: Game) -> bool:
        """Write ``game`` to storage, overwriting a previously saved copy.

        Assigns ``game.id`` on first save, only once the file is written: a
        game whose first write failed is still new on retry. Returns True when
        the game was new, False when an existing file was overwritten.
        """
        is_new_game = game.id is None
        if is_new_game:
            game_id = game_id_for(game)
            content = game_to_json(game.model_copy(update={"id": game_id}))
        else:
            game_id = game.id
            content = game_to_json(game)

        self._writer.write(self._game_file(game_id), content)
        game.id = game_id
        logger.info("saved game", game_id=game_id, new_game=is_new_game)
        return is_new_game

    def _game_files_by_most_recent(self) -> list[Path]:
        if not self._game_dir.is_dir():
            return []
        files = [entry for entry in self._game_dir.iterdir() if entry.name.endswith(GAME_SUFFIX)]
        return sorted(files, key=lambda entry: entry.name, reverse=True)

    def _read_game(self, path: Path) -> Game:
        data = path.read_bytes()
        try:
            return json_to_game(data)
        except ValidationError as exc:
            msg = f"Failed to parse game file {path}"
            raise GameFileError(msg) from exc

    def all_games(self) -> list[Game]:
        """Return all games ordered from newest to oldest."""
        return [self._read_game(path) for path in self._game_files_by_most_recent()]

    def most_recent_game(self) -> Game | None:
        """Return the most recently started game, or None if no games have been saved."""
        files = self._game_files_by_most_recent()
        if not files:
            return None
        return self._read_game(files[0])

    def delete_games(self, game_ids: Iterable[str]) -> None:
        """Remove games from storage.

        Raises FileNotFoundError for an id with no saved file. Player
        statistics are not modified.
        """
        deleted = []
        for game_id in game_ids:
            self._game_file(game_id).unlink()
            deleted.append(game_id)
        logger.info("deleted games", game_ids=deleted)

    def remove_stale_scratch_files(self) -> int:
        """Delete scratch files left behind by interrupted writes.

        Only safe while no write is in progress. Errors on individual files
        are logged and skipped so that one bad file does not block the rest.
        Returns the number of files removed.
        """
        if not self._game_dir.is_dir():
            return 0

        removed = 0
        for entry in self._game_dir.iterdir():
            try:
                if not entry.is_file() or entry.suffix != SCRATCH_SUFFIX:
                    continue
                entry.unlink()
                removed += 1
            except OSError:
                logger.exception("failed to remove scratch file", path=str(entry))
        if removed:
            logger.info("removed stale scratch files", count=removed)
        return removed
