"""Game and player statistics records, and their JSON encoding.

Field names on disk are camelCase (``dateStarted``, ``totalGames``) so that
stores written by earlier releases of the app load unchanged. Both the alias
and the Python field name are accepted on decode.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class InvalidGameError(ValueError):
    """A game cannot be saved in its current state."""


class PlayerSlot(BaseModel):
    """One seat at the table: a player name and the color chosen for it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    color: int  # ARGB, signed 32-bit as produced by the color picker


class Game(BaseModel):
    """One recorded play session.

    ``id`` stays None until the first save assigns it from ``date_started``.
    Player order is seating order and is preserved across save and load.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    date_started: int = 0  # epoch milliseconds
    players: list[PlayerSlot] = Field(default_factory=list)

    def player_names(self) -> list[str]:
        return [slot.name for slot in self.players]

    def add_player(self, name: str, color: int) -> None:
        self.players.append(PlayerSlot(name=name, color=color))

    def remove_player(self, index: int) -> None:
        del self.players[index]

    def set_player_name(self, index: int, name: str) -> None:
        self.players[index].name = name

    def set_player_color(self, index: int, color: int) -> None:
        self.players[index].color = color


class PlayerStats(BaseModel):
    """Running statistics for one player name, built from first-time game saves."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_games: int = 0
    most_recent_game: int = 0  # date_started of the newest game played
    most_recent_color: int = 0


PlayersMap = dict[str, PlayerStats]

_players_adapter: TypeAdapter[PlayersMap] = TypeAdapter(PlayersMap)


def game_to_json(game: Game) -> bytes:
    return game.model_dump_json(by_alias=True).encode("utf-8")


def json_to_game(data: str | bytes) -> Game:
    """Decode a game record. Raises pydantic.ValidationError on malformed input."""
    return Game.model_validate_json(data)


def players_to_json(players: PlayersMap) -> bytes:
    return _players_adapter.dump_json(players, by_alias=True, indent=2)


def json_to_players(data: str | bytes) -> PlayersMap:
    """Decode the name -> PlayerStats mapping. Raises pydantic.ValidationError on malformed input."""
    return _players_adapter.validate_json(data)
