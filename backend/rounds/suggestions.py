"""Player name suggestions for the set-up screen."""

from collections.abc import Mapping

from rounds.models import PlayerStats

RECENT_GAME_THRESHOLD = 3

_Entry = tuple[str, PlayerStats]


def by_recency(entry: _Entry) -> int:
    """Sort key: most recently played first."""
    return -entry[1].most_recent_game


def by_frequency(entry: _Entry) -> int:
    """Sort key: most games played first."""
    return -entry[1].total_games


def suggest(players: Mapping[str, PlayerStats], recent_game_threshold: int = RECENT_GAME_THRESHOLD) -> list[str]:
    """Return player names ordered by best suggestion, without duplicates.

    Names of everyone who played in one of the ``recent_game_threshold`` most
    recent distinct game dates come first, followed by all other players
    ordered by play count. Both sorts are stable, so players who tie keep the
    order of ``players``.
    """
    if not players:
        return []

    by_most_recent_game = sorted(players.items(), key=by_recency)

    recent: list[str] = []
    last_date = by_most_recent_game[0][1].most_recent_game
    date_changes = 0
    for name, stats in by_most_recent_game:
        if stats.most_recent_game != last_date:
            last_date = stats.most_recent_game
            date_changes += 1
        if date_changes == recent_game_threshold:
            break
        recent.append(name)

    by_play_count = [name for name, _stats in sorted(players.items(), key=by_frequency)]

    # first occurrence wins, so recent names keep their place
    return list(dict.fromkeys([*recent, *by_play_count]))
