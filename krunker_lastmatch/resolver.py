from __future__ import annotations

from typing import Dict, Optional

from .errors import InternalError, PlayerNotFound
from .models import HistoryEntry, Match, MatchHistoryResponse, ResolvedPlayerInfo


MAP_NAMES: Dict[int, str] = {
    17: "Bureau",
    11: "Industry",
    2: "Sandstorm",
    0: "Burg",
    4: "Undergrowth",
    12: "Lumber",
    5: "Shipment",
    14: "Site",
}

_RANK_TIERS = ["Bronze", "Silver", "Gold", "Platinum", "Diamond", "Master", "Grandmaster"]

# 0 = Unranked, then three divisions per tier: 1 = Bronze 1 ... 21 = Grandmaster 3.
RANK_NAMES: Dict[int, str] = {0: "Unranked"}
RANK_NAMES.update(
    {i * 3 + div: f"{tier} {div}" for i, tier in enumerate(_RANK_TIERS) for div in (1, 2, 3)}
)


def map_name(map_id: int) -> str:
    return MAP_NAMES.get(map_id, f"Map ID: {map_id}")


def rank_name(rank_id: int) -> str:
    return RANK_NAMES.get(rank_id, f"Rank ID: {rank_id}")


def format_kd_ratio(kills: int, deaths: int) -> str:
    """K/D as shown on the overlay.

    With no deaths the kill count itself is shown with one decimal ("7.0"),
    otherwise the ratio with two ("3.50").
    """
    if deaths == 0:
        return f"{kills:.1f}"
    return f"{kills / deaths:.2f}"


def is_winner(team: int, score_alpha: int, score_bravo: int) -> bool:
    # Ties count as a loss for both teams.
    if team == 1:
        return score_alpha > score_bravo
    if team == 2:
        return score_bravo > score_alpha
    return False


def find_player_entry(match: Match, player_name: str) -> Optional[HistoryEntry]:
    for entry in match.history_entries:
        if entry.player_name == player_name:
            return entry
    return None


def find_latest_match(response: MatchHistoryResponse, player_name: str) -> Optional[Match]:
    # Matches come back newest first.
    for match in response.matches:
        if find_player_entry(match, player_name) is not None:
            return match
    return None


def resolve(response: MatchHistoryResponse, player_name: str) -> ResolvedPlayerInfo:
    """Summarize `player_name`'s most recent match in `response`.

    Raises PlayerNotFound when none of the fetched matches include the player.
    """
    match = find_latest_match(response, player_name)
    if match is None:
        raise PlayerNotFound(player_name, len(response.matches))

    entry = find_player_entry(match, player_name)
    if entry is None:
        raise InternalError("Could not retrieve player data from the match.")

    return ResolvedPlayerInfo(
        is_winner=is_winner(entry.team, match.score_alpha, match.score_bravo),
        kd_ratio=format_kd_ratio(entry.kills, entry.deaths),
        mmr_change=entry.mmr_change,
        map_name=map_name(match.map),
        rank=rank_name(entry.rank),
    )
