from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .errors import ConfigError, TransportError


@dataclass(frozen=True, slots=True)
class Credentials:
    player_name: str
    token: str

    @classmethod
    def from_inputs(cls, player_name: str | None, token: str | None) -> "Credentials":
        player_name = (player_name or "").strip()
        token = (token or "").strip()
        if not player_name or not token:
            raise ConfigError("Both a Krunker username and an API bearer token are required.")
        return cls(player_name=player_name, token=token)

    def __repr__(self) -> str:
        return f"Credentials(player_name={self.player_name!r}, token='***')"


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    player_name: str
    team: int  # 1 = alpha, 2 = bravo
    kills: int
    deaths: int
    rank: int
    mmr_change: int
    accuracy: float = 0
    assists: int = 0
    damage_done: int = 0
    headshots: int = 0
    objective_score: int = 0
    score: int = 0


@dataclass(frozen=True, slots=True)
class Match:
    date: str
    map: int
    duration: int
    mode: int
    season: int
    is_ranked: bool
    region: int
    score_alpha: int
    score_bravo: int
    history_entries: Tuple[HistoryEntry, ...]
    is_competitive: bool = False


@dataclass(frozen=True, slots=True)
class MatchHistoryResponse:
    matches: Tuple[Match, ...]  # index 0 = most recent
    total_pages: int = 0


@dataclass(frozen=True, slots=True)
class ResolvedPlayerInfo:
    is_winner: bool
    kd_ratio: str
    mmr_change: int
    map_name: str
    rank: str


def dict_to_entry(d: Dict[str, Any]) -> HistoryEntry:
    return HistoryEntry(
        player_name=str(d["player_name"]),
        team=int(d["team"]),
        kills=int(d["kills"]),
        deaths=int(d["deaths"]),
        rank=int(d.get("rank") or 0),
        mmr_change=int(d.get("mmr_change") or 0),
        accuracy=float(d.get("accuracy") or 0),
        assists=int(d.get("assists") or 0),
        damage_done=int(d.get("damage_done") or 0),
        headshots=int(d.get("headshots") or 0),
        objective_score=int(d.get("objective_score") or 0),
        score=int(d.get("score") or 0),
    )


def dict_to_match(d: Dict[str, Any]) -> Match:
    return Match(
        date=str(d.get("date") or ""),
        map=int(d["map"]),
        duration=int(d.get("duration") or 0),
        mode=int(d.get("mode") or 0),
        season=int(d.get("season") or 0),
        is_ranked=bool(d.get("is_ranked")),
        region=int(d.get("region") or 0),
        score_alpha=int(d["score_alpha"]),
        score_bravo=int(d["score_bravo"]),
        history_entries=tuple(dict_to_entry(e) for e in d.get("historyEntries") or []),
        is_competitive=bool(d.get("is_competitive")),
    )


def parse_match_history(payload: Any) -> MatchHistoryResponse:
    """Decode the `{data: {matchHistory: {matches, totalPages}}}` body.

    Any deviation from that shape is reported as a TransportError.
    """
    try:
        history = payload["data"]["matchHistory"]
        matches = tuple(dict_to_match(m) for m in history["matches"])
        total_pages = int(history.get("totalPages") or 0)
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError) as e:
        raise TransportError(f"Unexpected match history payload: {e!r}") from e
    return MatchHistoryResponse(matches=matches, total_pages=total_pages)
