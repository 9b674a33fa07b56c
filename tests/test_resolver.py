from __future__ import annotations

import pytest

from krunker_lastmatch.errors import InternalError, PlayerNotFound
from krunker_lastmatch.models import Match, MatchHistoryResponse, parse_match_history
from krunker_lastmatch.resolver import (
    RANK_NAMES,
    format_kd_ratio,
    is_winner,
    map_name,
    rank_name,
    resolve,
)

from payloads import make_entry, make_match, make_payload


def history(*matches) -> MatchHistoryResponse:
    return parse_match_history(make_payload(list(matches)))


def test_kd_ratio_without_deaths_shows_kills_with_one_decimal() -> None:
    assert format_kd_ratio(7, 0) == "7.0"
    assert format_kd_ratio(0, 0) == "0.0"
    assert format_kd_ratio(23, 0) == "23.0"


def test_kd_ratio_with_deaths_has_two_decimals() -> None:
    assert format_kd_ratio(7, 2) == "3.50"
    assert format_kd_ratio(10, 3) == "3.33"
    assert format_kd_ratio(0, 4) == "0.00"
    assert format_kd_ratio(2, 3) == "0.67"


@pytest.mark.parametrize(
    ("team", "alpha", "bravo", "expected"),
    [
        (1, 10, 7, True),
        (2, 10, 7, False),
        (1, 3, 10, False),
        (2, 3, 10, True),
        (1, 5, 5, False),
        (2, 5, 5, False),
    ],
)
def test_is_winner(team: int, alpha: int, bravo: int, expected: bool) -> None:
    assert is_winner(team, alpha, bravo) is expected


def test_map_names() -> None:
    assert map_name(2) == "Sandstorm"
    assert map_name(0) == "Burg"
    assert map_name(17) == "Bureau"
    assert map_name(99) == "Map ID: 99"


def test_rank_names() -> None:
    assert len(RANK_NAMES) == 22
    assert rank_name(0) == "Unranked"
    assert rank_name(1) == "Bronze 1"
    assert rank_name(6) == "Silver 3"
    assert rank_name(8) == "Gold 2"
    assert rank_name(12) == "Platinum 3"
    assert rank_name(13) == "Diamond 1"
    assert rank_name(18) == "Master 3"
    assert rank_name(21) == "Grandmaster 3"
    assert rank_name(22) == "Rank ID: 22"


def test_resolve_builds_player_summary() -> None:
    match = make_match(
        [
            make_entry("Other", team=1, kills=3, deaths=9),
            make_entry("Guest_1", team=2, kills=7, deaths=2, rank=14, mmr_change=-8),
        ],
        map_id=11,
        score_alpha=10,
        score_bravo=7,
    )
    info = resolve(history(match), "Guest_1")
    assert info.is_winner is False
    assert info.kd_ratio == "3.50"
    assert info.mmr_change == -8
    assert info.map_name == "Industry"
    assert info.rank == "Diamond 2"


def test_resolve_picks_most_recent_match_with_player() -> None:
    newest_without_player = make_match([make_entry("Someone")], map_id=17)
    newer = make_match([make_entry("Guest_1", kills=7, deaths=0)], map_id=2)
    older = make_match([make_entry("Guest_1", kills=1, deaths=1)], map_id=14)

    info = resolve(history(newest_without_player, newer, older), "Guest_1")
    assert info.map_name == "Sandstorm"
    assert info.kd_ratio == "7.0"


def test_player_lookup_is_case_sensitive() -> None:
    resp = history(make_match([make_entry("Guest_1")]))
    with pytest.raises(PlayerNotFound):
        resolve(resp, "guest_1")


def test_player_not_found_names_player_and_window() -> None:
    resp = history(make_match([make_entry("A")]), make_match([make_entry("B")]))
    with pytest.raises(PlayerNotFound) as exc_info:
        resolve(resp, "Guest_1")
    err = exc_info.value
    assert err.player_name == "Guest_1"
    assert err.matches_scanned == 2
    assert '"Guest_1"' in str(err)
    assert "2 matches" in str(err)


def test_empty_history_is_player_not_found() -> None:
    with pytest.raises(PlayerNotFound):
        resolve(history(), "Guest_1")


def test_unknown_codes_do_not_raise() -> None:
    resp = history(make_match([make_entry(rank=40)], map_id=99))
    info = resolve(resp, "Guest_1")
    assert info.map_name == "Map ID: 99"
    assert info.rank == "Rank ID: 40"


def test_kd_is_independent_of_roster_order() -> None:
    entries = [make_entry("A"), make_entry("Guest_1", kills=9, deaths=4), make_entry("B", team=2)]
    forward = resolve(history(make_match(entries)), "Guest_1")
    backward = resolve(history(make_match(list(reversed(entries)))), "Guest_1")
    assert forward.kd_ratio == backward.kd_ratio == "2.25"


def test_resolve_is_deterministic() -> None:
    resp = history(make_match([make_entry(kills=11, deaths=3)]))
    assert resolve(resp, "Guest_1") == resolve(resp, "Guest_1")


def test_missing_entry_after_selection_is_internal_error(monkeypatch: pytest.MonkeyPatch) -> None:
    import krunker_lastmatch.resolver as resolver

    resp = history(make_match())
    match: Match = resp.matches[0]
    monkeypatch.setattr(resolver, "find_latest_match", lambda response, name: match)
    with pytest.raises(InternalError):
        resolver.resolve(resp, "Nobody")
