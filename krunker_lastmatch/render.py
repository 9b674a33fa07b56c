from __future__ import annotations

from typing import Any, Dict

from .models import ResolvedPlayerInfo
from .poller import CycleResult


def format_mmr_change(mmr_change: int) -> str:
    return f"+{mmr_change}" if mmr_change >= 0 else str(mmr_change)


def render_summary(info: ResolvedPlayerInfo) -> str:
    lines = [
        "LAST MATCH",
        "VICTORY" if info.is_winner else "DEFEAT",
        info.map_name,
        f"K/D Ratio: {info.kd_ratio}",
        f"MMR: {format_mmr_change(info.mmr_change)}",
        f"Rank: {info.rank}",
    ]
    return "\n".join(lines)


def render_result(result: CycleResult) -> str:
    # The summary and the error are never shown together.
    if result.info is not None:
        return render_summary(result.info)
    return f"Error: {result.error}"


def result_to_dict(result: CycleResult) -> Dict[str, Any]:
    if result.info is None:
        return {"error": result.error}
    info = result.info
    return {
        "is_winner": info.is_winner,
        "kd_ratio": info.kd_ratio,
        "mmr_change": info.mmr_change,
        "map_name": info.map_name,
        "rank": info.rank,
    }
